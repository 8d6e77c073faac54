"""\
fskit
=====

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

Filesystem toolkit

This package (fskit) is a unified API over path manipulation, file and
directory creation, copying, moving, deletion, attribute inspection
(timestamps, POSIX permissions, ownership) and symlink-aware traversal.

Every operation is a thin, synchronous call into the operating system
with consistent conventions: paths go in as strings or path-like
objects and come out as strings, options are explicit objects with
conservative defaults, and failures surface as one small family of
errors that are also the matching built-in `OSError` subclasses.

Example::

    .. code-block:: python

        import fskit

        with fskit.TempDirectory() as path:
            source = fskit.join(path, "src")
            fskit.create_directories(fskit.join(source, "docs"))
            fskit.create_file(fskit.join(source, "docs", "a.md"), content="# A")
            fskit.copy_recursively(source, fskit.join(path, "backup"))
"""

from __future__ import annotations

from .core import *
from .utils import *


__all__: tuple[str, ...] = ("__version__",)
__all__ += core.__all__
__all__ += utils.__all__

__version__: str = "18.10.2026"
