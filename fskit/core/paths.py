"""\
Path algebra
============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides pure string manipulation of filesystem paths. Apart
from `absolute` and `canonical`, nothing here looks at the filesystem;
the answers depend only on the strings passed in.

Paths are accepted as `str` or any `os.PathLike` and are always
returned as plain strings. Separators are normalised the same way
everywhere: duplicate separators collapse into one and trailing
separators are dropped, while a leading separator (absoluteness) is
kept.

The module also captures the user's home directory and the system
temporary directory once, at import time. Both stay stable for the
lifetime of the process even if the environment changes afterwards.
"""

from __future__ import annotations

import os
import pathlib
import tempfile
import typing as t
from collections.abc import Iterable
from collections.abc import Iterator

from fskit.core.error import oserrors

__all__: tuple[str, ...] = (
    "Ancestors",
    "FILE_SEPARATOR",
    "HOME",
    "StrPath",
    "TEMP_DIRECTORY",
    "absolute",
    "ancestors",
    "as_path",
    "canonical",
    "expand_home",
    "extension",
    "filename",
    "is_absolute",
    "is_descendant_of",
    "is_relative",
    "join",
    "last_segment",
    "normalize",
    "parent",
    "split",
    "without_extension",
)

StrPath: t.TypeAlias = str | os.PathLike[str]

FILE_SEPARATOR: t.Final[str] = os.sep
HOME: t.Final[str] = os.path.expanduser("~")
TEMP_DIRECTORY: t.Final[str] = tempfile.gettempdir()


def join(path: StrPath, *paths: StrPath) -> str:
    """Join one or more path segments into a single path.

    Unlike `os.path.join`, an absolute segment in the middle does not
    discard the segments before it, and separators are normalised::

        >>> join("foo/", "bar//", "baz")
        'foo/bar/baz'
        >>> join("/foo", "/bar")
        '/foo/bar'

    :param path: The first segment, which decides whether the result is
        absolute.
    :param paths: Further segments to append.
    :return: The joined path.
    """
    parts = [os.fspath(part) for part in (path, *paths)]
    segments = [
        segment for part in parts for segment in part.split(os.sep) if segment
    ]
    joined = os.sep.join(segments)
    if parts[0].startswith(os.sep):
        return os.sep + joined
    return joined


def split(path: StrPath) -> list[str]:
    """Split a path into its segments.

    Leading, trailing and duplicate separators never produce empty
    segments. The empty path splits into a single empty segment.

    :param path: The path to split.
    :return: The ordered list of segments.
    """
    segments = [segment for segment in os.fspath(path).split(os.sep) if segment]
    return segments or [""]


def last_segment(path: StrPath) -> str:
    """Return the final segment of a path, ignoring trailing separators."""
    return split(path)[-1]


def filename(path: StrPath) -> str | None:
    """Return the name of the file a path points to.

    This is `last_segment`, except that a path ending with a separator
    denotes a directory and therefore has no file name.

    :param path: The path to inspect.
    :return: The file name or `None`.
    """
    if os.fspath(path).endswith(os.sep):
        return None
    return last_segment(path)


def parent(path: StrPath) -> str | None:
    """Return the path one level up.

    :param path: The path to inspect.
    :return: The parent path, or `None` for the root and for relative
        paths made of a single segment.
    """
    normalised = join(path)
    if normalised == os.sep:
        return None
    index = normalised.rfind(os.sep)
    if index < 0:
        return None
    if index == 0:
        return os.sep
    return normalised[:index]


class Ancestors(Iterable[str]):
    """Lazy sequence of all the parents of a path, root-most last.

    Iterating computes the parents one at a time from the path string,
    so the sequence is finite and can be iterated any number of times.

    :param path: The path whose parents are produced.
    """

    __slots__: tuple[str, ...] = ("path",)

    def __init__(self, path: StrPath) -> None:
        """Initialise the sequence for a path."""
        self.path = os.fspath(path)

    def __iter__(self) -> Iterator[str]:
        """Yield the parents, nearest first."""
        current = parent(self.path)
        while current is not None:
            yield current
            current = parent(current)

    def __repr__(self) -> str:
        """Return a string representation of the sequence."""
        return f"{type(self).__name__}({self.path!r})"


def ancestors(path: StrPath) -> Ancestors:
    """Return the lazy, re-iterable sequence of parents of a path."""
    return Ancestors(path)


def is_descendant_of(parent_path: StrPath, child_path: StrPath) -> bool:
    """Check whether a path lies beneath another one.

    The check is purely syntactic; a path is never its own descendant
    and an absolute path is never beneath a relative one.

    :param parent_path: The candidate parent.
    :param child_path: The candidate child.
    :return: `True` if `parent_path` is an ancestor of `child_path`.
    """
    return join(parent_path) in ancestors(child_path)


def extension(path: StrPath) -> str | None:
    """Return the extension of the file a path points to.

    The extension is whatever follows the last `.` of the file name.
    Dotfiles (`.bashrc`), names ending with a dot (`name.`) and paths
    ending with a separator have no extension.

    :param path: The path to inspect.
    :return: The extension without its dot, or `None`.
    """
    name = filename(path)
    if name is None:
        return None
    index = name.rfind(".")
    if index > 0 and index != len(name) - 1:
        return name[index + 1 :]
    return None


def without_extension(path: StrPath) -> str:
    """Return the path with its extension and the separating dot removed.

    Paths without an extension (see `extension`) are returned unchanged.
    """
    path = os.fspath(path)
    suffix = extension(path)
    if suffix is None:
        return path
    return path[: -(len(suffix) + 1)]


def expand_home(path: StrPath) -> str:
    """Expand a leading `~` segment into the user's home directory.

    Only a `~` that makes up the whole first segment is expanded;
    `~foo/bar` and `/foo/~/bar` are returned unchanged.

    :param path: The path to expand.
    :return: The expanded path.
    """
    path = os.fspath(path)
    if path.startswith("~") and split(path)[0] == "~":
        return HOME + path[1:]
    return path


def normalize(path: StrPath) -> str:
    """Resolve `.` and `..` segments without touching the filesystem.

    A path that resolves to the current directory normalises to the
    empty path, and leading separators collapse into one::

        >>> normalize("foo/..")
        ''
        >>> normalize("//foo/./bar")
        '/foo/bar'

    :param path: The path to normalise.
    :return: The normalised path.
    """
    path = os.fspath(path)
    if not path:
        return path
    normalised = os.path.normpath(path)
    # NOTE(xames3): POSIX lets `normpath` keep exactly two leading
    # separators.
    if normalised.startswith(os.sep * 2):
        normalised = normalised[1:]
    return "" if normalised == os.curdir else normalised


def is_absolute(path: StrPath) -> bool:
    return os.path.isabs(path)


def is_relative(path: StrPath) -> bool:
    return not os.path.isabs(path)


def absolute(path: StrPath) -> str:
    """Resolve a path against the current working directory.

    The result is not normalised: `..` and `.` segments are kept and
    symlinks are not resolved.

    :param path: The path to resolve.
    :return: The absolute path.
    """
    if is_absolute(path):
        return join(path)
    return join(os.getcwd(), path)


@oserrors
def canonical(path: StrPath) -> str:
    """Return the absolute, normalised path with all symlinks resolved.

    :param path: The path to resolve.
    :return: The canonical path.
    :raises NotFoundError: If the path, or the target of any symlink
        along it, does not exist.
    """
    return os.path.realpath(path, strict=True)


def as_path(path: StrPath, *paths: StrPath) -> pathlib.Path:
    """Join the segments and return them as a `pathlib.Path` object."""
    return pathlib.Path(join(path, *paths))
