"""\
Core
====

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module acts as an entry point for combining the path algebra,
permissions, attribute queries, filesystem operations, temporary
resources, options and configurations of this library.
"""

from __future__ import annotations

from .attributes import *
from .config import *
from .error import *
from .operations import *
from .options import *
from .paths import *
from .permissions import *
from .temp import *


__all__: tuple[str, ...] = (
    attributes.__all__
    + config.__all__
    + error.__all__
    + operations.__all__
    + options.__all__
    + paths.__all__
    + permissions.__all__
    + temp.__all__
)
