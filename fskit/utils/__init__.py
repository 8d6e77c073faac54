"""\
Utilities
=========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Saturday, October 17 2026

This module acts as an entry point for combining various utilities used
throughout the library.
"""

from __future__ import annotations

from .logging import *
from .opentelemetry import *


__all__: tuple[str, ...] = tuple(logging.__all__) + tuple(opentelemetry.__all__)
