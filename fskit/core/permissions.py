"""\
POSIX permissions
=================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides lossless conversion among the three ways of writing
the nine POSIX permission bits::

    754             octal digits, one per owner/group/others
    "rwxr-xr--"     symbolic, three characters per owner/group/others
    {OWNER_READ,    a set of `PosixPermission` flags
     OWNER_WRITE,
     ...}

The `Permissions` object validates its input once, when it is built,
and exposes every representation from then on. Anything that cannot be
read as permissions raises `InvalidPermissionsError`.
"""

from __future__ import annotations

import enum
import stat
import typing as t
from collections.abc import Iterable

from fskit.core.error import InvalidPermissionsError

__all__: tuple[str, ...] = (
    "Permissions",
    "PermissionsLike",
    "PosixPermission",
    "octal_to_symbolic",
    "symbolic_to_octal",
)

_NUMBER_TO_PERMISSIONS: t.Final[dict[int, str]] = {
    7: "rwx",
    6: "rw-",
    5: "r-x",
    4: "r--",
    3: "-wx",
    2: "-w-",
    1: "--x",
    0: "---",
}
_PERMISSION_TO_NUMBERS: t.Final[dict[str, int]] = {
    "r": 4,
    "w": 2,
    "x": 1,
    "-": 0,
}
_SYMBOLIC_TEMPLATE: t.Final[str] = "rwxrwxrwx"


class PosixPermission(enum.IntFlag):
    """The nine POSIX permission bits, valued as in `stat`."""

    OWNER_READ = stat.S_IRUSR
    OWNER_WRITE = stat.S_IWUSR
    OWNER_EXECUTE = stat.S_IXUSR
    GROUP_READ = stat.S_IRGRP
    GROUP_WRITE = stat.S_IWGRP
    GROUP_EXECUTE = stat.S_IXGRP
    OTHERS_READ = stat.S_IROTH
    OTHERS_WRITE = stat.S_IWOTH
    OTHERS_EXECUTE = stat.S_IXOTH


def _octal_digits(octal: t.Any) -> tuple[int, int, int]:
    """Validate an octal permission number and return its digits.

    Numbers below 100 are read as if zero padded, so `7` is `007`.

    :param octal: The number to validate, for instance `754`.
    :return: The owner, group and others digits.
    :raises InvalidPermissionsError: If the value is not an integer, is
        out of range or has a digit greater than 7.
    """
    if isinstance(octal, bool) or not isinstance(octal, int):
        raise InvalidPermissionsError(
            "Invalid permissions! Expected an integer", permissions=octal
        )
    if not 0 <= octal <= 777:
        raise InvalidPermissionsError(
            "Invalid permissions! Expected a number between 0 and 777",
            permissions=octal,
        )
    owner, group, others = (int(digit) for digit in f"{octal:03d}")
    if max(owner, group, others) > 7:
        raise InvalidPermissionsError(
            "Invalid permissions! Digits must be between 0 and 7",
            permissions=octal,
        )
    return owner, group, others


def octal_to_symbolic(octal: int) -> str:
    """Convert octal permissions (`754`) to symbolic ones (`rwxr-xr--`)."""
    return "".join(_NUMBER_TO_PERMISSIONS[digit] for digit in _octal_digits(octal))


def symbolic_to_octal(symbolic: str) -> int:
    """Convert symbolic permissions (`rwxr-xr--`) to octal ones (`754`).

    Every character must either be `-` or the letter expected at its
    position in `rwxrwxrwx`.

    :param symbolic: The nine character permission string.
    :return: The permissions as `100 * owner + 10 * group + others`.
    :raises InvalidPermissionsError: If the string is malformed.
    """
    if not isinstance(symbolic, str):
        raise InvalidPermissionsError(
            "Invalid permissions! Expected a string", permissions=symbolic
        )
    if len(symbolic) != len(_SYMBOLIC_TEMPLATE) or any(
        char not in (expected, "-")
        for char, expected in zip(symbolic, _SYMBOLIC_TEMPLATE)
    ):
        raise InvalidPermissionsError(
            "Invalid permissions! Expected a string like 'rwxr-xr--'",
            permissions=symbolic,
        )
    owner, group, others = (
        sum(_PERMISSION_TO_NUMBERS[char] for char in symbolic[start : start + 3])
        for start in (0, 3, 6)
    )
    return 100 * owner + 10 * group + others


class Permissions:
    """Validated POSIX permissions.

    Build an instance with one of the `from_*` constructors or let
    `parse` pick the right one. Two instances are equal when they grant
    the same bits, whatever representation they were built from.

    :param mode: The permission bits, between `0o000` and `0o777`.
    """

    __slots__: tuple[str, ...] = ("_mode",)

    def __init__(self, mode: int) -> None:
        """Initialise the permissions from raw mode bits."""
        if isinstance(mode, bool) or not isinstance(mode, int):
            raise InvalidPermissionsError(
                "Invalid permissions! Expected integer mode bits",
                permissions=mode,
            )
        if not 0 <= mode <= 0o777:
            raise InvalidPermissionsError(
                "Invalid permissions! Mode bits must be between 0o000 and "
                "0o777",
                permissions=mode,
            )
        self._mode = int(mode)

    @classmethod
    def from_mode(cls, mode: int) -> Permissions:
        return cls(mode)

    @classmethod
    def from_octal(cls, octal: int) -> Permissions:
        """Build permissions from octal digits such as `754`."""
        owner, group, others = _octal_digits(octal)
        return cls(owner << 6 | group << 3 | others)

    @classmethod
    def from_symbolic(cls, symbolic: str) -> Permissions:
        """Build permissions from a string such as `rwxr-xr--`."""
        return cls.from_octal(symbolic_to_octal(symbolic))

    @classmethod
    def from_flags(cls, flags: Iterable[PosixPermission]) -> Permissions:
        """Build permissions from a collection of `PosixPermission`."""
        mode = 0
        for flag in flags:
            if not isinstance(flag, PosixPermission):
                raise InvalidPermissionsError(
                    "Invalid permissions! Expected PosixPermission flags",
                    permissions=flag,
                )
            mode |= flag
        return cls(mode)

    @classmethod
    def parse(cls, value: PermissionsLike) -> Permissions:
        """Build permissions from any of the supported representations.

        Strings are read as symbolic permissions, integers as octal
        digits, `PosixPermission` values as mode bits and other
        iterables as collections of flags.

        :param value: The permissions to parse.
        :return: The validated permissions.
        :raises InvalidPermissionsError: If the value cannot be read as
            permissions.
        """
        if isinstance(value, Permissions):
            return value
        if isinstance(value, str):
            return cls.from_symbolic(value)
        if isinstance(value, PosixPermission):
            return cls(int(value))
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.from_octal(value)
        if isinstance(value, (set, frozenset, list, tuple)):
            return cls.from_flags(value)
        raise InvalidPermissionsError("Invalid permissions!", permissions=value)

    @property
    def mode(self) -> int:
        """Return the permission bits, for instance `0o754`."""
        return self._mode

    @property
    def octal(self) -> int:
        """Return the permissions as octal digits, for instance `754`."""
        return int(f"{self._mode:o}")

    @property
    def symbolic(self) -> str:
        """Return the permissions as a string, for instance `rwxr-xr--`."""
        return octal_to_symbolic(self.octal)

    @property
    def flags(self) -> frozenset[PosixPermission]:
        """Return the set of granted `PosixPermission` flags."""
        return frozenset(flag for flag in PosixPermission if self._mode & flag)

    def __contains__(self, flag: PosixPermission) -> bool:
        """Check whether a single permission is granted."""
        return bool(self._mode & flag)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permissions):
            return NotImplemented
        return self._mode == other._mode

    def __hash__(self) -> int:
        return hash(self._mode)

    def __str__(self) -> str:
        return self.symbolic

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbolic!r})"


PermissionsLike: t.TypeAlias = (
    Permissions | str | int | Iterable[PosixPermission]
)
