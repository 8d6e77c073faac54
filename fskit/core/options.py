"""\
Options
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Saturday, October 17 2026

This module provides the option objects accepted by the copy, move and
link-aware operations. Every field is a validated `config_property`, so
a typo'd value (`"yes"` instead of `True`) fails loudly on assignment.

All fields default to the most conservative behaviour: nothing is
overwritten, nothing extra is copied and moves are not required to be
atomic. Links are followed unless stated otherwise.
"""

from __future__ import annotations

import typing as t

from fskit.core.config import config_property

__all__: tuple[str, ...] = (
    "CopyOptions",
    "LinkOptions",
    "MoveOptions",
)


def _boolean(value: t.Any) -> bool:
    return isinstance(value, bool)


class _Options:
    """Shared behaviour of the option objects."""

    __fields__: t.ClassVar[tuple[str, ...]] = ()

    def __init__(self, **kwargs: bool) -> None:
        """Initialise the options from keyword arguments."""
        for key, value in kwargs.items():
            if key not in self.__fields__:
                raise TypeError(
                    f"{type(self).__name__} got an unexpected option: {key!r}"
                )
            setattr(self, key, value)

    def __repr__(self) -> str:
        """Return a string representation of the options."""
        fields = ", ".join(
            f"{key}={getattr(self, key)!r}" for key in self.__fields__
        )
        return f"{type(self).__name__}({fields})"

    def __eq__(self, other: object) -> bool:
        """Compare options field by field."""
        if type(other) is not type(self):
            return NotImplemented
        return all(
            getattr(self, key) == getattr(other, key)
            for key in self.__fields__
        )

    __hash__ = None  # type: ignore[assignment]


class LinkOptions(_Options):
    """Options for operations that may or may not follow symlinks.

    :param follow_links: Whether a symlink is dereferenced before the
        operation looks at it, defaults to `True`.
    """

    __fields__ = ("follow_links",)

    follow_links: config_property[bool] = config_property(
        True,
        check=_boolean,
    )

    def __init__(self, *, follow_links: bool = True) -> None:
        """Initialise the link options."""
        super().__init__(follow_links=follow_links)

    @classmethod
    def of(cls, value: bool | LinkOptions) -> LinkOptions:
        """Return link options for a flag or for existing options.

        :param value: Either `LinkOptions` or the bare `follow_links`
            flag.
        :return: The options, validated.
        """
        if isinstance(value, LinkOptions):
            return value
        return cls(follow_links=value)


class CopyOptions(_Options):
    """Options for `copy` and `copy_recursively`.

    :param replace_existing: Whether an existing target is replaced,
        defaults to `False`.
    :param copy_attributes: Whether permissions and timestamps are
        copied along with the content, defaults to `False`.
    :param follow_links: Whether a symlink source is dereferenced and
        its target copied, defaults to `True`. When `False` the symlink
        itself is recreated at the target.
    """

    __fields__ = ("replace_existing", "copy_attributes", "follow_links")

    replace_existing: config_property[bool] = config_property(
        False,
        check=_boolean,
    )
    copy_attributes: config_property[bool] = config_property(
        False,
        check=_boolean,
    )
    follow_links: config_property[bool] = config_property(
        True,
        check=_boolean,
    )

    def __init__(
        self,
        *,
        replace_existing: bool = False,
        copy_attributes: bool = False,
        follow_links: bool = True,
    ) -> None:
        """Initialise the copy options."""
        super().__init__(
            replace_existing=replace_existing,
            copy_attributes=copy_attributes,
            follow_links=follow_links,
        )


class MoveOptions(_Options):
    """Options for `move` and `rename`.

    :param replace_existing: Whether an existing target is replaced,
        defaults to `False`.
    :param atomic_move: Whether the move must happen as a single atomic
        rename, defaults to `False`. Atomic moves fail rather than fall
        back to copying when source and target are on different
        filesystems.
    """

    __fields__ = ("replace_existing", "atomic_move")

    replace_existing: config_property[bool] = config_property(
        False,
        check=_boolean,
    )
    atomic_move: config_property[bool] = config_property(
        False,
        check=_boolean,
    )

    def __init__(
        self,
        *,
        replace_existing: bool = False,
        atomic_move: bool = False,
    ) -> None:
        """Initialise the move options."""
        super().__init__(
            replace_existing=replace_existing,
            atomic_move=atomic_move,
        )
