"""\
Attributes
==========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides existence and type predicates together with
generic access to file attributes.

Attributes are grouped in views and addressed as `view:name`, with the
view defaulting to `basic` when left out::

    basic   last_modified_time, last_access_time, creation_time, size,
            is_regular_file, is_directory, is_symbolic_link, is_other,
            file_key
    owner   owner
    posix   everything in basic, owner, group, permissions
    unix    everything in posix, mode, ino, dev, rdev, nlink, uid, gid,
            ctime

Nothing is cached: every call stats the path again, so answers always
reflect the state of the filesystem at the time of the call.
"""

from __future__ import annotations

import errno
import grp
import os
import pwd
import stat
import typing as t
from datetime import UTC
from datetime import datetime
from datetime import timedelta

from fskit.core.error import PrincipalNotFoundError
from fskit.core.error import UnsupportedOperationError
from fskit.core.error import oserrors
from fskit.core.options import LinkOptions
from fskit.core.paths import last_segment
from fskit.core.permissions import Permissions
from fskit.utils.logging import get_logger

if t.TYPE_CHECKING:
    from fskit.core.paths import StrPath
    from fskit.core.permissions import PermissionsLike

__all__: tuple[str, ...] = (
    "children",
    "creation_time",
    "exists",
    "find_group",
    "find_user",
    "get_attribute",
    "group",
    "is_directory",
    "is_executable",
    "is_hidden",
    "is_readable",
    "is_regular_file",
    "is_same_file",
    "is_symlink",
    "is_writable",
    "last_access_time",
    "last_modified_time",
    "lookup_group",
    "lookup_user",
    "octal_posix_permissions",
    "owner",
    "posix_permissions",
    "read_all_attributes",
    "read_attributes",
    "set_attribute",
    "set_creation_time",
    "set_group",
    "set_last_access_time",
    "set_last_modified_time",
    "set_owner",
    "set_posix_permissions",
    "size",
    "supported_attribute_views",
)

logger = get_logger(__name__)

FileTime: t.TypeAlias = datetime | int | float
Follow: t.TypeAlias = bool | LinkOptions

_EPOCH: t.Final[datetime] = datetime(1970, 1, 1, tzinfo=UTC)
_BASIC_ATTRIBUTES: t.Final[tuple[str, ...]] = (
    "last_modified_time",
    "last_access_time",
    "creation_time",
    "size",
    "is_regular_file",
    "is_directory",
    "is_symbolic_link",
    "is_other",
    "file_key",
)
_POSIX_ATTRIBUTES: t.Final[tuple[str, ...]] = _BASIC_ATTRIBUTES + (
    "owner",
    "group",
    "permissions",
)
_UNIX_ATTRIBUTES: t.Final[tuple[str, ...]] = _POSIX_ATTRIBUTES + (
    "mode",
    "ino",
    "dev",
    "rdev",
    "nlink",
    "uid",
    "gid",
    "ctime",
)
_VIEWS: t.Final[dict[str, tuple[str, ...]]] = {
    "basic": _BASIC_ATTRIBUTES,
    "owner": ("owner",),
    "posix": _POSIX_ATTRIBUTES,
    "unix": _UNIX_ATTRIBUTES,
}


def _to_datetime(ns: int) -> datetime:
    """Convert nanoseconds since the epoch to an aware UTC datetime."""
    seconds, remainder = divmod(ns, 1_000_000_000)
    return _EPOCH + timedelta(seconds=seconds, microseconds=remainder // 1000)


def _to_ns(value: FileTime) -> int:
    """Convert a datetime or a POSIX timestamp to nanoseconds."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.astimezone()
        delta = value - _EPOCH
        return (
            delta.days * 86_400 + delta.seconds
        ) * 1_000_000_000 + delta.microseconds * 1000
    if isinstance(value, int | float) and not isinstance(value, bool):
        return round(value * 1_000_000) * 1000
    raise TypeError(
        f"expected a datetime or a timestamp, got {type(value).__name__!r}"
    )


def _user_name(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def _group_name(gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def _creation_time(st: os.stat_result) -> datetime:
    # NOTE(xames3): Most Linux filesystems expose no birth time through
    # `stat`, in which case the last modified time stands in for it.
    birth = getattr(st, "st_birthtime", None)
    if birth is None:
        return _to_datetime(st.st_mtime_ns)
    return _to_datetime(round(birth * 1_000_000) * 1000)


_READERS: t.Final[dict[str, t.Callable[[os.stat_result], t.Any]]] = {
    "last_modified_time": lambda st: _to_datetime(st.st_mtime_ns),
    "last_access_time": lambda st: _to_datetime(st.st_atime_ns),
    "creation_time": _creation_time,
    "size": lambda st: st.st_size,
    "is_regular_file": lambda st: stat.S_ISREG(st.st_mode),
    "is_directory": lambda st: stat.S_ISDIR(st.st_mode),
    "is_symbolic_link": lambda st: stat.S_ISLNK(st.st_mode),
    "is_other": lambda st: not (
        stat.S_ISREG(st.st_mode)
        or stat.S_ISDIR(st.st_mode)
        or stat.S_ISLNK(st.st_mode)
    ),
    "file_key": lambda st: (st.st_dev, st.st_ino),
    "owner": lambda st: _user_name(st.st_uid),
    "group": lambda st: _group_name(st.st_gid),
    "permissions": lambda st: Permissions(stat.S_IMODE(st.st_mode) & 0o777),
    "mode": lambda st: st.st_mode,
    "ino": lambda st: st.st_ino,
    "dev": lambda st: st.st_dev,
    "rdev": lambda st: st.st_rdev,
    "nlink": lambda st: st.st_nlink,
    "uid": lambda st: st.st_uid,
    "gid": lambda st: st.st_gid,
    "ctime": lambda st: _to_datetime(st.st_ctime_ns),
}


def _follows(follow_links: Follow) -> bool:
    return LinkOptions.of(follow_links).follow_links


def _stat(path: StrPath, follow_links: Follow) -> os.stat_result | None:
    """Stat a path, returning `None` when that is not possible."""
    follow = _follows(follow_links)
    try:
        return os.stat(path, follow_symlinks=follow)
    except (OSError, ValueError):
        return None


def exists(path: StrPath, follow_links: Follow = True) -> bool:
    """Check whether something exists at a path.

    :param path: The path to check.
    :param follow_links: Whether a symlink counts only when its target
        exists, defaults to `True`. With `False` a dangling symlink
        exists. `LinkOptions` are accepted as well.
    :return: `True` if the path exists.
    """
    if _follows(follow_links):
        return os.path.exists(path)
    return os.path.lexists(path)


def is_directory(path: StrPath, follow_links: Follow = True) -> bool:
    """Check whether a path is a directory (or a link to one)."""
    st = _stat(path, follow_links)
    return st is not None and stat.S_ISDIR(st.st_mode)


def is_regular_file(path: StrPath, follow_links: Follow = True) -> bool:
    """Check whether a path is a regular file (or a link to one)."""
    st = _stat(path, follow_links)
    return st is not None and stat.S_ISREG(st.st_mode)


def is_symlink(path: StrPath) -> bool:
    return os.path.islink(path)


def is_hidden(path: StrPath) -> bool:
    """Check whether a path names a dotfile."""
    return last_segment(path).startswith(".")


def is_readable(path: StrPath) -> bool:
    return os.access(path, os.R_OK)


def is_writable(path: StrPath) -> bool:
    return os.access(path, os.W_OK)


def is_executable(path: StrPath) -> bool:
    return os.access(path, os.X_OK)


@oserrors
def is_same_file(path: StrPath, other: StrPath) -> bool:
    """Check whether two paths locate the same file.

    This compares identity, not content: hard links and symlinks that
    lead to the same file are the same file.

    :param path: The first path.
    :param other: The second path.
    :return: `True` if both paths locate the same file.
    :raises NotFoundError: If either path does not exist.
    """
    return os.path.samefile(path, other)


@oserrors
def size(path: StrPath) -> int | None:
    """Return the size of a file in bytes, or `None` if it is missing."""
    try:
        return os.stat(path).st_size
    except FileNotFoundError:
        return None


@oserrors
def children(path: StrPath = ".") -> list[str]:
    """Return the names of the entries of a directory."""
    return os.listdir(path)


def supported_attribute_views() -> tuple[str, ...]:
    return tuple(_VIEWS)


def _resolve(attribute: str) -> tuple[str, list[str]]:
    """Split a `view:names` attribute string into view and names.

    :param attribute: The attribute string, for instance `posix:*` or
        `basic:size,last_modified_time`.
    :return: The view and the list of attribute names.
    :raises UnsupportedOperationError: If the view or any of the names
        is unknown.
    """
    view, _, names = attribute.rpartition(":")
    view = view or "basic"
    if view not in _VIEWS:
        raise UnsupportedOperationError(
            errno.ENOTSUP, f"attribute view {view!r} not supported"
        )
    if names == "*":
        return view, list(_VIEWS[view])
    requested = names.split(",")
    for name in requested:
        if name not in _VIEWS[view]:
            raise UnsupportedOperationError(
                errno.ENOTSUP,
                f"attribute {name!r} not supported by view {view!r}",
            )
    return view, requested


@oserrors
def get_attribute(
    path: StrPath,
    attribute: str,
    follow_links: Follow = True,
) -> t.Any:
    """Read a single attribute of a path.

    :param path: The path to read.
    :param attribute: The attribute as `view:name`, for instance
        `posix:permissions`.
    :param follow_links: Whether to read the target of a symlink
        rather than the link itself, defaults to `True`. `LinkOptions`
        are accepted as well.
    :return: The value of the attribute.
    """
    _, names = _resolve(attribute)
    if len(names) != 1:
        raise UnsupportedOperationError(
            errno.ENOTSUP, f"expected a single attribute, got {attribute!r}"
        )
    st = os.stat(path, follow_symlinks=_follows(follow_links))
    return _READERS[names[0]](st)


@oserrors
def read_attributes(
    path: StrPath,
    attributes: str = "basic:*",
    follow_links: Follow = True,
) -> dict[str, t.Any]:
    """Read several attributes of one view in a single `stat` call.

    :param path: The path to read.
    :param attributes: The attributes as `view:*` or
        `view:name,name,...`, defaults to every basic attribute.
    :param follow_links: Whether to read the target of a symlink,
        defaults to `True`. `LinkOptions` are accepted as well.
    :return: A mapping of attribute names to values.
    """
    _, names = _resolve(attributes)
    st = os.stat(path, follow_symlinks=_follows(follow_links))
    return {name: _READERS[name](st) for name in names}


@oserrors
def read_all_attributes(
    path: StrPath,
    follow_links: Follow = True,
) -> dict[str, dict[str, t.Any]]:
    """Read every attribute of every supported view.

    :param path: The path to read.
    :param follow_links: Whether to read the target of a symlink,
        defaults to `True`.
    :return: A mapping of view names to their attribute mappings.
    """
    st = os.stat(path, follow_symlinks=_follows(follow_links))
    return {
        view: {name: _READERS[name](st) for name in names}
        for view, names in _VIEWS.items()
    }


def _set_times(
    path: StrPath,
    follow_links: bool,
    *,
    modified: FileTime | None = None,
    accessed: FileTime | None = None,
) -> None:
    st = os.stat(path, follow_symlinks=follow_links)
    atime = st.st_atime_ns if accessed is None else _to_ns(accessed)
    mtime = st.st_mtime_ns if modified is None else _to_ns(modified)
    os.utime(path, ns=(atime, mtime), follow_symlinks=follow_links)


def _uid(user: str | int) -> int:
    if isinstance(user, int):
        return user
    return lookup_user(user).pw_uid


def _gid(group: str | int) -> int:
    if isinstance(group, int):
        return group
    return lookup_group(group).gr_gid


@oserrors
def set_attribute(
    path: StrPath,
    attribute: str,
    value: t.Any,
    follow_links: Follow = True,
) -> None:
    """Write a single attribute of a path.

    Only the timestamps, the owner, the group and the permissions can
    be written; every other attribute is derived by the filesystem.

    :param path: The path to modify.
    :param attribute: The attribute as `view:name`.
    :param value: The new value. Times accept a `datetime` or a POSIX
        timestamp, owner and group accept a name or a numeric id and
        permissions accept anything `Permissions.parse` accepts.
    :param follow_links: Whether to modify the target of a symlink
        rather than the link itself, defaults to `True`. `LinkOptions`
        are accepted as well.
    :raises UnsupportedOperationError: If the attribute is read-only or
        the platform cannot modify links themselves.
    """
    _, names = _resolve(attribute)
    if len(names) != 1:
        raise UnsupportedOperationError(
            errno.ENOTSUP, f"expected a single attribute, got {attribute!r}"
        )
    name, follow = names[0], _follows(follow_links)
    logger.debug(
        f"Setting attribute {name!r}",
        extra={"path": os.fspath(path), "value": value},
    )
    if name == "last_modified_time":
        _set_times(path, follow, modified=value)
    elif name == "last_access_time":
        _set_times(path, follow, accessed=value)
    elif name == "permissions":
        mode = Permissions.parse(value).mode
        os.chmod(path, mode, follow_symlinks=follow)
    elif name == "owner":
        os.chown(path, _uid(value), -1, follow_symlinks=follow)
    elif name == "group":
        os.chown(path, -1, _gid(value), follow_symlinks=follow)
    else:
        raise UnsupportedOperationError(
            errno.ENOTSUP, f"attribute {name!r} cannot be set"
        )


def last_modified_time(path: StrPath, follow_links: Follow = True) -> datetime:
    return get_attribute(path, "basic:last_modified_time", follow_links)


def set_last_modified_time(
    path: StrPath,
    time: FileTime,
    follow_links: Follow = True,
) -> None:
    set_attribute(path, "basic:last_modified_time", time, follow_links)


def last_access_time(path: StrPath, follow_links: Follow = True) -> datetime:
    return get_attribute(path, "basic:last_access_time", follow_links)


def set_last_access_time(
    path: StrPath,
    time: FileTime,
    follow_links: Follow = True,
) -> None:
    set_attribute(path, "basic:last_access_time", time, follow_links)


def creation_time(path: StrPath, follow_links: Follow = True) -> datetime:
    """Return the creation time, or the last modified time without one."""
    return get_attribute(path, "basic:creation_time", follow_links)


def set_creation_time(
    path: StrPath,
    time: FileTime,
    follow_links: Follow = True,
) -> None:
    """Set the creation time; no supported platform allows this."""
    set_attribute(path, "basic:creation_time", time, follow_links)


def owner(path: StrPath, follow_links: Follow = True) -> str:
    """Return the name of the user owning a path."""
    return get_attribute(path, "owner:owner", follow_links)


def set_owner(
    path: StrPath,
    user: str | int,
    follow_links: Follow = True,
) -> None:
    """Change the user owning a path.

    :raises PrincipalNotFoundError: If the user name does not exist.
    """
    set_attribute(path, "owner:owner", user, follow_links)


def group(path: StrPath, follow_links: Follow = True) -> str:
    """Return the name of the group owning a path."""
    return get_attribute(path, "posix:group", follow_links)


def set_group(
    path: StrPath,
    group: str | int,
    follow_links: Follow = True,
) -> None:
    """Change the group owning a path.

    :raises PrincipalNotFoundError: If the group name does not exist.
    """
    set_attribute(path, "posix:group", group, follow_links)


def posix_permissions(
    path: StrPath,
    follow_links: Follow = True,
) -> Permissions:
    return get_attribute(path, "posix:permissions", follow_links)


def octal_posix_permissions(path: StrPath, follow_links: Follow = True) -> int:
    """Return the permissions of a path as octal digits, such as `644`."""
    return posix_permissions(path, follow_links).octal


def set_posix_permissions(
    path: StrPath,
    permissions: PermissionsLike,
    follow_links: Follow = True,
) -> None:
    """Change the permissions of a path.

    :param path: The path to modify.
    :param permissions: The new permissions, in any representation
        `Permissions.parse` accepts (`754`, `"rwxr-xr--"`, ...).
    :param follow_links: Whether to modify the target of a symlink,
        defaults to `True`.
    :raises InvalidPermissionsError: If the permissions are malformed.
    """
    set_attribute(path, "posix:permissions", permissions, follow_links)


def lookup_user(name: str) -> pwd.struct_passwd:
    """Look up a user by name.

    :param name: The user name.
    :return: The password database entry of the user.
    :raises PrincipalNotFoundError: If no such user exists.
    """
    try:
        return pwd.getpwnam(name)
    except KeyError:
        raise PrincipalNotFoundError(name, "user") from None


def find_user(name: str) -> pwd.struct_passwd | None:
    """Look up a user by name, returning `None` if it does not exist."""
    try:
        return lookup_user(name)
    except PrincipalNotFoundError:
        return None


def lookup_group(name: str) -> grp.struct_group:
    """Look up a group by name.

    :param name: The group name.
    :return: The group database entry of the group.
    :raises PrincipalNotFoundError: If no such group exists.
    """
    try:
        return grp.getgrnam(name)
    except KeyError:
        raise PrincipalNotFoundError(name, "group") from None


def find_group(name: str) -> grp.struct_group | None:
    """Look up a group by name, returning `None` if it does not exist."""
    try:
        return lookup_group(name)
    except PrincipalNotFoundError:
        return None
