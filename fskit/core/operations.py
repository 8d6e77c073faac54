"""\
Operations
==========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides the operations that change the filesystem:
creating, copying, moving and deleting files, directories and links.

Every operation is a direct, synchronous call into the operating system
with no retries and no rollback. The recursive operations in particular
are not transactional: when the Nth entry fails, the entries already
copied or deleted stay that way and the error propagates to the caller.

The defaults are conservative. Nothing is overwritten unless
`replace_existing` is set and `delete_recursively` never follows
symlinks unless asked to, so a link inside a tree cannot lead it into
destroying data outside of that tree.

.. note::

    Permissions requested at creation time go through the process
    umask, which may clear some of the bits. Callers who need an exact
    set of bits should call `set_posix_permissions` after creating the
    entry.
"""

from __future__ import annotations

import errno
import os
import shutil
import stat
import tempfile
import typing as t

from fskit.core.config import Config
from fskit.core.error import AlreadyExistsError
from fskit.core.error import NotFoundError
from fskit.core.error import UnsupportedOperationError
from fskit.core.error import oserrors
from fskit.core.options import CopyOptions
from fskit.core.options import MoveOptions
from fskit.core.paths import join
from fskit.core.paths import last_segment
from fskit.core.paths import parent
from fskit.core.permissions import Permissions
from fskit.utils.logging import get_logger
from fskit.utils.logging import perf_logger
from fskit.utils.opentelemetry import get_tracer

if t.TYPE_CHECKING:
    from fskit.core.paths import StrPath
    from fskit.core.permissions import PermissionsLike

__all__: tuple[str, ...] = (
    "copy",
    "copy_recursively",
    "create_directories",
    "create_directory",
    "create_file",
    "create_link",
    "create_symlink",
    "create_temp_directory",
    "create_temp_file",
    "delete",
    "delete_if_exists",
    "delete_recursively",
    "move",
    "rename",
)

logger = get_logger(__name__)

Content: t.TypeAlias = str | bytes


def _mode(permissions: PermissionsLike | None, default: int) -> int:
    if permissions is None:
        return default
    return Permissions.parse(permissions).mode


def _encode(content: Content) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    if isinstance(content, bytes | bytearray):
        return bytes(content)
    raise TypeError(
        f"content must be str or bytes, not {type(content).__name__!r}"
    )


def _same(source: StrPath, target: StrPath, follow_links: bool) -> bool:
    """Check whether a target entry already is the source.

    The target is never dereferenced: a link at the target is an entry
    of its own, even when it points at the source.
    """
    try:
        entry = os.lstat(target)
        if os.path.samestat(os.lstat(source), entry):
            return True
        return os.path.samestat(
            os.stat(source, follow_symlinks=follow_links), entry
        )
    except OSError:
        return False


def _walk(root: str, follow_links: bool) -> tuple[list[str], list[str]]:
    """Collect every directory and file of a tree, root included.

    Directories are descended into; everything else, including links
    to directories when `follow_links` is off, counts as a file. A
    directory reached a second time through a symlink is listed but not
    descended into again, which keeps cyclic links from looping.

    :param root: The root of the tree.
    :param follow_links: Whether symlinks to directories are treated as
        directories.
    :return: The sorted lists of directories and files.
    """
    directories: list[str] = []
    files: list[str] = []
    visited: set[tuple[int, int]] = set()
    pending = [root]
    while pending:
        path = pending.pop()
        try:
            st = os.stat(path, follow_symlinks=follow_links)
        except OSError:
            st = None
        if st is None or not stat.S_ISDIR(st.st_mode):
            files.append(path)
            continue
        directories.append(path)
        key = (st.st_dev, st.st_ino)
        if key in visited:
            continue
        visited.add(key)
        pending.extend(os.path.join(path, name) for name in os.listdir(path))
    return sorted(directories), sorted(files)


@oserrors
def delete(path: StrPath) -> None:
    """Delete exactly one entry.

    Symlinks are never followed: deleting a link removes the link.

    :param path: The entry to delete.
    :raises NotFoundError: If nothing exists at the path.
    :raises DirectoryNotEmptyError: If the path is a directory with
        entries in it.
    """
    if stat.S_ISDIR(os.lstat(path).st_mode):
        os.rmdir(path)
    else:
        os.unlink(path)
    logger.debug("Deleted entry", extra={"path": os.fspath(path)})


def delete_if_exists(path: StrPath) -> bool:
    """Delete exactly one entry if it exists.

    :param path: The entry to delete.
    :return: `True` if something was deleted, `False` if nothing
        existed at the path.
    """
    try:
        delete(path)
    except NotFoundError:
        return False
    return True


@perf_logger
@oserrors
def delete_recursively(
    path: StrPath,
    follow_links: bool = False,
    *,
    config: Config | None = None,
) -> None:
    """Delete a path and, for a directory, everything beneath it.

    Files go first, then directories from the deepest up, so that no
    directory is removed while it still has entries.

    :param path: The root of the tree to delete.
    :param follow_links: Whether to descend into symlinked directories
        and delete their contents, defaults to `False`. Links
        themselves are always deleted as links.
    :param config: An optional configuration object, used for tracing.
    :raises NotFoundError: If nothing exists at the path.
    """
    root = join(path)
    tracer = get_tracer(config)
    with tracer.start_as_current_span("fskit.delete_recursively") as span:
        directories, files = _walk(root, follow_links)
        span.set_attribute("fskit.path", root)
        span.set_attribute("fskit.directories", len(directories))
        span.set_attribute("fskit.files", len(files))
        for entry in files + directories[::-1]:
            delete(entry)
    logger.debug(
        "Deleted tree",
        extra={
            "path": root,
            "directories": len(directories),
            "files": len(files),
        },
    )


@oserrors
def copy(
    source: StrPath,
    target: StrPath,
    options: CopyOptions | None = None,
) -> str:
    """Copy a single entry.

    Files are copied with their content. Directories are copied as an
    empty directory; use `copy_recursively` to copy their contents as
    well. Copying an entry onto itself does nothing.

    :param source: The entry to copy.
    :param target: Where to copy it to.
    :param options: The copy options, defaults to `CopyOptions()`.
    :return: The target path.
    :raises NotFoundError: If the source does not exist.
    :raises AlreadyExistsError: If the target exists and
        `replace_existing` is not set.
    :raises DirectoryNotEmptyError: If the target is a directory with
        entries in it and `replace_existing` is set.
    """
    options = options or CopyOptions()
    follow = options.follow_links
    mode = os.stat(source, follow_symlinks=follow).st_mode
    if os.path.lexists(target):
        if _same(source, target, follow):
            return os.fspath(target)
        if not options.replace_existing:
            raise AlreadyExistsError.of(
                errno.EEXIST, os.fspath(target), os.fspath(source)
            )
        delete(target)
    if stat.S_ISLNK(mode):
        os.symlink(os.readlink(source), target)
    elif stat.S_ISDIR(mode):
        os.mkdir(target)
    else:
        shutil.copyfile(source, target, follow_symlinks=follow)
    if options.copy_attributes:
        shutil.copystat(source, target, follow_symlinks=follow)
    logger.debug(
        "Copied entry",
        extra={"source": os.fspath(source), "target": os.fspath(target)},
    )
    return os.fspath(target)


@perf_logger
@oserrors
def copy_recursively(
    source: StrPath,
    target: StrPath,
    options: CopyOptions | None = None,
    *,
    config: Config | None = None,
) -> str:
    """Copy an entry and, for a directory, everything beneath it.

    All directories are copied first, parents before children, then all
    files. Each entry keeps its position relative to the source. Like
    `cp -r`, when the target is an existing directory and does not end
    with a separator, the source is copied into it rather than onto it.

    :param source: The root of the tree to copy.
    :param target: Where to copy it to.
    :param options: The options applied to every entry, defaults to
        `CopyOptions()`. With `follow_links` set, symlinked directories
        are copied as directories along with their contents.
    :param config: An optional configuration object, used for tracing.
    :return: The path the source root was copied to.
    """
    options = options or CopyOptions()
    root = join(source)
    destination = os.fspath(target)
    if os.path.isdir(destination) and not destination.endswith(os.sep):
        destination = join(destination, last_segment(root))
    else:
        destination = join(destination)
    tracer = get_tracer(config)
    with tracer.start_as_current_span("fskit.copy_recursively") as span:
        directories, files = _walk(root, options.follow_links)
        span.set_attribute("fskit.source", root)
        span.set_attribute("fskit.target", destination)
        span.set_attribute("fskit.directories", len(directories))
        span.set_attribute("fskit.files", len(files))
        for entry in directories + files:
            copy(entry, destination + entry[len(root) :], options)
    logger.debug(
        "Copied tree",
        extra={
            "source": root,
            "target": destination,
            "directories": len(directories),
            "files": len(files),
        },
    )
    return destination


def _move_across(source: StrPath, target: StrPath, mode: int) -> None:
    """Move between filesystems by copying, then deleting the source."""
    if stat.S_ISDIR(mode):
        shutil.copytree(source, target, symlinks=True)
        shutil.rmtree(source)
    else:
        shutil.copy2(source, target, follow_symlinks=False)
        os.unlink(source)


@oserrors
def move(
    source: StrPath,
    target: StrPath,
    options: MoveOptions | None = None,
) -> str:
    """Move or rename an entry.

    Symlinks are moved as links. Moving across filesystems copies the
    entry, attributes included, and deletes the source afterwards,
    unless `atomic_move` is set.

    :param source: The entry to move.
    :param target: Where to move it to.
    :param options: The move options, defaults to `MoveOptions()`.
    :return: The target path.
    :raises NotFoundError: If the source does not exist.
    :raises AlreadyExistsError: If the target exists and
        `replace_existing` is not set.
    :raises UnsupportedOperationError: If `atomic_move` is set and the
        move cannot be done as a single rename.
    """
    options = options or MoveOptions()
    mode = os.lstat(source).st_mode
    if os.path.lexists(target):
        if _same(source, target, False):
            return os.fspath(target)
        if not options.replace_existing:
            raise AlreadyExistsError.of(
                errno.EEXIST, os.fspath(target), os.fspath(source)
            )
        if not options.atomic_move:
            delete(target)
    try:
        os.rename(source, target)
    except OSError as error:
        if error.errno != errno.EXDEV or options.atomic_move:
            raise
        _move_across(source, target, mode)
    logger.debug(
        "Moved entry",
        extra={"source": os.fspath(source), "target": os.fspath(target)},
    )
    return os.fspath(target)


def rename(
    path: StrPath,
    name: str,
    options: MoveOptions | None = None,
) -> str:
    """Give an entry a new name in the same directory.

    :param path: The entry to rename.
    :param name: The new final segment.
    :param options: The move options, defaults to `MoveOptions()`.
    :return: The new path.
    :raises ValueError: If the name is not a single path segment.
    """
    if not name or os.sep in name or name in (".", ".."):
        raise ValueError(f"not a valid file name: {name!r}")
    directory = parent(path)
    target = join(directory, name) if directory is not None else name
    return move(path, target, options)


@oserrors
def create_file(
    path: StrPath,
    permissions: PermissionsLike | None = None,
    content: Content | None = None,
) -> str:
    """Create a new, empty file and optionally write content to it.

    :param path: The file to create.
    :param permissions: The permissions to create the file with,
        subject to the umask, defaults to `None`.
    :param content: The initial content, text is encoded as UTF-8,
        defaults to `None`.
    :return: The path of the file.
    :raises AlreadyExistsError: If something exists at the path.
    """
    flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL
    fd = os.open(path, flags, _mode(permissions, 0o666))
    with os.fdopen(fd, "wb") as handle:
        if content is not None:
            handle.write(_encode(content))
    logger.debug("Created file", extra={"path": os.fspath(path)})
    return os.fspath(path)


@oserrors
def create_directory(
    path: StrPath,
    permissions: PermissionsLike | None = None,
) -> str:
    """Create a new directory whose parent must already exist.

    :raises AlreadyExistsError: If something exists at the path.
    """
    os.mkdir(path, _mode(permissions, 0o777))
    logger.debug("Created directory", extra={"path": os.fspath(path)})
    return os.fspath(path)


@oserrors
def create_directories(
    path: StrPath,
    permissions: PermissionsLike | None = None,
) -> str:
    """Create a directory along with any missing parents.

    An existing directory is not an error. The permissions only apply
    to the last directory of the path.

    :raises AlreadyExistsError: If a non-directory exists at the path.
    """
    os.makedirs(path, _mode(permissions, 0o777), exist_ok=True)
    return os.fspath(path)


@oserrors
def create_temp_directory(
    prefix: str | None = None,
    directory: StrPath | None = None,
    permissions: PermissionsLike | None = None,
    *,
    suffix: str = "",
    config: Config | None = None,
) -> str:
    """Create a uniquely named temporary directory.

    The directory is not deleted automatically; see `TempDirectory` for
    a scoped alternative.

    :param prefix: The start of the directory name, defaults to the
        configured temp prefix.
    :param directory: Where to create the directory, defaults to the
        system temporary directory.
    :param permissions: The permissions of the directory, set after
        creation, defaults to `0o700`.
    :param suffix: The end of the directory name, defaults to none.
        The configured temp suffix applies to files only.
    :param config: An optional configuration object.
    :return: The path of the directory.
    """
    config = config or Config()
    if prefix is None:
        prefix = config.temp.prefix
    path = tempfile.mkdtemp(suffix=suffix, prefix=prefix, dir=directory)
    if permissions is not None:
        os.chmod(path, _mode(permissions, 0o700))
    logger.debug("Created temporary directory", extra={"path": path})
    return path


@oserrors
def create_temp_file(
    prefix: str | None = None,
    suffix: str | None = None,
    directory: StrPath | None = None,
    permissions: PermissionsLike | None = None,
    content: Content | None = None,
    *,
    config: Config | None = None,
) -> str:
    """Create a uniquely named temporary file.

    :param prefix: The start of the file name, defaults to the
        configured temp prefix.
    :param suffix: The end of the file name, defaults to the configured
        temp suffix.
    :param directory: Where to create the file, defaults to the system
        temporary directory.
    :param permissions: The permissions of the file, set after creation,
        defaults to `0o600`.
    :param content: The initial content, text is encoded as UTF-8,
        defaults to `None`.
    :param config: An optional configuration object.
    :return: The path of the file.
    """
    config = config or Config()
    if prefix is None:
        prefix = config.temp.prefix
    if suffix is None:
        suffix = config.temp.suffix
    fd, path = tempfile.mkstemp(suffix=suffix, prefix=prefix, dir=directory)
    with os.fdopen(fd, "wb") as handle:
        if content is not None:
            handle.write(_encode(content))
    if permissions is not None:
        os.chmod(path, _mode(permissions, 0o600))
    logger.debug("Created temporary file", extra={"path": path})
    return path


@oserrors
def create_link(link: StrPath, target: StrPath) -> str:
    """Create a hard link at `link` to the existing file `target`."""
    os.link(target, link)
    return os.fspath(link)


@oserrors
def create_symlink(
    link: StrPath,
    target: StrPath,
    permissions: PermissionsLike | None = None,
) -> str:
    """Create a symbolic link at `link` pointing to `target`.

    The target does not need to exist.

    :param link: Where to create the link.
    :param target: What the link points to.
    :param permissions: The permissions of the link itself, defaults to
        `None`.
    :return: The path of the link.
    :raises UnsupportedOperationError: If permissions are given but the
        platform cannot change the permissions of a link, in which case
        nothing is created.
    """
    if permissions is not None and os.chmod not in os.supports_follow_symlinks:
        raise UnsupportedOperationError(
            errno.ENOTSUP,
            "symlink permissions are not supported on this platform",
            os.fspath(link),
        )
    os.symlink(target, link)
    if permissions is not None:
        os.chmod(link, _mode(permissions, 0o777), follow_symlinks=False)
    logger.debug(
        "Created symlink",
        extra={"path": os.fspath(link), "target": os.fspath(target)},
    )
    return os.fspath(link)
