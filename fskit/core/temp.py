"""\
Temporary resources
===================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides temporary directories and files whose lifetime is
bound to a `with` block. The entry is created when the block is entered
and recursively deleted when it is left, whether the block returns
normally or raises.

Cleanup runs when the block exits, not when the object is garbage
collected. A process that is killed inside the block leaves its
temporary entries behind.
"""

from __future__ import annotations

import typing as t

from fskit.core.attributes import exists
from fskit.core.operations import create_temp_directory
from fskit.core.operations import create_temp_file
from fskit.core.operations import delete_recursively
from fskit.core.paths import canonical
from fskit.utils.logging import get_logger
from fskit.utils.logging import perf_logger

if t.TYPE_CHECKING:
    from types import TracebackType

    from fskit.core.config import Config
    from fskit.core.paths import StrPath

__all__: tuple[str, ...] = (
    "TempDirectory",
    "TempFile",
    "with_temp_directory",
    "with_temp_file",
)

logger = get_logger(__name__)

R = t.TypeVar("R")


class TempDirectory:
    """Context manager for a temporary directory.

    Entering the context creates a uniquely named directory and returns
    its canonical path. Leaving it deletes the directory along with
    everything created inside of it, without following symlinks.

    Example::

        .. code-block:: python

            with TempDirectory() as path:
                create_file(join(path, "notes.txt"), content="hello")

    :param prefix: The start of the directory name, defaults to the
        configured temp prefix.
    :param directory: Where to create the directory, defaults to the
        system temporary directory.
    :param config: An optional configuration object.
    :var path: The canonical path of the directory while the context is
        active, `None` otherwise.
    """

    def __init__(
        self,
        prefix: str | None = None,
        directory: StrPath | None = None,
        *,
        config: Config | None = None,
    ) -> None:
        """Initialise a temporary directory scope."""
        self.prefix = prefix
        self.directory = directory
        self.config = config
        self.path: str | None = None

    def __enter__(self) -> str:
        """Create the directory and return its canonical path."""
        self.path = canonical(
            create_temp_directory(
                self.prefix,
                self.directory,
                config=self.config,
            )
        )
        logger.debug("Entered temporary directory", extra={"path": self.path})
        return self.path

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Delete the directory recursively.

        The directory may already be gone if the block removed it, in
        which case there is nothing left to do. Exceptions raised by the
        block are never suppressed.
        """
        path, self.path = self.path, None
        if path is not None and exists(path, follow_links=False):
            delete_recursively(path, config=self.config)
            logger.debug("Removed temporary directory", extra={"path": path})


class TempFile:
    """Context manager for a temporary file in its own directory.

    Entering the context creates a temporary directory and a file inside
    of it, and returns both canonical paths as `(directory, file)`.
    Leaving it deletes the directory, and with it the file and anything
    else created next to it.

    :param prefix: The start of the directory and file names, defaults
        to the configured temp prefix.
    :param suffix: The end of the file name, defaults to the configured
        temp suffix.
    :param directory: Where to create the temporary directory, defaults
        to the system temporary directory.
    :param config: An optional configuration object.
    """

    def __init__(
        self,
        prefix: str | None = None,
        suffix: str | None = None,
        directory: StrPath | None = None,
        *,
        config: Config | None = None,
    ) -> None:
        """Initialise a temporary file scope."""
        self.prefix = prefix
        self.suffix = suffix
        self.config = config
        self.scope = TempDirectory(prefix, directory, config=config)

    def __enter__(self) -> tuple[str, str]:
        """Create the directory and the file, returning both paths."""
        directory = self.scope.__enter__()
        try:
            file = canonical(
                create_temp_file(
                    self.prefix,
                    self.suffix,
                    directory,
                    config=self.config,
                )
            )
        except BaseException as error:
            self.scope.__exit__(type(error), error, error.__traceback__)
            raise
        return directory, file

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Delete the directory holding the file."""
        self.scope.__exit__(exc_type, exc_val, exc_tb)


@perf_logger
def with_temp_directory(
    body: t.Callable[[str], R],
    prefix: str | None = None,
    *,
    config: Config | None = None,
) -> R:
    """Call `body` with the path of a temporary directory.

    :param body: The function to call with the canonical path of the
        directory.
    :param prefix: The start of the directory name, defaults to the
        configured temp prefix.
    :param config: An optional configuration object.
    :return: Whatever `body` returns.
    """
    with TempDirectory(prefix, config=config) as path:
        return body(path)


@perf_logger
def with_temp_file(
    body: t.Callable[[str, str], R],
    prefix: str | None = None,
    suffix: str | None = None,
    *,
    config: Config | None = None,
) -> R:
    """Call `body` with the paths of a temporary directory and a file in it.

    :param body: The function to call with the canonical paths of the
        directory and of the file.
    :param prefix: The start of the names, defaults to the configured
        temp prefix.
    :param suffix: The end of the file name, defaults to the configured
        temp suffix.
    :param config: An optional configuration object.
    :return: Whatever `body` returns.
    """
    with TempFile(prefix, suffix, config=config) as (directory, file):
        return body(directory, file)
