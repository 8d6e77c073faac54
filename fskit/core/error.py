"""\
Error and warnings
==================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides various error classes that are used throughout
this library along with the machinery to translate raw `OSError`
instances raised by the operating system into them.

Every error raised by the operating system is re-raised as one of the
classes below while still being an instance of the matching built-in
exception. This means that callers can catch either the library error
(`NotFoundError`) or the built-in one (`FileNotFoundError`) for the
same failure.
"""

from __future__ import annotations

import errno
import functools
import os
import typing as t

__all__: tuple[str, ...] = (
    "AccessDeniedError",
    "AlreadyExistsError",
    "ConfigValidationError",
    "DirectoryNotEmptyError",
    "FilesystemError",
    "IOFailureError",
    "InvalidPermissionsError",
    "NotFoundError",
    "PrincipalNotFoundError",
    "UnsupportedOperationError",
    "ValidationError",
    "oserrors",
    "translate",
)

Error = Exception

_P = t.ParamSpec("_P")
_R = t.TypeVar("_R")


class BaseError(Error):
    """Base error class for all exceptions."""


class FilesystemError(BaseError, OSError):
    """Errors related to failure of an underlying filesystem call.

    Instances carry the usual `OSError` fields (`errno`, `strerror`,
    `filename` and `filename2`) of the failure they were created from.
    """

    @classmethod
    def of(
        cls,
        code: int,
        path: str | None = None,
        other: str | None = None,
    ) -> t.Self:
        """Create an error for an `errno` code and the paths involved.

        :param code: The `errno` code describing the failure.
        :param path: The path the failure relates to, defaults to `None`.
        :param other: The second path of two path operations (copy,
            move, link), defaults to `None`.
        :return: An instance of the error class.
        """
        return cls(code, os.strerror(code), path, None, other)


class IOFailureError(FilesystemError):
    """Errors related to any other failure of the operating system."""


class NotFoundError(FilesystemError, FileNotFoundError):
    """Errors related to a path that does not exist."""


class AlreadyExistsError(FilesystemError, FileExistsError):
    """Errors related to a target path that already exists."""


class DirectoryNotEmptyError(IOFailureError):
    """Errors related to removing or replacing a non-empty directory."""


class AccessDeniedError(IOFailureError, PermissionError):
    """Errors related to the operating system denying access."""


class UnsupportedOperationError(FilesystemError):
    """Errors related to an operation the platform cannot perform."""


class PrincipalNotFoundError(UnsupportedOperationError, LookupError):
    """Errors related to looking up a user or group that doesn't exist.

    :param name: The name of the principal that was looked up.
    :param kind: The kind of principal, either `user` or `group`.
    """

    def __init__(self, name: str, kind: str = "user") -> None:
        """Initialise the error with the principal name and kind."""
        super().__init__(f"no such {kind}: {name!r}")
        self.name = name
        self.kind = kind


class ValidationError(BaseError, ValueError):
    """Errors related to validation check failure.

    :param message: The error message to be displayed.
    """

    def __init__(self, message: str, *args: t.Any) -> None:
        """Initialise the exception with a message and optional args."""
        super().__init__(message, *args)
        self.message = message

    def __repr__(self) -> str:
        """Return a string representation of the exception."""
        return f"<{type(self).__name__}(message={self.message!r})>"


class ConfigValidationError(ValidationError):
    """Errors related to configuration validation failure."""


class InvalidPermissionsError(ValidationError):
    """Errors related to malformed POSIX permissions.

    :param message: The error message to be displayed.
    :param permissions: The offending value, if any.
    """

    def __init__(self, message: str, *, permissions: t.Any = None) -> None:
        """Initialise the permissions error with the offending value."""
        if permissions is not None:
            message = f"{message} (Permissions: {permissions!r})"
        super().__init__(message)
        self.permissions = permissions


_ERRNO_ERRORS: dict[int, type[FilesystemError]] = {
    errno.ENOENT: NotFoundError,
    errno.EEXIST: AlreadyExistsError,
    errno.ENOTEMPTY: DirectoryNotEmptyError,
    errno.EACCES: AccessDeniedError,
    errno.EPERM: AccessDeniedError,
    errno.EXDEV: UnsupportedOperationError,
    errno.ENOTSUP: UnsupportedOperationError,
    errno.EOPNOTSUPP: UnsupportedOperationError,
}


def translate(error: OSError) -> FilesystemError:
    """Translate an `OSError` into the library's error taxonomy.

    The error class is picked using the `errno` of the original error,
    falling back to `IOFailureError` for anything not mapped explicitly.
    Errors which are already part of the taxonomy are returned as is.

    :param error: The error raised by the operating system.
    :return: The equivalent library error.
    """
    if isinstance(error, FilesystemError):
        return error
    klass = _ERRNO_ERRORS.get(error.errno, IOFailureError)
    if error.errno is None:
        return klass(*error.args)
    return klass(
        error.errno,
        error.strerror,
        error.filename,
        None,
        error.filename2,
    )


def oserrors(func: t.Callable[_P, _R]) -> t.Callable[_P, _R]:
    """Decorator to translate operating system errors.

    This decorator wraps a function that talks to the operating system
    and re-raises any `OSError` as its translated library error, chained
    to the original. `NotImplementedError`, which `os` raises when an
    option such as `follow_symlinks` is unavailable on the platform,
    becomes an `UnsupportedOperationError`.

    :param func: Function to wrap.
    :return: Wrapped function with error translation.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        """Wrapper function to translate raised errors."""
        try:
            return func(*args, **kwargs)
        except BaseError:
            raise
        except OSError as error:
            raise translate(error) from error
        except NotImplementedError as error:
            raise UnsupportedOperationError(
                errno.ENOTSUP, str(error) or os.strerror(errno.ENOTSUP)
            ) from error

    return wrapper
