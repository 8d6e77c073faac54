"""\
Logging
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides logging utilities and configuration helpers for
fskit. Every module of the library logs through a logger obtained from
`get_logger(__name__)`, so all records live under the `fskit` logger
namespace.

The library never installs handlers on its own. Applications that want
to see what fskit does call `configure` with a `LoggerConfig`, which
sets up a console handler (coloured or JSON) and, optionally, a
rotating log file.

Filesystem operations attach their paths to the log records as extra
fields (`source`, `target`, `path`, ...). The formatters below pick
those fields up automatically and render them next to the message.
"""

from __future__ import annotations

import functools
import json
import logging
import logging.handlers
import os
import sys
import time
import typing as t
from pathlib import Path

if t.TYPE_CHECKING:
    from fskit.core.config import LoggerConfig

__all__: list[str] = [
    "ColouredFormatter",
    "FskitFormatter",
    "JSONFormatter",
    "configure",
    "get_logger",
    "perf_logger",
]

_ROOT_LOGGER: t.Final[str] = "fskit"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    This formatter outputs log records in JSON format, capturing the
    timestamp, log level, logger name, message, module, function, line
    number, any exception information and, optionally, the extra fields
    attached to the record.

    :param extras: Whether to include extra fields in output, defaults
        to `True`.
    """

    def __init__(self, extras: bool = True) -> None:
        """Initialise the JSON formatter instance."""
        super().__init__()
        self.extras = extras

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        :param record: The log record to format.
        :return: JSON-formatted log message.
        """
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if self.extras:
            for key, value in record.__dict__.items():
                if (
                    key not in payload
                    and key not in FskitFormatter.LOG_RECORD_ATTRS
                    and not key.startswith("_")
                ):
                    payload[key] = value
        return json.dumps(payload, default=str)


class FskitFormatter(logging.Formatter):
    """Custom formatter that automatically includes extra fields.

    This formatter extends the standard logging formatter to detect the
    extra fields of a record (those not part of the standard
    `LogRecord` attributes) and expose them, formatted, as the
    `%(extra)s` placeholder.

    :param fmt: The format string for log messages, defaults to `None`.
    :param datefmt: The format string for timestamps, defaults to
        `None`.
    :param extra_format: Format string for individual extra fields,
        defaults to `key: value`.
    :param extra_separator: Separator between multiple extra fields,
        defaults to a single space.
    :var LOG_RECORD_ATTRS: Set of standard `LogRecord` attributes.
    """

    LOG_RECORD_ATTRS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "getMessage",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
        "asctime",
        "taskName",
        "qualName",
        "extra",
    }

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        extra_format: str = "{key}: {value}",
        extra_separator: str = " ",
    ) -> None:
        """Initialise the custom formatter."""
        super().__init__(fmt, datefmt)
        self.extra = extra_format
        self.extra_separator = extra_separator

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with automatic extra field handling.

        :param record: The log record to format.
        :return: Formatted log message with extra fields.
        """
        clone = logging.makeLogRecord(record.__dict__)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self.LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extras:
            entries = [
                self.extra.format(key=key, value=value)
                for key, value in sorted(extras.items())
            ]
            clone.extra = self.extra_separator.join(entries)
        else:
            clone.extra = ""
        if not hasattr(clone, "qualName"):
            clone.qualName = f"{record.name}.{record.funcName}"
        return super().format(clone)


class ColouredFormatter(FskitFormatter):
    """Coloured formatter with fully qualified function names.

    Colours are only applied when `is_tty` is set, so that log files
    stay free of ANSI escape sequences.

    :var COLORS: Dictionary mapping log levels to ANSI colour codes.
    """

    COLORS = {
        "DEBUG": "\x1b[38;5;14m",
        "INFO": "\x1b[38;5;41m",
        "WARNING": "\x1b[38;5;215m",
        "ERROR": "\x1b[38;5;204m",
        "CRITICAL": "\x1b[38;5;197m",
        "QUALNAME": "\x1b[38;5;140m",
        "RESET": "\x1b[0m",
    }

    is_tty: bool = False

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, colouring it for TTY output.

        :param record: The log record to format.
        :return: Formatted log message.
        """
        clone = logging.makeLogRecord(record.__dict__)
        qualname = f"{record.name}.{record.funcName}"
        clone.qualName = qualname
        if self.is_tty:
            colour = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            clone.levelname = (
                f"{colour}{record.levelname:>8s}{self.COLORS['RESET']}"
            )
            clone.qualName = (
                f"{self.COLORS['QUALNAME']}{qualname}{self.COLORS['RESET']}"
            )
        else:
            clone.levelname = f"{record.levelname:>8s}"
        return super().format(clone)


def configure(config: LoggerConfig) -> logging.Logger:
    """Configure the `fskit` logger from a logger configuration.

    This function replaces the handlers of the `fskit` logger with a
    console handler and, when enabled, a rotating file handler. Records
    are rendered as JSON when `config.as_json` is set and with the
    coloured formatter otherwise.

    :param config: Logging configuration settings.
    :return: The configured `fskit` logger.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.handlers.clear()
    levels: list[int] = [getattr(logging, config.level.upper())]
    if config.tty.enable:
        tty = logging.StreamHandler(sys.stdout)
        tty.setLevel(getattr(logging, config.tty.level.upper()))
        if config.as_json:
            formatter: logging.Formatter = JSONFormatter()
        else:
            formatter = ColouredFormatter(
                fmt=config.tty.fmt,
                datefmt=config.tty.datefmt,
                extra_format="[{key}: {value}]",
            )
            formatter.is_tty = config.tty.colour and sys.stdout.isatty()
        tty.setFormatter(formatter)
        logger.addHandler(tty)
        levels.append(tty.level)
    if config.file.enable:
        Path(config.file.path).mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(config.file.path, config.file.output),
            maxBytes=config.file.max_bytes,
            backupCount=config.file.backups,
            encoding=config.file.encoding,
        )
        handler.setLevel(getattr(logging, config.file.level.upper()))
        if config.as_json:
            formatter = JSONFormatter()
        else:
            formatter = ColouredFormatter(
                fmt=config.file.fmt,
                datefmt=config.file.datefmt,
                extra_format="[{key}: {value}]",
            )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        levels.append(handler.level)
    logger.setLevel(min(levels))
    return logger


def get_logger(logger_name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    :param logger_name: Logger name, usually the module's `__name__`.
    :return: Logger instance.
    """
    return logging.getLogger(logger_name)


def perf_logger(func: t.Callable[..., t.Any]) -> t.Callable[..., t.Any]:
    """Decorator to log function execution time.

    This decorator wraps a function and logs its execution time at the
    `DEBUG` level. If an exception occurs, it logs the error along with
    the execution time and re-raises it.

    :param func: Function to wrap.
    :return: Wrapped function with performance logging.
    """

    @functools.wraps(func)
    def wrapper(*args: t.Any, **kwargs: t.Any) -> t.Any:
        """Wrapper function to log execution time."""
        logger = get_logger(func.__module__)
        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            elapsed = time.perf_counter() - started
            logger.error(
                f"Function {func.__qualname__!r} failed after "
                f"{elapsed:.4f}s: {exc}",
                extra={
                    "function": func.__qualname__,
                    "elapsed": elapsed,
                },
            )
            raise
        elapsed = time.perf_counter() - started
        logger.debug(
            f"Function: {func.__qualname__!r} completed in {elapsed:.4f}s",
            extra={
                "function": func.__qualname__,
                "elapsed": elapsed,
            },
        )
        return result

    return wrapper
