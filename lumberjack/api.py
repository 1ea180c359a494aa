"""Public Python API for lumberjack package.

This module provides the lifecycle controls for logging a pipeline:
attach a logger, dump its log, and detach it.
"""

import logging
from typing import Any, Optional, Union

from lumberjack.core.exceptions import UsageError
from lumberjack.loggers.base import Logger, logger_type
from lumberjack.loggers.registry import get_logger
from lumberjack.loggers.simple import SimpleLogger
from lumberjack.pipe import Attachment, Tracked

_log = logging.getLogger(__name__)


def start_log(data: Any, logger: Union[Logger, str, None] = None, **options: Any) -> Tracked:
    """Attach a logger to a dataset.

    If ``data`` already carries a logger, that logger is detached without
    being flushed and replaced.

    Args:
        data: Dataset value, or a Tracked value
        logger: Logger to attach, or the registered name of a logger type
            (default: a new SimpleLogger)
        **options: Configuration for the logger type named by ``logger``

    Returns:
        Tracked value with the logger attached and the step counter at 0

    Raises:
        UsageError: If ``logger`` does not implement record() and flush(),
            or if options are given with a logger instance
        ConfigurationError: If the named logger type is unknown or its
            options are invalid

    Example:
        >>> from lumberjack import start_log, dump_log, CellwiseLogger
        >>> out = start_log(table, CellwiseLogger(key="id")) >> clean
        >>> dump_log(out, file="changes.csv", stop=True)
        >>> out = start_log(table, "cellwise", key="id") >> clean
    """
    if isinstance(logger, str):
        logger = get_logger(logger, options)
    elif options:
        raise UsageError(
            "Logger options are only accepted with a logger type name",
            context={"options": sorted(options)},
        )
    if logger is None:
        logger = SimpleLogger()
    if not isinstance(logger, Logger):
        raise UsageError(
            "Logger must implement record() and flush()",
            context={"type": type(logger).__name__},
        )

    if isinstance(data, Tracked) and data.attachment is not None:
        _log.info(
            "Replacing attached logger without flushing",
            extra={"logger_type": logger_type(data.logger)},
        )
        data.attachment.detach()

    return Tracked(data, Attachment(logger))


def dump_log(data: Tracked, stop: bool = False, **options: Any) -> Tracked:
    """Flush the attached logger's log to its sink.

    Args:
        data: Tracked value with a logger attached
        stop: Detach the logger after flushing
        **options: Forwarded verbatim to the logger's flush()
            (for built-in loggers: file, append, verbose, delimiter, encoding)

    Returns:
        The Tracked value, without attachment when ``stop`` is True

    Raises:
        UsageError: If no logger is attached
        OSError: If the sink cannot be written
    """
    attachment = _require_attachment(data, "dump_log")
    attachment.logger.flush(**options)
    _log.debug(
        "Flushed log",
        extra={"step": attachment.step, "logger_type": logger_type(attachment.logger)},
    )
    if stop:
        return stop_log(data)
    return data


def stop_log(data: Tracked) -> Tracked:
    """Detach the logger from a dataset without flushing it.

    Args:
        data: Tracked value with a logger attached

    Returns:
        Tracked value without attachment

    Raises:
        UsageError: If no logger is attached
    """
    attachment = _require_attachment(data, "stop_log")
    attachment.detach()
    return Tracked(data.value)


def get_log(data: Any) -> Optional[Logger]:
    """Return the logger attached to ``data``, or None."""
    if isinstance(data, Tracked):
        return data.logger
    return None


def _require_attachment(data: Any, operation: str) -> Attachment:
    attachment = data.attachment if isinstance(data, Tracked) else None
    if attachment is None:
        raise UsageError(
            f"{operation}() requires data with an attached logger",
            context={"type": type(data).__name__},
        )
    return attachment
