"""Logger protocol and step metadata."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from lumberjack.core.sink import DEFAULT_DELIMITER, DEFAULT_ENCODING, write_csv
from lumberjack.models.logger_config import DumpOptions, parse_config

logger = logging.getLogger(__name__)

# Flush options passed through to the csv sink
SINK_OPTIONS = frozenset({"delimiter", "encoding"})


@dataclass(frozen=True)
class StepMeta:
    """Metadata describing one application of the pipe operator.

    Attributes:
        step: Sequence number of the step, starting at 1
        expr: Source text of the right-hand side, best effort
        timestamp: Wall-clock time the step was recorded
        func: The callable that produced the step's output
    """

    step: int
    expr: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    func: Optional[Callable[..., Any]] = None


@runtime_checkable
class Logger(Protocol):
    """Protocol every logger implements.

    ``record`` is called once per step with the step's input and output and
    must not mutate them. ``flush`` writes the accumulated log to a sink and
    must not raise when the log is empty.
    """

    def record(self, meta: StepMeta, input: Any, output: Any) -> None:
        """Append entries describing the step to the log."""
        ...

    def flush(self, **options: Any) -> None:
        """Write the log to an external sink."""
        ...


def logger_type(logger: Any) -> str:
    """Return a short name for a logger, used in log records."""
    return getattr(logger, "type_name", type(logger).__name__)


def write_log(
    header: list[str],
    rows: list[list[Any]],
    options: dict[str, Any],
    default_file: str,
    verbose: bool,
) -> str:
    """Write log rows to the sink named in ``options``.

    Args:
        header: Log column names
        rows: Log rows
        options: Flush options (file, append, verbose, delimiter, encoding)
        default_file: Sink used when ``options`` names none
        verbose: The logger's verbose setting, overridable per flush

    Returns:
        The sink that was written
    """
    opts = parse_config(DumpOptions, options)
    extra = opts.model_extra or {}
    file = opts.file or default_file

    ignored = sorted(set(extra) - SINK_OPTIONS)
    if ignored:
        logger.warning(
            f"Ignoring unknown flush options: {', '.join(ignored)}",
            extra={"context": {"file": file}},
        )

    write_csv(
        file,
        header,
        rows,
        append=opts.append,
        delimiter=extra.get("delimiter", DEFAULT_DELIMITER),
        encoding=extra.get("encoding", DEFAULT_ENCODING),
    )

    if not rows:
        logger.info("Log is empty; wrote header only", extra={"context": {"file": file}})

    if opts.verbose is not None:
        verbose = opts.verbose
    if verbose:
        logger.info(f"Dumped a log at {file}")

    return file
