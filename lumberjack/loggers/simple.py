"""Simple logger: records whether each step changed the data."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import pyarrow as pa

from lumberjack.core.table import deep_equal
from lumberjack.loggers.base import StepMeta, write_log
from lumberjack.loggers.registry import register_logger
from lumberjack.models.logger_config import SimpleLoggerConfig, parse_config

logger = logging.getLogger(__name__)

DEFAULT_FILE = "simple_log.csv"
LOG_COLUMNS = ["step", "timestamp", "expr", "changed"]


@dataclass(frozen=True)
class SimpleEntry:
    """One simple log entry per step."""

    step: int
    timestamp: datetime
    expr: str
    changed: bool


class SimpleLogger:
    """Records, per step, whether the output differs from the input.

    Equality is structural: a reordered row or column counts as a change.
    """

    type_name = "simple"

    def __init__(self, verbose: bool = True):
        """Initialize the logger.

        Args:
            verbose: Log a notice naming the sink after each flush
        """
        self._config = parse_config(SimpleLoggerConfig, {"verbose": verbose})
        self._entries: list[SimpleEntry] = []

    @property
    def verbose(self) -> bool:
        return self._config.verbose

    @property
    def entries(self) -> list[SimpleEntry]:
        """Return a copy of the recorded entries."""
        return list(self._entries)

    def record(self, meta: StepMeta, input: Any, output: Any) -> None:
        changed = not deep_equal(input, output)
        self._entries.append(
            SimpleEntry(
                step=meta.step,
                timestamp=meta.timestamp,
                expr=meta.expr,
                changed=changed,
            )
        )
        logger.debug(
            f"Recorded step (changed={changed})",
            extra={"step": meta.step, "logger_type": self.type_name},
        )

    def flush(self, **options: Any) -> None:
        write_log(
            LOG_COLUMNS,
            [
                [e.step, e.timestamp.isoformat(), e.expr, e.changed]
                for e in self._entries
            ],
            options,
            default_file=DEFAULT_FILE,
            verbose=self.verbose,
        )

    def to_table(self) -> pa.Table:
        """Return the log as a table with columns step, timestamp, expr, changed."""
        return pa.table(
            {
                "step": pa.array([e.step for e in self._entries], type=pa.int64()),
                "timestamp": pa.array(
                    [e.timestamp for e in self._entries], type=pa.timestamp("us", tz="UTC")
                ),
                "expr": pa.array([e.expr for e in self._entries], type=pa.string()),
                "changed": pa.array([e.changed for e in self._entries], type=pa.bool_()),
            }
        )


@register_logger("simple")
def create_simple_logger(config: dict[str, Any]) -> SimpleLogger:
    """Factory function for the simple logger."""
    cfg = parse_config(SimpleLoggerConfig, config)
    return SimpleLogger(verbose=cfg.verbose)
