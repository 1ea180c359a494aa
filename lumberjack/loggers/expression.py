"""Expression logger: tracks the value of user expressions after each step."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from lumberjack.loggers.base import StepMeta, write_log
from lumberjack.loggers.registry import register_logger
from lumberjack.models.logger_config import ExpressionLoggerConfig, parse_config

logger = logging.getLogger(__name__)

DEFAULT_FILE = "expression_log.csv"


@dataclass(frozen=True)
class ExpressionEntry:
    """Values of every tracked expression after one step."""

    step: int
    timestamp: datetime
    expr: str
    values: dict[str, Any] = field(default_factory=dict)


class ExpressionLogger:
    """Evaluates named expressions on each step's output.

    Example:
        >>> log = ExpressionLogger(
        ...     rows=lambda t: t.num_rows,
        ...     mean_x=lambda t: pc.mean(t["x"]).as_py(),
        ... )
    """

    type_name = "expression"

    def __init__(self, verbose: bool = True, **expressions: Callable[[Any], Any]):
        self._config = parse_config(
            ExpressionLoggerConfig,
            {"expressions": expressions, "verbose": verbose},
        )
        self._entries: list[ExpressionEntry] = []

    @property
    def names(self) -> list[str]:
        return list(self._config.expressions)

    @property
    def verbose(self) -> bool:
        return self._config.verbose

    @property
    def entries(self) -> list[ExpressionEntry]:
        return list(self._entries)

    def record(self, meta: StepMeta, input: Any, output: Any) -> None:
        values = {name: func(output) for name, func in self._config.expressions.items()}
        self._entries.append(
            ExpressionEntry(
                step=meta.step,
                timestamp=meta.timestamp,
                expr=meta.expr,
                values=values,
            )
        )
        logger.debug(
            "Recorded expression values",
            extra={"step": meta.step, "logger_type": self.type_name, "context": values},
        )

    def flush(self, **options: Any) -> None:
        names = self.names
        write_log(
            ["step", "timestamp", "expr", *names],
            [
                [e.step, e.timestamp.isoformat(), e.expr, *(e.values[n] for n in names)]
                for e in self._entries
            ],
            options,
            default_file=DEFAULT_FILE,
            verbose=self.verbose,
        )


@register_logger("expression")
def create_expression_logger(config: dict[str, Any]) -> ExpressionLogger:
    """Factory function for the expression logger.

    Expects ``{"expressions": {name: callable, ...}}``.
    """
    cfg = parse_config(ExpressionLoggerConfig, config)
    return ExpressionLogger(verbose=cfg.verbose, **cfg.expressions)
