"""Logger that records nothing."""

from typing import Any

from lumberjack.loggers.base import StepMeta
from lumberjack.loggers.registry import register_logger


class NoLogger:
    """Accepts every step and writes nothing. Useful to switch logging off."""

    type_name = "no_log"

    def record(self, meta: StepMeta, input: Any, output: Any) -> None:
        pass

    def flush(self, **options: Any) -> None:
        pass


@register_logger("no_log")
def create_no_logger(config: dict[str, Any]) -> NoLogger:
    """Factory function for the no-op logger."""
    return NoLogger()
