"""Structured logging configuration for lumberjack."""

import logging
import sys
from typing import Optional

from json_log_formatter import JSONFormatter


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    pipeline_name: Optional[str] = None,
) -> None:
    """Configure logging for lumberjack.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, use JSON format; otherwise use normal format
        pipeline_name: Optional pipeline name to include in every record
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("lumberjack")
    logger.setLevel(log_level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = StructuredFormatter()

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if pipeline_name:
        handler.addFilter(PipelineNameFilter(pipeline_name))


class PipelineNameFilter(logging.Filter):
    """Stamps the configured pipeline name on every record."""

    def __init__(self, pipeline_name: str):
        super().__init__()
        self.pipeline_name = pipeline_name

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "pipeline_name"):
            record.pipeline_name = self.pipeline_name
        return True


class StructuredFormatter(logging.Formatter):
    """Structured formatter that adds pipeline context to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with context."""
        context = getattr(record, "context", {})

        parts = [f"[{record.levelname}]"]

        if hasattr(record, "pipeline_name"):
            parts.append(f"pipeline={record.pipeline_name}")

        if hasattr(record, "step"):
            parts.append(f"step={record.step}")

        if hasattr(record, "logger_type"):
            parts.append(f"logger={record.logger_type}")

        for key, value in context.items():
            parts.append(f"{key}={value}")

        parts.append(record.getMessage())

        return " ".join(parts)
