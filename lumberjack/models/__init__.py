"""Configuration models for lumberjack."""

from lumberjack.models.logger_config import (
    CellwiseLoggerConfig,
    DumpOptions,
    ExpressionLoggerConfig,
    FileDumpLoggerConfig,
    SimpleLoggerConfig,
    parse_config,
)

__all__ = [
    "SimpleLoggerConfig",
    "CellwiseLoggerConfig",
    "ExpressionLoggerConfig",
    "FileDumpLoggerConfig",
    "DumpOptions",
    "parse_config",
]
