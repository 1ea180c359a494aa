"""Loggers that record what each pipeline step changed.

Provides:
- Logger: Protocol every logger implements (record, flush)
- Logger registry: Registration and retrieval of logger factories
- Built-in loggers: simple, cellwise, expression, filedump, no_log
"""

from lumberjack.loggers.base import Logger, StepMeta

# Registry must be imported before the logger modules (they use register_logger)
from lumberjack.loggers.registry import (
    LoggerFactory,
    clear_registry,
    get_logger,
    list_logger_types,
    register_logger,
)

# Logger modules register themselves via @register_logger decorator
from lumberjack.loggers.cellwise import (
    CellEntry,
    CellwiseLogger,
    celldiff,
    create_cellwise_logger,
)
from lumberjack.loggers.expression import (
    ExpressionEntry,
    ExpressionLogger,
    create_expression_logger,
)
from lumberjack.loggers.filedump import FileDumpLogger, create_filedump_logger
from lumberjack.loggers.nolog import NoLogger, create_no_logger
from lumberjack.loggers.simple import SimpleEntry, SimpleLogger, create_simple_logger

__all__ = [
    # Protocol
    "Logger",
    "StepMeta",
    # Registry
    "register_logger",
    "get_logger",
    "list_logger_types",
    "clear_registry",
    "LoggerFactory",
    # Logger classes
    "SimpleLogger",
    "CellwiseLogger",
    "ExpressionLogger",
    "FileDumpLogger",
    "NoLogger",
    # Entries
    "SimpleEntry",
    "CellEntry",
    "ExpressionEntry",
    "celldiff",
    # Factory functions
    "create_simple_logger",
    "create_cellwise_logger",
    "create_expression_logger",
    "create_filedump_logger",
    "create_no_logger",
]
