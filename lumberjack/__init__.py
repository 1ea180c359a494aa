"""lumberjack - Track changes in data, step by step.

Wraps a chain of transformations applied to an in-memory dataset and
records what each step changed, using pluggable loggers.
"""

__version__ = "0.1.0"

# Public API
from lumberjack.api import dump_log, get_log, start_log, stop_log

# Exceptions
from lumberjack.core.exceptions import ConfigurationError, LumberjackError, UsageError
from lumberjack.core.logging import configure_logging

# Loggers
from lumberjack.loggers import (
    CellwiseLogger,
    ExpressionLogger,
    FileDumpLogger,
    Logger,
    NoLogger,
    SimpleLogger,
    StepMeta,
    celldiff,
    get_logger,
    list_logger_types,
    register_logger,
)
from lumberjack.pipe import Tracked

__all__ = [
    # Version
    "__version__",
    # Public API
    "start_log",
    "dump_log",
    "stop_log",
    "get_log",
    "Tracked",
    "configure_logging",
    # Loggers
    "Logger",
    "StepMeta",
    "SimpleLogger",
    "CellwiseLogger",
    "ExpressionLogger",
    "FileDumpLogger",
    "NoLogger",
    "celldiff",
    "register_logger",
    "get_logger",
    "list_logger_types",
    # Exceptions
    "LumberjackError",
    "ConfigurationError",
    "UsageError",
]
