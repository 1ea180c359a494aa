"""Core module for lumberjack package."""

from lumberjack.core.exceptions import ConfigurationError, LumberjackError, UsageError
from lumberjack.core.logging import configure_logging
from lumberjack.core.sink import write_csv
from lumberjack.core.table import as_table, cells_equal, deep_equal, is_tabular

__all__ = [
    "LumberjackError",
    "ConfigurationError",
    "UsageError",
    "configure_logging",
    "write_csv",
    "as_table",
    "cells_equal",
    "deep_equal",
    "is_tabular",
]
