"""Cellwise logger: records every changed cell between two snapshots."""

import logging
from dataclasses import dataclass
from typing import Any, Iterable

import pyarrow as pa
import pyarrow.compute as pc

from lumberjack.core.exceptions import ConfigurationError
from lumberjack.core.table import as_table, cells_equal
from lumberjack.loggers.base import StepMeta, write_log
from lumberjack.loggers.registry import register_logger
from lumberjack.models.logger_config import CellwiseLoggerConfig, parse_config

logger = logging.getLogger(__name__)

DEFAULT_FILE = "cellwise.csv"

CellChange = tuple[Any, str, Any, Any]


@dataclass(frozen=True)
class CellEntry:
    """One changed cell, identified by row key and column."""

    step: int
    key: Any
    column: str
    old: Any
    new: Any


def _key_index(table: pa.Table, key: str, role: str) -> dict[Any, int]:
    """Map each key value to its row index, validating presence and uniqueness."""
    if key not in table.column_names:
        raise ConfigurationError(
            f"Key column '{key}' not found in {role}",
            context={"key": key, "columns": table.column_names},
        )

    column = table.column(key)
    if table.num_rows and pc.count_distinct(column, mode="all").as_py() != table.num_rows:
        raise ConfigurationError(
            f"Key column '{key}' has duplicate values in {role}",
            context={"key": key, "rows": table.num_rows},
        )

    return {value: i for i, value in enumerate(column.to_pylist())}


def celldiff(
    input: Any,
    output: Any,
    key: str,
    ignore: Iterable[str] = (),
) -> list[CellChange]:
    """Compute the cell-level difference between two tabular snapshots.

    Rows are matched on ``key``. Rows only in ``output`` are reported as every
    cell changed from missing; rows only in ``input`` as every cell changed to
    missing. Columns present on one side only are treated the same way for
    matched rows. Missing cells are ``None``.

    Args:
        input: Snapshot before the step
        output: Snapshot after the step
        key: Name of the column holding unique row keys
        ignore: Columns left out of the comparison

    Returns:
        List of ``(key value, column, old, new)`` tuples

    Raises:
        UsageError: If either snapshot is not tabular
        ConfigurationError: If the key column is missing or not unique
    """
    old_table = as_table(input)
    new_table = as_table(output)

    old_index = _key_index(old_table, key, "input")
    new_index = _key_index(new_table, key, "output")

    skip = set(ignore) | {key}
    old_columns = {
        name: old_table.column(name).to_pylist()
        for name in old_table.column_names
        if name not in skip
    }
    new_columns = {
        name: new_table.column(name).to_pylist()
        for name in new_table.column_names
        if name not in skip
    }

    changes: list[CellChange] = []

    for key_value, new_row in new_index.items():
        old_row = old_index.get(key_value)
        if old_row is None:
            for name, cells in new_columns.items():
                changes.append((key_value, name, None, cells[new_row]))
            continue

        for name, cells in new_columns.items():
            new_value = cells[new_row]
            if name in old_columns:
                old_value = old_columns[name][old_row]
                if not cells_equal(old_value, new_value):
                    changes.append((key_value, name, old_value, new_value))
            else:
                changes.append((key_value, name, None, new_value))

        for name, cells in old_columns.items():
            if name not in new_columns:
                changes.append((key_value, name, cells[old_row], None))

    for key_value, old_row in old_index.items():
        if key_value not in new_index:
            for name, cells in old_columns.items():
                changes.append((key_value, name, cells[old_row], None))

    return changes


class CellwiseLogger:
    """Records one log entry per changed cell at each step."""

    type_name = "cellwise"

    def __init__(self, key: str | None = None, ignore: Iterable[str] = (), verbose: bool = True):
        """Initialize the logger.

        Args:
            key: Name of the column holding unique row keys (required)
            ignore: Columns left out of the comparison
            verbose: Log a notice naming the sink after each flush

        Raises:
            ConfigurationError: If no key is given
        """
        if key is None:
            raise ConfigurationError(
                "Cellwise logger requires a key column",
                context={"option": "key"},
            )
        self._config = parse_config(
            CellwiseLoggerConfig,
            {"key": key, "ignore": ignore, "verbose": verbose},
        )
        self._entries: list[CellEntry] = []

    @property
    def key(self) -> str:
        return self._config.key

    @property
    def ignore(self) -> set[str]:
        return set(self._config.ignore)

    @property
    def verbose(self) -> bool:
        return self._config.verbose

    @property
    def entries(self) -> list[CellEntry]:
        """Return a copy of the recorded entries."""
        return list(self._entries)

    def record(self, meta: StepMeta, input: Any, output: Any) -> None:
        changes = celldiff(input, output, self.key, self._config.ignore)
        self._entries.extend(
            CellEntry(step=meta.step, key=key, column=column, old=old, new=new)
            for key, column, old, new in changes
        )
        logger.debug(
            f"Recorded {len(changes)} changed cells",
            extra={"step": meta.step, "logger_type": self.type_name},
        )

    def flush(self, **options: Any) -> None:
        write_log(
            ["step", self.key, "column", "old", "new"],
            [[e.step, e.key, e.column, e.old, e.new] for e in self._entries],
            options,
            default_file=DEFAULT_FILE,
            verbose=self.verbose,
        )

    def to_table(self) -> pa.Table:
        """Return the log as a table with columns step, <key>, column, old, new.

        Old and new values are rendered as strings since a log mixes columns
        of different types.
        """
        return pa.table(
            {
                "step": pa.array([e.step for e in self._entries], type=pa.int64()),
                self.key: pa.array([_render(e.key) for e in self._entries], type=pa.string()),
                "column": pa.array([e.column for e in self._entries], type=pa.string()),
                "old": pa.array([_render(e.old) for e in self._entries], type=pa.string()),
                "new": pa.array([_render(e.new) for e in self._entries], type=pa.string()),
            }
        )


def _render(value: Any) -> str | None:
    return None if value is None else str(value)


@register_logger("cellwise")
def create_cellwise_logger(config: dict[str, Any]) -> CellwiseLogger:
    """Factory function for the cellwise logger."""
    cfg = parse_config(CellwiseLoggerConfig, config)
    return CellwiseLogger(key=cfg.key, ignore=cfg.ignore, verbose=cfg.verbose)
