"""File-dump logger: writes a snapshot of the data after every step."""

import logging
from typing import Any

import pyarrow as pa

from lumberjack.core.sink import write_csv
from lumberjack.core.table import as_table
from lumberjack.loggers.base import StepMeta
from lumberjack.loggers.registry import register_logger
from lumberjack.models.logger_config import FileDumpLoggerConfig, parse_config

logger = logging.getLogger(__name__)


class FileDumpLogger:
    """Writes the input of the first step and the output of every step to csv.

    Files are named ``<dir>/<stem>NNN.csv`` where ``NNN`` is the zero-padded
    step number; ``000`` holds the data as it entered the pipeline.
    """

    type_name = "filedump"

    def __init__(self, dir: str = ".", stem: str = "step", verbose: bool = True):
        self._config = parse_config(
            FileDumpLoggerConfig,
            {"dir": dir, "stem": stem, "verbose": verbose},
        )
        self._files: list[str] = []

    @property
    def files(self) -> list[str]:
        """Return the snapshot files written so far."""
        return list(self._files)

    def path_for(self, step: int) -> str:
        return f"{self._config.dir.rstrip('/')}/{self._config.stem}{step:03d}.csv"

    def record(self, meta: StepMeta, input: Any, output: Any) -> None:
        new_table = as_table(output)
        if meta.step == 1:
            self._dump(as_table(input), 0)
        self._dump(new_table, meta.step)
        logger.debug(
            "Dumped snapshot",
            extra={"step": meta.step, "logger_type": self.type_name},
        )

    def _dump(self, table: pa.Table, step: int) -> None:
        path = self.path_for(step)
        rows = ([row[name] for name in table.column_names] for row in table.to_pylist())
        write_csv(path, table.column_names, rows)
        self._files.append(path)

    def flush(self, **options: Any) -> None:
        verbose = options.get("verbose")
        if verbose is None:
            verbose = self._config.verbose
        if verbose:
            logger.info(
                f"Snapshots were written to {self._config.dir}",
                extra={"context": {"files": len(self._files)}},
            )


@register_logger("filedump")
def create_filedump_logger(config: dict[str, Any]) -> FileDumpLogger:
    """Factory function for the file-dump logger."""
    cfg = parse_config(FileDumpLoggerConfig, config)
    return FileDumpLogger(dir=cfg.dir, stem=cfg.stem, verbose=cfg.verbose)
