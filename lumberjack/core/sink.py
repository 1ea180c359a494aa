"""Delimited-file sink for flushing logs.

Uses fsspec so a sink may be a local path or any fsspec URL
(``memory://``, ``s3://``, ...).
"""

import csv
import logging
from typing import Any, Iterable

import fsspec

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","
DEFAULT_ENCODING = "utf-8"


def write_csv(
    path: str,
    header: list[str],
    rows: Iterable[Iterable[Any]],
    append: bool = False,
    delimiter: str = DEFAULT_DELIMITER,
    encoding: str = DEFAULT_ENCODING,
) -> int:
    """Write rows to a delimited file.

    The header is written when overwriting, or when appending to a sink that
    does not exist yet or is empty. Missing values are written as empty fields.

    Args:
        path: Local path or fsspec URL of the sink
        header: Column names
        rows: Row data (each row is an iterable of values)
        append: Append to an existing sink instead of overwriting it
        delimiter: Field delimiter
        encoding: Text encoding

    Returns:
        Number of data rows written

    Raises:
        OSError: If the sink cannot be written (propagated from fsspec)
    """
    write_header = True
    if append:
        fs, fs_path = fsspec.core.url_to_fs(path)
        if fs.exists(fs_path) and fs.size(fs_path) > 0:
            write_header = False

    count = 0
    with fsspec.open(path, "a" if append else "w", encoding=encoding, newline="") as f:
        writer = csv.writer(f, delimiter=delimiter)
        if write_header:
            writer.writerow(header)
        for row in rows:
            writer.writerow(["" if value is None else value for value in row])
            count += 1

    logger.debug(
        "Wrote log rows",
        extra={"context": {"path": path, "rows": count, "append": append}},
    )
    return count
