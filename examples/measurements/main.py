"""Log a small cleaning pipeline over a measurements table.

Writes a cell-level change log (default) or a per-step simple log.
"""

from __future__ import annotations

import argparse

import pyarrow as pa
import pyarrow.compute as pc

from lumberjack import CellwiseLogger, SimpleLogger, configure_logging, dump_log, start_log


def load_measurements() -> pa.Table:
    return pa.table(
        {
            "id": [1, 2, 3, 4, 5],
            "length": [5.1, -1.0, 4.7, None, 5.0],
            "species": ["setosa", "setosa", "Setosa", "versicolor", "virginica"],
        }
    )


def clip_negative(table: pa.Table) -> pa.Table:
    index = table.column_names.index("length")
    clipped = pc.if_else(
        pc.less(table["length"], 0), pa.scalar(None, type=pa.float64()), table["length"]
    )
    return table.set_column(index, "length", clipped)


def normalize_species(table: pa.Table) -> pa.Table:
    index = table.column_names.index("species")
    return table.set_column(index, "species", pc.utf8_lower(table["species"]))


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the measurements pipeline with logging")
    parser.add_argument("--logger", choices=["cellwise", "simple"], default="cellwise")
    parser.add_argument("--file", default=None, help="Log file (default depends on logger)")
    args = parser.parse_args()

    configure_logging(level="INFO", pipeline_name="measurements")

    log = CellwiseLogger(key="id") if args.logger == "cellwise" else SimpleLogger()
    out = (
        start_log(load_measurements(), log)
        >> clip_negative
        >> normalize_species
        >> (lambda t: t.filter(pc.is_valid(t["length"])))
    )
    dump_log(out, file=args.file, stop=True)


if __name__ == "__main__":
    main()
