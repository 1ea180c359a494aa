"""Unit tests for the simple logger."""

import csv
import logging
from datetime import datetime, timezone

import pyarrow as pa
import pytest

from lumberjack.core.exceptions import ConfigurationError
from lumberjack.loggers import SimpleLogger, StepMeta


def read_rows(path):
    with open(path, newline="") as f:
        return list(csv.reader(f))


@pytest.fixture
def meta():
    return StepMeta(
        step=1,
        expr="identity",
        timestamp=datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
    )


class TestSimpleLoggerRecord:
    """Tests for SimpleLogger.record."""

    def test_identity_is_unchanged(self, keyed_table, meta):
        log = SimpleLogger()
        log.record(meta, keyed_table, keyed_table)

        assert len(log.entries) == 1
        entry = log.entries[0]
        assert entry.step == 1
        assert entry.expr == "identity"
        assert entry.changed is False

    def test_altered_cell_is_changed(self, keyed_table, meta):
        output = keyed_table.set_column(2, "y", pa.array(["a", "b", "z"]))
        log = SimpleLogger()
        log.record(meta, keyed_table, output)

        assert log.entries[0].changed is True

    def test_dropped_row_is_changed(self, keyed_table, meta):
        log = SimpleLogger()
        log.record(meta, keyed_table, keyed_table.slice(0, 2))

        assert log.entries[0].changed is True

    def test_non_tabular_values(self, meta):
        log = SimpleLogger()
        log.record(meta, [1, 2, 3], [1, 2, 3])
        log.record(StepMeta(step=2, expr="sorted"), [3, 1], [1, 3])

        assert [e.changed for e in log.entries] == [False, True]

    def test_record_does_not_mutate_inputs(self, keyed_table, meta):
        snapshot = keyed_table.to_pydict()
        SimpleLogger().record(meta, keyed_table, keyed_table)
        assert keyed_table.to_pydict() == snapshot

    def test_to_table(self, keyed_table, meta):
        log = SimpleLogger()
        log.record(meta, keyed_table, keyed_table)

        table = log.to_table()
        assert table.column_names == ["step", "timestamp", "expr", "changed"]
        assert table.column("changed").to_pylist() == [False]


class TestSimpleLoggerFlush:
    """Tests for SimpleLogger.flush."""

    def test_flush_writes_csv(self, keyed_table, meta, temp_dir):
        log = SimpleLogger()
        log.record(meta, keyed_table, keyed_table)

        path = temp_dir / "log.csv"
        log.flush(file=str(path))

        rows = read_rows(path)
        assert rows[0] == ["step", "timestamp", "expr", "changed"]
        assert rows[1] == ["1", "2024-01-01T10:00:00+00:00", "identity", "False"]

    def test_flush_empty_log_writes_header(self, temp_dir):
        path = temp_dir / "empty.csv"
        SimpleLogger().flush(file=str(path))

        assert read_rows(path) == [["step", "timestamp", "expr", "changed"]]

    def test_flush_default_file(self, keyed_table, meta, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        log = SimpleLogger()
        log.record(meta, keyed_table, keyed_table)
        log.flush()

        assert (temp_dir / "simple_log.csv").exists()

    def test_flush_does_not_clear_log(self, keyed_table, meta, temp_dir):
        log = SimpleLogger()
        log.record(meta, keyed_table, keyed_table)
        log.flush(file=str(temp_dir / "a.csv"))
        log.flush(file=str(temp_dir / "b.csv"))

        assert len(log.entries) == 1
        assert read_rows(temp_dir / "a.csv") == read_rows(temp_dir / "b.csv")

    def test_flush_append(self, keyed_table, meta, temp_dir):
        path = temp_dir / "log.csv"
        log = SimpleLogger()
        log.record(meta, keyed_table, keyed_table)
        log.flush(file=str(path))
        log.flush(file=str(path), append=True)

        rows = read_rows(path)
        assert len(rows) == 3
        assert rows[0][0] == "step"
        assert rows[2][0] == "1"

    def test_verbose_notice(self, temp_dir, caplog):
        path = temp_dir / "log.csv"
        with caplog.at_level(logging.INFO, logger="lumberjack"):
            SimpleLogger(verbose=True).flush(file=str(path))

        assert f"Dumped a log at {path}" in caplog.text

    def test_quiet_flush(self, temp_dir, caplog):
        path = temp_dir / "log.csv"
        with caplog.at_level(logging.INFO, logger="lumberjack"):
            SimpleLogger(verbose=False).flush(file=str(path))

        assert "Dumped a log" not in caplog.text

    def test_unwritable_sink_raises(self, temp_dir):
        with pytest.raises(OSError):
            SimpleLogger().flush(file=str(temp_dir / "missing" / "log.csv"))

    def test_invalid_option_type_raises(self, temp_dir):
        with pytest.raises(ConfigurationError):
            SimpleLogger().flush(file=str(temp_dir / "log.csv"), append="sometimes")

    def test_unknown_option_is_reported(self, temp_dir, caplog):
        path = temp_dir / "log.csv"
        with caplog.at_level(logging.WARNING, logger="lumberjack"):
            SimpleLogger(verbose=False).flush(file=str(path), fiel="other.csv", delimiter=";")

        assert path.exists()
        assert "Ignoring unknown flush options: fiel" in caplog.text
        assert "delimiter" not in caplog.text

    def test_sink_options_are_not_reported(self, temp_dir, caplog):
        with caplog.at_level(logging.WARNING, logger="lumberjack"):
            SimpleLogger(verbose=False).flush(file=str(temp_dir / "log.csv"), encoding="utf-8")

        assert "Ignoring" not in caplog.text
