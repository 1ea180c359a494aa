"""Unit tests for tabular snapshot helpers."""

import math

import pyarrow as pa
import pytest

from lumberjack.core.exceptions import UsageError
from lumberjack.core.table import (
    as_table,
    cells_equal,
    deep_equal,
    is_na,
    is_tabular,
)


class TestAsTable:
    """Tests for coercion to pyarrow tables."""

    def test_table_is_returned_unchanged(self, keyed_table):
        assert as_table(keyed_table) is keyed_table

    def test_record_batch(self, keyed_table):
        batch = keyed_table.to_batches()[0]
        result = as_table(batch)
        assert isinstance(result, pa.Table)
        assert result.column_names == ["sl", "x", "y"]

    def test_column_mapping(self):
        result = as_table({"id": [1, 2], "name": ["a", "b"]})
        assert result.num_rows == 2
        assert result.column("name").to_pylist() == ["a", "b"]

    def test_unequal_column_lengths_raise(self):
        with pytest.raises(UsageError) as exc_info:
            as_table({"id": [1, 2], "name": ["a"]})

        assert "lengths" in exc_info.value.context

    @pytest.mark.parametrize("value", [42, "text", [1, 2, 3], {}, {"a": "abc"}])
    def test_non_tabular_raises(self, value):
        with pytest.raises(UsageError) as exc_info:
            as_table(value)

        assert exc_info.value.context["type"] == type(value).__name__

    def test_is_tabular(self, keyed_table):
        assert is_tabular(keyed_table)
        assert is_tabular({"a": [1]})
        assert not is_tabular(3)


class TestCellsEqual:
    """Tests for NA-aware cell comparison."""

    def test_equal_values(self):
        assert cells_equal(1, 1)
        assert cells_equal("a", "a")

    def test_different_values(self):
        assert not cells_equal(1, 2)

    def test_missing_values_are_equal(self):
        assert cells_equal(None, None)
        assert cells_equal(float("nan"), None)
        assert cells_equal(math.nan, math.nan)

    def test_missing_differs_from_value(self):
        assert not cells_equal(None, 0)
        assert not cells_equal("", None)

    def test_is_na(self):
        assert is_na(None)
        assert is_na(float("nan"))
        assert not is_na(0)


class TestDeepEqual:
    """Tests for structural equality."""

    def test_identical_tables(self, keyed_table):
        assert deep_equal(keyed_table, pa.table(keyed_table.to_pydict()))

    def test_changed_cell(self, keyed_table):
        changed = keyed_table.set_column(1, "x", pa.array([2, 2, 3]))
        assert not deep_equal(keyed_table, changed)

    def test_column_order_matters(self, keyed_table):
        reordered = keyed_table.select(["x", "sl", "y"])
        assert not deep_equal(keyed_table, reordered)

    def test_row_order_matters(self, keyed_table):
        reversed_rows = keyed_table.take([2, 1, 0])
        assert not deep_equal(keyed_table, reversed_rows)

    def test_column_type_matters(self, keyed_table):
        cast = keyed_table.set_column(1, "x", pa.array([1.0, 2.0, 3.0]))
        assert not deep_equal(keyed_table, cast)

    def test_table_and_mapping_differ(self, keyed_table):
        assert not deep_equal(keyed_table, keyed_table.to_pydict())

    def test_nested_structures(self):
        assert deep_equal({"a": [1, {"b": None}]}, {"a": [1, {"b": None}]})
        assert not deep_equal({"a": [1, 2]}, {"a": [2, 1]})
        assert not deep_equal([1, 2], (1, 2))

    def test_scalars(self):
        assert deep_equal(3, 3)
        assert not deep_equal(3, 3.0)
        assert deep_equal(float("nan"), float("nan"))

    def test_nested_missing_values_match(self):
        assert deep_equal([1.0, float("nan")], [1.0, float("nan")])
        assert cells_equal([1.0, float("nan")], [1.0, float("nan")])
        assert not cells_equal([1.0, float("nan")], [1.0, 2.0])


class ElementwiseResult:
    """Result of an elementwise comparison; truthiness is ambiguous."""

    def __init__(self, flags):
        self.flags = flags

    def all(self):
        return all(self.flags)

    def __bool__(self):
        raise ValueError("The truth value of an array is ambiguous")


class Vector:
    """Array-like value whose ``==`` compares element by element."""

    def __init__(self, *values):
        self.values = values
        self.shape = (len(values),)

    def __eq__(self, other):
        if len(self.values) != len(other.values):
            raise ValueError("operands could not be broadcast together")
        return ElementwiseResult([a == b for a, b in zip(self.values, other.values)])

    __hash__ = None


class Frame:
    """Frame-like value that is compared through ``equals``."""

    def __init__(self, rows):
        self.rows = rows

    def equals(self, other):
        return isinstance(other, Frame) and self.rows == other.rows

    def __eq__(self, other):
        return ElementwiseResult([True])

    __hash__ = None


class TestElementwiseEquality:
    """Tests for leaf values whose ``==`` is elementwise."""

    def test_equal_vectors(self):
        assert deep_equal(Vector(1, 2, 3), Vector(1, 2, 3))

    def test_different_vectors(self):
        assert not deep_equal(Vector(1, 2, 3), Vector(1, 0, 3))

    def test_different_shapes(self):
        assert not deep_equal(Vector(1, 2), Vector(1, 2, 3))

    def test_failed_comparison_is_not_equal(self):
        left, right = Vector(1, 2), Vector(1, 2, 3)
        right.shape = left.shape
        assert not deep_equal(left, right)

    def test_equals_method_is_preferred(self):
        assert deep_equal(Frame([1, 2]), Frame([1, 2]))
        assert not deep_equal(Frame([1, 2]), Frame([2, 1]))

    def test_vectors_nested_in_mappings(self):
        assert deep_equal({"v": Vector(1.5, 2.5)}, {"v": Vector(1.5, 2.5)})
        assert not deep_equal({"v": Vector(1.5, 2.5)}, {"v": Vector(1.5, 0.0)})

    def test_cells_holding_vectors(self):
        assert cells_equal(Vector(1, 2), Vector(1, 2))
        assert not cells_equal(Vector(1, 2), Vector(2, 1))
