"""Tabular snapshot helpers.

Snapshots are compared as Apache Arrow tables:
- ``as_table`` coerces tables, record batches and column mappings
- ``deep_equal`` implements structural equality for any dataset value
- ``cells_equal`` implements NA-aware scalar equality for a single cell
"""

import math
from collections.abc import Mapping, Sequence
from typing import Any

import pyarrow as pa

from lumberjack.core.exceptions import UsageError


def is_tabular(value: Any) -> bool:
    """Return True if ``value`` can be coerced to a table."""
    if isinstance(value, (pa.Table, pa.RecordBatch)):
        return True
    if isinstance(value, Mapping) and value:
        return all(
            isinstance(column, Sequence) and not isinstance(column, (str, bytes))
            for column in value.values()
        )
    return False


def as_table(value: Any) -> pa.Table:
    """Coerce a dataset value to a PyArrow table.

    Args:
        value: A ``pa.Table``, a ``pa.RecordBatch`` or a mapping of column
            name to an equal-length sequence of cells

    Returns:
        PyArrow Table view of the value

    Raises:
        UsageError: If the value is not tabular
    """
    if isinstance(value, pa.Table):
        return value
    if isinstance(value, pa.RecordBatch):
        return pa.Table.from_batches([value])
    if is_tabular(value):
        lengths = {len(column) for column in value.values()}
        if len(lengths) > 1:
            raise UsageError(
                "Columns of a tabular value must have equal length",
                context={"lengths": sorted(lengths)},
            )
        return pa.table({str(name): list(column) for name, column in value.items()})
    raise UsageError(
        "Expected a tabular value",
        context={"type": type(value).__name__},
    )


def is_na(value: Any) -> bool:
    """Return True for missing cells (None or float NaN)."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def cells_equal(old: Any, new: Any) -> bool:
    """Compare two cells, treating missing values as equal to each other.

    List and struct cells are compared element by element with ``deep_equal``
    so nested missing values match too.
    """
    old_na, new_na = is_na(old), is_na(new)
    if old_na or new_na:
        return old_na and new_na
    if isinstance(old, (list, tuple, Mapping)) or isinstance(new, (list, tuple, Mapping)):
        return deep_equal(old, new)
    return _values_equal(old, new)


def deep_equal(left: Any, right: Any) -> bool:
    """Structural equality between two dataset values.

    Values are equal iff they have the same type and shape and all
    corresponding elements are equal. Column and row order are significant.
    """
    if isinstance(left, (pa.Table, pa.RecordBatch)) or isinstance(
        right, (pa.Table, pa.RecordBatch)
    ):
        if type(left) is not type(right):
            return False
        if left.schema.names != right.schema.names:
            return False
        if left.schema.types != right.schema.types:
            return False
        if left.num_rows != right.num_rows:
            return False
        return all(
            _sequences_equal(
                left.column(name).to_pylist(), right.column(name).to_pylist()
            )
            for name in left.schema.names
        )

    if type(left) is not type(right):
        return False

    if isinstance(left, Mapping):
        if list(left.keys()) != list(right.keys()):
            return False
        return all(deep_equal(left[k], right[k]) for k in left)

    if isinstance(left, (list, tuple)):
        return _sequences_equal(list(left), list(right))

    if is_na(left) and is_na(right):
        return True
    return _values_equal(left, right)


def _values_equal(left: Any, right: Any) -> bool:
    """Compare two leaf values, including ones whose ``==`` is elementwise.

    Objects with an ``equals`` method (pandas, pyarrow) use it. Elementwise
    results (numpy) are reduced with ``all()``; mismatched shapes are unequal.
    """
    equals = getattr(left, "equals", None)
    if callable(equals):
        return bool(equals(right))

    if getattr(left, "shape", None) != getattr(right, "shape", None):
        return False

    try:
        result = left == right
        if isinstance(result, bool):
            return result
        reduce_all = getattr(result, "all", None)
        if callable(reduce_all):
            return bool(reduce_all())
        return bool(result)
    except ValueError:
        return False


def _sequences_equal(left: list[Any], right: list[Any]) -> bool:
    if len(left) != len(right):
        return False
    return all(deep_equal(a, b) for a, b in zip(left, right))
