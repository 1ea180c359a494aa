"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path

import pyarrow as pa
import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def keyed_table():
    """Create a small table keyed on ``sl``.

    Returns a table with columns sl, x and y - commonly used across logger tests.
    """
    return pa.table({"sl": [1, 2, 3], "x": [1, 2, 3], "y": ["a", "b", "c"]})
