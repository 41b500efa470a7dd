"""Pytest fixtures shared across arbor tests."""

import pytest


class CountingSource:
    """MemorySource wrapper that counts how often rows are pulled."""

    def __init__(self, source):
        self._source = source
        self.row_calls = 0

    @property
    def columns(self):
        return self._source.columns

    def rows(self):
        self.row_calls += 1
        return self._source.rows()

    def column_values(self, name):
        return self._source.column_values(name)


@pytest.fixture
def simple_rows():
    """Root with one child."""
    return [
        {"id": "1", "label": "Root", "parent": None},
        {"id": "2", "label": "Root|Child", "parent": "1"},
    ]


@pytest.fixture
def catalog_rows():
    """Three-level catalog with children listed before their parents."""
    return [
        {"id": "FRUIT-APPLE", "label": "Food|Fruit|Apple", "parent": "fruit"},
        {"id": "Food", "label": "Food", "parent": ""},
        {"id": "fruit", "label": "Food|Fruit", "parent": "FOOD"},
        {"id": "veg", "label": "Food|Vegetables", "parent": "food"},
        {"id": "fruit-pear", "label": "Food|Fruit|Pear", "parent": "Fruit"},
        {"id": "drinks", "label": "Drinks", "parent": None},
    ]


@pytest.fixture
def make_index():
    """Factory building a HierarchyIndex over in-memory rows."""
    from arbor import HierarchyConfig, HierarchyIndex, MemorySource

    def _make(rows, columns=None, **config_kwargs):
        return HierarchyIndex(MemorySource(rows, columns=columns), HierarchyConfig(**config_kwargs))

    return _make


@pytest.fixture
def counting_source():
    """Factory wrapping rows in a CountingSource."""
    from arbor import MemorySource

    def _make(rows, columns=None):
        return CountingSource(MemorySource(rows, columns=columns))

    return _make


@pytest.fixture
def catalog_csv(tmp_path, catalog_rows):
    """Catalog rows written to a CSV file."""
    path = tmp_path / "catalog.csv"
    lines = ["id,label,parent"]
    for row in catalog_rows:
        lines.append(f"{row['id']},{row['label']},{row['parent'] or ''}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
