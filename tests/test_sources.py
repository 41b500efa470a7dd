"""
Tests for arbor.core.sources module.
"""

import pytest


class TestMemorySource:
    """Tests for MemorySource class."""

    def test_columns_inferred(self):
        """Test columns are the union of row keys in first-seen order."""
        from arbor import MemorySource

        source = MemorySource([{"id": "1", "label": "A"}, {"id": "2", "parent": "1"}])

        assert source.columns == ["id", "label", "parent"]

    def test_explicit_columns(self):
        """Test explicit column list is used as given."""
        from arbor import MemorySource

        source = MemorySource([], columns=["id", "label", "parent"])

        assert source.columns == ["id", "label", "parent"]
        assert source.rows() == []

    def test_column_values_aligned(self):
        """Test column values follow row order, missing cells as None."""
        from arbor import MemorySource

        source = MemorySource([{"id": "1", "color": "red"}, {"id": "2"}])

        assert source.column_values("color") == ["red", None]

    def test_side_columns(self):
        """Test side columns are listed and fetched by name."""
        from arbor import MemorySource

        source = MemorySource([{"id": "1"}], side_columns={"label_en": ["One"]})

        assert "label_en" in source.columns
        assert source.column_values("label_en") == ["One"]

    def test_unknown_column(self):
        """Test unknown column raises MissingColumnError."""
        from arbor import MemorySource, MissingColumnError

        source = MemorySource([{"id": "1"}])

        with pytest.raises(MissingColumnError):
            source.column_values("nope")

    def test_satisfies_protocol(self):
        """Test MemorySource is a RecordSource."""
        from arbor import MemorySource, RecordSource

        assert isinstance(MemorySource([]), RecordSource)


class TestCsvSource:
    """Tests for CsvSource class."""

    def test_reads_rows(self, catalog_csv):
        """Test rows and header are read from the file."""
        from arbor import CsvSource

        source = CsvSource(catalog_csv)

        assert source.columns == ["id", "label", "parent"]
        assert len(source) == 6
        assert source.rows()[0]["id"] == "FRUIT-APPLE"
        assert source.rows()[1]["parent"] == ""

    def test_semicolon_delimiter(self, tmp_path):
        """Test custom delimiters."""
        from arbor import CsvSource

        path = tmp_path / "rows.csv"
        path.write_text("id;label;parent\n1;A, with comma;\n", encoding="utf-8")

        source = CsvSource(path, delimiter=";")

        assert source.rows()[0]["label"] == "A, with comma"

    def test_byte_order_mark(self, tmp_path):
        """Test a leading BOM does not leak into the first header."""
        from arbor import CsvSource, HierarchyIndex

        path = tmp_path / "rows.csv"
        path.write_text("id,label,parent\n1,Root,\n2,Root|Child,1\n", encoding="utf-8-sig")

        source = CsvSource(path)

        assert source.columns == ["id", "label", "parent"]
        assert HierarchyIndex(source).get_path("2")[0].id == "1"

    def test_builds_index(self, catalog_csv):
        """Test CSV rows feed a HierarchyIndex."""
        from arbor import CsvSource, HierarchyIndex

        index = HierarchyIndex(CsvSource(catalog_csv))

        assert [n.id for n in index.get_forest()] == ["food", "drinks"]
        assert index.get_level_count() == 3

    def test_missing_file(self, tmp_path):
        """Test a missing file raises OSError."""
        from arbor import CsvSource

        with pytest.raises(OSError):
            CsvSource(tmp_path / "missing.csv")
