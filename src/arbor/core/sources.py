"""
arbor.core.sources - Record sources feeding the hierarchy index.

A record source provides an ordered collection of rows with named-column
access plus a column-oriented accessor for the "extra columns" feature.
Any object implementing RecordSource can be passed to HierarchyIndex.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol, Sequence, runtime_checkable

from arbor.core.errors import MissingColumnError


@runtime_checkable
class RecordSource(Protocol):
    """Capability consumed by HierarchyIndex."""

    @property
    def columns(self) -> Sequence[str]:
        """Names of all columns available on this source."""
        ...

    def rows(self) -> Sequence[Mapping[str, Any]]:
        """Return all rows in source order."""
        ...

    def column_values(self, name: str) -> Sequence[Any]:
        """Return one column's values aligned by row index.

        Raises:
            MissingColumnError: If the column does not exist.
        """
        ...


class MemorySource:
    """Record source over rows already held in memory.

    Column names default to the union of row keys in first-seen order.
    Side columns are column-oriented values that are not part of the
    rows themselves; they are only reachable through column_values().

    Example:
        source = MemorySource([
            {"id": "1", "label": "Root", "parent": None},
            {"id": "2", "label": "Root|Child", "parent": "1"},
        ])
    """

    def __init__(
        self,
        rows: Iterable[Mapping[str, Any]],
        columns: Sequence[str] | None = None,
        side_columns: Mapping[str, Sequence[Any]] | None = None,
    ) -> None:
        self._rows: list[Mapping[str, Any]] = list(rows)
        self._side_columns: dict[str, list[Any]] = {
            name: list(values) for name, values in (side_columns or {}).items()
        }
        if columns is None:
            seen: dict[str, None] = {}
            for row in self._rows:
                for key in row:
                    seen.setdefault(key, None)
            columns = list(seen)
        self._columns = list(columns)

    @property
    def columns(self) -> list[str]:
        names = list(self._columns)
        names.extend(name for name in self._side_columns if name not in names)
        return names

    def rows(self) -> list[Mapping[str, Any]]:
        return self._rows

    def column_values(self, name: str) -> list[Any]:
        if name in self._side_columns:
            return self._side_columns[name]
        if name not in self._columns:
            raise MissingColumnError(name, self.columns)
        return [row.get(name) for row in self._rows]

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"MemorySource(rows={len(self._rows)}, columns={self.columns!r})"


class CsvSource(MemorySource):
    """Record source reading a delimited text file with a header row.

    Empty cells are read as empty strings, which flattening treats the
    same as missing values for parent ids and extra columns.
    """

    def __init__(
        self,
        path: Path | str,
        delimiter: str = ",",
        encoding: str = "utf-8-sig",
    ) -> None:
        self.path = Path(path)
        self.delimiter = delimiter
        self.encoding = encoding

        with self.path.open(newline="", encoding=encoding) as handle:
            reader = csv.DictReader(handle, delimiter=delimiter)
            rows = list(reader)
            columns = list(reader.fieldnames or [])

        super().__init__(rows, columns=columns)

    def __repr__(self) -> str:
        return f"CsvSource(path={str(self.path)!r}, rows={len(self)})"
