"""
arbor.core.flatten - Normalize source rows into flat entries.

Each row becomes one FlatEntry with a case-folded id and parent id, a
label stripped of its ancestor path, and any configured extra columns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from arbor.core.config import HierarchyConfig
from arbor.core.errors import HierarchyWarning, MissingColumnError, WarningKind
from arbor.core.models import FlatEntry
from arbor.core.sources import RecordSource

logger = logging.getLogger(__name__)


@dataclass
class FlattenResult:
    """Output of flattening a record source.

    Attributes:
        entries: Mapping id -> FlatEntry. A repeated id keeps its first
            position but holds the last record's values.
        occurrences: Every FlatEntry in row order, duplicates included.
        warnings: Duplicate id warnings.
    """

    entries: dict[str, FlatEntry] = field(default_factory=dict)
    occurrences: list[FlatEntry] = field(default_factory=list)
    warnings: list[HierarchyWarning] = field(default_factory=list)


def self_name(label: str, separator: str) -> str:
    """Trim the ancestor path off a label.

    Examples:
        'A|B|C' -> 'C'
        'Solo' -> 'Solo'
        ' A | B ' -> 'B'

    Args:
        label: Full label, possibly prefixed with ancestor names
        separator: Path separator used inside labels

    Returns:
        The text after the last separator, trimmed of whitespace
    """
    if not separator:
        return label.strip()
    index = label.rfind(separator)
    if index < 0:
        return label.strip()
    return label[index + len(separator):].strip()


def normalize_id(value: Any) -> str | None:
    """Case-fold an id value; empty or missing values become None."""
    if value is None:
        return None
    text = str(value)
    if not text:
        return None
    return text.casefold()


def _require_columns(source: RecordSource, names: list[str]) -> None:
    available = list(source.columns)
    for name in names:
        if name not in available:
            raise MissingColumnError(name, available)


def _load_additional_columns(
    source: RecordSource, config: HierarchyConfig
) -> dict[str, list[Any]]:
    """Fetch extra columns keyed by suffix."""
    columns: dict[str, list[Any]] = {}
    for suffix in config.additional_columns:
        key = config.additional_column_key(suffix)
        _require_columns(source, [key])
        columns[suffix] = list(source.column_values(key))
    return columns


def _row_extras(additional: dict[str, list[Any]], row_index: int) -> dict[str, Any]:
    extras: dict[str, Any] = {}
    for suffix, values in additional.items():
        if row_index >= len(values):
            continue
        value = values[row_index]
        if value is None or len(str(value)) == 0:
            continue
        extras[suffix] = value
    return extras


def create_flat_entry(
    row: Mapping[str, Any],
    config: HierarchyConfig,
    row_index: int = 0,
    extras: dict[str, Any] | None = None,
) -> FlatEntry:
    """Build a FlatEntry from one source row.

    Args:
        row: Row with named-column access
        config: Column mapping
        row_index: Position of the row in the source
        extras: Extra column values already filtered for this row

    Returns:
        The normalized FlatEntry
    """
    raw_label = row.get(config.text_column)
    raw_label = "" if raw_label is None else str(raw_label)
    raw_id = row.get(config.id_column)

    return FlatEntry(
        id="" if raw_id is None else str(raw_id).casefold(),
        raw_label=raw_label,
        self_name=self_name(raw_label, config.text_separator),
        parent_id=normalize_id(row.get(config.relationship_column)),
        extras=extras or {},
        row_index=row_index,
    )


def flatten_records(source: RecordSource, config: HierarchyConfig) -> FlattenResult:
    """Flatten every row of a record source.

    Args:
        source: Record source to read
        config: Column mapping and separator

    Returns:
        FlattenResult with the id mapping, ordered occurrences and
        duplicate id warnings

    Raises:
        MissingColumnError: If a configured column is absent
    """
    _require_columns(
        source, [config.id_column, config.text_column, config.relationship_column]
    )
    additional = _load_additional_columns(source, config)

    result = FlattenResult()
    for row_index, row in enumerate(source.rows()):
        entry = create_flat_entry(
            row, config, row_index=row_index, extras=_row_extras(additional, row_index)
        )
        if entry.id in result.entries:
            warning = HierarchyWarning(
                kind=WarningKind.DUPLICATE_ID,
                ids=(entry.id,),
                message=f"Duplicate id '{entry.id}' at row {row_index}; keeping the later row",
            )
            logger.warning("%s", warning.message)
            result.warnings.append(warning)
        result.entries[entry.id] = entry
        result.occurrences.append(entry)

    logger.debug("Flattened %d rows into %d entries", len(result.occurrences), len(result.entries))
    return result
