"""Hierarchy serialization - export nodes, forests and levels.

Provides functions to turn a HierarchyIndex into JSON-compatible dicts
and CSV text.
"""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from arbor.core.hierarchy import HierarchyIndex
    from arbor.core.models import FlatEntry, HierarchyNode


def serialize_entry(entry: FlatEntry) -> dict[str, Any]:
    """Serialize a FlatEntry to a JSON-compatible dict."""
    result: dict[str, Any] = {
        "id": entry.id,
        "label": entry.raw_label,
        "name": entry.self_name,
        "parent": entry.parent_id,
    }
    if entry.extras:
        result["extras"] = {key: _plain(value) for key, value in entry.extras.items()}
    return result


def serialize_node(node: HierarchyNode, recursive: bool = True) -> dict[str, Any]:
    """Serialize a HierarchyNode to a JSON-compatible dict.

    Args:
        node: The node to serialize.
        recursive: Nest full child dicts instead of child ids.

    Returns:
        Dict suitable for JSON serialization.
    """
    result = serialize_entry(node.entry)
    result["level"] = node.level

    if not recursive:
        if node.children:
            result["children"] = [child.id for child in node.children]
        return result

    # Build bottom-up so deep trees do not recurse
    done: dict[int, dict[str, Any]] = {}
    for current in node.walk("post"):
        data = result if current is node else serialize_entry(current.entry)
        data["level"] = current.level
        if current.children:
            data["children"] = [done.pop(id(child)) for child in current.children]
        done[id(current)] = data
    return result


def serialize_forest(index: HierarchyIndex) -> list[dict[str, Any]]:
    """Serialize every root with its nested descendants."""
    return [serialize_node(root) for root in index.get_forest()]


def serialize_levels(index: HierarchyIndex) -> list[list[str]]:
    """Serialize level buckets as lists of ids."""
    return [[node.id for node in level] for level in index.get_levels()]


def serialize_index(index: HierarchyIndex) -> dict[str, Any]:
    """Serialize a whole index: forest, levels and warnings."""
    return {
        "forest": serialize_forest(index),
        "levels": serialize_levels(index),
        "warnings": [
            {"kind": w.kind.value, "ids": list(w.ids), "message": w.message}
            for w in index.warnings
        ],
    }


def to_csv(index: HierarchyIndex) -> str:
    """Export flat entries with their levels as CSV.

    Columns are id, parent, level, name, label, then one column per
    configured extra column suffix.

    Args:
        index: The index to export.

    Returns:
        CSV string with a header row.
    """
    extra_names = list(index.config.additional_columns)

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["id", "parent", "level", "name", "label", *extra_names])

    for node in index.iter_nodes():
        entry = node.entry
        writer.writerow(
            [
                entry.id,
                entry.parent_id or "",
                node.level,
                entry.self_name,
                entry.raw_label,
                *[entry.extras.get(name, "") for name in extra_names],
            ]
        )

    return output.getvalue()


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
