"""
arbor.core.errors - Exceptions and warning records for hierarchy building.

Fatal conditions are raised as ArborError subclasses. Recoverable data
quality problems (cycles, duplicate ids, orphans) are collected as
HierarchyWarning records on the index instead of being raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ArborError(Exception):
    """Base class for all arbor errors."""


class ConfigError(ArborError, ValueError):
    """Configuration file could not be read or is invalid."""


class MissingColumnError(ArborError, KeyError):
    """A configured column does not exist on the record source."""

    def __init__(self, column: str, available: list[str] | None = None) -> None:
        self.column = column
        self.available = list(available or [])
        super().__init__(column)

    def __str__(self) -> str:
        if self.available:
            return f"Column '{self.column}' not found (available: {', '.join(self.available)})"
        return f"Column '{self.column}' not found"


class NodeNotFoundError(ArborError, KeyError):
    """No node exists for the requested id."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(node_id)

    def __str__(self) -> str:
        return f"Node '{self.node_id}' not found"


class LevelOutOfRangeError(ArborError, IndexError):
    """Requested level lies outside the computed hierarchy depth."""

    def __init__(self, level: int, level_count: int) -> None:
        self.level = level
        self.level_count = level_count
        super().__init__(f"Level {level} is out of range (hierarchy has {level_count} levels)")


class CyclicRelationshipError(ArborError, ValueError):
    """Parent relationships form a cycle (raised only in strict mode)."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = list(cycle)
        super().__init__(f"Cyclic parent relationship: {' -> '.join(self.cycle)}")


class WarningKind(Enum):
    """Kinds of recoverable data quality problems."""

    CYCLE = "cycle"
    DUPLICATE_ID = "duplicate_id"
    ORPHAN = "orphan"


@dataclass(frozen=True)
class HierarchyWarning:
    """A recoverable problem found while building the hierarchy.

    Attributes:
        kind: What went wrong.
        ids: Node ids involved. For cycles this is the cycle path,
            starting and ending with the same id.
        message: Human-readable description.
    """

    kind: WarningKind
    ids: tuple[str, ...] = field(default_factory=tuple)
    message: str = ""

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"
