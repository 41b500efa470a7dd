"""
arbor - Build and query hierarchies from flat parent/child tables

arbor turns rows that carry their own id and an optional parent id into
a forest of nodes, level buckets and an id lookup, all derived lazily
from one canonical node set.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("arbor")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__author__ = "Anspar"
__license__ = "MIT"

from arbor.core import (
    ArborError,
    CsvSource,
    CyclicRelationshipError,
    FlatEntry,
    HierarchyConfig,
    HierarchyIndex,
    HierarchyNode,
    HierarchyWarning,
    LevelOutOfRangeError,
    MemorySource,
    MissingColumnError,
    NodeNotFoundError,
    RecordSource,
    WarningKind,
    self_name,
)

__all__ = [
    "__version__",
    "ArborError",
    "CsvSource",
    "CyclicRelationshipError",
    "FlatEntry",
    "HierarchyConfig",
    "HierarchyIndex",
    "HierarchyNode",
    "HierarchyWarning",
    "LevelOutOfRangeError",
    "MemorySource",
    "MissingColumnError",
    "NodeNotFoundError",
    "RecordSource",
    "WarningKind",
    "self_name",
]
