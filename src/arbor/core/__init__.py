"""
arbor.core - Flattening, tree linking, level indexing and lookup
"""

from arbor.core.config import HierarchyConfig
from arbor.core.errors import (
    ArborError,
    ConfigError,
    CyclicRelationshipError,
    HierarchyWarning,
    LevelOutOfRangeError,
    MissingColumnError,
    NodeNotFoundError,
    WarningKind,
)
from arbor.core.flatten import FlattenResult, flatten_records, self_name
from arbor.core.hierarchy import HierarchyIndex, find_cycle_breaks, index_levels, link_forest
from arbor.core.models import FlatEntry, HierarchyNode
from arbor.core.sources import CsvSource, MemorySource, RecordSource

__all__ = [
    "ArborError",
    "ConfigError",
    "CsvSource",
    "CyclicRelationshipError",
    "FlatEntry",
    "FlattenResult",
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
    "find_cycle_breaks",
    "flatten_records",
    "index_levels",
    "link_forest",
    "self_name",
]
