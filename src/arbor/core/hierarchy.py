"""
Hierarchy building and query surface.

Turns flat entries into three views over one canonical node set:
- a forest of nested nodes
- level buckets (nodes grouped by depth)
- lookup of any node by id

All traversals use explicit stacks or queues, so deep or cyclic inputs
cannot exhaust the call stack.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Set, Tuple

from arbor.core.config import HierarchyConfig
from arbor.core.errors import (
    CyclicRelationshipError,
    HierarchyWarning,
    LevelOutOfRangeError,
    NodeNotFoundError,
    WarningKind,
)
from arbor.core.flatten import flatten_records
from arbor.core.models import FlatEntry, HierarchyNode
from arbor.core.sources import RecordSource

logger = logging.getLogger(__name__)


@dataclass
class CycleInfo:
    """Cycle detection results.

    Attributes:
        breakers: Ids promoted to root to break a cycle.
        cycle_paths: One path per cycle, starting and ending at the breaker.
    """

    breakers: Set[str] = field(default_factory=set)
    cycle_paths: List[List[str]] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Cycle Detection
# -----------------------------------------------------------------------------


def find_cycle_breaks(entries: Dict[str, FlatEntry]) -> CycleInfo:
    """Find parent chains that loop back on themselves. PURE - no mutation.

    Every entry has at most one parent, so each connected group holds at
    most one cycle. The cycle member that comes first in insertion order
    is chosen as the breaker.

    Args:
        entries: Mapping id -> FlatEntry in insertion order

    Returns:
        CycleInfo with the breaker ids and cycle paths
    """
    position = {entry_id: i for i, entry_id in enumerate(entries)}
    resolved: Set[str] = set()
    info = CycleInfo()

    for start_id in entries:
        if start_id in resolved:
            continue

        path: List[str] = []
        on_path: Dict[str, int] = {}
        current: Optional[str] = start_id

        while current is not None and current not in resolved:
            if current in on_path:
                members = path[on_path[current]:]
                breaker = min(members, key=position.__getitem__)
                # Rotate so the reported path starts at the breaker
                offset = members.index(breaker)
                cycle = members[offset:] + members[:offset]
                info.breakers.add(breaker)
                info.cycle_paths.append(cycle + [breaker])
                break

            on_path[current] = len(path)
            path.append(current)
            parent_id = entries[current].parent_id
            current = parent_id if parent_id in entries else None

        resolved.update(path)

    return info


# -----------------------------------------------------------------------------
# Tree Linking
# -----------------------------------------------------------------------------


def link_forest(
    entries: Dict[str, FlatEntry],
    nodes: Dict[str, HierarchyNode],
    breakers: Optional[Set[str]] = None,
) -> List[HierarchyNode]:
    """Attach every node to its parent in a single pass.

    Args:
        entries: Mapping id -> FlatEntry in insertion order
        nodes: Mapping id -> HierarchyNode, one per entry
        breakers: Ids to treat as roots regardless of their parent

    Returns:
        Root nodes in insertion order
    """
    breakers = breakers or set()
    roots: List[HierarchyNode] = []

    for entry_id, entry in entries.items():
        node = nodes[entry_id]
        parent_id = entry.parent_id
        if not parent_id or parent_id not in nodes or entry_id in breakers:
            roots.append(node)
            continue
        parent = nodes[parent_id]
        node.parent = parent
        parent.children.append(node)

    return roots


# -----------------------------------------------------------------------------
# Level Indexing
# -----------------------------------------------------------------------------


def index_levels(roots: List[HierarchyNode]) -> List[List[HierarchyNode]]:
    """Group nodes by distance from their root (BFS).

    Sets each node's level as a side effect.

    Args:
        roots: Root nodes in discovery order

    Returns:
        List of levels, level 0 holding the roots
    """
    levels: List[List[HierarchyNode]] = []
    queue = deque((root, 0) for root in roots)

    while queue:
        node, depth = queue.popleft()
        if depth == len(levels):
            levels.append([])
        levels[depth].append(node)
        node.level = depth
        for child in node.children:
            queue.append((child, depth + 1))

    return levels


# -----------------------------------------------------------------------------
# Index
# -----------------------------------------------------------------------------


class _BuildState(Enum):
    PENDING = "pending"
    BUILDING = "building"
    READY = "ready"


class HierarchyIndex:
    """Lazily built hierarchy over a flat record source.

    The first query pulls the records, flattens them, links parents to
    children and computes level buckets. Every later query is answered
    from that cached state. An index is never rebuilt; construct a new
    one to pick up changed records.

    Lazy construction is not thread-safe. Pass eager=True to build in
    the constructor before sharing an index between threads.

    Example:
        index = HierarchyIndex(MemorySource(rows))
        for root in index.get_forest():
            print(root.name, [c.name for c in root.children])
    """

    def __init__(
        self,
        source: RecordSource,
        config: Optional[HierarchyConfig] = None,
        eager: bool = False,
    ) -> None:
        """Initialize the index.

        Args:
            source: Record source providing rows and columns.
            config: Column mapping and policy (uses defaults if not provided).
            eager: Build immediately instead of on first query.
        """
        self.source = source
        self.config = config or HierarchyConfig()

        self._state = _BuildState.PENDING
        self._entries: Dict[str, FlatEntry] = {}
        self._occurrences: List[FlatEntry] = []
        self._nodes: Dict[str, HierarchyNode] = {}
        self._roots: List[HierarchyNode] = []
        self._levels: List[List[HierarchyNode]] = []
        self._warnings: List[HierarchyWarning] = []

        if eager:
            self.build()

    @property
    def is_built(self) -> bool:
        return self._state is _BuildState.READY

    def build(self) -> HierarchyIndex:
        """Derive all views if not done yet.

        Returns:
            Self for method chaining.

        Raises:
            MissingColumnError: If a configured column is absent.
            CyclicRelationshipError: On a cycle when strict_cycles is set.
        """
        if self._state is _BuildState.READY:
            return self
        if self._state is _BuildState.BUILDING:
            raise RuntimeError("HierarchyIndex queried while it is being built")

        self._state = _BuildState.BUILDING
        try:
            self._build()
        except BaseException:
            self._state = _BuildState.PENDING
            raise
        self._state = _BuildState.READY
        return self

    def _build(self) -> None:
        flat = flatten_records(self.source, self.config)
        warnings = list(flat.warnings)

        cycles = find_cycle_breaks(flat.entries)
        for cycle in cycles.cycle_paths:
            if self.config.strict_cycles:
                raise CyclicRelationshipError(cycle)
            warning = HierarchyWarning(
                kind=WarningKind.CYCLE,
                ids=tuple(cycle),
                message=(
                    f"Cyclic parent relationship {' -> '.join(cycle)}; "
                    f"'{cycle[0]}' promoted to root"
                ),
            )
            logger.warning("%s", warning.message)
            warnings.append(warning)

        for entry in flat.entries.values():
            if entry.parent_id and entry.parent_id not in flat.entries:
                warning = HierarchyWarning(
                    kind=WarningKind.ORPHAN,
                    ids=(entry.id, entry.parent_id),
                    message=f"Parent '{entry.parent_id}' of '{entry.id}' not found; promoted to root",
                )
                logger.info("%s", warning.message)
                warnings.append(warning)

        nodes = {entry_id: HierarchyNode(entry=entry) for entry_id, entry in flat.entries.items()}
        roots = link_forest(flat.entries, nodes, cycles.breakers)
        levels = index_levels(roots)

        self._entries = flat.entries
        self._occurrences = flat.occurrences
        self._nodes = nodes
        self._roots = roots
        self._levels = levels
        self._warnings = warnings

        logger.debug(
            "Built hierarchy: %d nodes, %d roots, %d levels",
            len(nodes),
            len(roots),
            len(levels),
        )

    # -- Queries ---------------------------------------------------------------

    def get_forest(self) -> List[HierarchyNode]:
        """Return the root nodes in discovery order."""
        self.build()
        return self._roots

    def get_level(self, level: int) -> List[HierarchyNode]:
        """Return all nodes at the given depth.

        Args:
            level: 0-based level index

        Raises:
            LevelOutOfRangeError: If level is negative or beyond the depth
        """
        self.build()
        if level < 0 or level >= len(self._levels):
            raise LevelOutOfRangeError(level, len(self._levels))
        return self._levels[level]

    def get_levels(self) -> List[List[HierarchyNode]]:
        self.build()
        return self._levels

    def get_level_count(self) -> int:
        self.build()
        return len(self._levels)

    def get_flat(self) -> Mapping[str, FlatEntry]:
        """Return a read-only id -> FlatEntry mapping (one entry per distinct id)."""
        self.build()
        return MappingProxyType(self._entries)

    def get_flat_entries(self) -> Tuple[FlatEntry, ...]:
        """Return every flattened row in source order.

        Unlike get_flat(), repeated ids appear once per occurrence, so
        the two views disagree on count when the source has duplicates.
        """
        self.build()
        return tuple(self._occurrences)

    def get_by_id(self, node_id: str) -> HierarchyNode:
        """Look up a node by id, ignoring case.

        Raises:
            NodeNotFoundError: If no node has this id
        """
        self.build()
        node = self._nodes.get(str(node_id).casefold())
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def get_entry(self, node_id: str) -> FlatEntry:
        """Look up a flat entry by id, ignoring case."""
        return self.get_by_id(node_id).entry

    def get_path(self, node_id: str) -> List[HierarchyNode]:
        """Return the nodes from the root down to the given node."""
        node = self.get_by_id(node_id)
        path = [node, *node.ancestors()]
        path.reverse()
        return path

    def iter_nodes(self, order: str = "pre") -> Iterator[HierarchyNode]:
        """Iterate every node, root by root.

        Args:
            order: Traversal order ("pre", "post", "level").
        """
        for root in self.get_forest():
            yield from root.walk(order)

    @property
    def warnings(self) -> List[HierarchyWarning]:
        """Recoverable problems found while building."""
        self.build()
        return self._warnings

    def __contains__(self, node_id: object) -> bool:
        if not isinstance(node_id, str):
            return False
        self.build()
        return node_id.casefold() in self._nodes

    def __len__(self) -> int:
        self.build()
        return len(self._nodes)

    def __repr__(self) -> str:
        if not self.is_built:
            return f"HierarchyIndex(source={self.source!r}, state={self._state.value})"
        return (
            f"HierarchyIndex(nodes={len(self._nodes)}, roots={len(self._roots)}, "
            f"levels={len(self._levels)})"
        )
