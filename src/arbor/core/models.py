"""
arbor.core.models - Data structures for flattened records and tree nodes.

FlatEntry is the normalized projection of one source row. HierarchyNode
wraps a FlatEntry and carries the links produced by tree building.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping


@dataclass(frozen=True)
class FlatEntry:
    """
    Normalized projection of a source record.

    Attributes:
        id: Case-folded record id
        raw_label: Label exactly as stored in the source
        self_name: Label with the ancestor path prefix removed
        parent_id: Case-folded parent id, or None for top-level records
        extras: Additional column values keyed by column suffix
        row_index: Position of the originating row in the source
    """

    id: str
    raw_label: str
    self_name: str
    parent_id: str | None = None
    extras: Mapping[str, Any] = field(default_factory=dict)
    row_index: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))

    def __str__(self) -> str:
        return f"{self.id}: {self.self_name}"


@dataclass(eq=False)
class HierarchyNode:
    """A node in the hierarchy forest.

    Nodes compare by identity: there is exactly one canonical node per
    id, shared by the forest, the level buckets and the id lookup.

    Attributes:
        entry: The flattened record this node represents.
        children: Child nodes in flattening order.
        parent: Parent node, or None for roots.
        level: Distance from the node's root (set by level indexing).
    """

    entry: FlatEntry
    children: list[HierarchyNode] = field(default_factory=list)
    parent: HierarchyNode | None = field(default=None, repr=False)
    level: int = 0

    @property
    def id(self) -> str:
        return self.entry.id

    @property
    def parent_id(self) -> str | None:
        """Declared parent id, even when the parent was not found."""
        return self.entry.parent_id

    @property
    def name(self) -> str:
        return self.entry.self_name

    @property
    def label(self) -> str:
        return self.entry.raw_label

    @property
    def extras(self) -> Mapping[str, Any]:
        return self.entry.extras

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self, order: str = "pre") -> Iterator[HierarchyNode]:
        """Iterate over this node and its descendants.

        Args:
            order: Traversal order:
                - "pre": Parent first (depth-first, pre-order)
                - "post": Children first (depth-first, post-order)
                - "level": Breadth-first (level order)

        Yields:
            HierarchyNode instances in the specified order.
        """
        if order == "pre":
            yield from self._walk_preorder()
        elif order == "post":
            yield from self._walk_postorder()
        elif order == "level":
            yield from self._walk_level()
        else:
            raise ValueError(f"Unknown traversal order: {order}")

    def _walk_preorder(self) -> Iterator[HierarchyNode]:
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def _walk_postorder(self) -> Iterator[HierarchyNode]:
        stack: list[tuple[HierarchyNode, bool]] = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                yield node
                continue
            stack.append((node, True))
            for child in reversed(node.children):
                stack.append((child, False))

    def _walk_level(self) -> Iterator[HierarchyNode]:
        queue = deque([self])
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node.children)

    def ancestors(self) -> Iterator[HierarchyNode]:
        """Iterate from the parent up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def __str__(self) -> str:
        return str(self.entry)

    def __repr__(self) -> str:
        return (
            f"HierarchyNode(id={self.id!r}, name={self.name!r}, "
            f"level={self.level}, children={len(self.children)})"
        )
