"""Tests for core/models.py - FlatEntry and HierarchyNode."""

import pytest


def _node(node_id, *children):
    from arbor import FlatEntry, HierarchyNode

    node = HierarchyNode(entry=FlatEntry(id=node_id, raw_label=node_id, self_name=node_id))
    for child in children:
        child.parent = node
        node.children.append(child)
    return node


class TestFlatEntry:
    """Tests for FlatEntry dataclass."""

    def test_defaults(self):
        """Test optional fields default sensibly."""
        from arbor import FlatEntry

        entry = FlatEntry(id="a", raw_label="A", self_name="A")

        assert entry.parent_id is None
        assert entry.extras == {}
        assert str(entry) == "a: A"

    def test_frozen(self):
        """Test entries cannot be modified."""
        from dataclasses import FrozenInstanceError

        from arbor import FlatEntry

        entry = FlatEntry(id="a", raw_label="A", self_name="A")

        with pytest.raises(FrozenInstanceError):
            entry.id = "b"

    def test_extras_read_only(self):
        """Test extras are copied and cannot be modified."""
        from arbor import FlatEntry

        extras = {"_color": "red"}
        entry = FlatEntry(id="a", raw_label="A", self_name="A", extras=extras)
        extras["_color"] = "blue"

        assert entry.extras == {"_color": "red"}
        with pytest.raises(TypeError):
            entry.extras["_color"] = "green"


class TestHierarchyNode:
    """Tests for HierarchyNode traversal."""

    @pytest.fixture
    def tree(self):
        #     root
        #    /    \
        #   a      b
        #  / \
        # c   d
        return _node("root", _node("a", _node("c"), _node("d")), _node("b"))

    def test_walk_preorder(self, tree):
        """Test pre-order visits parents before children."""
        assert [n.id for n in tree.walk("pre")] == ["root", "a", "c", "d", "b"]

    def test_walk_postorder(self, tree):
        """Test post-order visits children before parents."""
        assert [n.id for n in tree.walk("post")] == ["c", "d", "a", "b", "root"]

    def test_walk_level(self, tree):
        """Test level order visits breadth-first."""
        assert [n.id for n in tree.walk("level")] == ["root", "a", "b", "c", "d"]

    def test_walk_unknown_order(self, tree):
        """Test unknown traversal order is rejected."""
        with pytest.raises(ValueError, match="Unknown traversal order"):
            list(tree.walk("sideways"))

    def test_ancestors(self, tree):
        """Test ancestors run from parent to root."""
        c = tree.children[0].children[0]

        assert [n.id for n in c.ancestors()] == ["a", "root"]
        assert list(tree.ancestors()) == []

    def test_root_and_leaf(self, tree):
        """Test is_root and is_leaf flags."""
        assert tree.is_root
        assert not tree.is_leaf
        assert tree.children[1].is_leaf
        assert not tree.children[1].is_root

    def test_identity_equality(self):
        """Test nodes with equal entries are still distinct."""
        assert _node("a") != _node("a")

    def test_repr(self, tree):
        """Test repr summarizes the node."""
        assert repr(tree) == "HierarchyNode(id='root', name='root', level=0, children=2)"
