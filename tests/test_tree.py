"""Tests for the in-memory tree: construction, derived fields and lookup."""

import pytest

from mindpad.tree import (
    Node,
    add_child,
    bounds,
    find_node_at,
    flatten,
    iter_nodes,
    new_tree,
    refresh_derived,
)


class TestConstruction:
    """new_tree and add_child."""

    def test_new_tree_is_single_root(self):
        root = new_tree()
        assert root.label == "Root"
        assert root.children == []
        assert root.parent is None
        assert root.depth == 0
        assert root.subtree_weight == 1
        assert root.is_root

    def test_add_child_links_and_weights(self):
        root = new_tree("Root")
        a = add_child(root, "A")
        b = add_child(root, "B")

        assert [c.label for c in root.children] == ["A", "B"]
        assert a.parent is root and b.parent is root
        assert a.depth == 1
        assert root.subtree_weight == 3

    def test_add_child_updates_all_ancestor_weights(self, small_tree):
        a = small_tree.children[0]
        a1 = a.children[0]
        add_child(a1, "A1x")

        assert a1.subtree_weight == 2
        assert a.subtree_weight == 3
        assert small_tree.subtree_weight == 5

    def test_child_starts_at_parent_position(self):
        root = new_tree()
        root.x, root.y = 123.0, 45.0
        child = add_child(root, "C")
        assert (child.x, child.y) == (123.0, 45.0)

    @pytest.mark.parametrize("label", ["", "   ", "\t\n"])
    def test_blank_label_declined(self, label):
        root = new_tree()
        assert add_child(root, label) is None
        assert root.children == []
        assert root.subtree_weight == 1

    def test_label_kept_verbatim(self):
        root = new_tree()
        child = add_child(root, "  padded  ")
        assert child.label == "  padded  "


class TestTraversal:
    """Pre-order iteration and derived-field rebuilding."""

    def test_pre_order(self, small_tree):
        assert [n.label for n in iter_nodes(small_tree)] == ["Root", "A", "A1", "B"]
        assert flatten(small_tree) == list(iter_nodes(small_tree))

    def test_refresh_derived_rebuilds_everything(self):
        root = Node("R", children=[Node("A", children=[Node("A1")]), Node("B")])
        refresh_derived(root)

        a, b = root.children
        a1 = a.children[0]
        assert a.parent is root and b.parent is root and a1.parent is a
        assert (root.depth, a.depth, a1.depth) == (0, 1, 2)
        assert (root.subtree_weight, a.subtree_weight, b.subtree_weight) == (4, 2, 1)

    def test_deep_chain_does_not_recurse(self):
        root = new_tree()
        node = root
        for i in range(3000):
            node = add_child(node, f"n{i}")

        refresh_derived(root)
        assert root.subtree_weight == 3001
        assert node.depth == 3000

    def test_equality_ignores_derived_fields(self, small_tree):
        copy = Node("Root", children=[Node("A", children=[Node("A1")]), Node("B")])
        small_tree.x = 999.0
        assert copy == small_tree


class TestGeometry:
    """Hit-testing and bounds."""

    def test_find_node_at_hits_within_radius(self, small_tree):
        a = small_tree.children[0]
        a.x, a.y = 100.0, 100.0
        small_tree.x, small_tree.y = 0.0, 0.0
        for n in (small_tree.children[1], a.children[0]):
            n.x, n.y = -500.0, -500.0

        assert find_node_at(small_tree, 110.0, 105.0) is a
        assert find_node_at(small_tree, 120.0, 100.0) is None

    def test_find_node_at_prefers_pre_order(self, small_tree):
        for n in iter_nodes(small_tree):
            n.x, n.y = 0.0, 0.0
        assert find_node_at(small_tree, 1.0, 1.0) is small_tree

    def test_bounds(self, small_tree):
        coords = [(0.0, 0.0), (10.0, -5.0), (-3.0, 20.0), (7.0, 7.0)]
        for node, (x, y) in zip(iter_nodes(small_tree), coords):
            node.x, node.y = x, y
        assert bounds(small_tree) == (-3.0, -5.0, 10.0, 20.0)
