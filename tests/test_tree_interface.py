"""
Test Suite for BittingTreeIndex Interface

Tests the bitting list navigator:
- Node lookup by dotted step path
- Tree structure navigation (children, ancestors, paths)
- Node details and metadata
- Reporting helpers and text rendering
"""

import pytest

from masterkey import NodeId, create_progression_criteria, create_progression_engine
from masterkey.trees import BittingTreeNavigator, create_navigator
from masterkey.trees.bitting_tree import ROOT_ID, child_id


@pytest.fixture
def tree():
    """Navigator over a three-cut, two-step bitting list with a MACS of 1."""
    criteria = create_progression_criteria(1, [1, 2, 3], [[0, 0, 0], [2, 3, 4]], [1, 2, 3])
    return create_navigator(create_progression_engine(criteria).generate())


class TestBasicNavigation:
    """Test basic tree navigation operations."""

    def test_root_lookup(self, tree: BittingTreeNavigator):
        """The root is the master key."""
        node = tree.get(NodeId(ROOT_ID))

        assert node is not None
        assert node.id == ROOT_ID
        assert node.key == (1, 2, 3)
        assert node.element_type == "group"
        assert node.level == 0

    def test_node_lookup(self, tree: BittingTreeNavigator):
        """Nodes are found by their dotted step path."""
        expected = {
            "0": (1, 2, 0),
            "1": (1, 2, 4),
            "0.1": (1, 3, 0),
            "0.1.0": (0, 3, 0),
            "0.1.1": (2, 3, 0),
        }
        for code, key in expected.items():
            assert tree.get(NodeId(code)).key == key

    def test_nonexistent_node(self, tree: BittingTreeNavigator):
        """Lookup of an unknown id returns None."""
        assert tree.get(NodeId("9.9")) is None

    def test_child_id(self):
        """Ids of the root's children have no prefix."""
        assert child_id(ROOT_ID, 2) == "2"
        assert child_id("2", 0) == "2.0"


class TestTreeStructure:
    """Test tree structure navigation."""

    def test_children(self, tree: BittingTreeNavigator):
        """Each group has one child per step row."""
        assert tree.children(NodeId(ROOT_ID)) == ["0", "1"]
        assert tree.children(NodeId("0.1")) == ["0.1.0", "0.1.1"]
        assert tree.children(NodeId("0.1.0")) == []

    def test_ancestors(self, tree: BittingTreeNavigator):
        """Ancestors are ordered parent first."""
        assert tree.ancestors(NodeId("0.1.0")) == ["0.1", "0", ROOT_ID]
        assert tree.ancestors(NodeId(ROOT_ID)) == []

    def test_path_to_root(self, tree: BittingTreeNavigator):
        """The path starts at the node and ends at the root."""
        assert tree.path_to_root(NodeId("1.0")) == ["1.0", "1", ROOT_ID]
        assert tree.path_to_root(NodeId("missing")) == []

    def test_is_leaf(self, tree: BittingTreeNavigator):
        """Only change keys are leaves."""
        assert tree.is_leaf(NodeId("1.1.1"))
        assert not tree.is_leaf(NodeId("1.1"))
        assert not tree.is_leaf(NodeId("missing"))


class TestNodeDetails:
    """Test node details."""

    def test_change_key_details(self, tree: BittingTreeNavigator):
        """Details carry everything known about a change key."""
        details = tree.details(NodeId("0.1.0"))

        assert details == {
            "id": "0.1.0",
            "key": "030",
            "element_type": "key",
            "has_macs_violation": True,
            "level": 3,
            "is_leaf": True,
            "children_count": 0,
            "ancestors": ["0.1", "0", ROOT_ID],
        }

    def test_group_details(self, tree: BittingTreeNavigator):
        """Group details count children."""
        details = tree.details(NodeId(ROOT_ID))

        assert details["key"] == "123"
        assert details["has_macs_violation"] is False
        assert details["children_count"] == 2
        assert details["is_leaf"] is False

    def test_unknown_details(self, tree: BittingTreeNavigator):
        """Unknown ids have no details."""
        assert tree.details(NodeId("missing")) == {}


class TestReporting:
    """Test reporting helpers."""

    def test_indexes(self, tree: BittingTreeNavigator):
        """Seven groups and eight change keys are indexed."""
        assert len(tree.groups) == 7
        assert len(tree.keys) == 8
        assert len(tree.code_to_node) == 15

    def test_change_keys(self, tree: BittingTreeNavigator):
        """Change keys are listed left to right."""
        keys = [view.key for view in tree.change_keys()]

        assert len(keys) == 8
        assert keys[0] == (0, 0, 0)
        assert keys[-1] == (2, 3, 4)

    def test_macs_violations(self, tree: BittingTreeNavigator):
        """Violating masters and change keys are reported."""
        violations = tree.macs_violations()

        assert ROOT_ID not in violations
        assert "0" in violations
        assert "0.0.0" not in violations

    def test_render(self, tree: BittingTreeNavigator):
        """The rendering marks violating keys."""
        lines = tree.render().splitlines()

        assert len(lines) == 15
        assert lines[0] == "123"
        assert lines[1].endswith("120 *")

    def test_render_levels(self, tree: BittingTreeNavigator):
        """Rendering can stop at a level."""
        assert len(tree.render(max_level=1).splitlines()) == 3
