"""
Bitting List Tree Navigation Interface
======================================

Indexes a generated BittingList into an anytree tree for navigation and
reporting. Node ids are dotted step paths from the root: "ROOT" is the
system master key, "2" is the root's third child, "2.0" its first child,
and so on down to the change keys.
"""

from __future__ import annotations

from typing import Any
from anytree import Node, PreOrderIter, RenderTree

from ..interfaces import NodeView
from ..serialization import cuts_to_key_string
from ..types import BittingGroup, BittingList, BittingNode, NodeId

ROOT_ID = "ROOT"


def child_id(parent_id: str, index: int) -> str:
    return str(index) if parent_id == ROOT_ID else f"{parent_id}.{index}"


def build_tree(bitting_list: BittingList) -> Node:
    """Build an anytree tree mirroring the bitting list."""

    def create_nodes(bitting_node: BittingNode, node_id: str, parent: Node | None) -> Node:
        key = bitting_node.master if isinstance(bitting_node, BittingGroup) else bitting_node
        node = Node(
            cuts_to_key_string(key.depths),
            parent=parent,
            code=node_id,
            depths=key.depths,
            has_macs_violation=key.has_macs_violation,
            element_type=bitting_node.element_type,
        )
        if isinstance(bitting_node, BittingGroup):
            for index, child in enumerate(bitting_node.children):
                create_nodes(child, child_id(node_id, index), node)
        return node

    return create_nodes(bitting_list.root, ROOT_ID, None)


class BittingTreeNavigator:
    """
    Bitting list navigator that implements the BittingTreeIndex protocol.
    """

    def __init__(self, bitting_list: BittingList) -> None:
        self.bitting_list = bitting_list
        self.root: Node = build_tree(bitting_list)
        self._build_indexes()

    def _build_indexes(self) -> None:
        """Build indexes for O(1) lookups by node id."""
        self.code_to_node: dict[str, Node] = {}
        self.groups: dict[str, Node] = {}
        self.keys: dict[str, Node] = {}

        for node in PreOrderIter(self.root):
            self.code_to_node[node.code] = node
            if node.element_type == "group":
                self.groups[node.code] = node
            else:
                self.keys[node.code] = node

    def find_by_code(self, code: str) -> Node | None:
        return self.code_to_node.get(code)

    # ================================================================
    # BittingTreeIndex Protocol Implementation
    # ================================================================

    def get(self, node_id: NodeId) -> NodeView | None:
        node = self.find_by_code(str(node_id))
        if node is None:
            return None
        return NodeView(
            id=NodeId(node.code),
            key=node.depths,
            element_type=node.element_type,
            has_macs_violation=node.has_macs_violation,
            level=node.depth,
        )

    def children(self, node_id: NodeId) -> list[NodeId]:
        node = self.find_by_code(str(node_id))
        if node is None:
            return []
        return [NodeId(child.code) for child in node.children]

    def ancestors(self, node_id: NodeId) -> list[NodeId]:
        node = self.find_by_code(str(node_id))
        if node is None:
            return []
        return [NodeId(ancestor.code) for ancestor in reversed(node.ancestors)]

    def path_to_root(self, node_id: NodeId) -> list[NodeId]:
        if self.find_by_code(str(node_id)) is None:
            return []
        return [node_id, *self.ancestors(node_id)]

    def is_leaf(self, node_id: NodeId) -> bool:
        node = self.find_by_code(str(node_id))
        return node is not None and node.element_type == "key"

    def details(self, node_id: NodeId) -> dict[str, Any]:
        node_view = self.get(node_id)
        if not node_view:
            return {}

        return {
            "id": str(node_view.id),
            "key": cuts_to_key_string(node_view.key),
            "element_type": node_view.element_type,
            "has_macs_violation": node_view.has_macs_violation,
            "level": node_view.level,
            "is_leaf": self.is_leaf(node_id),
            "children_count": len(self.children(node_id)),
            "ancestors": [str(aid) for aid in self.ancestors(node_id)],
        }

    # ================================================================
    # Reporting helpers
    # ================================================================

    def change_keys(self) -> list[NodeView]:
        """Every change key, left to right."""
        return [self.get(NodeId(code)) for code in self.keys]

    def macs_violations(self) -> list[NodeId]:
        """Ids of every node (group master or change key) violating the MACS."""
        return [NodeId(code) for code, node in self.code_to_node.items() if node.has_macs_violation]

    def render(self, max_level: int | None = None) -> str:
        """Render the tree as text; violating keys are marked with '*'."""
        lines: list[str] = []
        for pre, _fill, node in RenderTree(self.root):
            if max_level is not None and node.depth > max_level:
                continue
            marker = " *" if node.has_macs_violation else ""
            lines.append(f"{pre}{node.name}{marker}")
        return "\n".join(lines)


def create_navigator(bitting_list: BittingList) -> BittingTreeNavigator:
    """Create and return a fully initialized navigator."""
    return BittingTreeNavigator(bitting_list)
