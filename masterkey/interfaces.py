"""
Core interfaces for the bitting list generator.

These protocols define the contracts between layers:
- ProgressionService: turns a JSON configuration into a generated bitting list
- BittingTreeIndex: read-only navigation over a generated bitting list
"""

from __future__ import annotations
from typing import Any, Protocol

from .types import NodeId, ProcessingCapability, ProgressionServiceResults


class NodeView:
    """View of a single node of a generated bitting list."""

    def __init__(
        self,
        id: NodeId,
        key: tuple[int, ...],
        element_type: str,
        has_macs_violation: bool | None = None,
        level: int = 0,
    ):
        self.id = id
        self.key = key
        self.element_type = element_type  # "group" | "key"
        self.has_macs_violation = has_macs_violation
        self.level = level  # distance from the root


class ProgressionService(Protocol):
    """
    Protocol for progression services.

    A service inspects a JSON configuration string, reports whether it can
    process it, and generates a bitting list from it. Uses structural typing
    so services need not share a base class.
    """

    @property
    def name(self) -> str:
        """Human-readable service name, reported as the results' source."""
        ...

    def can_process_configs(self, configs: str | None) -> ProcessingCapability:
        """Check whether this service can process the given configurations."""
        ...

    def generate_bitting_list(self, configs: str | None) -> ProgressionServiceResults:
        """Generate a bitting list; raises ProgressionServiceError on failure."""
        ...


class BittingTreeIndex(Protocol):
    """
    Protocol for navigation over a generated bitting list.

    Node ids are dotted step paths from the root ("ROOT", "0", "0.3", ...).
    """

    def get(self, node_id: NodeId) -> NodeView | None:
        """Get a node by its ID, or None if not found."""
        ...

    def children(self, node_id: NodeId) -> list[NodeId]:
        """Get direct children of a node."""
        ...

    def ancestors(self, node_id: NodeId) -> list[NodeId]:
        """Get ancestors from parent to root (ordered parent -> grandparent -> root)."""
        ...

    def path_to_root(self, node_id: NodeId) -> list[NodeId]:
        """Get full path from node to root (ordered node -> parent -> root)."""
        ...

    def is_leaf(self, node_id: NodeId) -> bool:
        """Check if node is a change key."""
        ...

    def details(self, node_id: NodeId) -> dict[str, Any]:
        """Get comprehensive details for a node."""
        ...
