"""
Master-key bitting list generation with the Total Position Progression technique.

This package provides the contracts and components that turn a master key
and a progression scheme into a hierarchical list of keys:

- Criteria (ProgressionCriteriaBuilder) validate master key, steps and sequence
- The engine (TotalPositionProgressionEngine) expands criteria into a BittingList
- Services parse JSON configurations and choose how criteria are produced
- The gateway and serializers turn requests into JSON results

Version: 1.0.0
"""

CORE_API_VERSION = "1.0.0"

from .types import (
    Depth,
    NodeId,
    ProcessingCapability,
    KeyBitting,
    BittingGroup,
    BittingNode,
    BittingList,
    ProgressionServiceResults,
    has_macs_violation,
)

from .exceptions import (
    MasterKeyError,
    ValidationError,
    PreconditionError,
    ProgressionServiceError,
    ProgressionServiceProviderError,
    GatewayError,
)

from .interfaces import (
    NodeView,
    ProgressionService,
    BittingTreeIndex,
)

from .progression import (
    ProgressionCriteria,
    ProgressionCriteriaBuilder,
    create_progression_criteria,
    TotalPositionProgressionEngine,
    create_progression_engine,
    derive_cut_order,
    expected_leaf_count,
    expected_node_count,
)

from .config import (
    MasterKeyConfig,
    get_masterkey_config,
    set_masterkey_config,
    configure_logging,
)

__all__ = [
    "CORE_API_VERSION",
    # Types
    "Depth",
    "NodeId",
    "ProcessingCapability",
    "KeyBitting",
    "BittingGroup",
    "BittingNode",
    "BittingList",
    "ProgressionServiceResults",
    "has_macs_violation",
    # Errors
    "MasterKeyError",
    "ValidationError",
    "PreconditionError",
    "ProgressionServiceError",
    "ProgressionServiceProviderError",
    "GatewayError",
    # Interfaces
    "NodeView",
    "ProgressionService",
    "BittingTreeIndex",
    # Progression
    "ProgressionCriteria",
    "ProgressionCriteriaBuilder",
    "create_progression_criteria",
    "TotalPositionProgressionEngine",
    "create_progression_engine",
    "derive_cut_order",
    "expected_leaf_count",
    "expected_node_count",
    # Configuration
    "MasterKeyConfig",
    "get_masterkey_config",
    "set_masterkey_config",
    "configure_logging",
]
