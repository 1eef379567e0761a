"""
Total Position Progression: validated criteria and the generation engine.
"""

from .criteria import ProgressionCriteria, ProgressionCriteriaBuilder, create_progression_criteria
from .engine import (
    TotalPositionProgressionEngine,
    create_progression_engine,
    derive_cut_order,
    expected_leaf_count,
    expected_node_count,
)

__all__ = [
    "ProgressionCriteria",
    "ProgressionCriteriaBuilder",
    "create_progression_criteria",
    "TotalPositionProgressionEngine",
    "create_progression_engine",
    "derive_cut_order",
    "expected_leaf_count",
    "expected_node_count",
]
