"""
Total Position Progression Engine

Expands validated ProgressionCriteria into a complete BittingList.

The tree is a perfect step_count-ary tree of depth cut_count. Each level
corresponds to a progression rank: the root is at rank cut_count - 1 and
its master key is the system master key; moving down one level progresses
the cut position holding the next lower rank. The bottom groups (rank 0)
hold the change keys, where every position carries a progression step.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..exceptions import PreconditionError
from ..types import BittingGroup, BittingList, KeyBitting
from .criteria import ProgressionCriteria

logger = logging.getLogger(__name__)


def derive_cut_order(progression_sequence: Sequence[int]) -> tuple[int, ...]:
    """
    Invert the progression sequence into the cut order.

    cut_order[rank] is the cut position whose sequence value is rank + 1.

        [1, 2, 3, 4, 5] -> [0, 1, 2, 3, 4]
        [5, 4, 3, 2, 1] -> [4, 3, 2, 1, 0]
        [3, 5, 2, 1, 4] -> [3, 2, 0, 4, 1]
    """
    cut_order = [0] * len(progression_sequence)
    for cut, position in enumerate(progression_sequence):
        cut_order[position - 1] = cut
    return tuple(cut_order)


def expected_leaf_count(cut_count: int, step_count: int) -> int:
    return step_count ** cut_count


def expected_node_count(cut_count: int, step_count: int) -> int:
    """Groups plus change keys in a generated tree."""
    if step_count == 1:
        return cut_count + 1
    return (step_count ** (cut_count + 1) - 1) // (step_count - 1)


class TotalPositionProgressionEngine:
    """
    Generates bitting lists with the Total Position Progression technique.

    Everything derived from the criteria is computed once here. The only
    working state of a generation (the step row selected for each cut
    position along the current path) lives in generate(), so an engine can
    be reused across calls.
    """

    def __init__(self, criteria: ProgressionCriteria | None) -> None:
        self.criteria = criteria
        self.cut_order: tuple[int, ...] | None = None

        if criteria is None:
            logger.error("No criteria were passed to the progression engine.")
            return

        # The builder guarantees the criteria are valid; no re-validation here.
        self.master_cuts = criteria.master_cuts
        self.progression_steps = criteria.progression_steps
        self.macs = criteria.macs
        self.cut_count = len(criteria.progression_sequence)
        self.step_count = len(criteria.progression_steps)
        self.cut_order = derive_cut_order(criteria.progression_sequence)

        logger.debug("The master cuts: %s.", list(self.master_cuts))
        for row in self.progression_steps:
            logger.debug("The progression steps: %s.", list(row))
        logger.debug("The progression sequence: %s.", list(criteria.progression_sequence))
        logger.debug("The MACS: %s.", self.macs)
        logger.debug("The step count: %s.", self.step_count)
        logger.debug("The cut count: %s.", self.cut_count)
        logger.debug("The cut order: %s.", list(self.cut_order))

    @property
    def node_count(self) -> int:
        self._require_criteria()
        return expected_node_count(self.cut_count, self.step_count)

    def generate(self, source: str | None = None) -> BittingList:
        """Generate the complete bitting list for the engine's criteria."""
        self._require_criteria()

        # selected[cut] = step row chosen for that cut position on the current path
        selected = [0] * self.cut_count
        root = self._progress_group(self.cut_count - 1, selected)

        return BittingList(
            root=root,
            cut_count=self.cut_count,
            step_count=self.step_count,
            cut_order=self.cut_order,
            macs=self.macs,
            source=source,
        )

    # ------------------------------------------------------------------
    # Recursive progression
    # ------------------------------------------------------------------

    def _require_criteria(self) -> None:
        if self.cut_order is None:
            message = "Could not generate the bitting list; no progression criteria."
            logger.error(message)
            raise PreconditionError(message)

    def _progress_group(self, level: int, selected: list[int]) -> BittingGroup:
        """Build the group at the given rank level and everything below it."""
        group = BittingGroup(master=self._group_master(level, selected))
        cut = self.cut_order[level]

        if level > 0:
            for step in range(self.step_count):
                selected[cut] = step
                group.children.append(self._progress_group(level - 1, selected))
        else:
            for step in range(self.step_count):
                selected[cut] = step
                group.children.append(self._change_key(selected))

        return group

    def _group_master(self, level: int, selected: list[int]) -> KeyBitting:
        # Ranks at or below the level still hold the master depth.
        depths = list(self.master_cuts)
        for rank in range(level + 1, self.cut_count):
            cut = self.cut_order[rank]
            depths[cut] = self.progression_steps[selected[cut]][cut]
        return KeyBitting(depths, macs=self.macs)

    def _change_key(self, selected: list[int]) -> KeyBitting:
        depths = [self.progression_steps[selected[cut]][cut] for cut in range(self.cut_count)]
        return KeyBitting(depths, macs=self.macs)


def create_progression_engine(criteria: ProgressionCriteria | None) -> TotalPositionProgressionEngine:
    """Create a TotalPositionProgressionEngine."""
    return TotalPositionProgressionEngine(criteria)
