"""
Total Position Progression criteria.

ProgressionCriteria is an immutable value object. It can only be obtained
from ProgressionCriteriaBuilder.build() (or create_progression_criteria),
which validates every attribute first and raises ValidationError on the
first violation found. The validation order is part of the contract:
callers report the first error, and tests assert on it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..exceptions import ValidationError
from ..validators import (
    CUT_COUNT_MAX, CUT_COUNT_MIN, MACS_MAX, MACS_MIN,
    STARTING_DEPTH_MAX, STARTING_DEPTH_MIN,
    describe_range, validate_cut_count, validate_macs, validate_starting_depth,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressionCriteria:
    """The validated set of criteria for a Total Position Progression."""
    macs: int
    master_cuts: tuple[int, ...]
    progression_steps: tuple[tuple[int, ...], ...]
    progression_sequence: tuple[int, ...]
    starting_depth: int = 0

    @property
    def cut_count(self) -> int:
        return len(self.master_cuts)

    @property
    def step_count(self) -> int:
        return len(self.progression_steps)


class ProgressionCriteriaBuilder:
    """
    Builds ProgressionCriteria objects. Every object it returns is valid.

    Setters return the builder so calls can be chained:

        criteria = (ProgressionCriteriaBuilder()
                    .set_macs(4)
                    .set_master_cuts([2, 5, 7, 4, 5, 9])
                    .set_progression_steps(steps)
                    .set_progression_sequence([5, 3, 1, 6, 4, 2])
                    .build())
    """

    def __init__(self) -> None:
        self._macs: int | None = None
        self._master_cuts: Sequence[int] | None = None
        self._progression_steps: Sequence[Sequence[int]] | None = None
        self._progression_sequence: Sequence[int] | None = None
        self._starting_depth: int = STARTING_DEPTH_MIN

    def set_macs(self, macs: int) -> ProgressionCriteriaBuilder:
        self._macs = macs
        return self

    def set_master_cuts(self, master_cuts: Sequence[int]) -> ProgressionCriteriaBuilder:
        self._master_cuts = master_cuts
        return self

    def set_progression_steps(self, progression_steps: Sequence[Sequence[int]]) -> ProgressionCriteriaBuilder:
        self._progression_steps = progression_steps
        return self

    def set_progression_sequence(self, progression_sequence: Sequence[int]) -> ProgressionCriteriaBuilder:
        self._progression_sequence = progression_sequence
        return self

    def set_starting_depth(self, starting_depth: int) -> ProgressionCriteriaBuilder:
        self._starting_depth = starting_depth
        return self

    def build(self) -> ProgressionCriteria:
        """Validate the attributes and construct the criteria."""
        self._validate()
        return ProgressionCriteria(
            macs=self._macs,
            master_cuts=tuple(self._master_cuts),
            progression_steps=tuple(tuple(row) for row in self._progression_steps),
            progression_sequence=tuple(self._progression_sequence),
            starting_depth=self._starting_depth,
        )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _fail(message: str) -> None:
        logger.error(message)
        raise ValidationError(message)

    def _validate(self) -> None:
        master = self._master_cuts
        steps = self._progression_steps
        sequence = self._progression_sequence

        # Presence
        if master is None:
            self._fail("The master key is missing.")
        if not steps:
            self._fail("The progression steps are missing.")
        if sequence is None:
            self._fail("The progression sequence is missing.")

        if not validate_macs(self._macs):
            self._fail(f"The MACS is out of range {describe_range(self._macs, MACS_MIN, MACS_MAX)}.")

        cut_count = len(master)
        if not validate_cut_count(cut_count):
            self._fail(
                "The master key has an invalid number of cuts "
                f"{describe_range(cut_count, CUT_COUNT_MIN, CUT_COUNT_MAX)}."
            )

        # Every row, and the sequence, must have one entry per cut
        for row in steps:
            if len(row) != cut_count:
                self._fail(
                    "The progression steps do not have the same number of cuts as the master key "
                    f"({len(row)}, {cut_count})."
                )
        if len(sequence) != cut_count:
            self._fail(
                "The progression sequence does not have the same number of cuts as the master key "
                f"({len(sequence)}, {cut_count})."
            )

        for cut, depth in enumerate(master):
            if depth < 0:
                self._fail(f"The master key contains a negative depth (cut={cut}, depth={depth}).")

        # Column by column: no master depth, no repeated depth
        for cut in range(cut_count):
            seen: set[int] = set()
            for step, row in enumerate(steps):
                depth = row[cut]
                if depth == master[cut]:
                    self._fail(
                        "The progression steps contain a master key depth "
                        f"(cut={cut}, step={step}, depth={depth})."
                    )
                if depth in seen:
                    self._fail(
                        "The progression steps contain duplicate depths "
                        f"(cut={cut}, step={step}, depth={depth})."
                    )
                seen.add(depth)

        # The sequence must hold every position 1..cut_count exactly once
        positions: set[int] = set()
        for cut, position in enumerate(sequence):
            if position < 1 or position > cut_count:
                self._fail(
                    "The progression sequence contains an invalid position "
                    f"(cut={cut}, position={position})."
                )
            if position in positions:
                self._fail(
                    "The progression sequence position is duplicated "
                    f"(cut={cut}, position={position})."
                )
            positions.add(position)

        if not validate_starting_depth(self._starting_depth):
            self._fail(
                "The starting depth is out of range "
                f"{describe_range(self._starting_depth, STARTING_DEPTH_MIN, STARTING_DEPTH_MAX)}."
            )


def create_progression_criteria(
    macs: int,
    master_cuts: Sequence[int],
    progression_steps: Sequence[Sequence[int]],
    progression_sequence: Sequence[int],
    starting_depth: int = STARTING_DEPTH_MIN,
) -> ProgressionCriteria:
    """Build validated criteria in one call; raises ValidationError."""
    return (ProgressionCriteriaBuilder()
            .set_macs(macs)
            .set_master_cuts(master_cuts)
            .set_progression_steps(progression_steps)
            .set_progression_sequence(progression_sequence)
            .set_starting_depth(starting_depth)
            .build())
