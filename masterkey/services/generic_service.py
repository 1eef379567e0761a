"""
Generic Total Position Progression Service

Generates a bitting list from explicit criteria. Expected configurations:

    {
        "masterCuts": "623578",                       # digit string, one digit per cut
        "progressionSteps": ["081956", "265790"],     # one digit string per step row
        "progressionSequence": "413625",              # priority rank of each cut
        "startingDepth": 0,                           # 0 or 1
        "macs": 7                                     # 1..10
    }

With a starting depth of 1 the digit "0" stands for depth 10.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..progression.criteria import ProgressionCriteria, ProgressionCriteriaBuilder
from ..serialization import key_string_to_cuts
from ..validators import STARTING_DEPTH_MAX, STARTING_DEPTH_MIN
from .base_service import AbstractTotalPositionProgressionService
from .registry import auto_register

logger = logging.getLogger(__name__)

MASTER_CUTS_KEY = "masterCuts"
PROGRESSION_STEPS_KEY = "progressionSteps"
PROGRESSION_SEQUENCE_KEY = "progressionSequence"
STARTING_DEPTH_KEY = "startingDepth"
MACS_KEY = "macs"


class GenericConfigs(BaseModel):
    """Typed view of the generic service configurations."""
    model_config = ConfigDict(strict=True, extra="ignore", populate_by_name=True, frozen=True)

    master_cuts: str = Field(alias=MASTER_CUTS_KEY)
    progression_steps: list[str] = Field(alias=PROGRESSION_STEPS_KEY)
    progression_sequence: str = Field(alias=PROGRESSION_SEQUENCE_KEY)
    starting_depth: int = Field(alias=STARTING_DEPTH_KEY, ge=STARTING_DEPTH_MIN, le=STARTING_DEPTH_MAX)
    macs: int = Field(alias=MACS_KEY)


@auto_register
class GenericTotalPositionProgressionService(AbstractTotalPositionProgressionService):
    """Total Position Progression from explicitly supplied criteria."""

    def __init__(self) -> None:
        super().__init__(
            "Generic Total Position Progression Service",
            (MASTER_CUTS_KEY, PROGRESSION_STEPS_KEY, PROGRESSION_SEQUENCE_KEY, STARTING_DEPTH_KEY, MACS_KEY),
        )

    def generate_progression_criteria(self, json_configs: dict[str, Any]) -> ProgressionCriteria:
        configs = GenericConfigs.model_validate(json_configs)
        start = configs.starting_depth

        master_cuts = key_string_to_cuts(configs.master_cuts, start, MASTER_CUTS_KEY)
        progression_steps = [
            key_string_to_cuts(row, start, PROGRESSION_STEPS_KEY)
            for row in configs.progression_steps
        ]
        # Sequence digits are ranks, never depths
        progression_sequence = key_string_to_cuts(configs.progression_sequence, 0, PROGRESSION_SEQUENCE_KEY)

        logger.debug("Parsed master cuts %s, %d step rows, sequence %s.",
                     master_cuts, len(progression_steps), progression_sequence)

        return (ProgressionCriteriaBuilder()
                .set_macs(configs.macs)
                .set_master_cuts(master_cuts)
                .set_progression_steps(progression_steps)
                .set_progression_sequence(progression_sequence)
                .set_starting_depth(start)
                .build())
