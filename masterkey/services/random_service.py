"""
Random Generic Total Position Progression Service

Generates a random, valid set of progression criteria and then a bitting
list from them. Expected configurations:

    {
        "cutCount": 6,                   # 3..7 cuts on the key
        "depthCount": 10,                # 5..10 cut depths
        "startingDepth": 0,              # value of the shallowest depth
        "doubleStepProgression": true,   # progress with same-parity depths only
        "macs": 4,                       # 1..10
        "seed": 1234                     # optional
    }
"""

from __future__ import annotations

import logging
import random
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..config import get_masterkey_config
from ..progression.criteria import ProgressionCriteria, ProgressionCriteriaBuilder
from ..validators import (
    CUT_COUNT_MAX, CUT_COUNT_MIN, DEPTH_COUNT_MAX, DEPTH_COUNT_MIN,
    MACS_MAX, MACS_MIN, STARTING_DEPTH_MAX, STARTING_DEPTH_MIN,
)
from .base_service import AbstractTotalPositionProgressionService
from .registry import auto_register

logger = logging.getLogger(__name__)

CUT_COUNT_KEY = "cutCount"
DEPTH_COUNT_KEY = "depthCount"
STARTING_DEPTH_KEY = "startingDepth"
DOUBLE_STEP_PROGRESSION_KEY = "doubleStepProgression"
MACS_KEY = "macs"
SEED_KEY = "seed"


class RandomConfigs(BaseModel):
    """Typed view of the random service configurations."""
    model_config = ConfigDict(strict=True, extra="ignore", populate_by_name=True, frozen=True)

    cut_count: int = Field(alias=CUT_COUNT_KEY, ge=CUT_COUNT_MIN, le=CUT_COUNT_MAX)
    depth_count: int = Field(alias=DEPTH_COUNT_KEY, ge=DEPTH_COUNT_MIN, le=DEPTH_COUNT_MAX)
    starting_depth: int = Field(alias=STARTING_DEPTH_KEY, ge=STARTING_DEPTH_MIN, le=STARTING_DEPTH_MAX)
    double_step_progression: bool = Field(alias=DOUBLE_STEP_PROGRESSION_KEY)
    macs: int = Field(alias=MACS_KEY, ge=MACS_MIN, le=MACS_MAX)
    seed: int | None = Field(default=None, alias=SEED_KEY)


def generate_master_cuts(
    cut_count: int, depth_count: int, starting_depth: int, macs: int, rng: random.Random
) -> list[int]:
    """Random walk over the depth range where adjacent cuts honor the MACS."""
    max_depth = starting_depth + depth_count - 1
    cuts = [rng.randint(starting_depth, max_depth)]
    for _ in range(1, cut_count):
        last = cuts[-1]
        cuts.append(rng.randint(max(starting_depth, last - macs), min(last + macs, max_depth)))
    return cuts


def generate_progression_steps(
    master_cuts: list[int], depth_count: int, starting_depth: int,
    double_step: bool, rng: random.Random,
) -> list[list[int]]:
    """
    Per cut, every other depth (same parity as the master for double-step
    progressions), shuffled. Columns are trimmed to the shortest one so
    every row has a depth for every cut.
    """
    columns: list[list[int]] = []
    for master in master_cuts:
        column = [
            depth for depth in range(starting_depth, starting_depth + depth_count)
            if depth != master and (not double_step or depth % 2 == master % 2)
        ]
        rng.shuffle(column)
        columns.append(column)

    step_count = min(len(column) for column in columns)
    return [[column[step] for column in columns] for step in range(step_count)]


def generate_progression_sequence(cut_count: int, rng: random.Random) -> list[int]:
    sequence = list(range(1, cut_count + 1))
    rng.shuffle(sequence)
    return sequence


@auto_register
class RandomGenericTotalPositionProgressionService(AbstractTotalPositionProgressionService):
    """Total Position Progression from randomly generated criteria."""

    def __init__(self) -> None:
        super().__init__(
            "Random Generic Total Position Progression Service",
            (CUT_COUNT_KEY, DEPTH_COUNT_KEY, STARTING_DEPTH_KEY, DOUBLE_STEP_PROGRESSION_KEY, MACS_KEY),
            optional_keys=(SEED_KEY,),
        )

    def generate_progression_criteria(self, json_configs: dict[str, Any]) -> ProgressionCriteria:
        configs = RandomConfigs.model_validate(json_configs)

        seed = configs.seed if configs.seed is not None else get_masterkey_config().random_seed
        rng = random.Random(seed)
        logger.debug("Generating progression criteria with seed %s.", seed)

        master_cuts = generate_master_cuts(
            configs.cut_count, configs.depth_count, configs.starting_depth, configs.macs, rng
        )
        logger.debug("Generated the master key: %s.", master_cuts)

        progression_steps = generate_progression_steps(
            master_cuts, configs.depth_count, configs.starting_depth,
            configs.double_step_progression, rng,
        )
        for row in progression_steps:
            logger.debug("Generated the progression steps: %s.", row)

        progression_sequence = generate_progression_sequence(configs.cut_count, rng)
        logger.debug("Generated the progression sequence: %s.", progression_sequence)

        return (ProgressionCriteriaBuilder()
                .set_macs(configs.macs)
                .set_master_cuts(master_cuts)
                .set_progression_steps(progression_steps)
                .set_progression_sequence(progression_sequence)
                .set_starting_depth(configs.starting_depth)
                .build())
