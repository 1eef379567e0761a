"""
Test Suite for Progression Services

Tests the generic and random services:
- Capability decisions (YES / MAYBE / NO)
- Bitting list generation from JSON configurations
- Rejection of wrongly typed or invalid configurations
- Seeded random criteria
- The configured tree size limit
"""

import json
import random

import pytest

from masterkey import (
    ProcessingCapability, ProgressionServiceError, create_progression_criteria,
    get_masterkey_config, has_macs_violation,
)
from masterkey.services import (
    GenericTotalPositionProgressionService, RandomGenericTotalPositionProgressionService,
)
from masterkey.services.random_service import (
    generate_master_cuts, generate_progression_sequence, generate_progression_steps,
)

GENERIC_CONFIGS = {
    "masterCuts": "623578",
    "progressionSteps": ["081956", "265790", "447312", "809134"],
    "progressionSequence": "413625",
    "startingDepth": 0,
    "macs": 7,
}

RANDOM_CONFIGS = {
    "cutCount": 5,
    "depthCount": 10,
    "startingDepth": 0,
    "doubleStepProgression": True,
    "macs": 4,
}


def configs_with(base: dict, **changes) -> str:
    data = dict(base)
    data.update(changes)
    return json.dumps(data)


def configs_without(base: dict, key: str) -> str:
    return json.dumps({k: v for k, v in base.items() if k != key})


@pytest.fixture
def generic_service():
    """Create a generic service."""
    return GenericTotalPositionProgressionService()


@pytest.fixture
def random_service():
    """Create a random service."""
    return RandomGenericTotalPositionProgressionService()


class TestGenericCapability:
    """Test can_process_configs for the generic service."""

    @pytest.mark.parametrize("configs", [None, "", "not json", "[1, 2, 3]", "42"])
    def test_unparseable(self, generic_service, configs):
        """Missing or non-object configurations cannot be processed."""
        assert generic_service.can_process_configs(configs) is ProcessingCapability.NO

    def test_valid(self, generic_service):
        """Exactly the expected attributes is a full match."""
        assert generic_service.can_process_configs(json.dumps(GENERIC_CONFIGS)) is ProcessingCapability.YES

    @pytest.mark.parametrize("key", list(GENERIC_CONFIGS))
    def test_missing_attribute(self, generic_service, key):
        """Any missing attribute is a mismatch."""
        configs = configs_without(GENERIC_CONFIGS, key)
        assert generic_service.can_process_configs(configs) is ProcessingCapability.NO

    def test_extra_attribute(self, generic_service):
        """Unrecognized attributes make a marginal match."""
        configs = configs_with(GENERIC_CONFIGS, unrecognized="value")
        assert generic_service.can_process_configs(configs) is ProcessingCapability.MAYBE

    def test_name(self, generic_service):
        """The service has a human-readable name."""
        assert generic_service.name == "Generic Total Position Progression Service"


class TestGenericGeneration:
    """Test generate_bitting_list for the generic service."""

    def test_generate(self, generic_service):
        """Valid configurations produce criteria and a full bitting list."""
        results = generic_service.generate_bitting_list(json.dumps(GENERIC_CONFIGS))

        assert results.source == generic_service.name
        assert results.bitting_list.source == generic_service.name
        assert results.criteria == create_progression_criteria(
            7,
            [6, 2, 3, 5, 7, 8],
            [[0, 8, 1, 9, 5, 6], [2, 6, 5, 7, 9, 0], [4, 4, 7, 3, 1, 2], [8, 0, 9, 1, 3, 4]],
            [4, 1, 3, 6, 2, 5],
        )
        assert results.bitting_list.master.depths == (6, 2, 3, 5, 7, 8)
        assert len(list(results.bitting_list.root.iter_keys())) == 4 ** 6

    def test_generate_with_extra_attribute(self, generic_service):
        """A marginal match still generates; extra attributes are ignored."""
        results = generic_service.generate_bitting_list(configs_with(GENERIC_CONFIGS, note="ignored"))
        assert results.criteria.macs == 7

    def test_starting_depth_one(self, generic_service):
        """With starting depth 1 the digit 0 becomes depth 10."""
        results = generic_service.generate_bitting_list(configs_with(GENERIC_CONFIGS, startingDepth=1))

        assert results.criteria.starting_depth == 1
        assert results.criteria.progression_steps[0][0] == 10
        assert results.criteria.progression_steps[1][5] == 10
        assert results.criteria.progression_steps[3][1] == 10

    @pytest.mark.parametrize("configs", [None, "", "not json"])
    def test_unparseable(self, generic_service, configs):
        """Configurations that cannot be processed are rejected."""
        with pytest.raises(ProgressionServiceError, match="Configurations not valid for this service."):
            generic_service.generate_bitting_list(configs)

    def test_missing_attribute(self, generic_service):
        """A missing attribute is rejected before any parsing."""
        with pytest.raises(ProgressionServiceError, match="Configurations not valid for this service."):
            generic_service.generate_bitting_list(configs_without(GENERIC_CONFIGS, "macs"))

    @pytest.mark.parametrize("changes", [
        {"masterCuts": 623578},
        {"progressionSteps": 6},
        {"progressionSteps": ["081956", 265790]},
        {"progressionSequence": 413625},
        {"startingDepth": "0"},
        {"startingDepth": 2},
        {"macs": "7"},
    ])
    def test_wrong_types(self, generic_service, changes):
        """Wrongly typed attributes are validation errors."""
        with pytest.raises(ProgressionServiceError, match="A validation error occurred"):
            generic_service.generate_bitting_list(configs_with(GENERIC_CONFIGS, **changes))

    @pytest.mark.parametrize("changes,attribute", [
        ({"masterCuts": "1V3456"}, "masterCuts"),
        ({"progressionSteps": ["081956", "26579X"]}, "progressionSteps"),
        ({"progressionSequence": "1V3456"}, "progressionSequence"),
    ])
    def test_non_numeric_strings(self, generic_service, changes, attribute):
        """Key strings must be digits only."""
        with pytest.raises(ProgressionServiceError, match=f"'{attribute}' configuration contains non-numeric"):
            generic_service.generate_bitting_list(configs_with(GENERIC_CONFIGS, **changes))

    def test_invalid_criteria(self, generic_service):
        """Criteria validation errors are wrapped with their cause."""
        with pytest.raises(ProgressionServiceError,
                           match=r"A validation error occurred\. Cause: The MACS is out of range \(11\)"):
            generic_service.generate_bitting_list(configs_with(GENERIC_CONFIGS, macs=11))

    def test_step_matching_master(self, generic_service):
        """A step depth equal to the master depth is reported."""
        configs = configs_with(GENERIC_CONFIGS, progressionSteps=["623578"])
        with pytest.raises(ProgressionServiceError, match="master key depth"):
            generic_service.generate_bitting_list(configs)

    def test_tree_size_limit(self, generic_service, monkeypatch):
        """Bitting lists larger than the configured maximum are refused."""
        monkeypatch.setattr(get_masterkey_config(), "max_tree_nodes", 100)
        with pytest.raises(ProgressionServiceError, match="more than the configured maximum of 100"):
            generic_service.generate_bitting_list(json.dumps(GENERIC_CONFIGS))


class TestRandomCapability:
    """Test can_process_configs for the random service."""

    def test_valid(self, random_service):
        """Exactly the expected attributes is a full match."""
        assert random_service.can_process_configs(json.dumps(RANDOM_CONFIGS)) is ProcessingCapability.YES

    def test_seed_is_recognized(self, random_service):
        """The optional seed does not lower the capability."""
        configs = configs_with(RANDOM_CONFIGS, seed=7)
        assert random_service.can_process_configs(configs) is ProcessingCapability.YES

    def test_extra_attribute(self, random_service):
        """Unrecognized attributes make a marginal match."""
        configs = configs_with(RANDOM_CONFIGS, colour="brass")
        assert random_service.can_process_configs(configs) is ProcessingCapability.MAYBE

    @pytest.mark.parametrize("key", list(RANDOM_CONFIGS))
    def test_missing_attribute(self, random_service, key):
        """Any missing required attribute is a mismatch."""
        configs = configs_without(RANDOM_CONFIGS, key)
        assert random_service.can_process_configs(configs) is ProcessingCapability.NO

    def test_generic_configs(self, random_service):
        """The random service does not accept explicit criteria."""
        assert random_service.can_process_configs(json.dumps(GENERIC_CONFIGS)) is ProcessingCapability.NO


class TestRandomGeneration:
    """Test generate_bitting_list for the random service."""

    def test_generate(self, random_service):
        """Random criteria follow the requested shape."""
        results = random_service.generate_bitting_list(configs_with(RANDOM_CONFIGS, seed=1234))
        criteria = results.criteria

        assert results.source == random_service.name
        assert criteria.cut_count == 5
        assert criteria.step_count == 4
        assert criteria.macs == 4
        assert sorted(criteria.progression_sequence) == [1, 2, 3, 4, 5]
        assert all(0 <= depth <= 9 for depth in criteria.master_cuts)
        assert not has_macs_violation(criteria.master_cuts, 4)

    def test_double_step_parity(self, random_service):
        """Double-step progressions keep the master depth's parity."""
        criteria = random_service.generate_bitting_list(configs_with(RANDOM_CONFIGS, seed=99)).criteria

        for row in criteria.progression_steps:
            for cut, depth in enumerate(row):
                assert depth % 2 == criteria.master_cuts[cut] % 2

    def test_single_step(self, random_service):
        """Single-step progressions use every other depth."""
        configs = configs_with(RANDOM_CONFIGS, depthCount=5, doubleStepProgression=False, seed=5)
        criteria = random_service.generate_bitting_list(configs).criteria

        assert criteria.step_count == 4
        for cut in range(criteria.cut_count):
            column = {row[cut] for row in criteria.progression_steps}
            assert column == set(range(5)) - {criteria.master_cuts[cut]}

    def test_starting_depth_one(self, random_service):
        """Depths start at 1 when requested."""
        configs = configs_with(RANDOM_CONFIGS, startingDepth=1, seed=3)
        criteria = random_service.generate_bitting_list(configs).criteria

        depths = list(criteria.master_cuts) + [d for row in criteria.progression_steps for d in row]
        assert all(1 <= depth <= 10 for depth in depths)

    def test_seed_is_repeatable(self, random_service):
        """The same seed yields the same criteria."""
        configs = configs_with(RANDOM_CONFIGS, seed=42)
        first = random_service.generate_bitting_list(configs).criteria
        second = random_service.generate_bitting_list(configs).criteria
        assert first == second

    def test_configured_seed(self, random_service, monkeypatch):
        """Without a seed attribute the configured seed is used."""
        monkeypatch.setattr(get_masterkey_config(), "random_seed", 8)
        first = random_service.generate_bitting_list(json.dumps(RANDOM_CONFIGS)).criteria
        second = random_service.generate_bitting_list(json.dumps(RANDOM_CONFIGS)).criteria
        assert first == second

    @pytest.mark.parametrize("changes", [
        {"cutCount": 8},
        {"cutCount": 2},
        {"depthCount": 11},
        {"startingDepth": 2},
        {"macs": 0},
        {"doubleStepProgression": "yes"},
        {"cutCount": "5"},
    ])
    def test_invalid_configs(self, random_service, changes):
        """Out-of-range or wrongly typed attributes are validation errors."""
        with pytest.raises(ProgressionServiceError, match="A validation error occurred"):
            random_service.generate_bitting_list(configs_with(RANDOM_CONFIGS, **changes))

    def test_oversized_request(self, random_service):
        """Seven cuts with nine single steps exceed the default limit."""
        configs = configs_with(RANDOM_CONFIGS, cutCount=7, doubleStepProgression=False, seed=1)
        with pytest.raises(ProgressionServiceError, match="more than the configured maximum"):
            random_service.generate_bitting_list(configs)


class TestRandomHelpers:
    """Test the random criteria helpers directly."""

    def test_master_cuts_honor_macs(self):
        """Adjacent master depths never differ by more than the MACS."""
        rng = random.Random(0)
        for _ in range(50):
            cuts = generate_master_cuts(7, 10, 0, 2, rng)
            assert len(cuts) == 7
            assert not has_macs_violation(cuts, 2)

    def test_steps_trimmed_to_shortest_column(self):
        """Rows stop at the shortest column."""
        steps = generate_progression_steps([0, 1, 2], 6, 0, True, random.Random(0))
        # columns: {2, 4}, {3, 5}, {0, 4}
        assert len(steps) == 2
        assert all(len(row) == 3 for row in steps)

    def test_sequence_is_permutation(self):
        """The sequence holds every position once."""
        assert sorted(generate_progression_sequence(6, random.Random(1))) == [1, 2, 3, 4, 5, 6]
