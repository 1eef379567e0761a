"""
Base class for Total Position Progression services.

Implements can_process_configs() and generate_bitting_list(); concrete
services supply a name, their expected attribute keys and
generate_progression_criteria().
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..config import get_masterkey_config
from ..exceptions import ProgressionServiceError, ValidationError
from ..progression.criteria import ProgressionCriteria
from ..progression.engine import TotalPositionProgressionEngine, expected_node_count
from ..types import ProcessingCapability, ProgressionServiceResults

logger = logging.getLogger(__name__)


class AbstractTotalPositionProgressionService(ABC):
    """
    Partial ProgressionService implementation.

    Capability rules:
    - unparseable JSON or a missing expected attribute -> NO
    - every expected attribute plus unrecognized ones -> MAYBE
    - exactly the expected (and optional) attributes -> YES
    """

    def __init__(
        self,
        name: str,
        attribute_keys: tuple[str, ...],
        optional_keys: tuple[str, ...] = (),
    ) -> None:
        self._name = name
        self.attribute_keys = attribute_keys
        self.optional_keys = optional_keys

    @property
    def name(self) -> str:
        return self._name

    def can_process_configs(self, configs: str | None) -> ProcessingCapability:
        logger.info("Verifying that %s can process the configurations.", self.name)
        _, capability = self._get_json_configs(configs, check_phase=True)
        return capability

    def generate_bitting_list(self, configs: str | None) -> ProgressionServiceResults:
        logger.info("Generating a bitting list using the %s.", self.name)

        json_configs, capability = self._get_json_configs(configs, check_phase=False)
        if capability is ProcessingCapability.NO:
            self._fail("Configurations not valid for this service.")

        try:
            criteria = self.generate_progression_criteria(json_configs)
        except ValidationError as e:
            self._fail(f"A validation error occurred. Cause: {e}")
        except PydanticValidationError as e:
            self._fail(f"A validation error occurred. Cause: {e}")

        self._check_tree_size(criteria)

        engine = TotalPositionProgressionEngine(criteria)
        bitting_list = engine.generate(source=self.name)

        return ProgressionServiceResults(
            source=self.name,
            criteria=criteria,
            bitting_list=bitting_list,
        )

    @abstractmethod
    def generate_progression_criteria(self, json_configs: dict[str, Any]) -> ProgressionCriteria:
        """
        Turn validated-for-presence configs into progression criteria.

        Raises ValidationError, pydantic's ValidationError or
        ProgressionServiceError.
        """

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _fail(message: str) -> None:
        logger.error(message)
        raise ProgressionServiceError(message)

    def _check_tree_size(self, criteria: ProgressionCriteria) -> None:
        limit = get_masterkey_config().max_tree_nodes
        node_count = expected_node_count(criteria.cut_count, criteria.step_count)
        if node_count > limit:
            self._fail(
                f"The bitting list would contain {node_count} nodes, "
                f"more than the configured maximum of {limit}."
            )

    def _get_json_configs(
        self, configs: str | None, check_phase: bool
    ) -> tuple[dict[str, Any] | None, ProcessingCapability]:
        """
        Parse the configuration string and decide the capability.

        Problems are logged at DEBUG while checking and at ERROR while
        generating.
        """
        log = logger.debug if check_phase else logger.error

        if configs is None:
            log("No configurations provided.")
            return self._cannot_process(None, check_phase)

        try:
            json_configs = json.loads(configs)
        except json.JSONDecodeError as e:
            log("Could not parse the configuration string into JSON. Cause: %s", e)
            return self._cannot_process(None, check_phase)

        if not isinstance(json_configs, dict):
            log("The configurations are not a JSON object.")
            return self._cannot_process(None, check_phase)

        for key in self.attribute_keys:
            if key not in json_configs:
                log("Missing '%s' configuration.", key)
                return self._cannot_process(json_configs, check_phase)

        known = set(self.attribute_keys) | set(self.optional_keys)
        unrecognized = [key for key in json_configs if key not in known]
        if unrecognized:
            if check_phase:
                logger.info("%s can process the configurations if necessary.", self.name)
            log("The configurations contain the following attributes that will be ignored: %s",
                ", ".join(unrecognized))
            return json_configs, ProcessingCapability.MAYBE

        if check_phase:
            logger.info("%s prefers to process the configurations.", self.name)
        return json_configs, ProcessingCapability.YES

    def _cannot_process(
        self, json_configs: dict[str, Any] | None, check_phase: bool
    ) -> tuple[dict[str, Any] | None, ProcessingCapability]:
        if check_phase:
            logger.info("%s CANNOT process the configurations.", self.name)
        return json_configs, ProcessingCapability.NO
