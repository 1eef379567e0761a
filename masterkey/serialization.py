"""
Key-string codec and JSON-compatible serialization of bitting lists.

Depths are written as digit strings, one digit per cut. A depth of 10 is
written as the digit "0"; when reading, "0" means 10 if the starting depth
is 1 and a real 0 otherwise.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from .exceptions import ProgressionServiceError
from .progression.criteria import ProgressionCriteria
from .types import BittingGroup, BittingList, BittingNode, KeyBitting, ProgressionServiceResults

logger = logging.getLogger(__name__)


def key_string_to_cuts(key_string: str, starting_depth: int, attribute_key: str) -> list[int]:
    """Convert a numeric key string like "623578" into a list of depths."""
    if not key_string or not key_string.isdigit() or not key_string.isascii():
        message = f"The '{attribute_key}' configuration contains non-numeric values ({key_string})."
        logger.error(message)
        raise ProgressionServiceError(message)

    cuts: list[int] = []
    for char in key_string:
        depth = int(char)
        if depth == 0 and starting_depth == 1:
            depth = 10
        cuts.append(depth)
    return cuts


def cuts_to_key_string(depths: Iterable[int]) -> str:
    """Convert depths into a digit string; depth 10 becomes "0"."""
    return "".join("0" if depth == 10 else str(depth) for depth in depths)


def key_to_dict(key: KeyBitting) -> dict[str, Any]:
    return {
        "key": cuts_to_key_string(key.depths),
        "hasMACSViolation": key.has_macs_violation,
    }


def bitting_node_to_dict(node: BittingNode) -> dict[str, Any]:
    """Serialize a group (recursively) or a change key."""
    if isinstance(node, BittingGroup):
        return {
            "master": key_to_dict(node.master),
            "children": [bitting_node_to_dict(child) for child in node.children],
        }
    return key_to_dict(node)


def bitting_list_to_dict(bitting_list: BittingList) -> dict[str, Any]:
    data = bitting_node_to_dict(bitting_list.root)
    if bitting_list.source is not None:
        data["source"] = bitting_list.source
    return data


def criteria_to_dict(criteria: ProgressionCriteria) -> dict[str, Any]:
    return {
        "macs": criteria.macs,
        "masterCuts": cuts_to_key_string(criteria.master_cuts),
        "progressionSteps": [cuts_to_key_string(row) for row in criteria.progression_steps],
        "progressionSequence": "".join(str(p) for p in criteria.progression_sequence),
        "startingDepth": criteria.starting_depth,
    }


def results_to_dict(results: ProgressionServiceResults) -> dict[str, Any]:
    return {
        "source": results.source,
        "criteria": criteria_to_dict(results.criteria),
        "bittingList": bitting_list_to_dict(results.bitting_list),
    }


def results_to_json(results: ProgressionServiceResults, indent: int | None = None) -> str:
    return json.dumps(results_to_dict(results), indent=indent)
