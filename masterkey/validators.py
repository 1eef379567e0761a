"""
Range validators shared by the criteria builder and the progression services.
"""

from __future__ import annotations

# Cut count validation range
CUT_COUNT_MIN: int = 3
CUT_COUNT_MAX: int = 7

# Starting depth validation range
STARTING_DEPTH_MIN: int = 0
STARTING_DEPTH_MAX: int = 1

# MACS validation range
MACS_MIN: int = 1
MACS_MAX: int = 10

# Depth count validation range (random criteria only)
DEPTH_COUNT_MIN: int = 5
DEPTH_COUNT_MAX: int = 10


def _in_range(value: int | None, low: int, high: int) -> bool:
    # bool is an int subclass; a flag is never a valid count
    if value is None or isinstance(value, bool):
        return False
    return low <= value <= high


def validate_cut_count(cut_count: int | None) -> bool:
    return _in_range(cut_count, CUT_COUNT_MIN, CUT_COUNT_MAX)


def validate_starting_depth(starting_depth: int | None) -> bool:
    return _in_range(starting_depth, STARTING_DEPTH_MIN, STARTING_DEPTH_MAX)


def validate_macs(macs: int | None) -> bool:
    return _in_range(macs, MACS_MIN, MACS_MAX)


def validate_depth_count(depth_count: int | None) -> bool:
    return _in_range(depth_count, DEPTH_COUNT_MIN, DEPTH_COUNT_MAX)


def describe_range(value: object, low: int, high: int) -> str:
    """Format the '(value) [low, high]' suffix used in range error messages."""
    return f"({value}) [{low}, {high}]"
