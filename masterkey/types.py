"""
Core types for the bitting list generator.

These types are shared across the engine, the services and the serializers.
A generated tree is made of two node variants: BittingGroup (a master key
plus child nodes) and KeyBitting (a terminal change key).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Iterable, NewType, Union

if TYPE_CHECKING:
    from .progression.criteria import ProgressionCriteria

# Type aliases
Depth = NewType('Depth', int)  # raw cut depth, never the "10 as 0" digit form
NodeId = NewType('NodeId', str)  # dotted step path, e.g. "ROOT" or "0.3.1"


class ProcessingCapability(str, Enum):
    """How well a progression service can process a set of configurations."""
    YES = "yes"          # every expected attribute, nothing extra
    MAYBE = "maybe"      # every expected attribute plus unrecognized ones
    NO = "no"            # missing or unparseable


def has_macs_violation(depths: Iterable[int], macs: int) -> bool:
    """True if any two adjacent depths differ by more than the MACS."""
    seq = list(depths)
    return any(abs(a - b) > macs for a, b in zip(seq, seq[1:]))


class KeyBitting:
    """
    A single key: one depth per cut position plus its MACS status.

    The depths are fixed at construction. The MACS flag is None until the
    key has been tested, then True/False. Passing ``macs`` tests immediately.
    """

    element_type: ClassVar[str] = "key"

    __slots__ = ("_depths", "_has_macs_violation")

    def __init__(self, depths: Iterable[int], macs: int | None = None) -> None:
        self._depths: tuple[int, ...] = tuple(depths)
        self._has_macs_violation: bool | None = None
        if macs is not None:
            self.test_for_macs_violation(macs)

    @property
    def depths(self) -> tuple[int, ...]:
        return self._depths

    @property
    def has_macs_violation(self) -> bool | None:
        return self._has_macs_violation

    @property
    def cut_count(self) -> int:
        return len(self._depths)

    def test_for_macs_violation(self, macs: int) -> bool:
        """Test the key against the MACS, cache and return the result."""
        self._has_macs_violation = has_macs_violation(self._depths, macs)
        return self._has_macs_violation

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyBitting):
            return NotImplemented
        return (self._depths == other._depths
                and self._has_macs_violation == other._has_macs_violation)

    def __hash__(self) -> int:
        return hash((self._depths, self._has_macs_violation))

    def __repr__(self) -> str:
        return f"KeyBitting(depths={list(self._depths)}, has_macs_violation={self._has_macs_violation})"


@dataclass
class BittingGroup:
    """
    A group node: the representative master key for its subtree plus the
    ordered children. Children of one group are all groups or all keys.
    """
    master: KeyBitting
    children: list[BittingNode] = field(default_factory=list)

    element_type: ClassVar[str] = "group"

    @property
    def has_groups(self) -> bool:
        """True if the children are groups, False if they are change keys."""
        return bool(self.children) and isinstance(self.children[0], BittingGroup)

    def iter_keys(self) -> Iterable[KeyBitting]:
        """Yield every change key below this group, left to right."""
        for child in self.children:
            if isinstance(child, BittingGroup):
                yield from child.iter_keys()
            else:
                yield child


BittingNode = Union[BittingGroup, KeyBitting]


@dataclass
class BittingList:
    """The generated bitting list: the root group plus engine metadata."""
    root: BittingGroup
    cut_count: int
    step_count: int
    cut_order: tuple[int, ...]
    macs: int
    source: str | None = None

    @property
    def master(self) -> KeyBitting:
        return self.root.master


@dataclass
class ProgressionServiceResults:
    """Results of a progression service run."""
    source: str
    criteria: ProgressionCriteria
    bitting_list: BittingList
