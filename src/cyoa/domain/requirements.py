"""Typed choice requirements and their evaluation against game state."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from cyoa.domain.state import GameState


@dataclass(frozen=True, slots=True)
class Always:
    """Requirement that never hides a choice."""


@dataclass(frozen=True, slots=True)
class HasItem:
    """Met when the item is in the inventory."""

    item: str


@dataclass(frozen=True, slots=True)
class StatAtLeast:
    """Met when the stat (0 if unset) reaches the threshold.

    A ``None`` threshold comes from text with no leading number and is never met.
    """

    stat: str
    threshold: Optional[int]


@dataclass(frozen=True, slots=True)
class VisitedNode:
    """Met when the node appears in the visited history."""

    node_id: str


@dataclass(frozen=True, slots=True)
class UnrecognizedRequirement:
    """Authoring text that matched no known form; treated as met."""

    text: str


Requirement = Union[Always, HasItem, StatAtLeast, VisitedNode, UnrecognizedRequirement]

ALWAYS = Always()

_HAS_PREFIX = "has_"
_VISITED_PREFIX = "visited_"
_AT_LEAST = ">="
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_requirement(text: str | None) -> Requirement:
    """Convert an authoring string such as ``has_sword`` into a requirement."""
    if text is None or not text.strip():
        return ALWAYS
    if text.startswith(_HAS_PREFIX):
        return HasItem(item=text[len(_HAS_PREFIX) :])
    if _AT_LEAST in text:
        stat, _, raw_threshold = text.partition(_AT_LEAST)
        match = _LEADING_INT.match(raw_threshold)
        threshold = int(match.group(1)) if match else None
        return StatAtLeast(stat=stat.strip(), threshold=threshold)
    if text.startswith(_VISITED_PREFIX):
        return VisitedNode(node_id=text[len(_VISITED_PREFIX) :])
    return UnrecognizedRequirement(text=text)


def is_requirement_met(requirement: Requirement, state: GameState) -> bool:
    """Evaluate a requirement against the current state."""
    if isinstance(requirement, HasItem):
        return state.has_item(requirement.item)
    if isinstance(requirement, StatAtLeast):
        if requirement.threshold is None:
            return False
        return state.get_stat(requirement.stat) >= requirement.threshold
    if isinstance(requirement, VisitedNode):
        return state.has_visited(requirement.node_id)
    if isinstance(requirement, (Always, UnrecognizedRequirement)):
        return True
    raise TypeError(f"Unsupported requirement type: {type(requirement).__name__}")


def describe_requirement(requirement: Requirement) -> str:
    """Return the authoring form of a requirement."""
    if isinstance(requirement, HasItem):
        return f"{_HAS_PREFIX}{requirement.item}"
    if isinstance(requirement, StatAtLeast):
        threshold = "?" if requirement.threshold is None else requirement.threshold
        return f"{requirement.stat} {_AT_LEAST} {threshold}"
    if isinstance(requirement, VisitedNode):
        return f"{_VISITED_PREFIX}{requirement.node_id}"
    if isinstance(requirement, UnrecognizedRequirement):
        return requirement.text
    return ""
