"""Story definition structures used by the runtime."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from cyoa.core.types import EndingType
from cyoa.domain.requirements import ALWAYS, Requirement


def _empty_mapping() -> Mapping[str, int]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ConsequenceDef:
    """Inventory and stat changes applied when a choice is taken."""

    add_to_inventory: Tuple[str, ...] = ()
    remove_from_inventory: Tuple[str, ...] = ()
    modify_stats: Mapping[str, int] = field(default_factory=_empty_mapping)

    @property
    def is_empty(self) -> bool:
        return not (self.add_to_inventory or self.remove_from_inventory or self.modify_stats)


@dataclass(frozen=True, slots=True)
class ChoiceDef:
    """Represents a selectable choice on a story node."""

    text: str
    next_node_id: str
    requirement: Requirement = ALWAYS
    consequence: ConsequenceDef | None = None


@dataclass(frozen=True, slots=True)
class StoryNodeDef:
    """Fully parsed story node."""

    id: str
    text: str
    choices: Tuple[ChoiceDef, ...] = ()
    is_ending: bool = False
    ending_type: EndingType | None = None


@dataclass(frozen=True, slots=True)
class InitialStateDef:
    """Template for the state a new playthrough starts from."""

    inventory: Tuple[str, ...] = ()
    stats: Mapping[str, int] = field(default_factory=_empty_mapping)
    player_name: str | None = None


@dataclass(frozen=True, slots=True)
class AdventureStoryDef:
    """A complete story graph plus its starting template."""

    id: str
    title: str
    description: str
    start_node_id: str
    nodes: Mapping[str, StoryNodeDef]
    initial_state: InitialStateDef = field(default_factory=InitialStateDef)
