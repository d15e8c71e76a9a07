"""Repository for adventure story definitions."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from cyoa.core.types import ENDING_TYPES
from cyoa.data.errors import DataValidationError
from cyoa.data.repositories.base import RepositoryBase
from cyoa.domain.defs import (
    AdventureStoryDef,
    ChoiceDef,
    ConsequenceDef,
    InitialStateDef,
    StoryNodeDef,
)
from cyoa.domain.requirements import parse_requirement

logger = logging.getLogger(__name__)

DEFAULT_STORY_ID = "mysterious_forest"


class StoryRepository(RepositoryBase[AdventureStoryDef]):
    """Loads stories and validates their structure."""

    def __init__(self, base_path=None) -> None:
        super().__init__("stories.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, AdventureStoryDef]:
        stories: Dict[str, AdventureStoryDef] = {}
        for story_id, story_payload in raw.items():
            stories[story_id] = parse_story(story_id, story_payload)
            logger.debug(
                "Loaded story '%s' with %d nodes", story_id, len(stories[story_id].nodes)
            )
        return stories


def parse_story(story_id: str, raw: object) -> AdventureStoryDef:
    """Convert a raw story payload into an immutable story definition."""
    context = f"story '{story_id}'"
    story_data = RepositoryBase._require_mapping(raw, context)
    title = _require_str(story_data.get("title"), f"{context} title")
    description = _require_str(story_data.get("description", ""), f"{context} description")
    start_node_id = _require_str(story_data.get("start_node_id"), f"{context} start_node_id")
    initial_state = _parse_initial_state(story_data.get("initial_state"), context)
    raw_nodes = RepositoryBase._require_mapping(story_data.get("nodes"), f"{context} nodes")
    nodes: Dict[str, StoryNodeDef] = {}
    for node_id, node_payload in raw_nodes.items():
        nodes[node_id] = _parse_node(node_id, node_payload, context)
    return AdventureStoryDef(
        id=story_id,
        title=title,
        description=description,
        start_node_id=start_node_id,
        nodes=MappingProxyType(nodes),
        initial_state=initial_state,
    )


def _parse_initial_state(raw: object, context: str) -> InitialStateDef:
    if raw is None:
        return InitialStateDef()
    state_ctx = f"{context} initial_state"
    state_data = RepositoryBase._require_mapping(raw, state_ctx)
    inventory = _parse_str_list(state_data.get("inventory"), f"{state_ctx} inventory")
    stats = _parse_int_mapping(state_data.get("stats"), f"{state_ctx} stats")
    player_name = _require_optional_str(state_data.get("player_name"), f"{state_ctx} player_name")
    return InitialStateDef(inventory=inventory, stats=stats, player_name=player_name)


def _parse_node(node_id: str, raw: object, context: str) -> StoryNodeDef:
    node_ctx = f"{context} node '{node_id}'"
    node_data = RepositoryBase._require_mapping(raw, node_ctx)
    declared_id = node_data.get("id", node_id)
    if declared_id != node_id:
        raise DataValidationError(f"{node_ctx} id must match its key.")
    text = _require_str(node_data.get("text"), f"{node_ctx} text")
    is_ending = node_data.get("is_ending", False)
    if not isinstance(is_ending, bool):
        raise DataValidationError(f"{node_ctx} is_ending must be a boolean.")
    ending_type = _require_optional_str(node_data.get("ending_type"), f"{node_ctx} ending_type")
    if ending_type is not None and ending_type not in ENDING_TYPES:
        raise DataValidationError(
            f"{node_ctx} ending_type must be one of: {', '.join(ENDING_TYPES)}."
        )
    choices = _parse_choices(node_data.get("choices"), node_ctx)
    return StoryNodeDef(
        id=node_id,
        text=text,
        choices=choices,
        is_ending=is_ending,
        ending_type=ending_type,
    )


def _parse_choices(raw_choices: object, node_ctx: str) -> Tuple[ChoiceDef, ...]:
    if raw_choices is None:
        return ()
    if not isinstance(raw_choices, list):
        raise DataValidationError(f"{node_ctx} choices must be a list if provided.")
    choices: List[ChoiceDef] = []
    for index, entry in enumerate(raw_choices):
        choice_ctx = f"{node_ctx} choices[{index}]"
        choice_data = RepositoryBase._require_mapping(entry, choice_ctx)
        text = _require_str(choice_data.get("text"), f"{choice_ctx} text")
        next_node_id = _require_str(choice_data.get("next"), f"{choice_ctx} next")
        requirement_text = _require_optional_str(
            choice_data.get("requirement"), f"{choice_ctx} requirement"
        )
        consequence = _parse_consequence(choice_data.get("consequence"), choice_ctx)
        choices.append(
            ChoiceDef(
                text=text,
                next_node_id=next_node_id,
                requirement=parse_requirement(requirement_text),
                consequence=consequence,
            )
        )
    return tuple(choices)


def _parse_consequence(raw: object, choice_ctx: str) -> ConsequenceDef | None:
    if raw is None:
        return None
    consequence_ctx = f"{choice_ctx} consequence"
    data = RepositoryBase._require_mapping(raw, consequence_ctx)
    return ConsequenceDef(
        add_to_inventory=_parse_str_list(
            data.get("add_to_inventory"), f"{consequence_ctx} add_to_inventory"
        ),
        remove_from_inventory=_parse_str_list(
            data.get("remove_from_inventory"), f"{consequence_ctx} remove_from_inventory"
        ),
        modify_stats=_parse_int_mapping(data.get("modify_stats"), f"{consequence_ctx} modify_stats"),
    )


def _parse_str_list(raw: object, context: str) -> Tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise DataValidationError(f"{context} must be a list if provided.", context)
    for index, value in enumerate(raw):
        _require_str(value, f"{context}[{index}]")
    return tuple(raw)


def _parse_int_mapping(raw: object, context: str) -> Mapping[str, int]:
    if raw is None:
        return MappingProxyType({})
    data = RepositoryBase._require_mapping(raw, context)
    values: Dict[str, int] = {}
    for key, value in data.items():
        # bool is an int subclass; reject it explicitly.
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context}.{key} must be an integer.", f"{context}.{key}")
        values[key] = value
    return MappingProxyType(values)


def _require_str(value: object, context: str) -> str:
    if not isinstance(value, str):
        raise DataValidationError(f"{context} must be a string.", context)
    return value


def _require_optional_str(value: object, context: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise DataValidationError(f"{context} must be a string if provided.", context)
    return value
