"""Story traversal engine that drives a single adventure."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from cyoa.core.types import EndingType, EngineStatus, TerminationReason
from cyoa.domain.defs import AdventureStoryDef, ChoiceDef, StoryNodeDef
from cyoa.domain.requirements import is_requirement_met
from cyoa.domain.state import GameState
from cyoa.services.errors import (
    EngineError,
    InvalidChoiceError,
    StoryNodeNotFoundError,
    StoryValidationError,
)
from cyoa.services.presenter import Presenter
from cyoa.services.story_validator import validate_story

logger = logging.getLogger(__name__)

HEALTH_STAT = "health"
DEFAULT_PLAYER_NAME = "Adventurer"


@dataclass(slots=True)
class ConsequenceEvent:
    """Base class for consequence events."""


@dataclass(slots=True)
class ItemGainedEvent(ConsequenceEvent):
    item: str


@dataclass(slots=True)
class ItemLostEvent(ConsequenceEvent):
    item: str


@dataclass(slots=True)
class StatChangedEvent(ConsequenceEvent):
    stat: str
    delta: int
    new_value: int


@dataclass(slots=True)
class RunResult:
    """How a run of the traversal loop ended."""

    reason: TerminationReason
    ending_type: EndingType | None
    final_node_id: str


@dataclass(frozen=True, slots=True)
class StoryInfo:
    title: str
    description: str


def initialize_state(story: AdventureStoryDef) -> GameState:
    """Build a fresh state from the story's starting template."""
    template = story.initial_state
    return GameState(
        current_node_id=story.start_node_id,
        inventory=list(template.inventory),
        stats=dict(template.stats),
        visited_nodes=[],
        is_game_over=False,
        player_name=template.player_name,
    )


class AdventureEngine:
    """Application service that walks the story graph for one player."""

    def __init__(
        self,
        story: AdventureStoryDef,
        presenter: Presenter,
        *,
        strict: bool = False,
    ) -> None:
        if strict:
            result = validate_story(story)
            if not result.is_valid:
                raise StoryValidationError(story.id, result.errors)
        self._story = story
        self._presenter = presenter
        self._state = initialize_state(story)
        self._status: EngineStatus = "not_started"

    @property
    def status(self) -> EngineStatus:
        return self._status

    @property
    def story(self) -> AdventureStoryDef:
        return self._story

    async def play(self) -> RunResult:
        """Run full sessions, including the welcome and replay prompts."""
        while True:
            self._presenter.show_welcome()
            player_name = await self._presenter.ask_for_name()
            self._state.player_name = player_name
            self._presenter.show_text(
                f"Welcome, {player_name}! Your adventure begins now...", "highlight"
            )
            self._presenter.show_text(f"\n{self._story.description}\n")
            await self._presenter.pause()
            result = await self.run()
            if not await self._presenter.ask_play_again():
                return result
            logger.debug("Restarting story '%s' for a new playthrough", self._story.id)
            self.reset()

    async def run(self) -> RunResult:
        """Traverse nodes from the current state until the adventure ends."""
        if self._status == "ended":
            raise EngineError("The adventure has ended; call reset() to play again.")
        self._status = "running"
        while True:
            node = self.current_node()
            if node is None:
                missing_id = self._state.current_node_id
                logger.error("Story node '%s' missing from story '%s'", missing_id, self._story.id)
                self._presenter.show_text(f"Error: Invalid story node '{missing_id}'!", "error")
                self._state.is_game_over = True
                self._status = "ended"
                raise StoryNodeNotFoundError(missing_id)

            logger.debug("Entering node '%s'", node.id)
            self._state.record_visit(node.id)
            self._presenter.clear()
            self._presenter.show_stats(dict(self._state.stats), list(self._state.inventory))
            self._presenter.show_text(node.text)

            if node.is_ending:
                ending_type: EndingType = node.ending_type or "neutral"
                self._presenter.show_ending(ending_type)
                return self._finish("ending", ending_type)

            choices = self.available_choices(node)
            if not choices:
                self._presenter.show_text(
                    "No available choices! The adventure ends here.", "warning"
                )
                return self._finish("dead_end", None)

            self._presenter.show_choices(choices)
            selected = await self._select_choice(choices)
            logger.debug("Selected '%s' -> '%s'", selected.text, selected.next_node_id)
            events = self.apply_consequence(selected)
            if events:
                await self._presenter.pause()
            self._state.current_node_id = selected.next_node_id

            if self._is_dead():
                player_name = self._state.player_name or DEFAULT_PLAYER_NAME
                self._presenter.show_text("\nYour health has reached zero!", "error")
                self._presenter.show_text(f"{player_name}, your adventure ends here...", "error")
                self._presenter.show_ending("bad")
                return self._finish("death", "bad")

    def available_choices(self, node: StoryNodeDef) -> List[ChoiceDef]:
        """Return the node's choices whose requirements the state meets."""
        return [
            choice
            for choice in node.choices
            if is_requirement_met(choice.requirement, self._state)
        ]

    def apply_consequence(self, choice: ChoiceDef) -> List[ConsequenceEvent]:
        """Apply a choice's consequence to the state and announce each change."""
        consequence = choice.consequence
        if consequence is None:
            return []
        events: List[ConsequenceEvent] = []
        for item in consequence.add_to_inventory:
            if self._state.add_item(item):
                events.append(ItemGainedEvent(item=item))
        for item in consequence.remove_from_inventory:
            if self._state.remove_item(item):
                events.append(ItemLostEvent(item=item))
        for stat, delta in consequence.modify_stats.items():
            new_value = self._state.apply_stat_delta(stat, delta)
            if delta != 0:
                events.append(StatChangedEvent(stat=stat, delta=delta, new_value=new_value))
        for event in events:
            logger.debug("Consequence applied: %s", event)
            self._announce(event)
        return events

    def current_node(self) -> StoryNodeDef | None:
        return self._story.nodes.get(self._state.current_node_id)

    def get_state(self) -> GameState:
        return self._state.copy()

    def load_state(self, state: GameState) -> None:
        """Replace the internal state wholesale. The caller owns consistency."""
        self._state = state.copy()
        self._status = "ended" if state.is_game_over else "not_started"

    def reset(self) -> None:
        self._state = initialize_state(self._story)
        self._status = "not_started"

    def get_story_info(self) -> StoryInfo:
        return StoryInfo(title=self._story.title, description=self._story.description)

    async def _select_choice(self, choices: Sequence[ChoiceDef]) -> ChoiceDef:
        while True:
            raw_index = await self._presenter.ask_for_choice(choices)
            try:
                return self._choice_at(choices, raw_index)
            except InvalidChoiceError as exc:
                logger.warning("%s", exc)
                self._presenter.show_text(
                    f"Please choose a number between 1 and {len(choices)}.", "warning"
                )

    @staticmethod
    def _choice_at(choices: Sequence[ChoiceDef], index: object) -> ChoiceDef:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidChoiceError(index, len(choices))
        if not 0 <= index < len(choices):
            raise InvalidChoiceError(index, len(choices))
        return choices[index]

    def _is_dead(self) -> bool:
        return HEALTH_STAT in self._state.stats and self._state.stats[HEALTH_STAT] <= 0

    def _finish(self, reason: TerminationReason, ending_type: EndingType | None) -> RunResult:
        self._state.is_game_over = True
        self._status = "ended"
        logger.debug(
            "Run ended at '%s': reason=%s ending=%s",
            self._state.current_node_id,
            reason,
            ending_type,
        )
        return RunResult(
            reason=reason,
            ending_type=ending_type,
            final_node_id=self._state.current_node_id,
        )

    def _announce(self, event: ConsequenceEvent) -> None:
        if isinstance(event, ItemGainedEvent):
            self._presenter.show_text(f"You obtained: {event.item}", "success")
        elif isinstance(event, ItemLostEvent):
            self._presenter.show_text(f"You lost: {event.item}", "warning")
        elif isinstance(event, StatChangedEvent):
            label = event.stat[:1].upper() + event.stat[1:]
            if event.delta > 0:
                self._presenter.show_text(f"{label} increased by {event.delta}!", "success")
            else:
                self._presenter.show_text(f"{label} decreased by {abs(event.delta)}!", "warning")
