"""Integrity checks and playthroughs for the bundled stories."""
from __future__ import annotations

import asyncio

import pytest

from cyoa.data.repositories import StoryRepository
from cyoa.data.repositories.story_repo import DEFAULT_STORY_ID
from cyoa.services import AdventureEngine, ValidationOptions, format_issue, validate_story
from tests.helpers.presenters import ScriptedPresenter


@pytest.fixture(scope="module")
def forest():
    return StoryRepository().get(DEFAULT_STORY_ID)


def _play(story, choices):
    presenter = ScriptedPresenter(choices)
    engine = AdventureEngine(story, presenter, strict=True)
    result = asyncio.run(engine.run())
    return engine.get_state(), result, presenter


def test_bundled_stories_validate_cleanly() -> None:
    for story in StoryRepository().all():
        result = validate_story(story, ValidationOptions(check_unreachable_nodes=True))
        if result.issues:
            pytest.fail(
                f"Story '{story.id}' has issues:\n"
                + "\n".join(format_issue(issue) for issue in result.issues)
            )


def test_every_ending_category_is_present(forest) -> None:
    categories = {node.ending_type for node in forest.nodes.values() if node.is_ending}
    assert categories == {"good", "bad", "neutral"}


def test_guardian_ally_path(forest) -> None:
    state, result, _ = _play(forest, [0, 1, 2])
    assert result.reason == "ending"
    assert result.ending_type == "good"
    assert state.visited_nodes == ["start", "forest_bold", "deep_forest", "guardian_ally"]
    assert state.stats["courage"] == 60


def test_fighting_the_guardian_is_fatal(forest) -> None:
    state, result, presenter = _play(forest, [0, 1, 1])
    assert result.reason == "death"
    assert result.ending_type == "bad"
    assert state.stats["health"] == 0
    assert state.current_node_id == "guardian_fight"
    assert "guardian_fight" not in state.visited_nodes
    assert presenter.endings == ["bad"]


def test_mushroom_can_be_offered_to_the_guardian(forest) -> None:
    state, result, presenter = _play(forest, [1, 1, 0, 3])
    assert result.ending_type == "good"
    assert state.current_node_id == "guardian_ally"
    assert state.inventory == ["Rations"]
    assert state.stats["wisdom"] == 50
    assert "Offer the glowing mushroom as a gift" in presenter.offered[-1]
    assert "Slip past while Thornfang is talking" not in presenter.offered[-1]


def test_hermit_trade_unlocks_book_of_future(forest) -> None:
    state, result, presenter = _play(forest, [2, 0, 0, 0, 1, 0, 2])
    assert result.ending_type == "good"
    assert state.current_node_id == "ending_future"
    assert state.inventory == ["Hermit's Map"]
    assert state.stats["wisdom"] == 40
    assert presenter.offered[-1] == [
        'Choose "The Book of Past Adventures"',
        'Choose "The Book of Present Possibilities"',
        'Choose "The Book of Future Consequences"',
    ]


def test_courage_gates_the_elf_challenge(forest) -> None:
    _, _, presenter = _play(forest, [3, 0])
    assert presenter.offered[1][-1] == "Challenge Silvaleaf to prove they are trustworthy"

    presenter = ScriptedPresenter([0])
    engine = AdventureEngine(forest, presenter, strict=True)
    state = engine.get_state()
    state.current_node_id = "forest_call"
    state.stats["courage"] = 40
    engine.load_state(state)
    asyncio.run(engine.run())
    assert presenter.offered[0] == [
        "Ask Silvaleaf about the forest and its dangers",
        "Request safe passage through the forest",
    ]


def test_path_of_thorns_costs_health(forest) -> None:
    state, result, _ = _play(forest, [3, 2, 0, 2])
    assert result.ending_type == "good"
    assert state.stats["health"] == 60
    assert state.stats["courage"] == 70
    assert state.visited_nodes == [
        "start",
        "forest_call",
        "elf_challenge",
        "deep_forest",
        "guardian_ally",
    ]
