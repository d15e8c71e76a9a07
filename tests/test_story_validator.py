from __future__ import annotations

import pytest

from cyoa.services.story_validator import (
    ValidationOptions,
    find_missing_nodes,
    find_unreachable_nodes,
    format_issue,
    get_statistics,
    validate_story,
)
from tests.helpers.stories import build_story, ending, linear_story


def _codes(result) -> list[str]:
    return [issue.code for issue in result.issues]


def test_well_formed_story_is_valid() -> None:
    result = validate_story(linear_story(), ValidationOptions(check_unreachable_nodes=True))
    assert result.is_valid
    assert result.errors == []
    assert result.warnings == []


def test_missing_start_node_is_an_error() -> None:
    story = build_story({"ending": ending()}, start_node_id="prologue")
    result = validate_story(story)
    assert not result.is_valid
    assert len(result.errors) == 1
    assert "prologue" in result.errors[0]
    assert _codes(result) == ["MISSING_START_NODE"]


def test_story_without_endings_is_invalid() -> None:
    story = build_story(
        {
            "start": {"text": "Round.", "choices": [{"text": "Again", "next": "middle"}]},
            "middle": {"text": "And round.", "choices": [{"text": "Again", "next": "start"}]},
        }
    )
    result = validate_story(story)
    assert not result.is_valid
    assert "NO_ENDING_NODES" in _codes(result)


def test_dangling_target_is_only_a_warning() -> None:
    story = build_story(
        {
            "start": {
                "text": "Two doors.",
                "choices": [
                    {"text": "Left", "next": "ghost"},
                    {"text": "Right", "next": "ghost"},
                    {"text": "Back", "next": "phantom"},
                    {"text": "Out", "next": "ending"},
                ],
            },
            "ending": ending(),
        }
    )
    result = validate_story(story)
    assert result.is_valid
    assert len(result.warnings) == 1
    assert result.warnings[0].count("ghost") == 1
    assert "phantom" in result.warnings[0]


def test_missing_node_check_can_be_disabled() -> None:
    story = build_story(
        {"start": {"text": "x", "choices": [{"text": "y", "next": "ghost"}]}, "ending": ending()}
    )
    result = validate_story(story, ValidationOptions(check_missing_nodes=False))
    assert "MISSING_NODE_REF" not in _codes(result)


def test_unreachable_nodes_are_reported_when_requested() -> None:
    story = build_story({"start": ending(), "island": {"text": "Nobody comes here."}})
    assert validate_story(story).warnings == []

    result = validate_story(story, ValidationOptions(check_unreachable_nodes=True))
    assert result.is_valid
    assert _codes(result) == ["UNREACHABLE_NODE"]
    assert "island" in result.warnings[0]


def test_linear_story_has_no_unreachable_nodes() -> None:
    story = build_story(
        {
            "start": {"text": "a", "choices": [{"text": "on", "next": "a"}]},
            "a": {"text": "b", "choices": [{"text": "on", "next": "b"}]},
            "b": ending(),
        }
    )
    assert find_unreachable_nodes(story.nodes, "start") == []


def test_reachability_ignores_requirements() -> None:
    story = build_story(
        {
            "start": {
                "text": "Gate.",
                "choices": [{"text": "Open", "next": "vault", "requirement": "has_key"}],
            },
            "vault": ending(),
        }
    )
    assert find_unreachable_nodes(story.nodes, "start") == []


def test_find_missing_nodes_keeps_discovery_order() -> None:
    story = build_story(
        {
            "start": {
                "text": "x",
                "choices": [{"text": "1", "next": "b"}, {"text": "2", "next": "a"}, {"text": "3", "next": "b"}],
            },
        }
    )
    assert find_missing_nodes(story.nodes) == ["b", "a"]


def test_unknown_requirement_is_warned() -> None:
    story = build_story(
        {
            "start": {
                "text": "Riddle.",
                "choices": [{"text": "Answer", "next": "ending", "requirement": "clever enough"}],
            },
            "ending": ending(),
        }
    )
    result = validate_story(story)
    assert result.is_valid
    assert _codes(result) == ["UNKNOWN_REQUIREMENT"]
    assert "clever enough" in result.warnings[0]
    assert validate_story(story, ValidationOptions(check_requirements=False)).warnings == []


def test_ending_with_choices_is_warned() -> None:
    story = build_story(
        {"start": {"text": "End?", "is_ending": True, "choices": [{"text": "More", "next": "start"}]}}
    )
    result = validate_story(story)
    assert result.is_valid
    assert _codes(result) == ["ENDING_WITH_CHOICES"]


def test_report_summarises_result() -> None:
    story = build_story({"ending": ending()}, start_node_id="prologue")
    report = validate_story(story).report()
    assert "MISSING_START_NODE" in report
    assert report.endswith("Story is invalid: errors=1 warnings=0")


def test_format_issue_includes_context() -> None:
    story = build_story({"ending": ending()}, start_node_id="prologue")
    issue = validate_story(story).issues[0]
    assert format_issue(issue) == (
        "[ERROR] MISSING_START_NODE: Start node 'prologue' does not exist. "
        "(story_id=test_story node_id=prologue)"
    )


def test_statistics() -> None:
    story = build_story(
        {
            "start": {
                "text": "x",
                "choices": [{"text": "1", "next": "a"}, {"text": "2", "next": "b"}, {"text": "3", "next": "b"}],
            },
            "a": {"text": "y", "choices": [{"text": "1", "next": "b"}]},
            "b": ending(),
            "c": ending("bad"),
        }
    )
    stats = get_statistics(story)
    assert stats.total_nodes == 4
    assert stats.total_choices == 4
    assert stats.ending_nodes == 2
    assert stats.average_choices_per_node == pytest.approx(1.0)


def test_statistics_of_empty_story() -> None:
    stats = get_statistics(build_story({}))
    assert stats.total_nodes == 0
    assert stats.total_choices == 0
    assert stats.ending_nodes == 0
    assert stats.average_choices_per_node == 0


def test_non_numeric_stat_threshold_is_warned() -> None:
    story = build_story(
        {
            "start": {
                "text": "Gate.",
                "choices": [
                    {"text": "Push", "next": "ending", "requirement": "courage >= high"},
                    {"text": "Wait", "next": "ending"},
                ],
            },
            "ending": ending(),
        }
    )
    result = validate_story(story)
    assert result.is_valid
    assert _codes(result) == ["INVALID_STAT_THRESHOLD"]
    assert "requirement=courage >= ?" in result.warnings[0]
