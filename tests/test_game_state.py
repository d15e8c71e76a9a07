from __future__ import annotations

import json

import pytest

from cyoa.domain.state import GameState


def test_add_item_suppresses_duplicates() -> None:
    state = GameState(current_node_id="start")
    assert state.add_item("sword") is True
    assert state.add_item("sword") is False
    assert state.inventory == ["sword"]


def test_remove_item_removes_single_entry() -> None:
    state = GameState(current_node_id="start", inventory=["rope", "lamp"])
    assert state.remove_item("rope") is True
    assert state.remove_item("rope") is False
    assert state.inventory == ["lamp"]


@pytest.mark.parametrize(
    ("start", "delta", "expected"),
    [(10, -30, 0), (10, 5, 15), (0, -1, 0), (7, 0, 7)],
)
def test_apply_stat_delta_clamps_at_zero(start: int, delta: int, expected: int) -> None:
    state = GameState(current_node_id="start", stats={"health": start})
    assert state.apply_stat_delta("health", delta) == expected
    assert state.stats["health"] == expected


def test_unset_stat_defaults_to_zero() -> None:
    state = GameState(current_node_id="start")
    assert state.get_stat("luck") == 0
    assert state.apply_stat_delta("luck", 4) == 4


def test_copy_shares_no_containers() -> None:
    state = GameState(
        current_node_id="start",
        inventory=["map"],
        stats={"health": 10},
        visited_nodes=["start"],
        player_name="Robin",
    )
    clone = state.copy()
    clone.inventory.append("coin")
    clone.stats["health"] = 1
    clone.visited_nodes.append("cave")
    assert state.inventory == ["map"]
    assert state.stats == {"health": 10}
    assert state.visited_nodes == ["start"]
    assert clone.player_name == "Robin"


def test_dict_record_survives_json() -> None:
    state = GameState(
        current_node_id="cave",
        inventory=["map"],
        stats={"health": 80},
        visited_nodes=["start", "cave", "start", "cave"],
        is_game_over=False,
        player_name="Robin",
    )
    payload = json.loads(json.dumps(state.to_dict()))
    assert GameState.from_dict(payload) == state


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"current_node_id": 3},
        {"current_node_id": "start", "inventory": "sword"},
        {"current_node_id": "start", "stats": {"health": "full"}},
        {"current_node_id": "start", "visited_nodes": [1]},
        {"current_node_id": "start", "player_name": 5},
        {"current_node_id": "start", "is_game_over": "false"},
        {"current_node_id": "start", "is_game_over": 0},
    ],
)
def test_from_dict_rejects_malformed_records(payload) -> None:
    with pytest.raises(ValueError):
        GameState.from_dict(payload)
