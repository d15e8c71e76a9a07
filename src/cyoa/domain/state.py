"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping


@dataclass(slots=True)
class GameState:
    """Mutable progress record for a single playthrough."""

    current_node_id: str
    inventory: List[str] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)
    visited_nodes: List[str] = field(default_factory=list)
    is_game_over: bool = False
    player_name: str | None = None

    def copy(self) -> "GameState":
        """Return a copy that shares no mutable containers with this state."""
        return GameState(
            current_node_id=self.current_node_id,
            inventory=list(self.inventory),
            stats=dict(self.stats),
            visited_nodes=list(self.visited_nodes),
            is_game_over=self.is_game_over,
            player_name=self.player_name,
        )

    def has_item(self, item: str) -> bool:
        return item in self.inventory

    def has_visited(self, node_id: str) -> bool:
        return node_id in self.visited_nodes

    def get_stat(self, name: str) -> int:
        return self.stats.get(name, 0)

    def add_item(self, item: str) -> bool:
        """Add an item unless already held. Returns True when added."""
        if item in self.inventory:
            return False
        self.inventory.append(item)
        return True

    def remove_item(self, item: str) -> bool:
        """Remove the first matching entry. Returns False when absent."""
        try:
            self.inventory.remove(item)
        except ValueError:
            return False
        return True

    def apply_stat_delta(self, name: str, delta: int) -> int:
        """Apply a signed delta, clamping at zero, and return the new value."""
        new_value = max(0, self.get_stat(name) + delta)
        self.stats[name] = new_value
        return new_value

    def record_visit(self, node_id: str) -> None:
        self.visited_nodes.append(node_id)

    def to_dict(self) -> Dict[str, Any]:
        """Return the plain structured record used by save/load callers."""
        return {
            "current_node_id": self.current_node_id,
            "inventory": list(self.inventory),
            "stats": dict(self.stats),
            "visited_nodes": list(self.visited_nodes),
            "is_game_over": self.is_game_over,
            "player_name": self.player_name,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "GameState":
        """Rebuild a state from :meth:`to_dict` output."""
        current_node_id = payload.get("current_node_id")
        if not isinstance(current_node_id, str):
            raise ValueError("current_node_id must be a string.")
        inventory = payload.get("inventory", [])
        if not isinstance(inventory, list) or not all(isinstance(item, str) for item in inventory):
            raise ValueError("inventory must be a list of strings.")
        stats = payload.get("stats", {})
        if not isinstance(stats, dict) or not all(
            isinstance(key, str) and isinstance(value, int) for key, value in stats.items()
        ):
            raise ValueError("stats must map strings to integers.")
        visited = payload.get("visited_nodes", [])
        if not isinstance(visited, list) or not all(isinstance(node, str) for node in visited):
            raise ValueError("visited_nodes must be a list of strings.")
        is_game_over = payload.get("is_game_over", False)
        if not isinstance(is_game_over, bool):
            raise ValueError("is_game_over must be a boolean.")
        player_name = payload.get("player_name")
        if player_name is not None and not isinstance(player_name, str):
            raise ValueError("player_name must be a string if provided.")
        return cls(
            current_node_id=current_node_id,
            inventory=list(inventory),
            stats=dict(stats),
            visited_nodes=list(visited),
            is_game_over=is_game_over,
            player_name=player_name,
        )
