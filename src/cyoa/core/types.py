"""Shared type aliases for the core and domain layers."""
from typing import Literal

EndingType = Literal["good", "bad", "neutral"]
DisplayStyle = Literal["normal", "highlight", "warning", "success", "error"]
EngineStatus = Literal["not_started", "running", "ended"]
TerminationReason = Literal["ending", "death", "dead_end"]

ENDING_TYPES: tuple[str, ...] = ("good", "bad", "neutral")

__all__ = [
    "DisplayStyle",
    "ENDING_TYPES",
    "EndingType",
    "EngineStatus",
    "TerminationReason",
]
