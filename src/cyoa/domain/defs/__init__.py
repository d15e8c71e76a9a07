"""Domain definition exports."""

from .story_def import (
    AdventureStoryDef,
    ChoiceDef,
    ConsequenceDef,
    InitialStateDef,
    StoryNodeDef,
)

__all__ = [
    "AdventureStoryDef",
    "ChoiceDef",
    "ConsequenceDef",
    "InitialStateDef",
    "StoryNodeDef",
]
