"""Service layer exports."""

from .errors import EngineError, InvalidChoiceError, StoryNodeNotFoundError, StoryValidationError
from .adventure_engine import (
    AdventureEngine,
    ConsequenceEvent,
    ItemGainedEvent,
    ItemLostEvent,
    RunResult,
    StatChangedEvent,
    StoryInfo,
    initialize_state,
)
from .presenter import Presenter
from .story_validator import (
    Issue,
    StoryStatistics,
    ValidationOptions,
    ValidationResult,
    format_issue,
    get_statistics,
    validate_story,
)

__all__ = [
    "AdventureEngine",
    "ConsequenceEvent",
    "EngineError",
    "InvalidChoiceError",
    "Issue",
    "ItemGainedEvent",
    "ItemLostEvent",
    "Presenter",
    "RunResult",
    "StatChangedEvent",
    "StoryInfo",
    "StoryNodeNotFoundError",
    "StoryStatistics",
    "StoryValidationError",
    "ValidationOptions",
    "ValidationResult",
    "format_issue",
    "get_statistics",
    "initialize_state",
    "validate_story",
]
