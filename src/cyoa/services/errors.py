"""Service-layer exceptions."""


class EngineError(Exception):
    """Base exception for adventure engine failures."""


class StoryNodeNotFoundError(EngineError):
    """Raised when the current node id does not exist in the story graph."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Story node '{node_id}' does not exist.")
        self.node_id = node_id


class StoryValidationError(EngineError):
    """Raised when a story fails validation in strict mode."""

    def __init__(self, story_id: str, errors: list[str]) -> None:
        super().__init__(f"Story '{story_id}' is invalid: " + "; ".join(errors))
        self.story_id = story_id
        self.errors = list(errors)


class InvalidChoiceError(EngineError):
    """Raised when a selected index falls outside the available choices."""

    def __init__(self, index: object, choice_count: int) -> None:
        super().__init__(f"Choice index {index!r} is invalid for {choice_count} available choices.")
        self.index = index
        self.choice_count = choice_count
