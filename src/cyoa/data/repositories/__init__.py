"""Repository exports."""

from .story_repo import StoryRepository, parse_story

__all__ = ["StoryRepository", "parse_story"]
