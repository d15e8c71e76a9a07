"""Exceptions raised while reading story definition files."""
from __future__ import annotations

from pathlib import Path


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """A definition file is missing, unreadable or not valid JSON."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class DataValidationError(DataError):
    """A definition file parsed but its content has the wrong shape.

    ``context`` names the offending entry, e.g. ``story 'x' node 'y' text``.
    """

    def __init__(self, message: str, context: str | None = None) -> None:
        super().__init__(message)
        self.context = context
