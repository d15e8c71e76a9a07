"""Lazy, cached loading of one JSON definition file."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Generic, TypeVar

from cyoa.data import paths
from cyoa.data.errors import DataValidationError
from cyoa.data.json_loader import load_json

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Maps ids to typed definitions parsed from ``<definitions>/<filename>``.

    The file is read on first access and cached until :meth:`reload`.
    Subclasses implement :meth:`_build`.
    """

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._file_path = paths.get_definitions_path(base_path) / filename
        self._definitions: Dict[str, T] | None = None

    @property
    def file_path(self) -> Path:
        return self._file_path

    def _build(self, raw: dict[str, object]) -> Dict[str, T]:
        raise NotImplementedError

    def _loaded(self) -> Dict[str, T]:
        if self._definitions is None:
            raw = load_json(self._file_path)
            self._definitions = self._build(
                self._require_mapping(raw, f"top level of {self._file_path.name}")
            )
            logger.debug("Cached %d definitions from %s", len(self._definitions), self._file_path)
        return self._definitions

    def reload(self) -> None:
        """Drop the cache so the next access re-reads the file."""
        self._definitions = None

    def get(self, def_id: str) -> T:
        """Return a definition by id, raising KeyError when it is unknown."""
        definitions = self._loaded()
        if def_id not in definitions:
            raise KeyError(def_id)
        return definitions[def_id]

    def ids(self) -> list[str]:
        return sorted(self._loaded())

    def all(self) -> list[T]:
        """Return every definition ordered by id."""
        definitions = self._loaded()
        return [definitions[def_id] for def_id in sorted(definitions)]

    def __contains__(self, def_id: object) -> bool:
        return def_id in self._loaded()

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.", context)
        return value
