"""Reads JSON definition files for the repositories."""
from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import DataLoadError

logger = logging.getLogger(__name__)


def load_json(path: Path) -> object:
    """Parse ``path`` as UTF-8 JSON, wrapping every failure in DataLoadError."""
    logger.debug("Reading definitions from %s", path)
    if not path.is_file():
        raise DataLoadError(f"Definition file not found: {path}", path)
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise DataLoadError(
            f"Invalid JSON in {path} at line {exc.lineno}, column {exc.colno}: {exc.msg}",
            path,
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Unable to read definition file {path}: {exc}", path) from exc
