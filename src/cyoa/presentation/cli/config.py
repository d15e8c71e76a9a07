"""Per-user display settings for the terminal front end."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, replace
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


@dataclass(frozen=True, slots=True)
class CliConfig:
    color: bool = True
    clear_screen: bool = True

    @classmethod
    def from_dict(cls, raw: object) -> "CliConfig":
        """Build a config, keeping defaults for missing or non-boolean values."""
        if not isinstance(raw, dict):
            return cls()
        defaults = asdict(cls())
        values = {
            key: raw[key] if isinstance(raw.get(key), bool) else default
            for key, default in defaults.items()
        }
        return cls(**values)

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)


def get_user_data_dir() -> Path:
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        return (Path(appdata) if appdata else Path.home()) / "Cyoa"
    return Path.home() / ".config" / "cyoa"


def get_default_config_path() -> Path:
    return get_user_data_dir() / CONFIG_FILENAME


def load_config(path: Path | None = None) -> CliConfig:
    """Read the config file; unreadable files yield defaults. NO_COLOR wins over the file."""
    config_path = path or get_default_config_path()
    raw: object = None
    if config_path.exists():
        try:
            raw = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
    config = CliConfig.from_dict(raw)
    if os.environ.get("NO_COLOR"):
        config = replace(config, color=False)
    return config


def save_config(config: CliConfig, path: Path | None = None) -> Path:
    """Write ``config`` as JSON and return the path written."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config.to_dict(), indent=2, sort_keys=True), encoding="utf-8")
    return config_path
