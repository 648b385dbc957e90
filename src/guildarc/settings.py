"""Static configuration for guildarc.

All user-editable settings (file locations, key chords, logging) live in a
single JSON file for quick edits without touching Python. The file is
optional; every key has a default.

Example ``config.json``::

    {
      "state_path": "profiles.json",
      "directory_path": "directory.json",
      "shortcuts": {"next_profile": "right_square_bracket", "prev_profile": "left_square_bracket"},
      "logging": {"enabled": true, "level": "INFO", "file": {"enabled": true, "path": "logs/guildarc.log"}}
    }
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from dotenv import load_dotenv

from guildarc.core.config import DEFAULT_JUMP_KEYS, ShortcutConfig

CONFIG_ENV = "GUILDARC_CONFIG"
DEFAULT_CONFIG_NAME = "config.json"
DEFAULT_STATE_NAME = "profiles.json"
DEFAULT_DIRECTORY_NAME = "directory.json"
MAX_JUMP_KEYS = 9


class ConfigError(Exception):
    """Raised when config.json exists but cannot be used."""


@dataclass(frozen=True)
class Settings:
    """Resolved settings with absolute paths."""

    config_path: Path
    state_path: Path
    directory_path: Path
    shortcuts: ShortcutConfig = field(default_factory=ShortcutConfig)
    logging: dict[str, Any] = field(default_factory=dict)

    @property
    def base_dir(self) -> Path:
        return self.config_path.parent


def default_config_path() -> Path:
    """Return the config path, honouring GUILDARC_CONFIG from the env or .env."""

    load_dotenv()
    override = os.getenv(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return Path.cwd() / DEFAULT_CONFIG_NAME


def _load_json_config(path: Path) -> dict[str, Any]:
    """Load config.json, treating a missing file as an empty config."""

    if not path.exists():
        return {}
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path} is not valid JSON: {exc.msg}") from exc
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path} root must be an object")
    return loaded


def _resolve_path(base_dir: Path, value: Any, default: str) -> Path:
    raw = str(value) if value else default
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def _parse_shortcuts(raw: Any) -> ShortcutConfig:
    if not isinstance(raw, dict):
        return ShortcutConfig()
    defaults = ShortcutConfig()
    jump_keys = raw.get("jump_keys", DEFAULT_JUMP_KEYS)
    if not isinstance(jump_keys, (list, tuple)):
        raise ConfigError("shortcuts.jump_keys must be a list of keys")
    return ShortcutConfig(
        next_profile=str(raw.get("next_profile") or defaults.next_profile),
        prev_profile=str(raw.get("prev_profile") or defaults.prev_profile),
        # Only nine profiles are reachable by number.
        jump_keys=tuple(str(key) for key in jump_keys)[:MAX_JUMP_KEYS],
    )


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from ``path`` (or the default location)."""

    config_path = Path(path).expanduser() if path else default_config_path()
    config_path = config_path.resolve()
    raw = _load_json_config(config_path)
    base_dir = config_path.parent

    logging_cfg = raw.get("logging", {})
    if not isinstance(logging_cfg, dict):
        raise ConfigError("logging must be an object")

    return Settings(
        config_path=config_path,
        state_path=_resolve_path(base_dir, raw.get("state_path"), DEFAULT_STATE_NAME),
        directory_path=_resolve_path(base_dir, raw.get("directory_path"), DEFAULT_DIRECTORY_NAME),
        shortcuts=_parse_shortcuts(raw.get("shortcuts")),
        logging=logging_cfg,
    )
