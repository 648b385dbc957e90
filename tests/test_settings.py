from __future__ import annotations

import json

import pytest

from guildarc.core.config import DEFAULT_JUMP_KEYS
from guildarc.settings import ConfigError, load_settings


def test_missing_config_uses_defaults(tmp_path) -> None:
    settings = load_settings(tmp_path / "config.json")
    assert settings.state_path == (tmp_path / "profiles.json").resolve()
    assert settings.directory_path == (tmp_path / "directory.json").resolve()
    assert settings.shortcuts.next_profile == "right_square_bracket"
    assert settings.shortcuts.jump_keys == DEFAULT_JUMP_KEYS
    assert settings.logging == {}


def test_paths_resolve_relative_to_config(tmp_path) -> None:
    config = tmp_path / "conf" / "config.json"
    config.parent.mkdir()
    config.write_text(
        json.dumps({"state_path": "data/state.json", "directory_path": str(tmp_path / "dir.json")}),
        encoding="utf-8",
    )
    settings = load_settings(config)
    assert settings.state_path == config.parent.resolve() / "data" / "state.json"
    assert settings.directory_path == tmp_path / "dir.json"


def test_shortcuts_are_parsed_and_capped(tmp_path) -> None:
    config = tmp_path / "config.json"
    config.write_text(
        json.dumps({"shortcuts": {"next_profile": "ctrl+n", "jump_keys": [str(i) for i in range(12)]}}),
        encoding="utf-8",
    )
    shortcuts = load_settings(config).shortcuts
    assert shortcuts.next_profile == "ctrl+n"
    assert shortcuts.prev_profile == "left_square_bracket"
    assert len(shortcuts.jump_keys) == 9


def test_env_variable_selects_config(tmp_path, monkeypatch) -> None:
    config = tmp_path / "custom.json"
    config.write_text(json.dumps({"state_path": "custom-state.json"}), encoding="utf-8")
    monkeypatch.setenv("GUILDARC_CONFIG", str(config))
    settings = load_settings()
    assert settings.config_path == config.resolve()
    assert settings.state_path.name == "custom-state.json"


@pytest.mark.parametrize(
    "payload",
    ["{broken", "[]", json.dumps({"logging": "loud"}), json.dumps({"shortcuts": {"jump_keys": "123"}})],
)
def test_bad_config_raises(tmp_path, payload) -> None:
    config = tmp_path / "config.json"
    config.write_text(payload, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(config)
