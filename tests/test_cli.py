from __future__ import annotations

import json

import pytest

from guildarc.app import main


@pytest.fixture
def config_path(tmp_path):
    (tmp_path / "directory.json").write_text(
        json.dumps(
            {
                "servers": [{"id": "1", "name": "Gaming"}, {"id": "2", "name": "Office"}],
                "folders": [{"folderId": "work", "folderName": "Work", "guildIds": ["2"]}],
            }
        ),
        encoding="utf-8",
    )
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"state_path": "profiles.json"}), encoding="utf-8")
    return path


def _run(config_path, *argv: str) -> int:
    return main(["--config", str(config_path), *argv])


def _state(config_path) -> dict:
    return json.loads((config_path.parent / "profiles.json").read_text(encoding="utf-8"))


def test_create_assign_switch_show(config_path, capsys) -> None:
    assert _run(config_path, "create", "Work", "--emoji", "💼") == 0
    profile_id = capsys.readouterr().out.strip()
    assert profile_id.startswith("profile_")

    assert _run(config_path, "assign", profile_id, "--folder", "work") == 0
    assert _run(config_path, "switch", "2") == 0
    assert capsys.readouterr().out.strip() == "Switched to: Work"

    assert _run(config_path, "show") == 0
    assert capsys.readouterr().out.splitlines() == ["💼 Work", "▸ Work", "  • Office"]

    state = _state(config_path)
    assert state["activeProfileId"] == profile_id
    assert state["profiles"][profile_id]["folders"] == ["work"]


def test_list_shows_profiles(config_path, capsys) -> None:
    assert _run(config_path, "list") == 0
    out = capsys.readouterr().out
    assert "All Servers (Default)" in out


def test_switch_cycles(config_path, capsys) -> None:
    _run(config_path, "create", "Work")
    capsys.readouterr()
    assert _run(config_path, "switch", "next") == 0
    assert _run(config_path, "switch", "next") == 0
    assert capsys.readouterr().out.splitlines() == ["Switched to: Work", "Switched to: All Servers"]


def test_deleting_default_fails(config_path, capsys) -> None:
    assert _run(config_path, "delete", "all") == 1
    assert "error:" in capsys.readouterr().err


def test_rename_blank_name_fails(config_path, capsys) -> None:
    _run(config_path, "create", "Work")
    profile_id = capsys.readouterr().out.strip()
    assert _run(config_path, "rename", profile_id, "   ") == 1
    assert "Profile name cannot be empty" in capsys.readouterr().err
    assert _state(config_path)["profiles"][profile_id]["name"] == "Work"


def test_unassign_server(config_path, capsys) -> None:
    _run(config_path, "create", "Work")
    profile_id = capsys.readouterr().out.strip()
    _run(config_path, "assign", profile_id, "--server", "1")
    assert _state(config_path)["profiles"][profile_id]["servers"] == ["1"]
    assert _run(config_path, "unassign", profile_id, "--server", "1") == 0
    assert _state(config_path)["profiles"][profile_id]["servers"] == []


def test_bad_config_is_reported(tmp_path, capsys) -> None:
    path = tmp_path / "config.json"
    path.write_text("[]", encoding="utf-8")
    assert main(["--config", str(path), "list"]) == 1
    assert "config error" in capsys.readouterr().err


def test_tui_saves_state_even_when_the_app_crashes(config_path, monkeypatch) -> None:
    from guildarc.frontend.app import ArcPanelApp

    def _crash(self) -> None:
        raise RuntimeError("terminal went away")

    monkeypatch.setattr(ArcPanelApp, "run", _crash)
    monkeypatch.setattr("guildarc.app._print_banner", lambda: None)

    with pytest.raises(RuntimeError):
        _run(config_path, "tui")
    assert _state(config_path)["activeProfileId"] == "all"
