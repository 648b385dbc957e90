from __future__ import annotations

import pytest

from guildarc.core.errors import InvalidArgumentError
from guildarc.core.models import DEFAULT_PROFILE_ID
from guildarc.core.schema import dump_state, load_state, normalize_name, validate_emoji
from guildarc.core.store import ProfileStore


def test_empty_state_yields_defaults() -> None:
    loaded = load_state(None)
    assert list(loaded.profiles) == [DEFAULT_PROFILE_ID]
    assert loaded.active_profile_id == DEFAULT_PROFILE_ID
    assert loaded.profiles[DEFAULT_PROFILE_ID].name == "All Servers"


def test_missing_default_is_synthesized_last() -> None:
    loaded = load_state(
        {
            "activeProfile": "profile_1",
            "profiles": {"profile_1": {"name": "Work", "servers": ["1", "1", 2], "folders": []}},
        }
    )
    assert list(loaded.profiles) == ["profile_1", DEFAULT_PROFILE_ID]
    assert loaded.active_profile_id == "profile_1"
    work = loaded.profiles["profile_1"]
    assert work.emoji == "📁"
    assert work.servers == ("1", "2")
    assert loaded.profiles[DEFAULT_PROFILE_ID].emoji == "🌐"


def test_missing_emoji_and_name_are_filled() -> None:
    loaded = load_state(
        {
            "activeProfileId": "all",
            "profiles": {
                "all": {"name": "All Servers", "servers": [], "folders": []},
                "p": {"servers": [], "folders": []},
                "broken": "not-an-object",
            },
        }
    )
    assert loaded.profiles["all"].emoji == "🌐"
    assert loaded.profiles["all"].is_default
    assert loaded.profiles["p"].emoji == "📁"
    assert loaded.profiles["p"].name == "Unnamed Profile"
    assert "broken" not in loaded.profiles


def test_is_default_only_on_reserved_id() -> None:
    loaded = load_state({"profiles": {"p": {"name": "P", "isDefault": True}}})
    assert not loaded.profiles["p"].is_default
    assert loaded.profiles[DEFAULT_PROFILE_ID].is_default


def test_unknown_active_falls_back_to_default() -> None:
    loaded = load_state({"activeProfileId": "ghost", "profiles": {"all": {"name": "All"}}})
    assert loaded.active_profile_id == DEFAULT_PROFILE_ID


def test_dump_matches_persisted_shape() -> None:
    store = ProfileStore(clock=lambda: 1.0)
    work = store.create("Work", emoji="💼")
    store.add_server(work, "S1")
    store.add_folder(work, "F1")
    store.set_active(work)

    state = dump_state(store.profiles, store.active_profile_id)
    assert state == {
        "activeProfileId": work,
        "profiles": {
            "all": {"name": "All Servers", "emoji": "🌐", "servers": [], "folders": [], "isDefault": True},
            work: {"name": "Work", "emoji": "💼", "servers": ["S1"], "folders": ["F1"]},
        },
    }
    reloaded = ProfileStore.from_state(state)
    assert reloaded.active_profile_id == work
    assert reloaded.get(work) == store.get(work)


def test_name_and_emoji_validation() -> None:
    assert normalize_name("  Work ") == "Work"
    with pytest.raises(InvalidArgumentError):
        normalize_name(" ")
    with pytest.raises(InvalidArgumentError):
        normalize_name(None)
    assert validate_emoji(" 🎮 ") == " 🎮 "
    with pytest.raises(InvalidArgumentError):
        validate_emoji("")
