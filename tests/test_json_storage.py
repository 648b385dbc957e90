from __future__ import annotations

import json

import pytest

from guildarc.adapters.json_storage import JsonStateStorage
from guildarc.core.errors import PersistenceError
from guildarc.core.store import ProfileStore


def test_missing_file_loads_as_none(tmp_path) -> None:
    storage = JsonStateStorage(tmp_path / "profiles.json")
    assert storage.load() is None


def test_save_then_load_restores_store(tmp_path) -> None:
    storage = JsonStateStorage(tmp_path / "nested" / "profiles.json")
    store = ProfileStore(on_persist=storage.save, clock=lambda: 1.0)
    work = store.create("Work", emoji="💼")
    store.add_folder(work, "F1")
    store.set_active(work)

    reloaded = ProfileStore.from_state(storage.load())
    assert reloaded.active_profile_id == work
    assert reloaded.get(work).folders == ("F1",)
    assert reloaded.get(work).emoji == "💼"
    assert not (tmp_path / "nested" / "profiles.json.tmp").exists()


def test_saved_file_is_readable_json(tmp_path) -> None:
    path = tmp_path / "profiles.json"
    JsonStateStorage(path).save({"activeProfileId": "all", "profiles": {"all": {"name": "🌐"}}})
    raw = path.read_text(encoding="utf-8")
    assert "🌐" in raw
    assert json.loads(raw)["activeProfileId"] == "all"


def test_invalid_json_raises(tmp_path) -> None:
    path = tmp_path / "profiles.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(PersistenceError):
        JsonStateStorage(path).load()


def test_non_object_root_raises(tmp_path) -> None:
    path = tmp_path / "profiles.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(PersistenceError, match="root must be an object"):
        JsonStateStorage(path).load()


def test_unwritable_target_raises(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    storage = JsonStateStorage(blocker / "profiles.json")
    with pytest.raises(PersistenceError):
        storage.save({"activeProfileId": "all", "profiles": {}})
