"""Profile store (core domain).

The store is the single owner of profile records and the active pointer.
Every mutator validates its input before touching state, so a failed call
leaves the store exactly as it was. Successful mutations hand the full
serialized state to the persistence hook and then notify subscribers.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from guildarc.core.errors import CannotDeleteError, InvalidArgumentError, ProfileNotFoundError
from guildarc.core.models import (
    DEFAULT_PROFILE_ID,
    PROFILE_EMOJI,
    DirectorySnapshot,
    Profile,
    ProfileSummary,
    default_profile,
)
from guildarc.core.schema import dump_state, load_state, normalize_name, validate_emoji

PersistHook = Callable[[Dict[str, Any]], None]


@dataclass(frozen=True)
class StoreChange:
    """Notification emitted after a successful mutation.

    ``affects_visibility`` is set when the resolution for the active profile
    may have changed and the presentation layer should re-resolve.
    """

    kind: str
    profile_id: str
    affects_visibility: bool


Listener = Callable[[StoreChange], None]


def _normalized(profile_id: str, profile: Profile) -> Profile:
    if profile_id == DEFAULT_PROFILE_ID:
        # The default profile is a universal filter and carries no members.
        return replace(profile, servers=(), folders=(), is_default=True)
    if profile.is_default:
        return replace(profile, is_default=False)
    return profile


class ProfileStore:
    """Holds profiles and the active pointer while preserving invariants."""

    def __init__(
        self,
        profiles: Optional[Mapping[str, Profile]] = None,
        active_profile_id: str = DEFAULT_PROFILE_ID,
        on_persist: Optional[PersistHook] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._profiles: Dict[str, Profile] = {
            profile_id: _normalized(profile_id, profile) for profile_id, profile in (profiles or {}).items()
        }
        if DEFAULT_PROFILE_ID not in self._profiles:
            self._profiles[DEFAULT_PROFILE_ID] = default_profile()
        if active_profile_id not in self._profiles:
            active_profile_id = DEFAULT_PROFILE_ID
        self._active_profile_id = active_profile_id
        self._on_persist = on_persist
        self._clock = clock
        self._listeners: List[Listener] = []

    @classmethod
    def from_state(
        cls,
        raw: Optional[Mapping[str, Any]],
        on_persist: Optional[PersistHook] = None,
        clock: Callable[[], float] = time.time,
    ) -> "ProfileStore":
        """Build a store from a persisted document, applying migrations."""

        loaded = load_state(raw)
        return cls(
            profiles=loaded.profiles,
            active_profile_id=loaded.active_profile_id,
            on_persist=on_persist,
            clock=clock,
        )

    # ------------------------------------------------------------------ queries

    @property
    def profiles(self) -> Mapping[str, Profile]:
        return MappingProxyType(self._profiles)

    @property
    def active_profile_id(self) -> str:
        return self._active_profile_id

    @property
    def active_profile(self) -> Profile:
        return self._profiles[self._active_profile_id]

    def profile_ids(self) -> List[str]:
        """Return profile ids in navigation order."""

        return list(self._profiles)

    def get(self, profile_id: str) -> Profile:
        return self._require(profile_id)

    def __contains__(self, profile_id: object) -> bool:
        return profile_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def summaries(self) -> List[ProfileSummary]:
        return [
            ProfileSummary(
                profile_id=profile.id,
                name=profile.name,
                emoji=profile.emoji,
                is_default=profile.is_default,
                is_active=profile.id == self._active_profile_id,
                index=index,
            )
            for index, profile in enumerate(self._profiles.values(), start=1)
        ]

    def is_server_assigned(self, profile_id: str, server_id: str, snapshot: DirectorySnapshot) -> bool:
        """Return True if the server is assigned directly or through a folder."""

        profile = self._profiles.get(profile_id)
        if profile is None:
            return False
        if profile.has_server(server_id):
            return True
        return any(profile.has_folder(folder.folder_id) for folder in snapshot.folders_containing(server_id))

    def is_folder_assigned(self, profile_id: str, folder_id: str) -> bool:
        profile = self._profiles.get(profile_id)
        return bool(profile and profile.has_folder(folder_id))

    def to_dict(self) -> Dict[str, Any]:
        return dump_state(self._profiles, self._active_profile_id)

    # -------------------------------------------------------------- subscribers

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener and return a callable that removes it."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ----------------------------------------------------------------- commands

    def create(self, name: str, emoji: Optional[str] = None) -> str:
        """Create an empty profile and return its id."""

        trimmed = normalize_name(name)
        glyph = PROFILE_EMOJI if emoji is None else validate_emoji(emoji)
        profile_id = self._new_profile_id()
        self._profiles[profile_id] = Profile(id=profile_id, name=trimmed, emoji=glyph)
        self._commit("created", profile_id, affects_visibility=False)
        return profile_id

    def rename(self, profile_id: str, new_name: str) -> None:
        profile = self._require(profile_id)
        trimmed = normalize_name(new_name)
        self._profiles[profile_id] = replace(profile, name=trimmed)
        self._commit("renamed", profile_id, affects_visibility=False)

    def set_emoji(self, profile_id: str, emoji: str) -> None:
        profile = self._require(profile_id)
        glyph = validate_emoji(emoji)
        self._profiles[profile_id] = replace(profile, emoji=glyph)
        self._commit("emoji", profile_id, affects_visibility=False)

    def delete(self, profile_id: str) -> None:
        """Remove a user profile; the active pointer falls back to the default."""

        if profile_id == DEFAULT_PROFILE_ID:
            raise CannotDeleteError("The default profile cannot be deleted")
        if profile_id not in self._profiles:
            raise CannotDeleteError(f"Profile not found: {profile_id}")

        del self._profiles[profile_id]
        was_active = self._active_profile_id == profile_id
        if was_active:
            self._active_profile_id = DEFAULT_PROFILE_ID
        self._commit("deleted", profile_id, affects_visibility=was_active)

    def add_server(self, profile_id: str, server_id: str) -> None:
        profile = self._require_member_target(profile_id)
        if profile.has_server(server_id):
            return
        self._profiles[profile_id] = replace(profile, servers=profile.servers + (server_id,))
        self._commit("server_added", profile_id, affects_visibility=self._is_active(profile_id))

    def remove_server(self, profile_id: str, server_id: str) -> None:
        profile = self._require(profile_id)
        if not profile.has_server(server_id):
            return
        servers = tuple(item for item in profile.servers if item != server_id)
        self._profiles[profile_id] = replace(profile, servers=servers)
        self._commit("server_removed", profile_id, affects_visibility=self._is_active(profile_id))

    def add_folder(self, profile_id: str, folder_id: str) -> None:
        profile = self._require_member_target(profile_id)
        if profile.has_folder(folder_id):
            return
        self._profiles[profile_id] = replace(profile, folders=profile.folders + (folder_id,))
        self._commit("folder_added", profile_id, affects_visibility=self._is_active(profile_id))

    def remove_folder(self, profile_id: str, folder_id: str) -> None:
        profile = self._require(profile_id)
        if not profile.has_folder(folder_id):
            return
        folders = tuple(item for item in profile.folders if item != folder_id)
        self._profiles[profile_id] = replace(profile, folders=folders)
        self._commit("folder_removed", profile_id, affects_visibility=self._is_active(profile_id))

    def set_active(self, profile_id: str) -> None:
        self._require(profile_id)
        self._active_profile_id = profile_id
        self._commit("activated", profile_id, affects_visibility=True)

    # ------------------------------------------------------------------ helpers

    def _require(self, profile_id: str) -> Profile:
        profile = self._profiles.get(profile_id)
        if profile is None:
            raise ProfileNotFoundError(f"Profile not found: {profile_id}")
        return profile

    def _require_member_target(self, profile_id: str) -> Profile:
        profile = self._require(profile_id)
        if profile.is_default:
            raise InvalidArgumentError("The default profile always shows every server and folder")
        return profile

    def _is_active(self, profile_id: str) -> bool:
        return profile_id == self._active_profile_id

    def _new_profile_id(self) -> str:
        stamp = int(self._clock() * 1000)
        while f"profile_{stamp}" in self._profiles:
            stamp += 1
        return f"profile_{stamp}"

    def _commit(self, kind: str, profile_id: str, affects_visibility: bool) -> None:
        if self._on_persist is not None:
            self._on_persist(self.to_dict())
        change = StoreChange(kind=kind, profile_id=profile_id, affects_visibility=affects_visibility)
        for listener in list(self._listeners):
            listener(change)
