"""Profile session: composition root for the store and its collaborators.

This module is host-agnostic. It only relies on ports for persistence and
directory access, enabling other frontends or adapters without changes here.

Lifecycle: load-or-default on construction, commands mutate the store (each
followed by a save through the persistence port), ``close`` writes a final
save. All entry points are serialized through one re-entrant lock so a read
always observes a fully applied prior write.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, List, Optional

from guildarc.core import menus
from guildarc.core.errors import PersistenceError
from guildarc.core.models import DirectorySnapshot, MenuToggle, Profile, ProfileSummary, Resolution
from guildarc.core.navigator import next_profile_id, prev_profile_id, profile_id_by_index
from guildarc.core.ports import DirectoryPort, PersistencePort, read_snapshot
from guildarc.core.resolver import resolve
from guildarc.core.store import Listener, ProfileStore, StoreChange

LOGGER = logging.getLogger(__name__)


class ProfileSession:
    """Owns one ProfileStore and wires it to persistence and the directory."""

    def __init__(
        self,
        persistence: PersistencePort,
        directory: DirectoryPort,
        on_persist_error: Optional[Callable[[PersistenceError], None]] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._lock = threading.RLock()
        self._persistence = persistence
        self._directory = directory
        self._on_persist_error = on_persist_error
        self._listeners: List[Listener] = []
        self._store = ProfileStore.from_state(persistence.load(), on_persist=self._persist, clock=clock)
        self._store.subscribe(self._forward)
        self._snapshot = read_snapshot(self._directory)
        LOGGER.info(
            "Loaded %s profiles (active: %s)",
            len(self._store),
            self._store.active_profile_id,
        )

    # ------------------------------------------------------------------ queries

    @property
    def store(self) -> ProfileStore:
        return self._store

    @property
    def snapshot(self) -> DirectorySnapshot:
        with self._lock:
            return self._snapshot

    @property
    def active_profile_id(self) -> str:
        with self._lock:
            return self._store.active_profile_id

    @property
    def active_profile(self) -> Profile:
        with self._lock:
            return self._store.active_profile

    def get_profile(self, profile_id: str) -> Profile:
        with self._lock:
            return self._store.get(profile_id)

    def profile_ids(self) -> List[str]:
        with self._lock:
            return self._store.profile_ids()

    def summaries(self) -> List[ProfileSummary]:
        with self._lock:
            return self._store.summaries()

    def resolution(self) -> Resolution:
        """Resolve visibility for the active profile against the current snapshot."""

        with self._lock:
            return resolve(self._store, self._snapshot)

    def is_server_assigned(self, profile_id: str, server_id: str) -> bool:
        with self._lock:
            return self._store.is_server_assigned(profile_id, server_id, self._snapshot)

    def is_folder_assigned(self, profile_id: str, folder_id: str) -> bool:
        with self._lock:
            return self._store.is_folder_assigned(profile_id, folder_id)

    def server_toggles(self, server_id: str) -> List[MenuToggle]:
        with self._lock:
            return menus.server_toggles(self._store, server_id, self._snapshot)

    def folder_toggles(self, folder_id: str) -> List[MenuToggle]:
        with self._lock:
            return menus.folder_toggles(self._store, folder_id)

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
        with self._lock:
            profile_id = self._store.create(name, emoji)
        LOGGER.info("Created profile %s", profile_id)
        return profile_id

    def rename(self, profile_id: str, new_name: str) -> None:
        with self._lock:
            self._store.rename(profile_id, new_name)

    def set_emoji(self, profile_id: str, emoji: str) -> None:
        with self._lock:
            self._store.set_emoji(profile_id, emoji)

    def delete(self, profile_id: str) -> None:
        with self._lock:
            self._store.delete(profile_id)
        LOGGER.info("Deleted profile %s", profile_id)

    def add_server(self, profile_id: str, server_id: str) -> None:
        with self._lock:
            self._store.add_server(profile_id, server_id)

    def remove_server(self, profile_id: str, server_id: str) -> None:
        with self._lock:
            self._store.remove_server(profile_id, server_id)

    def add_folder(self, profile_id: str, folder_id: str) -> None:
        with self._lock:
            self._store.add_folder(profile_id, folder_id)

    def remove_folder(self, profile_id: str, folder_id: str) -> None:
        with self._lock:
            self._store.remove_folder(profile_id, folder_id)

    def toggle_server(self, profile_id: str, server_id: str) -> bool:
        with self._lock:
            return menus.toggle_server(self._store, profile_id, server_id)

    def toggle_folder(self, profile_id: str, folder_id: str) -> bool:
        with self._lock:
            return menus.toggle_folder(self._store, profile_id, folder_id)

    def switch(self, profile_id: str) -> Profile:
        """Make ``profile_id`` active and return its record."""

        with self._lock:
            self._store.set_active(profile_id)
            profile = self._store.active_profile
        LOGGER.info("Switched to profile %s (%s)", profile.id, profile.name)
        return profile

    def switch_next(self) -> Profile:
        with self._lock:
            target = next_profile_id(self._store.profile_ids(), self._store.active_profile_id)
            return self.switch(target)

    def switch_prev(self) -> Profile:
        with self._lock:
            target = prev_profile_id(self._store.profile_ids(), self._store.active_profile_id)
            return self.switch(target)

    def switch_to_number(self, number: int) -> Profile:
        """Switch to the profile at a 1-based position.

        Raises ProfileNotFoundError when the position is past the end; key
        handlers treat that as a no-op.
        """

        with self._lock:
            target = profile_id_by_index(self._store.profile_ids(), number)
            return self.switch(target)

    def refresh_directory(self) -> Resolution:
        """Re-read the directory and re-resolve visibility from scratch."""

        with self._lock:
            self._snapshot = read_snapshot(self._directory)
            resolution = resolve(self._store, self._snapshot)
            active_id = self._store.active_profile_id
        self._forward(StoreChange(kind="directory", profile_id=active_id, affects_visibility=True))
        return resolution

    def close(self) -> None:
        """Write a final save before the session is discarded."""

        with self._lock:
            self._persist(self._store.to_dict())
        LOGGER.info("Profile session closed")

    # ------------------------------------------------------------------ helpers

    def _persist(self, state: dict) -> None:
        try:
            self._persistence.save(state)
        except PersistenceError as exc:
            LOGGER.error("Failed to save profiles: %s", exc)
            if self._on_persist_error is not None:
                self._on_persist_error(exc)

    def _forward(self, change: StoreChange) -> None:
        for listener in list(self._listeners):
            listener(change)
