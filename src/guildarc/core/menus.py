"""Toggle-state queries for server and folder menus (core domain).

A menu lists every user profile with a check mark telling whether the item
belongs to it. The default profile never appears because it always shows
everything.
"""

from __future__ import annotations

from typing import List

from guildarc.core.models import UNNAMED_PROFILE, DirectorySnapshot, MenuToggle
from guildarc.core.store import ProfileStore


def server_toggles(store: ProfileStore, server_id: str, snapshot: DirectorySnapshot) -> List[MenuToggle]:
    """Return one toggle per user profile for a server.

    ``inherited`` marks servers that are only visible through an assigned
    folder, so a menu can show them checked while toggling still adds a
    direct assignment.
    """

    toggles: List[MenuToggle] = []
    for profile in store.profiles.values():
        if profile.is_default:
            continue
        direct = profile.has_server(server_id)
        assigned = store.is_server_assigned(profile.id, server_id, snapshot)
        toggles.append(
            MenuToggle(
                profile_id=profile.id,
                label=profile.name or UNNAMED_PROFILE,
                checked=assigned,
                inherited=assigned and not direct,
            )
        )
    return toggles


def folder_toggles(store: ProfileStore, folder_id: str) -> List[MenuToggle]:
    """Return one toggle per user profile for a folder."""

    return [
        MenuToggle(
            profile_id=profile.id,
            label=profile.name or UNNAMED_PROFILE,
            checked=profile.has_folder(folder_id),
        )
        for profile in store.profiles.values()
        if not profile.is_default
    ]


def toggle_server(store: ProfileStore, profile_id: str, server_id: str) -> bool:
    """Flip the direct assignment of a server and return the new state."""

    if store.get(profile_id).has_server(server_id):
        store.remove_server(profile_id, server_id)
        return False
    store.add_server(profile_id, server_id)
    return True


def toggle_folder(store: ProfileStore, profile_id: str, folder_id: str) -> bool:
    """Flip the assignment of a folder and return the new state."""

    if store.is_folder_assigned(profile_id, folder_id):
        store.remove_folder(profile_id, folder_id)
        return False
    store.add_folder(profile_id, folder_id)
    return True
