"""Visibility resolution (core domain)."""

from __future__ import annotations

from guildarc.core.models import DEFAULT_PROFILE_ID, DirectorySnapshot, Resolution
from guildarc.core.store import ProfileStore


def resolve(store: ProfileStore, snapshot: DirectorySnapshot) -> Resolution:
    """Return the visible server and folder ids for the active profile.

    Resolution logic:
    - The default profile shows every server and every folder, whatever its
      own member lists contain.
    - Otherwise only assigned folders are visible, and every server listed by
      a visible folder is visible alongside the directly assigned servers.
    - Folder and server visibility are returned as independent sets; how a
      visible server inside a hidden folder is drawn is up to the renderer.

    Nothing is cached: callers re-resolve after a switch, a membership change
    or a new snapshot.
    """

    if store.active_profile_id == DEFAULT_PROFILE_ID:
        return Resolution(
            visible_servers=frozenset(snapshot.server_ids()),
            visible_folders=frozenset(snapshot.folder_ids()),
        )

    profile = store.active_profile
    visible_folders = set(profile.folders)
    visible_servers = set(profile.servers)
    for folder in snapshot.folders:
        if folder.folder_id and folder.folder_id in visible_folders:
            visible_servers.update(folder.guild_ids)

    return Resolution(
        visible_servers=frozenset(visible_servers),
        visible_folders=frozenset(visible_folders),
    )
