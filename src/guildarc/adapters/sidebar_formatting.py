"""Shared sidebar formatting helpers.

Keeping formatting here prevents drift between the CLI and the TUI and keeps
labels consistent regardless of where a resolution is drawn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from guildarc.core.models import DirectorySnapshot, Profile, ProfileSummary, Resolution

FOLDER_GLYPH = "▸"
SERVER_GLYPH = "•"


@dataclass(frozen=True)
class SidebarRow:
    """One visible line of the rendered sidebar."""

    kind: str
    item_id: str
    label: str
    depth: int = 0


def format_profile_label(profile: Union[Profile, ProfileSummary], mark_default: bool = True) -> str:
    """Return ``"<emoji> <name>"``, tagging the default profile when asked."""

    label = f"{profile.emoji} {profile.name}"
    if mark_default and profile.is_default:
        label += " (Default)"
    return label


def format_switch_message(profile: Profile) -> str:
    return f"Switched to: {profile.name}"


def build_sidebar_rows(resolution: Resolution, snapshot: DirectorySnapshot) -> List[SidebarRow]:
    """Flatten a resolution into sidebar rows in directory order.

    A visible folder is drawn with its members nested under it. A server
    that is visible in its own right while its folder is hidden is drawn at
    the top level in the folder's place rather than being dropped.
    """

    rows: List[SidebarRow] = []
    placed: set[str] = set()

    def _server_row(server_id: str, depth: int) -> None:
        if server_id in placed or not resolution.is_server_visible(server_id):
            return
        placed.add(server_id)
        rows.append(SidebarRow("server", server_id, snapshot.server_name(server_id), depth))

    for folder in snapshot.folders:
        if folder.folder_id and resolution.is_folder_visible(folder.folder_id):
            rows.append(SidebarRow("folder", folder.folder_id, folder.label, 0))
            for server_id in folder.guild_ids:
                _server_row(server_id, 1)
        else:
            for server_id in folder.guild_ids:
                _server_row(server_id, 0)

    # Servers the host did not place in any folder entry come last.
    for server_id in snapshot.servers:
        _server_row(server_id, 0)

    return rows


def format_sidebar_row(row: SidebarRow) -> str:
    glyph = FOLDER_GLYPH if row.kind == "folder" else SERVER_GLYPH
    return f"{'  ' * row.depth}{glyph} {row.label}"


def format_sidebar(
    resolution: Resolution,
    snapshot: DirectorySnapshot,
    header: Optional[str] = None,
) -> str:
    """Render the sidebar as plain text lines."""

    lines = [header] if header else []
    rows = build_sidebar_rows(resolution, snapshot)
    if not rows:
        lines.append("(nothing visible)")
    lines.extend(format_sidebar_row(row) for row in rows)
    return "\n".join(lines)
