from __future__ import annotations

from guildarc.adapters.sidebar_formatting import (
    SidebarRow,
    build_sidebar_rows,
    format_profile_label,
    format_sidebar,
    format_switch_message,
)
from guildarc.core.models import DirectorySnapshot, Folder, Resolution, Server, default_profile
from guildarc.core.store import ProfileStore


def _snapshot() -> DirectorySnapshot:
    return DirectorySnapshot.build(
        servers=[Server("S1", "Gaming"), Server("S2", "Raid"), Server("S3", "Solo"), Server("S4", "Loose")],
        folders=[Folder("F1", "Games", ("S1", "S2")), Folder(None, None, ("S3",))],
    )


def _resolution(servers, folders) -> Resolution:
    return Resolution(visible_servers=frozenset(servers), visible_folders=frozenset(folders))


def test_profile_labels() -> None:
    assert format_profile_label(default_profile()) == "🌐 All Servers (Default)"
    assert format_profile_label(default_profile(), mark_default=False) == "🌐 All Servers"

    store = ProfileStore()
    work = store.get(store.create("Work", emoji="💼"))
    assert format_profile_label(work) == "💼 Work"
    assert format_switch_message(work) == "Switched to: Work"


def test_visible_folder_nests_members() -> None:
    rows = build_sidebar_rows(_resolution({"S1", "S2"}, {"F1"}), _snapshot())
    assert rows == [
        SidebarRow("folder", "F1", "Games", 0),
        SidebarRow("server", "S1", "Gaming", 1),
        SidebarRow("server", "S2", "Raid", 1),
    ]


def test_server_of_hidden_folder_is_drawn_at_top_level() -> None:
    rows = build_sidebar_rows(_resolution({"S2", "S4"}, set()), _snapshot())
    assert [(row.item_id, row.depth) for row in rows] == [("S2", 0), ("S4", 0)]


def test_format_sidebar_text() -> None:
    text = format_sidebar(_resolution({"S1", "S3"}, {"F1"}), _snapshot(), header="💼 Work")
    assert text.splitlines() == ["💼 Work", "▸ Games", "  • Gaming", "• Solo"]


def test_empty_sidebar_says_so() -> None:
    assert format_sidebar(_resolution(set(), set()), _snapshot()) == "(nothing visible)"
