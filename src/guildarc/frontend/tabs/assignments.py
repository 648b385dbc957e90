"""Assignments tab: folder and server checklist for the selected profile."""

from __future__ import annotations

from typing import Any, Optional

from textual.containers import Container, Vertical
from textual.widgets import DataTable, Static

from guildarc.adapters.sidebar_formatting import format_profile_label
from guildarc.core.models import MenuToggle

FOLDER_KIND = "folder"
SERVER_KIND = "server"


def toggle_mark(toggle: Optional[MenuToggle]) -> str:
    """Return the check box for a menu toggle; ``[~]`` means via a folder."""

    if toggle is None or not toggle.checked:
        return "[ ]"
    return "[~]" if toggle.inherited else "[x]"


def _toggle_for(toggles: list[MenuToggle], profile_id: str) -> Optional[MenuToggle]:
    for toggle in toggles:
        if toggle.profile_id == profile_id:
            return toggle
    return None


class AssignmentsTab(Container):
    """Toggle folders and servers for the selected profile."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._table_ready = False
        # A server may sit in more than one folder, so rows get positional keys.
        self._row_targets: dict[str, tuple[str, str]] = {}

    def compose(self):
        with Vertical(id="assignments-panel"):
            yield Static("", id="assignments-title")
            yield DataTable(id="assignments-table", cursor_type="row")
            yield Static("enter toggles the highlighted row, [~] = through a folder", classes="subtle")

    def on_mount(self) -> None:
        table = self.query_one("#assignments-table", DataTable)
        table.add_column("on", key="on", width=4)
        table.add_column("type", key="type", width=8)
        table.add_column("name", key="name", width=36)
        table.add_column("members", key="members", width=10)
        table.zebra_stripes = True
        self._table_ready = True
        self.reload_from_session()

    def reload_from_session(self) -> None:
        if not self._table_ready:
            return
        table = self.query_one("#assignments-table", DataTable)
        title = self.query_one("#assignments-title", Static)
        cursor_row = table.cursor_row
        table.clear()
        self._row_targets = {}

        profile = self.app.selected_profile()
        if profile is None:
            title.update("Select a profile on the Profiles tab")
            return
        if profile.is_default:
            title.update(f"{format_profile_label(profile)}: shows all servers and folders")
            return
        title.update(f"Assignments for {format_profile_label(profile)}")

        session = self.app.session
        snapshot = session.snapshot
        # Folders with their member servers nested under them, then loose servers.
        for folder in snapshot.folders:
            if not folder.folder_id:
                continue
            folder_toggle = _toggle_for(session.folder_toggles(folder.folder_id), profile.id)
            self._add_row(
                table,
                (FOLDER_KIND, folder.folder_id),
                toggle_mark(folder_toggle),
                "folder",
                folder.label,
                str(len(folder.guild_ids)),
            )
            for server_id in folder.guild_ids:
                self._add_server_row(table, profile.id, server_id, indent="  ")
        for server_id in snapshot.ungrouped_server_ids():
            self._add_server_row(table, profile.id, server_id)
        if table.row_count:
            table.move_cursor(row=min(cursor_row, table.row_count - 1))

    def _add_server_row(self, table: DataTable, profile_id: str, server_id: str, indent: str = "") -> None:
        session = self.app.session
        toggle = _toggle_for(session.server_toggles(server_id), profile_id)
        self._add_row(
            table,
            (SERVER_KIND, server_id),
            toggle_mark(toggle),
            "server",
            f"{indent}{session.snapshot.server_name(server_id)}",
            "",
        )

    def _add_row(self, table: DataTable, target: tuple[str, str], *cells: str) -> None:
        key = f"row-{len(self._row_targets)}"
        self._row_targets[key] = target
        table.add_row(*cells, key=key)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.data_table.id != "assignments-table":
            return
        profile = self.app.selected_profile()
        if profile is None or profile.is_default:
            return
        row_key = event.row_key.value if hasattr(event.row_key, "value") else event.row_key
        target = self._row_targets.get(str(row_key))
        if target is None:
            return
        kind, item_id = target
        if kind == FOLDER_KIND:
            self.app.session.toggle_folder(profile.id, item_id)
        else:
            self.app.session.toggle_server(profile.id, item_id)
