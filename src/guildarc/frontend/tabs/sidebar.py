"""Sidebar tab: preview of what the active profile makes visible."""

from __future__ import annotations

from rich.text import Text
from textual.containers import Container, VerticalScroll
from textual.widgets import Static

from guildarc.adapters.sidebar_formatting import build_sidebar_rows, format_profile_label, format_sidebar_row


class SidebarTab(Container):
    def compose(self):
        with VerticalScroll(id="sidebar-panel"):
            yield Static("", id="sidebar-title")
            yield Static("", id="sidebar-body")

    def on_mount(self) -> None:
        self.reload_from_session()

    def reload_from_session(self) -> None:
        session = self.app.session
        resolution = session.resolution()
        snapshot = session.snapshot
        rows = build_sidebar_rows(resolution, snapshot)

        title = self.query_one("#sidebar-title", Static)
        title.update(
            Text.assemble(
                (format_profile_label(session.active_profile), "bold"),
                (
                    f"  {len(resolution.visible_folders)}/{len(snapshot.folder_ids())} folders,"
                    f" {len(resolution.visible_servers)}/{len(snapshot.servers)} servers",
                    "dim",
                ),
            )
        )

        body = Text()
        if not rows:
            body.append("(nothing visible)", style="dim")
        for index, row in enumerate(rows):
            if index:
                body.append("\n")
            body.append(format_sidebar_row(row), style="bold" if row.kind == "folder" else "")
        self.query_one("#sidebar-body", Static).update(body)
