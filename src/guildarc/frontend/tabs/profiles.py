"""Profiles tab implementation."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Static

from guildarc.adapters.sidebar_formatting import format_profile_label


class ProfilesTab(Container):
    """Profiles tab listing every profile with switch and edit actions."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._table_ready = False

    def compose(self):
        with Vertical(id="profiles-panel"):
            yield DataTable(id="profiles-table", cursor_type="row")
            yield Static("", id="profiles-detail")
            with Horizontal(id="profiles-actions"):
                yield Button("Create", id="create-profile", variant="success")
                yield Button("Rename", id="rename-profile")
                yield Button("Emoji", id="emoji-profile")
                yield Button("Delete", id="delete-profile", variant="error")
                yield Button("Switch", id="switch-profile", variant="primary")

    def on_mount(self) -> None:
        table = self.query_one("#profiles-table", DataTable)
        table.add_column("#", key="index", width=3)
        table.add_column("emoji", key="emoji", width=6)
        table.add_column("name", key="name", width=32)
        table.add_column("active", key="active", width=8)
        table.zebra_stripes = True
        self._table_ready = True
        self.reload_from_session()

    def reload_from_session(self) -> None:
        if not self._table_ready:
            return
        session = self.app.session
        table = self.query_one("#profiles-table", DataTable)
        selected = self.app.panel_state.selected_profile_id
        table.clear()
        selected_row = 0
        for row_index, summary in enumerate(session.summaries()):
            name = f"{summary.name} (Default)" if summary.is_default else summary.name
            table.add_row(
                str(summary.index),
                summary.emoji,
                name,
                "Active" if summary.is_active else "",
                key=summary.profile_id,
            )
            if summary.profile_id == selected:
                selected_row = row_index
        if table.row_count:
            table.move_cursor(row=selected_row)
        self._update_detail()

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        if event.data_table.id != "profiles-table":
            return
        self.app.select_profile(self._coerce_row_key(event.row_key))
        self._update_detail()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.data_table.id != "profiles-table":
            return
        self.app.action_switch_selected()

    @on(Button.Pressed, "#create-profile")
    def _on_create(self) -> None:
        self.app.action_create_profile()

    @on(Button.Pressed, "#rename-profile")
    def _on_rename(self) -> None:
        self.app.action_rename_profile()

    @on(Button.Pressed, "#emoji-profile")
    def _on_emoji(self) -> None:
        self.app.action_edit_emoji()

    @on(Button.Pressed, "#delete-profile")
    def _on_delete(self) -> None:
        self.app.action_delete_profile()

    @on(Button.Pressed, "#switch-profile")
    def _on_switch(self) -> None:
        self.app.action_switch_selected()

    def _update_detail(self) -> None:
        detail = self.query_one("#profiles-detail", Static)
        profile = self.app.selected_profile()
        delete_btn = self.query_one("#delete-profile", Button)
        switch_btn = self.query_one("#switch-profile", Button)
        if profile is None:
            detail.update("")
            delete_btn.disabled = True
            switch_btn.disabled = True
            return
        is_active = profile.id == self.app.session.active_profile_id
        delete_btn.disabled = profile.is_default
        switch_btn.disabled = is_active
        switch_btn.label = "Active" if is_active else "Switch"
        if profile.is_default:
            detail.update(f"{format_profile_label(profile)}: shows all servers and folders")
        else:
            detail.update(
                f"{format_profile_label(profile)}: "
                f"{len(profile.folders)} folders, {len(profile.servers)} servers"
            )

    @staticmethod
    def _coerce_row_key(value: Any) -> Optional[str]:
        if value is None:
            return None
        if hasattr(value, "value"):
            return None if value.value is None else str(value.value)
        return str(value)
