"""Main Textual app for the guildarc profile panel."""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Center, Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import ContentSwitcher, Footer, Static, Tab, Tabs

from guildarc import __version__
from guildarc.adapters.json_directory import JsonDirectoryProvider
from guildarc.adapters.json_storage import JsonStateStorage
from guildarc.adapters.sidebar_formatting import format_profile_label, format_switch_message
from guildarc.core.errors import PersistenceError, ProfileError, ProfileNotFoundError
from guildarc.core.models import Profile
from guildarc.core.session import ProfileSession
from guildarc.core.store import StoreChange
from guildarc.settings import Settings, load_settings

from .constants import ACCENT
from .modals import DeleteProfileScreen, EmojiPickerScreen, ProfileNameScreen
from .state import PanelState
from .tabs.assignments import AssignmentsTab
from .tabs.guide import GuideTab
from .tabs.profiles import ProfilesTab
from .tabs.sidebar import SidebarTab
from .validators import parse_jump_number


class ArcPanelApp(App):
    """Profile panel: switch, edit and preview server profiles."""

    CSS = f"""
    Screen {{
        background: #1e1f22;
        color: #dbdee1;
    }}

    #header {{
        height: 5;
        padding: 0 2;
        border-bottom: solid #3f4147;
    }}

    #header-left, #header-right {{
        width: 1fr;
    }}

    #header-right {{
        content-align: right top;
        text-align: right;
    }}

    #title {{
        text-style: bold;
    }}

    #active-profile {{
        color: {ACCENT};
        text-style: bold;
    }}

    .subtle {{
        color: #949ba4;
    }}

    #tabs-bar {{
        height: 4;
        align: center middle;
    }}

    #content {{
        height: 1fr;
        padding: 0 2;
    }}

    #profiles-table, #assignments-table {{
        height: 1fr;
    }}

    #profiles-actions, .modal-actions {{
        height: 3;
    }}

    ModalScreen {{
        align: center middle;
    }}

    .modal-dialog {{
        width: 60;
        height: auto;
        padding: 1 2;
        background: #2b2d31;
        border: round {ACCENT};
    }}

    .modal-title {{
        text-style: bold;
        margin-bottom: 1;
    }}

    .modal-error {{
        color: #f23f43;
    }}

    #emoji-grid {{
        grid-size: 8;
        grid-gutter: 0;
        height: auto;
    }}

    .emoji-choice {{
        min-width: 6;
    }}

    #emoji-input {{
        width: 1fr;
    }}
    """

    BINDINGS = [
        ("n", "create_profile", "New"),
        ("r", "rename_profile", "Rename"),
        ("e", "edit_emoji", "Emoji"),
        ("d", "delete_profile", "Delete"),
        ("s", "switch_selected", "Switch"),
        ("ctrl+r", "reload_directory", "Reload"),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        settings: Settings | None = None,
        session: ProfileSession | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.settings = settings or load_settings()
        self.panel_state = PanelState()
        self.session = session or ProfileSession(
            persistence=JsonStateStorage(self.settings.state_path),
            directory=JsonDirectoryProvider(self.settings.directory_path),
            on_persist_error=self._on_persist_error,
        )
        self.panel_state.selected_profile_id = self.session.active_profile_id
        self.session.subscribe(self._on_session_change)

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static(f"engine v{__version__}", classes="subtle")
                with Vertical(id="header-right"):
                    yield Static("", id="active-profile")
                    yield Static(f"state: {self.settings.state_path.name}", classes="subtle")
                    yield Static("", id="header-status", classes="subtle")

        with Container(id="tabs-bar"):
            with Center(id="tabs-center"):
                yield Tabs(
                    Tab("Profiles", id="profiles"),
                    Tab("Assignments", id="assignments"),
                    Tab("Sidebar", id="sidebar"),
                    Tab("Guide", id="guide"),
                    id="tabs",
                )

        with ContentSwitcher(id="content", initial="profiles"):
            yield ProfilesTab(id="profiles")
            yield AssignmentsTab(id="assignments")
            yield SidebarTab(id="sidebar")
            yield GuideTab(id="guide")
        yield Footer()

    def on_mount(self) -> None:
        self._refresh_header()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        tab_id = event.tab.id or ""
        if not tab_id:
            label = event.tab.label
            if hasattr(label, "plain"):
                label = label.plain
            tab_id = str(label).strip().lower()
        self.query_one("#content", ContentSwitcher).current = tab_id

    # ------------------------------------------------------------ key chords

    def on_key(self, event: events.Key) -> None:
        if self._modal_open():
            return
        shortcuts = self.settings.shortcuts
        if event.key == shortcuts.next_profile:
            event.stop()
            self.action_next_profile()
        elif event.key == shortcuts.prev_profile:
            event.stop()
            self.action_prev_profile()
        else:
            number = parse_jump_number(event.key, shortcuts.jump_keys)
            if number is not None:
                event.stop()
                self.action_jump_profile(number)

    def action_next_profile(self) -> None:
        self._announce(self.session.switch_next())

    def action_prev_profile(self) -> None:
        self._announce(self.session.switch_prev())

    def action_jump_profile(self, number: int) -> None:
        try:
            profile = self.session.switch_to_number(number)
        except ProfileNotFoundError:
            # Jump keys past the last profile do nothing.
            return
        self._announce(profile)

    # --------------------------------------------------------------- actions

    def action_switch_selected(self) -> None:
        profile = self.selected_profile()
        if profile is None or self._modal_open():
            return
        if profile.id == self.session.active_profile_id:
            return
        self._announce(self.session.switch(profile.id))

    def action_create_profile(self) -> None:
        if self._modal_open():
            return
        self.push_screen(ProfileNameScreen("Create profile", "Create"), self._handle_create)

    def action_rename_profile(self) -> None:
        profile = self.selected_profile()
        if profile is None or self._modal_open():
            return
        self.push_screen(
            ProfileNameScreen(f"Rename {profile.name}", "Rename", initial=profile.name),
            self._handle_rename,
        )

    def action_edit_emoji(self) -> None:
        if self.selected_profile() is None or self._modal_open():
            return
        self.push_screen(EmojiPickerScreen(), self._handle_emoji)

    def action_delete_profile(self) -> None:
        profile = self.selected_profile()
        if profile is None or profile.is_default or self._modal_open():
            return
        self.push_screen(DeleteProfileScreen(profile.name), self._handle_delete)

    def action_reload_directory(self) -> None:
        try:
            self.session.refresh_directory()
        except ProfileError as exc:
            self._set_status(f"directory error: {exc}", error=True)
            return
        self._set_status("directory reloaded")

    def _handle_create(self, name: str | None) -> None:
        if not name:
            return
        def _create() -> None:
            self.panel_state.selected_profile_id = self.session.create(name)
            self.refresh_views()

        self._run_command(_create)

    def _handle_rename(self, name: str | None) -> None:
        profile = self.selected_profile()
        if not name or profile is None:
            return
        self._run_command(lambda: self.session.rename(profile.id, name))

    def _handle_emoji(self, emoji: str | None) -> None:
        profile = self.selected_profile()
        if not emoji or profile is None:
            return
        self._run_command(lambda: self.session.set_emoji(profile.id, emoji))

    def _handle_delete(self, confirmed: bool | None) -> None:
        profile = self.selected_profile()
        if not confirmed or profile is None:
            return
        self.panel_state.selected_profile_id = self.session.active_profile_id
        self._run_command(lambda: self.session.delete(profile.id))

    # ------------------------------------------------------------- selection

    def select_profile(self, profile_id: str | None) -> None:
        if profile_id is None or profile_id == self.panel_state.selected_profile_id:
            return
        self.panel_state.selected_profile_id = profile_id
        self._refresh_tab(AssignmentsTab)

    def selected_profile(self) -> Profile | None:
        profile_id = self.panel_state.selected_profile_id
        if profile_id is None:
            return None
        try:
            return self.session.get_profile(profile_id)
        except ProfileNotFoundError:
            return None

    # --------------------------------------------------------------- refresh

    def _on_session_change(self, change: StoreChange) -> None:
        if change.kind == "deleted" and change.profile_id == self.panel_state.selected_profile_id:
            self.panel_state.selected_profile_id = self.session.active_profile_id
        self.refresh_views()

    def refresh_views(self) -> None:
        if not self.is_running:
            return
        self._refresh_header()
        for tab_type in (ProfilesTab, AssignmentsTab, SidebarTab):
            self._refresh_tab(tab_type)

    def _refresh_tab(self, tab_type: type) -> None:
        try:
            tab = self._main_screen().query_one(tab_type)
        except Exception:
            return
        tab.reload_from_session()

    def _refresh_header(self) -> None:
        active = self._main_screen().query_one("#active-profile", Static)
        active.update(f"Active: {format_profile_label(self.session.active_profile, mark_default=False)}")
        status = self._main_screen().query_one("#header-status", Static)
        status.update(self.panel_state.error or self.panel_state.status)

    def _announce(self, profile: Profile) -> None:
        message = format_switch_message(profile)
        self.notify(message)
        self._set_status(message)

    def _set_status(self, message: str, error: bool = False) -> None:
        if error:
            self.panel_state.error = message
        else:
            self.panel_state.error = None
            self.panel_state.status = message
        self._refresh_header()

    def _run_command(self, command) -> None:
        try:
            command()
        except ProfileError as exc:
            self._set_status(str(exc), error=True)
            self.notify(str(exc), severity="error")

    def _on_persist_error(self, exc: PersistenceError) -> None:
        self.panel_state.error = f"save failed: {exc}"
        if self.is_running:
            self.notify(self.panel_state.error, severity="error")
            self._refresh_header()

    def _main_screen(self):
        # Tabs live on the base screen; modals are pushed above it.
        return self.screen_stack[0]

    def _modal_open(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("GUILD", ACCENT),
            ("ARC > Server Profiles", "bold"),
        )
