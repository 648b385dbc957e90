from __future__ import annotations

import asyncio
from typing import Any, Optional

from textual.coordinate import Coordinate
from textual.widgets import ContentSwitcher, DataTable

from guildarc.core.models import DEFAULT_PROFILE_ID, Folder, MenuToggle, Server
from guildarc.core.session import ProfileSession
from guildarc.frontend.app import ArcPanelApp
from guildarc.frontend.tabs.assignments import AssignmentsTab, toggle_mark
from guildarc.settings import Settings


class FakePersistence:
    def __init__(self) -> None:
        self.saved: list[dict[str, Any]] = []

    def load(self) -> Optional[dict[str, Any]]:
        return None

    def save(self, state: dict[str, Any]) -> None:
        self.saved.append(state)


class FakeDirectory:
    def get_servers(self) -> dict[str, Server]:
        return {"1": Server("1", "Gaming"), "2": Server("2", "Office")}

    def get_folders(self) -> list[Folder]:
        return [Folder("work", "Work", ("2",))]


def _app(tmp_path) -> ArcPanelApp:
    settings = Settings(
        config_path=tmp_path / "config.json",
        state_path=tmp_path / "profiles.json",
        directory_path=tmp_path / "directory.json",
    )
    session = ProfileSession(persistence=FakePersistence(), directory=FakeDirectory())
    return ArcPanelApp(settings=settings, session=session)


def test_bracket_keys_cycle_profiles(tmp_path) -> None:
    app = _app(tmp_path)
    work = app.session.create("Work")

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.press("right_square_bracket")
            await pilot.pause()
            assert app.session.active_profile_id == work
            await pilot.press("right_square_bracket")
            await pilot.pause()
            assert app.session.active_profile_id == DEFAULT_PROFILE_ID
            await pilot.press("2")
            await pilot.pause()
            assert app.session.active_profile_id == work
            # Only two profiles exist, so the third jump key is ignored.
            await pilot.press("3")
            await pilot.pause()
            assert app.session.active_profile_id == work

    asyncio.run(scenario())


def test_create_dialog_adds_profile(tmp_path) -> None:
    app = _app(tmp_path)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.press("n")
            await pilot.pause()
            await pilot.press("W", "o", "r", "k", "enter")
            await pilot.pause()
            names = [summary.name for summary in app.session.summaries()]
            assert names == ["All Servers", "Work"]
            assert app.panel_state.selected_profile_id == app.session.profile_ids()[1]

    asyncio.run(scenario())


def test_toggle_marks() -> None:
    assert toggle_mark(None) == "[ ]"
    assert toggle_mark(MenuToggle("p", "Work", checked=False)) == "[ ]"
    assert toggle_mark(MenuToggle("p", "Work", checked=True)) == "[x]"
    assert toggle_mark(MenuToggle("p", "Work", checked=True, inherited=True)) == "[~]"


def test_grouped_server_can_be_assigned_directly(tmp_path) -> None:
    app = _app(tmp_path)
    work = app.session.create("Work")
    app.session.add_folder(work, "work")
    app.panel_state.selected_profile_id = work

    async def scenario() -> None:
        async with app.run_test() as pilot:
            app.query_one("#content", ContentSwitcher).current = "assignments"
            await pilot.pause()
            table = app.query_one(AssignmentsTab).query_one("#assignments-table", DataTable)
            # Rows: folder "work", its member "Office", then loose "Gaming".
            assert table.row_count == 3
            assert table.get_cell_at(Coordinate(1, 2)).strip() == "Office"
            assert table.get_cell_at(Coordinate(1, 0)) == "[~]"

            table.focus()
            table.move_cursor(row=1)
            await pilot.pause()
            await pilot.press("enter")
            await pilot.pause()

            assert app.session.get_profile(work).servers == ("2",)
            assert table.get_cell_at(Coordinate(1, 0)) == "[x]"

    asyncio.run(scenario())
