"""Guide tab listing the key chords."""

from __future__ import annotations

from rich.table import Table
from textual.containers import Container
from textual.widgets import Static


class GuideTab(Container):
    def compose(self):
        yield Static(self._shortcuts_table(), id="guide-body")

    def _shortcuts_table(self) -> Table:
        table = Table(title="Keyboard shortcuts", show_header=False, box=None)
        table.add_column("keys", style="bold")
        table.add_column("action")
        for chord, action in self.app.settings.shortcuts.describe():
            table.add_row(chord, action)
        table.add_row("n / r / e / d", "Create, rename, emoji, delete")
        table.add_row("s", "Switch to the selected profile")
        table.add_row("ctrl+r", "Reload the server directory")
        return table
