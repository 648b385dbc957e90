"""Modal dialogs for the Textual profile panel."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Grid, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from .constants import COMMON_EMOJIS
from .validators import parse_emoji_input, parse_profile_name


class ProfileNameScreen(ModalScreen[str | None]):
    """Modal form asking for a profile name (create and rename)."""

    def __init__(self, title: str, confirm_label: str, initial: str = "") -> None:
        super().__init__()
        self._title = title
        self._confirm_label = confirm_label
        self._initial = initial

    def compose(self) -> ComposeResult:
        yield Container(
            Static(self._title, classes="modal-title"),
            Static("", id="name-error", classes="modal-error"),
            Static("name", classes="form-label"),
            Input(value=self._initial, placeholder="New profile name...", id="name-input"),
            Horizontal(
                Button(self._confirm_label, id="name-confirm", variant="success"),
                Button("Cancel", id="name-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--form",
        )

    def on_mount(self) -> None:
        self.query_one("#name-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "name-cancel":
            self.dismiss(None)
            return
        if event.button.id == "name-confirm":
            self._submit(self.query_one("#name-input", Input).value)

    def _submit(self, value: str) -> None:
        info = parse_profile_name(value)
        if info.error or info.normalized is None:
            self.query_one("#name-error", Static).update(info.error or "invalid name")
            return
        self.dismiss(info.normalized)


class EmojiPickerScreen(ModalScreen[str | None]):
    """Grid of common emoji plus a free-form input."""

    def compose(self) -> ComposeResult:
        buttons = [
            Button(emoji, id=f"emoji-{index}", classes="emoji-choice")
            for index, emoji in enumerate(COMMON_EMOJIS)
        ]
        yield Container(
            Static("Choose an emoji", classes="modal-title"),
            Grid(*buttons, id="emoji-grid"),
            Static("", id="emoji-error", classes="modal-error"),
            Horizontal(
                Input(placeholder="Or type any emoji...", id="emoji-input"),
                Button("Apply", id="emoji-apply", variant="primary"),
                Button("Cancel", id="emoji-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--form",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id == "emoji-cancel":
            self.dismiss(None)
        elif button_id == "emoji-apply":
            self._apply(self.query_one("#emoji-input", Input).value)
        elif button_id.startswith("emoji-"):
            index = int(button_id.split("-", 1)[1])
            self.dismiss(COMMON_EMOJIS[index])

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._apply(event.value)

    def _apply(self, value: str) -> None:
        info = parse_emoji_input(value)
        if info.error or info.normalized is None:
            self.query_one("#emoji-error", Static).update(info.error or "invalid emoji")
            return
        self.dismiss(info.normalized)


class DeleteProfileScreen(ModalScreen[bool]):
    """Confirm deletion of a profile."""

    def __init__(self, profile_name: str) -> None:
        super().__init__()
        self._profile_name = profile_name

    def compose(self) -> ComposeResult:
        yield Container(
            Static(f'Delete "{self._profile_name}"?', classes="modal-title"),
            Static("This will permanently delete this profile.", classes="modal-body"),
            Horizontal(
                Button("Delete", id="delete-confirm", variant="error"),
                Button("Cancel", id="delete-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "delete-confirm":
            self.dismiss(True)
        else:
            self.dismiss(False)
