"""Modal dialogs for the paste inspector."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ClearFormScreen(ModalScreen[bool]):
    """Confirm discarding the current paste and edits."""

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Clear form?", classes="modal-title"),
            Static("The pasted result and any edits will be lost.", classes="modal-body"),
            Horizontal(
                Button("Clear", id="clear-confirm", variant="warning"),
                Button("Cancel", id="clear-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "clear-confirm":
            self.dismiss(True)
        else:
            self.dismiss(False)
