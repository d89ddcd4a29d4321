"""Modal screens for the TUI.

Hides how a yes/no question is put to the user. The app only awaits the
boolean result.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ConfirmationScreen(ModalScreen[bool]):
    """Yes/no dialog. Dismisses with True only for an explicit yes."""

    CSS = """
    ConfirmationScreen {
        align: center middle;
        background: $background 60%;
    }

    #confirmation-dialog {
        width: 64;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: round $primary;
        border-title-color: $primary;
        border-title-style: bold;
    }

    #confirmation-prompt {
        width: 100%;
        text-align: center;
        margin-bottom: 1;
    }

    #confirmation-buttons {
        width: 100%;
        height: auto;
        align: center middle;

        Button {
            margin: 0 2;
        }
    }
    """

    BINDINGS = [
        Binding("y", "answer(True)", "Yes", show=False),
        Binding("n", "answer(False)", "No", show=False),
        Binding("escape", "answer(False)", "Cancel", show=False),
    ]

    def __init__(self, prompt: str, title: str = "Start fresh?") -> None:
        super().__init__()
        self._prompt = prompt
        self._title = title

    def compose(self) -> ComposeResult:
        with Vertical(id="confirmation-dialog") as dialog:
            dialog.border_title = self._title
            yield Static(self._prompt, id="confirmation-prompt", markup=False)
            with Horizontal(id="confirmation-buttons"):
                yield Button("Yes", id="btn-yes", variant="primary")
                yield Button("No", id="btn-no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "btn-yes")

    def action_answer(self, confirmed: bool) -> None:
        self.dismiss(confirmed)
