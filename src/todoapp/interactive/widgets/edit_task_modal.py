"""Modal for editing a todo's text."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label

from ...state.tasks import MAX_TEXT_LENGTH, Task


class EditTaskModal(ModalScreen):
    """Modal dialog returning the new text, or None when cancelled."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    DEFAULT_CSS = """
    EditTaskModal {
        align: center middle;
    }

    EditTaskModal > Vertical {
        width: 70;
        height: auto;
        background: $panel;
        border: thick $primary;
        padding: 1 2;
    }

    EditTaskModal Label {
        width: 100%;
        content-align: center middle;
        text-style: bold;
        color: $text;
        margin-bottom: 1;
    }

    EditTaskModal Input {
        width: 100%;
        margin-bottom: 1;
    }

    EditTaskModal Grid {
        width: 100%;
        height: auto;
        grid-size: 2;
        grid-gutter: 1;
    }

    EditTaskModal Button {
        width: 100%;
    }
    """

    def __init__(self, task: Task, max_length: int = MAX_TEXT_LENGTH, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.todo = task
        self.max_length = max_length

    def compose(self) -> ComposeResult:
        """Compose the modal layout."""
        with Vertical():
            yield Label("Edit Todo")
            yield Input(value=self.todo.text, id="task-text-input", max_length=self.max_length)
            with Grid():
                yield Button("Cancel", variant="default", id="cancel-button")
                yield Button("Save", variant="primary", id="save-button")

    def on_mount(self) -> None:
        self.query_one("#task-text-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "cancel-button":
            self.dismiss(None)
        elif event.button.id == "save-button":
            self._submit()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def _submit(self) -> None:
        text = self.query_one("#task-text-input", Input).value.strip()
        # Blank or unchanged text keeps the original, like cancelling.
        if text and text != self.todo.text:
            self.dismiss(text)
        else:
            self.dismiss(None)
