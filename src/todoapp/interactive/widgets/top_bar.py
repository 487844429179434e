"""Top bar widget with title, stats, theme toggle and the add input."""

from __future__ import annotations

from typing import List

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Input, Static

from ...state.tasks import TaskStats


class TopBar(Widget):
    """Header with title, counters, theme button and the add/command input."""

    DEFAULT_CSS = """
    TopBar {
        height: auto;
        dock: top;
        background: $panel;
    }

    TopBar Horizontal {
        height: 3;
        background: $primary;
        padding: 0 1;
    }

    TopBar #title-status {
        width: 1fr;
        content-align: left middle;
        text-style: bold;
        color: $text;
    }

    TopBar #stats {
        width: auto;
        content-align: right middle;
        color: $text;
        padding: 0 2;
    }

    TopBar #theme-toggle {
        min-width: 6;
        width: 6;
    }

    TopBar #command-input {
        border: tall $primary;
        background: $surface;
    }
    """

    def __init__(self, title: str = "Todo List", *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.title_text = title
        self.command_history: List[str] = []
        self.history_index = -1

    def compose(self) -> ComposeResult:
        """Compose the top bar layout."""
        with Horizontal():
            yield Static(self.title_text, id="title-status")
            yield Static("", id="stats")
            yield Button("🌙", id="theme-toggle")
        yield Input(placeholder="Add a new todo... (or /help)", id="command-input")

    def on_mount(self) -> None:
        """Focus the input when mounted."""
        self.query_one("#command-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle command submission."""
        if event.input.id != "command-input":
            return

        command = event.value.strip()
        if command:
            self.command_history.append(command)
            self.history_index = len(self.command_history)
            self.post_message(self.CommandSubmitted(command))
        event.input.value = ""

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "theme-toggle":
            self.post_message(self.ThemeToggled())
            event.stop()

    async def on_key(self, event) -> None:
        """Handle key presses for command history."""
        input_widget = self.query_one("#command-input", Input)
        if not input_widget.has_focus:
            return

        if event.key == "up":
            if self.command_history and self.history_index > 0:
                self.history_index -= 1
                input_widget.value = self.command_history[self.history_index]
                input_widget.cursor_position = len(input_widget.value)
            event.prevent_default()
        elif event.key == "down":
            if self.command_history:
                if self.history_index < len(self.command_history) - 1:
                    self.history_index += 1
                    input_widget.value = self.command_history[self.history_index]
                else:
                    self.history_index = len(self.command_history)
                    input_widget.value = ""
                input_widget.cursor_position = len(input_widget.value)
            event.prevent_default()

    def update_stats(self, stats: TaskStats) -> None:
        self.query_one("#stats", Static).update(
            f"Total: [b]{stats.total}[/b]  Completed: [b]{stats.completed}[/b]  Pending: [b]{stats.pending}[/b]"
        )

    def update_theme(self, dark: bool) -> None:
        button = self.query_one("#theme-toggle", Button)
        button.label = "☀️" if dark else "🌙"
        button.tooltip = f"Switch to {'light' if dark else 'dark'} mode"

    class CommandSubmitted(Message):
        """Message sent when command is submitted."""

        def __init__(self, command: str) -> None:
            super().__init__()
            self.command = command

    class ThemeToggled(Message):
        """Message sent when the theme button is pressed."""
