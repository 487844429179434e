"""Output panel widget for command feedback."""

from __future__ import annotations

from rich.panel import Panel
from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import RichLog


class OutputPanel(Widget):
    """Scrolling log of command results and errors."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.border_title = "Messages"

    def compose(self) -> ComposeResult:
        yield RichLog(id="output-log", highlight=False, markup=True, auto_scroll=True)

    def write_line(self, text: str, style: str | None = None) -> None:
        log = self.query_one("#output-log", RichLog)
        if style:
            log.write(f"[{style}]{text}[/{style}]")
        else:
            log.write(text)

    def write_section(self, title: str, content: str) -> None:
        log = self.query_one("#output-log", RichLog)
        log.write(Panel(content, title=title, border_style="blue"))

    def clear(self) -> None:
        self.query_one("#output-log", RichLog).clear()

    def write_error(self, error: str) -> None:
        self.write_line(f"ERROR: {error}", style="bold red")

    def write_success(self, message: str) -> None:
        self.write_line(f"✓ {message}", style="bold green")

    def write_warning(self, message: str) -> None:
        self.write_line(f"⚠ {message}", style="bold yellow")
