"""Textual application for interactive mode."""

from __future__ import annotations

from typing import Callable, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer

from .commands import CommandHandler
from .widgets import EditTaskModal, OutputPanel, TaskListWidget, TopBar
from ..state.tasks import TaskChange, TaskFilter
from ..state.workspace import Workspace

DARK_THEME = "textual-dark"
LIGHT_THEME = "textual-light"


class TodoApp(App):
    """Todo list TUI. Redraws whenever the task manager reports a change."""

    CSS = """
    Screen {
        layout: vertical;
        overflow: hidden;
    }

    #task-list-widget {
        height: 1fr;
        border: tall $primary;
        padding: 0 1;
    }

    #output-panel {
        height: 7;
        border: tall $primary;
        padding: 0;
    }
    """

    BINDINGS = [
        Binding("space", "toggle_task", "Toggle"),
        Binding("e", "edit_task", "Edit"),
        Binding("d", "delete_task", "Delete"),
        Binding("delete", "delete_task", "Delete", show=False),
        Binding("1", "filter('all')", "All"),
        Binding("2", "filter('pending')", "Pending"),
        Binding("3", "filter('completed')", "Completed"),
        Binding("ctrl+t", "toggle_theme", "Theme"),
        Binding("ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, workspace: Workspace, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.workspace = workspace
        self.task_manager = workspace.task_manager
        self.command_handler = CommandHandler(self.task_manager, self)
        self._unsubscribe: Optional[Callable[[], None]] = None

    def compose(self) -> ComposeResult:
        self.top_bar = TopBar(id="top-bar")
        self.task_list = TaskListWidget(id="task-list-widget")
        self.output_panel = OutputPanel(id="output-panel")

        yield self.top_bar
        yield self.task_list
        yield self.output_panel
        yield Footer()

    def on_mount(self) -> None:
        self._apply_theme(self.workspace.theme.load())
        self._unsubscribe = self.task_manager.subscribe(self._on_task_change)
        self.refresh_tasks()
        self.output_panel.write_line(f"Storage: {self.workspace.storage_path}", style="dim")
        self.output_panel.write_line("Type a todo and press Enter. /help for commands.", style="dim")

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_task_change(self, change: TaskChange) -> None:
        self.refresh_tasks()

    def refresh_tasks(self) -> None:
        """Redraw counters and the filtered list from the manager."""
        stats = self.task_manager.stats()
        self.top_bar.update_stats(stats)
        self.task_list.update_tasks(
            list(self.task_manager.list_filtered()),
            stats,
            self.task_manager.filter,
        )

    # ------------------------------------------------------------------ #
    # Widget messages
    # ------------------------------------------------------------------ #
    async def on_top_bar_command_submitted(self, event: TopBar.CommandSubmitted) -> None:
        await self.command_handler.handle(event.command)

    def on_top_bar_theme_toggled(self, event: TopBar.ThemeToggled) -> None:
        self.action_toggle_theme()

    def on_task_list_widget_filter_requested(self, event: TaskListWidget.FilterRequested) -> None:
        self.task_manager.set_filter(event.task_filter)

    def on_task_list_widget_task_selected(self, event: TaskListWidget.TaskSelected) -> None:
        self.task_manager.toggle(event.task.id)

    # ------------------------------------------------------------------ #
    # Actions
    # ------------------------------------------------------------------ #
    def action_toggle_task(self) -> None:
        task = self.task_list.highlighted_task()
        if task is not None:
            self.task_manager.toggle(task.id)

    def action_edit_task(self) -> None:
        task = self.task_list.highlighted_task()
        if task is None:
            return

        def apply_edit(text: Optional[str]) -> None:
            if text:
                self.task_manager.edit(task.id, text)

        self.push_screen(EditTaskModal(task, max_length=self.task_manager.max_text_length), apply_edit)

    def action_delete_task(self) -> None:
        task = self.task_list.highlighted_task()
        if task is not None:
            self.task_manager.remove(task.id)

    def action_filter(self, name: str) -> None:
        self.task_manager.set_filter(TaskFilter.parse(name))

    def action_toggle_theme(self) -> None:
        self._apply_theme(self.workspace.theme.toggle())

    def _apply_theme(self, dark: bool) -> None:
        self.theme = DARK_THEME if dark else LIGHT_THEME
        self.top_bar.update_theme(dark)
