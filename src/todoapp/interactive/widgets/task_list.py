"""Task list widget for interactive mode."""

from __future__ import annotations

from typing import List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Button, Label, ListItem, ListView, Static

from ...state.tasks import Task, TaskFilter, TaskStats

EMPTY_MESSAGES = {
    TaskFilter.ALL: ("Your todo list is empty", "No todos yet. Add one above to get started!"),
    TaskFilter.COMPLETED: ("No completed todos", "No completed todos yet."),
    TaskFilter.PENDING: ("No pending todos", "No pending todos. Great job!"),
}


class TaskListWidget(Widget):
    """Filter buttons plus the filtered list of todos."""

    DEFAULT_CSS = """
    TaskListWidget Vertical {
        height: 100%;
    }

    TaskListWidget #filter-buttons {
        height: auto;
        margin: 0 0 1 0;
    }

    TaskListWidget #filter-buttons Button {
        width: 1fr;
    }

    TaskListWidget #empty-state {
        width: 100%;
        content-align: center middle;
        color: $text-muted;
        padding: 1 2;
    }

    TaskListWidget ListView {
        height: 1fr;
    }
    """

    tasks: List[Task] = reactive([], layout=True, always_update=True)
    active_filter: TaskFilter = reactive(TaskFilter.ALL)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.border_title = "Todos"

    def compose(self) -> ComposeResult:
        with Vertical():
            with Horizontal(id="filter-buttons"):
                yield Button("All (0)", id="filter-all")
                yield Button("Pending (0)", id="filter-pending")
                yield Button("Completed (0)", id="filter-completed")
            yield Static(id="empty-state")
            yield ListView(id="task-list-view")

    def watch_tasks(self, tasks: List[Task]) -> None:
        list_view = self.query_one("#task-list-view", ListView)
        list_view.clear()

        for task in tasks:
            text = Text()
            if task.completed:
                text.append("[✓] ", style="green")
                text.append(task.text, style="strike dim")
            else:
                text.append("[ ] ", style="#888888")
                text.append(task.text)
            list_view.append(ListItem(Label(text)))

        empty = self.query_one("#empty-state", Static)
        if tasks:
            empty.display = False
        else:
            title, subtext = EMPTY_MESSAGES[self.active_filter]
            empty.update(f"📝\n[bold]{title}[/bold]\n{subtext}")
            empty.display = True

    def watch_active_filter(self, active_filter: TaskFilter) -> None:
        for task_filter in TaskFilter:
            button = self.query_one(f"#filter-{task_filter.value}", Button)
            button.variant = "primary" if task_filter is active_filter else "default"

    def update_tasks(self, tasks: List[Task], stats: TaskStats, active_filter: TaskFilter) -> None:
        self.query_one("#filter-all", Button).label = f"All ({stats.total})"
        self.query_one("#filter-pending", Button).label = f"Pending ({stats.pending})"
        self.query_one("#filter-completed", Button).label = f"Completed ({stats.completed})"
        self.active_filter = active_filter
        self.tasks = tasks

    def highlighted_task(self) -> Optional[Task]:
        """Task under the list cursor, if any."""
        index = self.query_one("#task-list-view", ListView).index
        if index is not None and index < len(self.tasks):
            return self.tasks[index]
        return None

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle filter button presses."""
        button_id = event.button.id or ""
        if button_id.startswith("filter-"):
            self.post_message(self.FilterRequested(TaskFilter(button_id[len("filter-") :])))
            event.stop()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Handle task selection from list."""
        if event.list_view.index is not None and event.list_view.index < len(self.tasks):
            selected_task = self.tasks[event.list_view.index]
            self.post_message(self.TaskSelected(selected_task))

    class FilterRequested(Message):
        """Message sent when a filter button is pressed."""

        def __init__(self, task_filter: TaskFilter) -> None:
            super().__init__()
            self.task_filter = task_filter

    class TaskSelected(Message):
        """Message sent when a task is selected from the list."""

        def __init__(self, task: Task) -> None:
            super().__init__()
            self.task = task
