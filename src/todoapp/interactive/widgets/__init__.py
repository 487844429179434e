"""Interactive mode widgets."""

from .edit_task_modal import EditTaskModal
from .output_panel import OutputPanel
from .task_list import TaskListWidget
from .top_bar import TopBar

__all__ = [
    "EditTaskModal",
    "OutputPanel",
    "TaskListWidget",
    "TopBar",
]
