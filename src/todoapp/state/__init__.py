"""State management modules."""

from .preferences import ThemePreference
from .storage import LocalStorage
from .store import TaskStore
from .tasks import ChangeKind, Task, TaskChange, TaskFilter, TaskManager, TaskStats, TaskView

__all__ = [
    "LocalStorage",
    "TaskStore",
    "ThemePreference",
    "TaskManager",
    "Task",
    "TaskChange",
    "TaskFilter",
    "TaskStats",
    "TaskView",
    "ChangeKind",
]
