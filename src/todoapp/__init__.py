"""todoapp - a local todo list."""

__version__ = "0.1.0"
__author__ = "todoapp Contributors"

from .config import Config
from .state.tasks import Task, TaskFilter, TaskManager, TaskStats

__all__ = ["Config", "TaskManager", "Task", "TaskFilter", "TaskStats"]
