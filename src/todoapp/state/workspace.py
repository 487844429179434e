"""Wiring of storage, task manager and preferences for one storage file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import ConfigLoader
from ..utils.logger import Logger
from .preferences import THEME_KEY, ThemePreference
from .storage import LocalStorage
from .store import TASKS_KEY, TaskStore
from .tasks import MAX_TEXT_LENGTH, TaskManager


class Workspace:
    """Builds the objects a front end needs from configuration.

    The activity log lives in a ``logs`` directory beside the storage file.
    """

    def __init__(self, config: ConfigLoader, storage_path: Optional[Path] = None) -> None:
        self.config = config
        self.storage_path = (
            Path(storage_path).expanduser()
            if storage_path is not None
            else config.get_path("storage.path", str(config.global_dir / "storage.json"))
        )
        self.base_dir = self.storage_path.parent

        self.storage = LocalStorage(self.storage_path)
        self.store = TaskStore(self.storage, key=config.get("storage.tasks_key", TASKS_KEY))
        self.theme = ThemePreference(self.storage, key=config.get("storage.theme_key", THEME_KEY))
        self.task_manager = TaskManager(
            self.store,
            max_text_length=config.get_int("tasks.max_text_length", MAX_TEXT_LENGTH),
        )
        self.activity_log = Logger(self.base_dir)
        self.activity_log.attach(self.task_manager)

    def close(self) -> None:
        self.activity_log.detach()
