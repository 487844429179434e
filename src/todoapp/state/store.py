"""Persistence of the task collection in local storage."""

from __future__ import annotations

import json
import logging
from typing import Iterable, List, Set, Tuple

from .storage import LocalStorage
from .tasks import Task, TaskId

logger = logging.getLogger(__name__)

TASKS_KEY = "todoApp_todos"


class TaskStore:
    """Loads and saves the whole task collection under one storage key."""

    def __init__(self, storage: LocalStorage, key: str = TASKS_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> Tuple[Task, ...]:
        """Restore the collection. Missing or corrupt data yields an empty tuple."""
        raw = self.storage.get_item(self.key)
        if raw is None:
            return ()

        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.warning("Error loading todos from %s[%s]: %s", self.storage.path, self.key, exc)
            return ()

        if not isinstance(data, list):
            logger.warning(
                "Error loading todos from %s[%s]: expected a list, got %s",
                self.storage.path,
                self.key,
                type(data).__name__,
            )
            return ()

        tasks: List[Task] = []
        seen: Set[TaskId] = set()
        for entry in data:
            try:
                task = Task.from_dict(entry)
            except ValueError as exc:
                logger.warning("Skipping stored todo: %s", exc)
                continue
            if task.id in seen:
                logger.warning("Skipping stored todo with duplicate id %s", task.id)
                continue
            seen.add(task.id)
            tasks.append(task)

        logger.debug("Loaded %d todos from %s", len(tasks), self.storage.path)
        return tuple(tasks)

    def save(self, tasks: Iterable[Task]) -> None:
        """Overwrite the stored collection with tasks."""
        payload = [task.to_dict() for task in tasks]
        self.storage.set_item(self.key, json.dumps(payload, ensure_ascii=False))
