from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from todoapp.state.storage import LocalStorage
from todoapp.state.store import TaskStore
from todoapp.state.tasks import TaskManager


class CountingStorage(LocalStorage):
    """LocalStorage that counts writes so tests can assert on persistence."""

    def __init__(self, path: Path) -> None:
        super().__init__(path)
        self.writes = 0

    def set_item(self, key: str, value: str) -> None:
        self.writes += 1
        super().set_item(key, value)


@pytest.fixture()
def storage(tmp_path: Path) -> CountingStorage:
    return CountingStorage(tmp_path / "storage.json")


@pytest.fixture()
def store(storage: CountingStorage) -> TaskStore:
    return TaskStore(storage)


@pytest.fixture()
def manager(store: TaskStore) -> TaskManager:
    return TaskManager(store, clock=lambda: datetime(2024, 5, 1, 9, 30, 0, 123456, tzinfo=timezone.utc))
