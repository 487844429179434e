"""Activity log of task changes."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from ..state.tasks import ChangeKind, TaskChange, TaskManager


class Logger:
    """Appends one JSON line per task change to logs/tasks.log."""

    def __init__(self, base_dir: Path) -> None:
        self.logs_dir = Path(base_dir) / "logs"
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.logs_dir / "tasks.log"
        self._unsubscribe: Optional[Callable[[], None]] = None

    def attach(self, manager: TaskManager) -> None:
        """Record every change made through manager."""
        self.detach()
        self._unsubscribe = manager.subscribe(self.log_change)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def log_change(self, change: TaskChange) -> None:
        if change.kind is ChangeKind.FILTERED:
            return
        payload = {"event": change.kind.value, "count": len(change.tasks)}
        if change.task is not None:
            payload.update(
                {
                    "task_id": change.task.id,
                    "text": change.task.text,
                    "completed": change.task.completed,
                }
            )
        self._write(payload)

    def _write(self, payload: dict) -> None:
        entry = {"timestamp": datetime.now(timezone.utc).isoformat(), **payload}
        with self.log_file.open("a", encoding="utf-8") as fp:
            fp.write(json.dumps(entry, ensure_ascii=False) + "\n")
