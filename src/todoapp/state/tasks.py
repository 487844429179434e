"""Task records and the task list manager."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from .store import TaskStore

TaskId = Union[int, float]

MAX_TEXT_LENGTH = 100


def parse_task_id(raw: str) -> TaskId:
    """Parse a user-typed id. Legacy ids may be fractional."""
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"Invalid task id: {raw!r}") from None


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T09:30:00.000Z."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class TaskFilter(Enum):
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    @classmethod
    def parse(cls, value: Union[str, "TaskFilter"]) -> "TaskFilter":
        """Accept a filter or its name ("all", "completed", "pending")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown filter {value!r} (expected one of: {choices})") from None

    def matches(self, task: "Task") -> bool:
        if self is TaskFilter.COMPLETED:
            return task.completed
        if self is TaskFilter.PENDING:
            return not task.completed
        return True


class ChangeKind(Enum):
    ADDED = "added"
    TOGGLED = "toggled"
    EDITED = "edited"
    REMOVED = "removed"
    FILTERED = "filtered"


@dataclass(frozen=True)
class Task:
    """A single todo entry. Instances are never mutated; updates build copies."""

    id: TaskId
    text: str
    completed: bool = False
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted dictionary layout."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Task":
        """Create from a persisted dictionary; raises ValueError on bad records."""
        if not isinstance(data, dict):
            raise ValueError("task record must be an object")

        task_id = data.get("id")
        if isinstance(task_id, bool) or not isinstance(task_id, (int, float)):
            raise ValueError(f"task id must be a number, got {task_id!r}")
        if isinstance(task_id, float) and not math.isfinite(task_id):
            raise ValueError(f"task id must be finite, got {task_id!r}")

        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"task {task_id} has no text")

        created_at = data.get("createdAt")
        return Task(
            id=task_id,
            text=text.strip(),
            completed=data.get("completed") is True,
            created_at=created_at if isinstance(created_at, str) else "",
        )


@dataclass(frozen=True)
class TaskStats:
    total: int
    completed: int
    pending: int

    def to_dict(self) -> Dict[str, int]:
        return {"total": self.total, "completed": self.completed, "pending": self.pending}


@dataclass(frozen=True)
class TaskChange:
    """Notification sent to subscribers after the task list changes."""

    kind: ChangeKind
    task: Optional[Task]
    tasks: Tuple[Task, ...]


Listener = Callable[[TaskChange], None]


class TaskView:
    """Lazy, restartable view over a snapshot of the task collection."""

    def __init__(self, tasks: Tuple[Task, ...], task_filter: TaskFilter) -> None:
        self._tasks = tasks
        self.filter = task_filter

    def __iter__(self) -> Iterator[Task]:
        return (task for task in self._tasks if self.filter.matches(task))

    def __repr__(self) -> str:
        return f"TaskView(filter={self.filter.value!r})"


class TaskManager:
    """Owns the task collection and the active filter.

    Every mutation replaces the collection tuple, hands the new value to the
    store and then notifies subscribers. Unknown ids are ignored rather than
    raising.
    """

    def __init__(
        self,
        store: "TaskStore",
        *,
        max_text_length: int = MAX_TEXT_LENGTH,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self.max_text_length = max_text_length
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._tasks: Tuple[Task, ...] = ()
        self._filter = TaskFilter.ALL
        self._last_id = 0
        self._listeners: List[Listener] = []
        self.load()

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #
    @property
    def tasks(self) -> Tuple[Task, ...]:
        return self._tasks

    @property
    def filter(self) -> TaskFilter:
        return self._filter

    def load(self) -> None:
        """Replace the in-memory collection with the stored one."""
        self._tasks = self.store.load()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener for change notifications; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #
    def add(self, text: str) -> Optional[Task]:
        """Prepend a new pending task. Blank text is ignored."""
        cleaned = self._clean(text)
        if not cleaned:
            return None

        task = Task(id=self._next_id(), text=cleaned, created_at=utc_timestamp(self._clock()))
        self._commit((task,) + self._tasks, ChangeKind.ADDED, task)
        return task

    def toggle(self, task_id: TaskId) -> Optional[Task]:
        """Flip the completed flag of a task."""
        index = self._index_of(task_id)
        if index is None:
            self.store.save(self._tasks)
            return None

        current = self._tasks[index]
        updated = replace(current, completed=not current.completed)
        self._commit(self._replace_at(index, updated), ChangeKind.TOGGLED, updated)
        return updated

    def edit(self, task_id: TaskId, new_text: str) -> Optional[Task]:
        """Replace a task's text. Blank or unchanged text leaves everything as is."""
        index = self._index_of(task_id)
        cleaned = self._clean(new_text)
        if index is None or not cleaned or cleaned == self._tasks[index].text:
            return None

        updated = replace(self._tasks[index], text=cleaned)
        self._commit(self._replace_at(index, updated), ChangeKind.EDITED, updated)
        return updated

    def remove(self, task_id: TaskId) -> bool:
        """Delete a task. Returns False when no task had that id."""
        task = self.get(task_id)
        if task is None:
            self.store.save(self._tasks)
            return False

        remaining = tuple(t for t in self._tasks if t.id != task_id)
        self._commit(remaining, ChangeKind.REMOVED, task)
        return True

    def set_filter(self, task_filter: Union[str, TaskFilter]) -> TaskFilter:
        """Change the active filter. Not persisted."""
        self._filter = TaskFilter.parse(task_filter)
        self._notify(TaskChange(ChangeKind.FILTERED, None, self._tasks))
        return self._filter

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def get(self, task_id: TaskId) -> Optional[Task]:
        """Get task by ID."""
        return next((task for task in self._tasks if task.id == task_id), None)

    def list_filtered(self, task_filter: Union[str, TaskFilter, None] = None) -> TaskView:
        """Tasks matching task_filter (the active filter when None), newest first."""
        chosen = self._filter if task_filter is None else TaskFilter.parse(task_filter)
        return TaskView(self._tasks, chosen)

    def stats(self) -> TaskStats:
        total = len(self._tasks)
        completed = sum(1 for task in self._tasks if task.completed)
        return TaskStats(total=total, completed=completed, pending=total - completed)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _clean(self, text: str) -> str:
        return (text or "").strip()[: self.max_text_length].strip()

    def _next_id(self) -> int:
        """Monotonic id, always above every id in the collection."""
        highest = max((int(task.id) for task in self._tasks), default=0)
        self._last_id = max(self._last_id, highest) + 1
        return self._last_id

    def _index_of(self, task_id: TaskId) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _replace_at(self, index: int, task: Task) -> Tuple[Task, ...]:
        return self._tasks[:index] + (task,) + self._tasks[index + 1 :]

    def _commit(self, tasks: Tuple[Task, ...], kind: ChangeKind, task: Task) -> None:
        self._tasks = tasks
        self.store.save(tasks)
        self._notify(TaskChange(kind, task, tasks))

    def _notify(self, change: TaskChange) -> None:
        for listener in list(self._listeners):
            listener(change)
