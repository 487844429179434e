import json

import pytest

from todoapp.state.store import TaskStore
from todoapp.state.tasks import ChangeKind, TaskFilter, TaskManager, TaskStats, parse_task_id


def texts(view) -> list:
    return [task.text for task in view]


def test_scenario_add_toggle_filter_stats(manager: TaskManager) -> None:
    milk = manager.add("buy milk")
    manager.add("walk dog")

    assert texts(manager.tasks) == ["walk dog", "buy milk"]

    manager.toggle(milk.id)

    assert texts(manager.list_filtered("completed")) == ["buy milk"]
    assert texts(manager.list_filtered("pending")) == ["walk dog"]
    assert manager.stats() == TaskStats(total=2, completed=1, pending=1)
    assert manager.stats().to_dict() == {"total": 2, "completed": 1, "pending": 1}


def test_adds_are_unique_and_newest_first(manager: TaskManager) -> None:
    added = [manager.add(f"task {i}") for i in range(25)]

    assert len(manager.tasks) == 25
    assert len({task.id for task in manager.tasks}) == 25
    assert [task.id for task in manager.tasks] == [task.id for task in reversed(added)]


def test_new_task_defaults(manager: TaskManager) -> None:
    task = manager.add("  buy milk  ")

    assert task.text == "buy milk"
    assert task.completed is False
    assert task.created_at == "2024-05-01T09:30:00.123Z"


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_blank_add_is_ignored(manager: TaskManager, storage, text: str) -> None:
    manager.add("keep me")
    writes = storage.writes

    assert manager.add(text) is None
    assert texts(manager.tasks) == ["keep me"]
    assert storage.writes == writes


def test_add_truncates_long_text(manager: TaskManager) -> None:
    task = manager.add("x" * 150)
    assert len(task.text) == 100


def test_toggle_twice_restores_state(manager: TaskManager) -> None:
    task = manager.add("buy milk")

    assert manager.toggle(task.id).completed is True
    assert manager.toggle(task.id).completed is False
    assert manager.get(task.id).completed is False


def test_toggle_unknown_id_saves_without_change(manager: TaskManager, storage) -> None:
    manager.add("buy milk")
    before = manager.tasks
    writes = storage.writes

    assert manager.toggle(999) is None
    assert manager.tasks == before
    assert storage.writes == writes + 1


def test_edit_replaces_text_only(manager: TaskManager) -> None:
    task = manager.add("buy milk")
    manager.toggle(task.id)

    edited = manager.edit(task.id, "  buy oat milk ")

    assert edited.text == "buy oat milk"
    assert edited.id == task.id
    assert edited.completed is True
    assert edited.created_at == task.created_at


@pytest.mark.parametrize("new_text", ["buy milk", "  buy milk ", "", "   "])
def test_edit_without_change_is_a_no_op(manager: TaskManager, storage, new_text: str) -> None:
    task = manager.add("buy milk")
    writes = storage.writes
    events = []
    manager.subscribe(events.append)

    assert manager.edit(task.id, new_text) is None
    assert manager.get(task.id).text == "buy milk"
    assert storage.writes == writes
    assert events == []


def test_edit_unknown_id(manager: TaskManager, storage) -> None:
    writes = storage.writes
    assert manager.edit(42, "anything") is None
    assert storage.writes == writes


def test_remove_is_idempotent(manager: TaskManager) -> None:
    milk = manager.add("buy milk")
    manager.add("walk dog")

    assert manager.remove(milk.id) is True
    assert manager.remove(milk.id) is False
    assert texts(manager.tasks) == ["walk dog"]


def test_mutations_do_not_touch_previous_snapshots(manager: TaskManager) -> None:
    task = manager.add("buy milk")
    snapshot = manager.tasks

    manager.toggle(task.id)
    manager.edit(task.id, "buy bread")

    assert snapshot[0].completed is False
    assert snapshot[0].text == "buy milk"


def test_filtered_view_is_lazy_and_restartable(manager: TaskManager) -> None:
    manager.add("a")
    b = manager.add("b")
    manager.toggle(b.id)

    view = manager.list_filtered(TaskFilter.PENDING)

    assert texts(view) == ["a"]
    assert texts(view) == ["a"]
    iterator = iter(view)
    assert next(iterator).text == "a"
    with pytest.raises(StopIteration):
        next(iterator)


def test_filtered_view_keeps_its_snapshot(manager: TaskManager) -> None:
    manager.add("a")
    view = manager.list_filtered()

    manager.add("b")

    assert texts(view) == ["a"]
    assert texts(manager.list_filtered()) == ["b", "a"]


def test_active_filter_is_used_by_default(manager: TaskManager) -> None:
    a = manager.add("a")
    manager.add("b")
    manager.toggle(a.id)

    assert manager.filter is TaskFilter.ALL
    manager.set_filter("completed")

    assert texts(manager.list_filtered()) == ["a"]
    assert texts(manager.list_filtered("all")) == ["b", "a"]


def test_unknown_filter_is_rejected(manager: TaskManager) -> None:
    with pytest.raises(ValueError):
        manager.list_filtered("done")
    with pytest.raises(ValueError):
        manager.set_filter("archived")
    assert manager.filter is TaskFilter.ALL


def test_subscribers_receive_changes(manager: TaskManager) -> None:
    events = []
    unsubscribe = manager.subscribe(events.append)

    task = manager.add("buy milk")
    manager.toggle(task.id)
    manager.edit(task.id, "buy bread")
    manager.set_filter("pending")
    manager.remove(task.id)
    manager.toggle(task.id)
    manager.remove(task.id)

    assert [e.kind for e in events] == [
        ChangeKind.ADDED,
        ChangeKind.TOGGLED,
        ChangeKind.EDITED,
        ChangeKind.FILTERED,
        ChangeKind.REMOVED,
    ]
    assert events[0].task == task
    assert events[-1].tasks == ()

    unsubscribe()
    manager.add("ignored")
    assert len(events) == 5


def test_filter_is_not_persisted(manager: TaskManager, storage) -> None:
    manager.add("buy milk")
    writes = storage.writes

    manager.set_filter("completed")

    assert storage.writes == writes
    assert TaskManager(TaskStore(storage)).filter is TaskFilter.ALL


def test_state_survives_restart(manager: TaskManager, storage) -> None:
    milk = manager.add("buy milk")
    manager.add("walk dog")
    manager.toggle(milk.id)

    restored = TaskManager(TaskStore(storage))

    assert restored.tasks == manager.tasks
    assert restored.add("third").id not in {milk.id}
    assert len({t.id for t in restored.tasks}) == 3


def test_ids_continue_after_legacy_fractional_ids(storage) -> None:
    legacy = [
        {"id": 1714555800123.4567, "text": "old", "completed": False, "createdAt": "2024-05-01T09:30:00.123Z"},
    ]
    storage.set_item("todoApp_todos", json.dumps(legacy))
    manager = TaskManager(TaskStore(storage))

    task = manager.add("new")

    assert task.id == 1714555800124
    assert manager.toggle(1714555800123.4567).completed is True


def test_ids_never_reused_within_session(manager: TaskManager) -> None:
    first = manager.add("a")
    manager.remove(first.id)

    second = manager.add("b")

    assert second.id != first.id


def test_parse_task_id() -> None:
    assert parse_task_id("12") == 12
    assert parse_task_id(" 1.5 ") == 1.5
    with pytest.raises(ValueError):
        parse_task_id("abc")
