import asyncio
from types import SimpleNamespace

import pytest

from todoapp.interactive.commands import CommandHandler
from todoapp.state.tasks import TaskFilter, TaskManager


class FakeOutputPanel:
    def __init__(self) -> None:
        self.lines = []

    def write_line(self, text: str, style=None) -> None:
        self.lines.append(("line", text))

    def write_section(self, title: str, content: str) -> None:
        self.lines.append(("section", title))

    def write_error(self, error: str) -> None:
        self.lines.append(("error", error))

    def write_success(self, message: str) -> None:
        self.lines.append(("success", message))

    def write_warning(self, message: str) -> None:
        self.lines.append(("warning", message))

    def kinds(self) -> list:
        return [kind for kind, _ in self.lines]


@pytest.fixture()
def app():
    calls = {"theme": 0, "exit": 0}

    def toggle_theme():
        calls["theme"] += 1

    def exit_app():
        calls["exit"] += 1

    return SimpleNamespace(
        output_panel=FakeOutputPanel(),
        action_toggle_theme=toggle_theme,
        exit=exit_app,
        calls=calls,
    )


def run(handler: CommandHandler, command: str) -> None:
    asyncio.run(handler.handle(command))


def test_plain_text_adds_a_todo(manager: TaskManager, app) -> None:
    handler = CommandHandler(manager, app)

    run(handler, "buy milk")

    assert [t.text for t in manager.tasks] == ["buy milk"]
    assert app.output_panel.kinds() == ["success"]


def test_toggle_edit_delete_by_id(manager: TaskManager, app) -> None:
    handler = CommandHandler(manager, app)
    task = manager.add("buy milk")

    run(handler, f"/done {task.id}")
    assert manager.get(task.id).completed is True

    run(handler, f"/edit {task.id} buy oat milk")
    assert manager.get(task.id).text == "buy oat milk"

    run(handler, f"/delete {task.id}")
    assert manager.tasks == ()
    assert app.output_panel.kinds() == ["success", "success", "success"]


def test_bad_ids_are_reported(manager: TaskManager, app) -> None:
    handler = CommandHandler(manager, app)

    run(handler, "/done abc")
    run(handler, "/delete")
    run(handler, "/done 99")
    run(handler, "/edit 1")

    assert app.output_panel.kinds() == ["error", "error", "warning", "error"]


def test_filter_and_stats(manager: TaskManager, app) -> None:
    handler = CommandHandler(manager, app)
    manager.add("a")

    run(handler, "/filter pending")
    assert manager.filter is TaskFilter.PENDING

    run(handler, "/filter nonsense")
    assert manager.filter is TaskFilter.PENDING

    run(handler, "/stats")
    assert app.output_panel.lines[-1] == ("line", "Total: 1 | Completed: 0 | Pending: 1")
    assert app.output_panel.kinds() == ["line", "error", "line"]


def test_theme_exit_help_and_unknown(manager: TaskManager, app) -> None:
    handler = CommandHandler(manager, app)

    run(handler, "/theme")
    run(handler, "/exit")
    run(handler, "/help")
    run(handler, "/nope")

    assert app.calls == {"theme": 1, "exit": 1}
    assert app.output_panel.kinds() == ["section", "error", "line"]
    assert "Unknown command" in app.output_panel.lines[1][1]
