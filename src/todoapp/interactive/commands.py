"""Command handlers for interactive mode."""

from __future__ import annotations

from typing import Callable, Dict

from rich.markup import escape

from ..state.tasks import TaskFilter, TaskManager, parse_task_id


class CommandHandler:
    """Routes text typed in the top bar.

    Plain text becomes a new todo; ``/name args`` runs a command.
    """

    def __init__(self, task_manager: TaskManager, app):
        self.task_manager = task_manager
        self.app = app

        self.commands: Dict[str, Callable] = {
            "/help": self.cmd_help,
            "/done": self.cmd_toggle,
            "/toggle": self.cmd_toggle,
            "/edit": self.cmd_edit,
            "/delete": self.cmd_delete,
            "/filter": self.cmd_filter,
            "/stats": self.cmd_stats,
            "/theme": self.cmd_theme,
            "/exit": self.cmd_exit,
        }

    async def handle(self, command: str) -> None:
        if command.startswith("/"):
            parts = command.split(maxsplit=1)
            cmd = parts[0]
            args = parts[1] if len(parts) > 1 else ""

            handler = self.commands.get(cmd)
            if handler:
                await handler(args)
            else:
                self.app.output_panel.write_error(f"Unknown command: {escape(cmd)}")
                self.app.output_panel.write_line("Type /help for available commands")
        else:
            await self.cmd_add(command)

    async def cmd_help(self, args: str) -> None:
        help_text = """
Type any text (without /) to add a todo.

Todos:
  /done <id>          Toggle completed
  /edit <id> <text>   Replace a todo's text
  /delete <id>        Delete a todo
  /filter <name>      Show all, pending or completed
  /stats              Show counters

Other:
  /theme              Switch light/dark mode
  /help               Show this help
  /exit               Quit

Keys: space toggle, e edit, d delete, 1/2/3 filters, ctrl+t theme
"""
        self.app.output_panel.write_section("Help", escape(help_text))

    async def cmd_add(self, args: str) -> None:
        task = self.task_manager.add(args)
        if task is None:
            self.app.output_panel.write_warning("Nothing to add")
            return
        self.app.output_panel.write_success(f"Added [{task.id}] {escape(task.text)}")

    async def cmd_toggle(self, args: str) -> None:
        task_id = self._parse_id(args)
        if task_id is None:
            return
        task = self.task_manager.toggle(task_id)
        if task is None:
            self.app.output_panel.write_warning(f"No todo with id {task_id}")
            return
        state = "completed" if task.completed else "pending"
        self.app.output_panel.write_success(f"[{task.id}] is now {state}")

    async def cmd_edit(self, args: str) -> None:
        parts = args.split(maxsplit=1)
        if len(parts) < 2:
            self.app.output_panel.write_error("Usage: /edit <id> <text>")
            return
        task_id = self._parse_id(parts[0])
        if task_id is None:
            return
        task = self.task_manager.edit(task_id, parts[1])
        if task is None:
            self.app.output_panel.write_warning(f"Todo {task_id} left unchanged")
            return
        self.app.output_panel.write_success(f"Updated [{task.id}] {escape(task.text)}")

    async def cmd_delete(self, args: str) -> None:
        task_id = self._parse_id(args)
        if task_id is None:
            return
        if self.task_manager.remove(task_id):
            self.app.output_panel.write_success(f"Deleted [{task_id}]")
        else:
            self.app.output_panel.write_warning(f"No todo with id {task_id}")

    async def cmd_filter(self, args: str) -> None:
        try:
            task_filter = self.task_manager.set_filter(args or TaskFilter.ALL)
        except ValueError as exc:
            self.app.output_panel.write_error(escape(str(exc)))
            return
        self.app.output_panel.write_line(f"Showing {task_filter.value} todos")

    async def cmd_stats(self, args: str) -> None:
        stats = self.task_manager.stats()
        self.app.output_panel.write_line(
            f"Total: {stats.total} | Completed: {stats.completed} | Pending: {stats.pending}"
        )

    async def cmd_theme(self, args: str) -> None:
        self.app.action_toggle_theme()

    async def cmd_exit(self, args: str) -> None:
        self.app.exit()

    def _parse_id(self, raw: str):
        if not raw.strip():
            self.app.output_panel.write_error("A todo id is required")
            return None
        try:
            return parse_task_id(raw)
        except ValueError as exc:
            self.app.output_panel.write_error(escape(str(exc)))
            return None
