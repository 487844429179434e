"""todoapp CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import Config
from .state.tasks import TaskFilter, TaskId, parse_task_id
from .state.workspace import Workspace
from .utils.logging_setup import setup_logging


class TaskIdType(click.ParamType):
    """Todo id given on the command line."""

    name = "id"

    def convert(self, value, param, ctx) -> TaskId:
        try:
            return parse_task_id(value)
        except ValueError as exc:
            self.fail(str(exc), param, ctx)


TASK_ID = TaskIdType()


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option(
    "--storage",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Storage file to use instead of the configured one.",
)
@click.pass_context
def main(ctx: click.Context, storage: Optional[Path]) -> None:
    """todoapp - a local todo list."""
    config = Config()
    setup_logging(
        level=str(config.get("general.log_level", "warning")),
        log_file=config.get_path("general.log_file", str(config.global_dir / "todoapp.log")),
    )
    workspace = Workspace(config, storage_path=storage)
    ctx.obj = workspace
    ctx.call_on_close(workspace.close)

    if ctx.invoked_subcommand is None:
        _start_tui(workspace)


def _start_tui(workspace: Workspace) -> None:
    """Helper to launch the Textual TUI."""
    from .interactive import TodoApp

    TodoApp(workspace).run()


@main.command()
@click.pass_obj
def tui(workspace: Workspace) -> None:
    """Start Textual TUI."""
    _start_tui(workspace)


@main.command()
@click.argument("text")
@click.pass_obj
def add(workspace: Workspace, text: str) -> None:
    """Add a todo."""
    task = workspace.task_manager.add(text)
    if task is None:
        raise click.UsageError("Todo text cannot be empty.")
    click.echo(f"Added [{task.id}] {task.text}")


@main.command(name="list")
@click.option(
    "--filter",
    "task_filter",
    type=click.Choice([f.value for f in TaskFilter]),
    default=TaskFilter.ALL.value,
    show_default=True,
)
@click.pass_obj
def list_tasks(workspace: Workspace, task_filter: str) -> None:
    """List todos, newest first."""
    shown = 0
    for task in workspace.task_manager.list_filtered(task_filter):
        mark = "x" if task.completed else " "
        click.echo(f"[{mark}] {task.id}  {task.text}")
        shown += 1
    if not shown:
        click.echo("No todos.")


@main.command()
@click.argument("task_id", type=TASK_ID)
@click.pass_obj
def toggle(workspace: Workspace, task_id: TaskId) -> None:
    """Toggle a todo between pending and completed."""
    task = workspace.task_manager.toggle(task_id)
    if task is None:
        raise click.ClickException(f"No todo with id {task_id}")
    click.echo(f"[{task.id}] is now {'completed' if task.completed else 'pending'}")


@main.command()
@click.argument("task_id", type=TASK_ID)
@click.argument("text")
@click.pass_obj
def edit(workspace: Workspace, task_id: TaskId, text: str) -> None:
    """Replace a todo's text."""
    task = workspace.task_manager.edit(task_id, text)
    if task is None:
        click.echo(f"Todo {task_id} left unchanged")
        return
    click.echo(f"Updated [{task.id}] {task.text}")


@main.command()
@click.argument("task_id", type=TASK_ID)
@click.pass_obj
def remove(workspace: Workspace, task_id: TaskId) -> None:
    """Delete a todo."""
    if not workspace.task_manager.remove(task_id):
        raise click.ClickException(f"No todo with id {task_id}")
    click.echo(f"Deleted [{task_id}]")


@main.command()
@click.pass_obj
def stats(workspace: Workspace) -> None:
    """Show todo counters."""
    counts = workspace.task_manager.stats()
    click.echo(f"Total: {counts.total}  Completed: {counts.completed}  Pending: {counts.pending}")


@main.command()
@click.option("--dark/--light", default=None, help="Set the mode instead of toggling it.")
@click.pass_obj
def theme(workspace: Workspace, dark: Optional[bool]) -> None:
    """Toggle or set dark mode."""
    if dark is None:
        dark = workspace.theme.toggle()
    else:
        workspace.theme.save(dark)
    click.echo(f"Dark mode {'on' if dark else 'off'}")


if __name__ == "__main__":
    main()
