"""`todo` command-line tool.

Every command is one Load-mutate-Save cycle through TodoService, against
the same date-sharded directory the API server uses.
"""

import asyncio
import sys
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar

import click
from rich.console import Console
from rich.markup import escape

from cli.git import GitRepo
from cli.render import render_day, render_listing
from core.config import settings
from core.exceptions import AppException
from core.logging import setup_logging
from domain.services.todo_service import TodoService
from infrastructure.storage.date_store import DateShardedStore, StoreConfig
from infrastructure.storage.json_uow import JsonFileUnitOfWork

T = TypeVar("T")

console = Console(highlight=False, emoji=False, soft_wrap=True)


@dataclass
class CliState:
    service: TodoService
    git: GitRepo


def _split_steps(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [s.strip() for s in value.split(",") if s.strip()]


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a service call, turning application errors into exit status 1."""
    try:
        return asyncio.run(coro)
    except AppException as e:
        console.print(f"[bold red]❌ {escape(e.message)}[/bold red]")
        sys.exit(1)


@click.group()
@click.version_option(version="1.0.0")
@click.option(
    "--dir",
    "todo_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Todo directory (defaults to TODO_DIR).",
)
@click.option("-v", "--verbose", is_flag=True, help="Show log output.")
@click.pass_context
def cli(ctx: click.Context, todo_dir: Path | None, verbose: bool) -> None:
    """📝 Personal todo list stored as one JSON file per date."""
    setup_logging(level="DEBUG" if verbose else "WARNING")

    if todo_dir is None:
        config = StoreConfig(directory=settings.todo_dir, legacy_file=settings.legacy_todo_file)
        work_tree = settings.git_dir
    else:
        config = StoreConfig(directory=todo_dir, legacy_file=todo_dir.parent / "todos.json")
        work_tree = todo_dir.parent

    store = DateShardedStore(config)
    ctx.obj = CliState(
        service=TodoService(lambda: JsonFileUnitOfWork(store)),
        git=GitRepo(work_tree=work_tree, todo_dir=config.directory),
    )


@cli.command("list")
@click.option("--project", default=None, help="Only this project.")
@click.option("--status", default=None, help="Only this status.")
@click.option("--date", "date_key", default=None, help="Only this YYYY-MM-DD date, sorted by time.")
@click.pass_obj
def list_cmd(state: CliState, project: str | None, status: str | None, date_key: str | None) -> None:
    """Show todos grouped by date and project."""
    todos = _run(state.service.list_todos(project=project, status=status, date=date_key))
    if date_key:
        render_day(console, date_key, todos)
    else:
        render_listing(console, todos)


cli.add_command(list_cmd, name="ls")


@cli.command()
@click.argument("name")
@click.argument("description", required=False, default="")
@click.option("--project", default="", help="Project name.")
@click.option("--start", default=None, help="Start time (HH:MM) or date.")
@click.option("--end", default=None, help="End time (HH:MM) or date.")
@click.option("--date", "date_key", default=None, help="Scheduled date (YYYY-MM-DD), default today.")
@click.option("--status", default=None, help="Status, e.g. pending, in_progress.")
@click.option("--steps", default=None, help="Comma-separated steps.")
@click.pass_obj
def add(
    state: CliState,
    name: str,
    description: str,
    project: str,
    start: str | None,
    end: str | None,
    date_key: str | None,
    status: str | None,
    steps: str | None,
) -> None:
    """Add a todo."""
    todo = _run(
        state.service.create(
            name=name,
            description=description,
            project=project,
            start=start,
            end=end,
            date=date_key,
            status=status,
            steps=_split_steps(steps),
        )
    )
    console.print(f"✅ Added: {escape(todo.name)} [dim](ID: {todo.id}, {todo.date_key})[/dim]")


@cli.command()
@click.argument("todo_id")
@click.option("--name", default=None, help="New name.")
@click.option("--desc", "description", default=None, help="New description.")
@click.option("--project", default=None, help="New project.")
@click.option("--steps", default=None, help="New comma-separated steps.")
@click.option("--status", default=None, help="New status.")
@click.option("--start", default=None, help="New start time or date.")
@click.option("--end", default=None, help="New end time or date.")
@click.option("--date", "date_key", default=None, help="New scheduled date (moves the todo).")
@click.pass_obj
def update(state: CliState, todo_id: str, **options: Any) -> None:
    """Update fields of a todo."""
    changes = {k: v for k, v in options.items() if v is not None}
    if "date_key" in changes:
        changes["date"] = changes.pop("date_key")
    if "steps" in changes:
        changes["steps"] = _split_steps(changes["steps"])
    if not changes:
        console.print("[yellow]Nothing to update.[/yellow]")
        return
    todo = _run(state.service.update(todo_id, changes))
    console.print(f"✅ Updated: {escape(todo.name)}")


@cli.command()
@click.argument("todo_id")
@click.pass_obj
def done(state: CliState, todo_id: str) -> None:
    """Mark a todo as completed."""
    todo = _run(state.service.complete(todo_id))
    console.print(f"✅ Completed: {escape(todo.name)}")


@cli.command()
@click.argument("todo_id")
@click.pass_obj
def remove(state: CliState, todo_id: str) -> None:
    """Delete a todo."""
    _run(state.service.delete(todo_id))
    console.print("✅ Deleted")


cli.add_command(remove, name="rm")


def _git(action: Callable[[], T]) -> T:
    try:
        return action()
    except AppException as e:
        console.print(f"[bold red]❌ {escape(e.message)}[/bold red]")
        sys.exit(1)


@cli.command()
@click.argument("message", required=False, default="Update todos")
@click.pass_obj
def commit(state: CliState, message: str) -> None:
    """Commit the todo directory to git."""
    if _git(lambda: state.git.commit(message)):
        console.print("✅ Committed to git")
    else:
        console.print("Nothing to commit")


@cli.command()
@click.pass_obj
def push(state: CliState) -> None:
    """Push to the remote repository."""
    _git(state.git.push)
    console.print("✅ Pushed to remote")


@cli.command()
@click.pass_obj
def pull(state: CliState) -> None:
    """Pull from the remote repository."""
    _git(state.git.pull)
    console.print("✅ Pulled from remote")


@cli.command()
@click.pass_context
def sync(ctx: click.Context) -> None:
    """Pull, commit and push."""
    ctx.invoke(pull)
    ctx.invoke(commit, message="Update todos")
    ctx.invoke(push)


def main() -> None:
    cli(prog_name="todo")


if __name__ == "__main__":
    main()
