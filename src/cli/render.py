"""Markdown-style rendering of todo listings for the terminal."""

from collections.abc import Iterable
from datetime import date, timedelta

from rich.console import Console
from rich.markup import escape

from domain.entities.todo import Todo, is_time_of_day, today_key
from domain.query import group_by_date, group_by_project, sort_by_created, sort_by_time, sorted_date_keys

DONE_ICON = "✅"
OPEN_ICON = "⏳"
TIME_ICON = "🕐"
DATE_ICON = "📅"


def _format_date(value: str) -> str:
    """YYYY-MM-DD for anything that starts with a date, else the raw value."""
    try:
        return date.fromisoformat(value[:10]).isoformat()
    except ValueError:
        return value


def date_heading(key: str) -> str:
    """Long date heading, with Today/Tomorrow/Yesterday for nearby dates."""
    try:
        day = date.fromisoformat(key)
    except ValueError:
        return key
    today = date.fromisoformat(today_key())
    relative = {
        today: "Today",
        today + timedelta(days=1): "Tomorrow",
        today - timedelta(days=1): "Yesterday",
    }.get(day)
    label = day.strftime("%A, %B %d, %Y").replace(" 0", " ")
    if relative:
        return f"{relative}, {label} ({key})"
    return f"{label} ({key})"


def time_display(todo: Todo) -> str:
    if todo.start and todo.end:
        if is_time_of_day(todo.start) and is_time_of_day(todo.end):
            return f"{TIME_ICON} {todo.start} - {todo.end}"
        return f"{DATE_ICON} {_format_date(todo.start)} {DATE_ICON} {_format_date(todo.end)}"
    for value, prefix in ((todo.start, ""), (todo.end, "until ")):
        if value:
            if is_time_of_day(value):
                return f"{TIME_ICON} {prefix}{value}"
            return f"{DATE_ICON} {prefix}{_format_date(value)}"
    return ""


def render_todo(console: Console, index: int, todo: Todo) -> None:
    icon = DONE_ICON if todo.is_done else OPEN_ICON
    console.print(f"{index}. {icon} [bold]{escape(todo.name)}[/bold]")
    if todo.description:
        console.print(f"   {escape(todo.description)}")
    if todo.steps:
        console.print("   - Steps:")
        for step in todo.steps:
            console.print(f"     - {escape(step)}")
    meta = [part for part in (time_display(todo), f"ID: {todo.id}") if part]
    console.print(f"   [dim]{escape(' | '.join(meta))}[/dim]")
    console.print()


def render_listing(console: Console, todos: Iterable[Todo]) -> None:
    """All dates, newest first; projects alphabetical; newest-created first."""
    todos = list(todos)
    if not todos:
        console.print("📝 No todos yet")
        return

    console.print("\n[bold]# 📋 Todo list[/bold]\n")
    by_date = group_by_date(todos)
    for key in sorted_date_keys(by_date, newest_first=True):
        console.print(f"[bold cyan]## {escape(date_heading(key))}[/bold cyan]\n")
        projects = group_by_project(by_date[key])
        for project in sorted(projects):
            console.print(f"[bold]### {escape(project)}[/bold]\n")
            for index, todo in enumerate(sort_by_created(projects[project], newest_first=True), 1):
                render_todo(console, index, todo)
        console.print("---\n")


def render_day(console: Console, key: str, todos: Iterable[Todo]) -> None:
    """One day in time-of-day order, oldest-created first for untimed tasks."""
    todos = sort_by_time(todos, newest_first=False)
    console.print(f"\n[bold cyan]## {escape(date_heading(key))}[/bold cyan]  [dim]{len(todos)} task(s)[/dim]\n")
    if not todos:
        console.print("📝 Nothing scheduled for this date")
        return
    for index, todo in enumerate(todos, 1):
        render_todo(console, index, todo)
