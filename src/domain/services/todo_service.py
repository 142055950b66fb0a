"""Todo service layer with business logic."""

from collections.abc import Callable, Mapping
from typing import Any

import structlog

from core.exceptions import TodoNotFoundError, ValidationError
from domain.entities.todo import Todo, TodoStatus, date_key_of, normalize_steps, today_key
from domain.query import filter_by_date, filter_by_project, filter_by_status
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class TodoService:
    """Service layer for Todo business logic.

    Every call opens its own unit of work, so every call sees the store as
    it is on disk right now.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_todos(
        self,
        project: str | None = None,
        status: str | None = None,
        date: str | None = None,
    ) -> list[Todo]:
        """Get all todos, optionally filtered by project, status and date key."""
        async with self._uow_factory() as uow:
            todos = await uow.todos.list_all()
        if project:
            todos = filter_by_project(todos, project)
        if status:
            todos = filter_by_status(todos, status)
        if date:
            todos = filter_by_date(todos, date)
        return todos

    async def get_by_id(self, todo_id: str) -> Todo:
        """Get a specific todo."""
        async with self._uow_factory() as uow:
            todo = await uow.todos.get(todo_id)
        if not todo:
            raise TodoNotFoundError(todo_id)
        return todo

    async def create(
        self,
        name: str,
        description: str = "",
        project: str = "",
        start: str | None = None,
        end: str | None = None,
        date: str | None = None,
        status: str | None = None,
        steps: Any = None,
    ) -> Todo:
        """Create a new todo scheduled for `date` (today when omitted)."""
        fields = _clean_changes(
            {
                "name": name,
                "description": description,
                "project": project,
                "start": start,
                "end": end,
                "date": date,
                "status": status,
            }
        )
        fields["date"] = fields["date"] or today_key()
        todo = Todo(**fields, steps=normalize_steps(steps))

        async with self._uow_factory() as uow:
            created = await uow.todos.add(todo)
            await uow.commit()

        logger.info("todo_created", todo_id=created.id, date=created.date_key)
        return created

    async def update(self, todo_id: str, changes: Mapping[str, Any]) -> Todo:
        """Merge `changes` over an existing todo.

        `id` and `created` are ignored; `updated` is always re-stamped. A
        changed `date` moves the todo to that date's file on save.
        Invalid values raise ValidationError before anything is written.
        """
        cleaned = _clean_changes(changes)
        async with self._uow_factory() as uow:
            todo = await uow.todos.get(todo_id)
            if not todo:
                raise TodoNotFoundError(todo_id)

            old_key = todo.date_key
            todo.apply(cleaned)
            await uow.todos.update(todo)
            await uow.commit()

        logger.info(
            "todo_updated",
            todo_id=todo_id,
            fields=sorted(changes),
            moved=old_key != todo.date_key,
        )
        return todo

    async def complete(self, todo_id: str) -> Todo:
        """Mark a todo as completed."""
        return await self.update(todo_id, {"status": TodoStatus.COMPLETED.value})

    async def delete(self, todo_id: str) -> None:
        """Delete a todo."""
        async with self._uow_factory() as uow:
            deleted = await uow.todos.delete(todo_id)
            if not deleted:
                raise TodoNotFoundError(todo_id)
            await uow.commit()

        logger.info("todo_deleted", todo_id=todo_id)


def _clean_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Validate record fields and normalize empty values.

    `name` must be non-blank, `date` must be a real YYYY-MM-DD date (with an
    optional time part), text fields are never null and empty optional
    fields are stored as null.
    """
    cleaned = dict(changes)
    if "name" in cleaned:
        name = cleaned["name"]
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Task name is required", field="name")
    for key in ("description", "project"):
        if key in cleaned and cleaned[key] is None:
            cleaned[key] = ""
    for key in ("start", "end", "status", "date"):
        if key in cleaned and not cleaned[key]:
            cleaned[key] = None
    date = cleaned.get("date")
    if date is not None and (not isinstance(date, str) or date_key_of(date) is None):
        raise ValidationError(f"Invalid date {date!r}, expected YYYY-MM-DD", field="date")
    return cleaned
