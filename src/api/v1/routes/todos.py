"""Todo API routes."""

from typing import Literal

from fastapi import APIRouter, Depends, Query, Request, status

from api.v1.dependencies import get_todo_service
from api.v1.schemas.todo import (
    AgendaDay,
    AgendaResponse,
    ProjectGroup,
    TodoCreate,
    TodoDetailResponse,
    TodoListResponse,
    TodoResponse,
    TodoUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.todo import Todo
from domain.query import build_agenda, sort_by_created, sort_by_time
from domain.services.todo_service import TodoService

router = APIRouter(prefix="/todos", tags=["todos"])


@router.get(
    "",
    response_model=TodoListResponse,
    summary="List tasks",
    responses={
        200: {"description": "Flat list of tasks"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_todos(
    request: Request,
    service: TodoService = Depends(get_todo_service),
    project: str | None = Query(None, description="Only tasks in this project"),
    status_: str | None = Query(None, alias="status", description="Only tasks with this status"),
    date: str | None = Query(None, description="Only tasks scheduled on this YYYY-MM-DD date"),
    sort: Literal["time", "created"] = Query("time", description="Order by time of day or creation"),
    newest_first: bool = Query(False, description="Creation-time direction"),
) -> TodoListResponse:
    """
    Get all tasks as a flat list.

    `sort=time` orders by start time, then end time, then creation time;
    `sort=created` orders by creation time only.
    """
    todos = await service.list_todos(project=project, status=status_, date=date)
    if sort == "created":
        todos = sort_by_created(todos, newest_first=newest_first)
    else:
        todos = sort_by_time(todos, newest_first=newest_first)

    return TodoListResponse(
        data=[_build_todo_response(t) for t in todos],
        meta={
            "total": len(todos),
            "done": len([t for t in todos if t.is_done]),
        },
    )


@router.get(
    "/agenda",
    response_model=AgendaResponse,
    summary="Tasks grouped by date and project",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_agenda(
    request: Request,
    service: TodoService = Depends(get_todo_service),
    project: str | None = Query(None, description="Only tasks in this project"),
    status_: str | None = Query(None, alias="status", description="Only tasks with this status"),
    newest_first: bool = Query(False, description="Latest dates first"),
) -> AgendaResponse:
    """Get tasks grouped by date, then by project, each group sorted by time."""
    todos = await service.list_todos(project=project, status=status_)
    days = [
        AgendaDay(
            date=key,
            total=sum(len(group) for _, group in projects),
            projects=[
                ProjectGroup(project=name, todos=[_build_todo_response(t) for t in group])
                for name, group in projects
            ],
        )
        for key, projects in build_agenda(todos, newest_first=newest_first)
    ]
    return AgendaResponse(data=days, meta={"total": len(todos), "days": len(days)})


@router.get(
    "/{todo_id}",
    response_model=TodoDetailResponse,
    summary="Get a task",
    responses={
        200: {"description": "Task details"},
        404: {"description": "Task not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_todo(
    request: Request,
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
) -> TodoDetailResponse:
    """Get a specific task by ID."""
    todo = await service.get_by_id(todo_id)
    return TodoDetailResponse(data=_build_todo_response(todo))


@router.post(
    "",
    response_model=TodoDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
    responses={
        201: {"description": "Task created successfully"},
        422: {"description": "Validation error"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_todo(
    request: Request,
    body: TodoCreate,
    service: TodoService = Depends(get_todo_service),
) -> TodoDetailResponse:
    """
    Create a new task.

    `date` defaults to today. `steps` may be a list or a single string.
    """
    todo = await service.create(
        name=body.name,
        description=body.description,
        project=body.project,
        start=body.start,
        end=body.end,
        date=body.date,
        status=body.status,
        steps=body.steps,
    )
    return TodoDetailResponse(data=_build_todo_response(todo))


@router.patch(
    "/{todo_id}",
    response_model=TodoDetailResponse,
    summary="Update a task",
    responses={
        200: {"description": "Task updated successfully"},
        404: {"description": "Task not found"},
        422: {"description": "Validation error"},
    },
)
@router.put("/{todo_id}", response_model=TodoDetailResponse, include_in_schema=False)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_todo(
    request: Request,
    todo_id: str,
    body: TodoUpdate,
    service: TodoService = Depends(get_todo_service),
) -> TodoDetailResponse:
    """
    Update an existing task. All fields are optional (partial update).

    Changing `date` moves the task to that day.
    """
    todo = await service.update(todo_id, body.changes())
    return TodoDetailResponse(data=_build_todo_response(todo))


@router.post(
    "/{todo_id}/complete",
    response_model=TodoDetailResponse,
    summary="Mark a task as completed",
    responses={
        200: {"description": "Task completed"},
        404: {"description": "Task not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def complete_todo(
    request: Request,
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
) -> TodoDetailResponse:
    """Set the task's status to `completed`."""
    todo = await service.complete(todo_id)
    return TodoDetailResponse(data=_build_todo_response(todo))


@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
    responses={
        204: {"description": "Task deleted successfully"},
        404: {"description": "Task not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_todo(
    request: Request,
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
) -> None:
    """Delete a task."""
    await service.delete(todo_id)
    return None


def _build_todo_response(todo: Todo) -> TodoResponse:
    """Convert domain entity to response schema."""
    return TodoResponse(
        id=todo.id,
        name=todo.name,
        description=todo.description,
        project=todo.project,
        status=todo.status,
        steps=list(todo.steps),
        start=todo.start,
        end=todo.end,
        date=todo.date,
        created=todo.created,
        updated=todo.updated,
    )
