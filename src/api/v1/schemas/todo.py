"""Pydantic schemas for Todo API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}(T.*)?$"


class TodoBase(BaseModel):
    """Base schema for Todo."""

    name: str = Field(..., min_length=1, max_length=500)
    description: str = Field("", max_length=5000)
    project: str = Field("", max_length=200)
    status: str | None = None
    start: str | None = Field(None, description="HH:MM time of day or a date")
    end: str | None = Field(None, description="HH:MM time of day or a date")
    date: str | None = Field(None, pattern=DATE_PATTERN, description="YYYY-MM-DD; defaults to today")


class TodoCreate(TodoBase):
    """Schema for creating a Todo."""

    steps: list[str] | str | None = None


class TodoUpdate(BaseModel):
    """Schema for updating a Todo (all fields optional)."""

    name: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = Field(None, max_length=5000)
    project: str | None = Field(None, max_length=200)
    status: str | None = None
    steps: list[str] | str | None = None
    start: str | None = None
    end: str | None = None
    date: str | None = Field(None, pattern=DATE_PATTERN)

    @field_validator("name", "description", "project")
    @classmethod
    def not_null(cls, value: str | None) -> str:
        """Omit a text field to leave it unchanged; it cannot be set to null."""
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> dict[str, Any]:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TodoResponse(BaseModel):
    """Schema for Todo response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "m3x9k2ab4f7q1z8c0d",
                "name": "Write report",
                "description": "Quarterly numbers",
                "project": "work",
                "status": "pending",
                "steps": ["outline", "draft", "review"],
                "start": "09:00",
                "end": "12:00",
                "date": "2026-01-28",
                "created": "2026-01-28T08:00:00.000000Z",
                "updated": "2026-01-28T08:00:00.000000Z",
            }
        },
    )

    id: str
    name: str
    description: str
    project: str
    status: str | None
    steps: list[str]
    start: str | None
    end: str | None
    date: str | None
    created: str
    updated: str


class TodoListResponse(BaseModel):
    """Schema for list of Todos response."""

    data: list[TodoResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class TodoDetailResponse(BaseModel):
    """Schema for single Todo response."""

    data: TodoResponse


class ProjectGroup(BaseModel):
    """Todos of one project on one date."""

    project: str
    todos: list[TodoResponse]


class AgendaDay(BaseModel):
    """All todos of one date, grouped by project."""

    date: str
    total: int
    projects: list[ProjectGroup]


class AgendaResponse(BaseModel):
    """Schema for the grouped agenda view."""

    data: list[AgendaDay]
    meta: dict[str, Any] = Field(default_factory=dict)
