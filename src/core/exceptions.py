"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API and CLI."""

    # Not found errors (404)
    TASK_NOT_FOUND = "TASK_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"
    GIT_ERROR = "GIT_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class TodoNotFoundError(AppException):
    """Todo not found."""

    def __init__(self, todo_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TASK_NOT_FOUND,
            message=f"Task not found: {todo_id}",
            status_code=404,
            details={"todo_id": todo_id},
        )


class ValidationError(AppException):
    """Input rejected by the service layer."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details={"field": field} if field else None,
        )


class StorageError(AppException):
    """Writing the todo directory failed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.STORAGE_ERROR,
            message=f"Failed to write {path}: {reason}",
            status_code=500,
            details={"path": path},
        )


class GitError(AppException):
    """A git command run by the CLI failed."""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.GIT_ERROR,
            message=f"git {command} failed: {reason}",
            status_code=500,
            details={"command": command},
        )
