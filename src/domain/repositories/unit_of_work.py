"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.todo_repository import ITodoRepository


class IUnitOfWork(Protocol):
    """One Load-mutate-Save cycle over the whole store."""

    todos: ITodoRepository

    async def commit(self) -> None:
        """Persist the current snapshot."""
        ...

    async def rollback(self) -> None:
        """Discard pending changes."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
