"""Todo repository protocol."""

from typing import Protocol

from domain.entities.todo import Todo


class ITodoRepository(Protocol):
    """Repository interface for Todo entities."""

    async def get(self, id: str) -> Todo | None:
        """Get a todo by ID."""
        ...

    async def list_all(self) -> list[Todo]:
        """Get every todo in the store (flat list, load order)."""
        ...

    async def add(self, todo: Todo) -> Todo:
        """Add a new todo."""
        ...

    async def update(self, todo: Todo) -> Todo:
        """Replace an existing todo."""
        ...

    async def delete(self, id: str) -> bool:
        """Delete a todo and return success status."""
        ...
