"""JSON file Unit of Work: one Load-mutate-Save cycle."""

from typing import Any, Optional

from infrastructure.storage.date_store import DateShardedStore
from infrastructure.storage.json_todo_repo import JsonTodoRepository


class JsonFileUnitOfWork:
    """Unit of Work implementation over a DateShardedStore.

    Entering loads the whole store; `commit()` saves the whole store.
    Leaving without a commit writes nothing.
    """

    def __init__(self, store: DateShardedStore) -> None:
        self._store = store
        self._todos: Optional[JsonTodoRepository] = None

    @property
    def todos(self) -> JsonTodoRepository:
        """Get todo repository."""
        if self._todos is None:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._todos

    async def commit(self) -> None:
        """Write the current snapshot back to disk."""
        if self._todos is not None:
            self._store.save(self._todos.snapshot())

    async def rollback(self) -> None:
        """Discard pending changes by reloading from disk."""
        if self._todos is not None:
            self._todos = JsonTodoRepository(self._store.load())

    async def __aenter__(self) -> "JsonFileUnitOfWork":
        """Enter the context manager and load the store."""
        self._todos = JsonTodoRepository(self._store.load())
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and drop the snapshot."""
        self._todos = None
