"""In-memory Todo repository over one loaded snapshot of the store."""

from collections.abc import Iterable

from domain.entities.todo import Todo


class JsonTodoRepository:
    """ITodoRepository backed by a dict built from one `DateShardedStore.load()`.

    The index only lives as long as the unit of work that created it.
    """

    def __init__(self, todos: Iterable[Todo]) -> None:
        self._todos: dict[str, Todo] = {}
        for todo in todos:
            self._todos[todo.id] = todo

    async def get(self, id: str) -> Todo | None:
        """Get a todo by ID."""
        return self._todos.get(id)

    async def list_all(self) -> list[Todo]:
        """Get every todo in load order."""
        return list(self._todos.values())

    async def add(self, todo: Todo) -> Todo:
        """Add a new todo."""
        if todo.id in self._todos:
            raise ValueError(f"Todo {todo.id} already exists")
        self._todos[todo.id] = todo
        return todo

    async def update(self, todo: Todo) -> Todo:
        """Replace an existing todo in place, keeping its position."""
        if todo.id not in self._todos:
            raise ValueError(f"Todo {todo.id} not found")
        self._todos[todo.id] = todo
        return todo

    async def delete(self, id: str) -> bool:
        """Delete a todo and return success status."""
        return self._todos.pop(id, None) is not None

    def snapshot(self) -> list[Todo]:
        return list(self._todos.values())
