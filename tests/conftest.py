"""Pytest configuration and fixtures."""

import os
import sys
import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path

# Disable rate limiting and keep the default store away from the home directory
_SESSION_DIR = Path(tempfile.mkdtemp(prefix="todo-tests-"))
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["TODO_DIR"] = str(_SESSION_DIR / "todos")
os.environ["LEGACY_TODO_FILE"] = str(_SESSION_DIR / "todos.json")

import pytest
import structlog
from httpx import ASGITransport, AsyncClient

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.todo import Todo
from domain.services.todo_service import TodoService
from infrastructure.storage.date_store import DateShardedStore, StoreConfig
from infrastructure.storage.json_uow import JsonFileUnitOfWork


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo logging configuration made by the app or the CLI during a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def store_config(tmp_path: Path) -> StoreConfig:
    """Store rooted in a fresh temporary directory."""
    return StoreConfig(directory=tmp_path / "todos", legacy_file=tmp_path / "todos.json")


@pytest.fixture
def store(store_config: StoreConfig) -> DateShardedStore:
    return DateShardedStore(store_config)


@pytest.fixture
def todo_service(store: DateShardedStore) -> TodoService:
    """Service wired to the temporary store."""
    return TodoService(lambda: JsonFileUnitOfWork(store))


@pytest.fixture
def make_todo():
    """Build a Todo with sensible defaults."""

    def _make(name: str = "Task", **fields) -> Todo:
        return Todo(name=name, **fields)

    return _make


@pytest.fixture
async def client(
    store: DateShardedStore, todo_service: TodoService
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create async test client backed by the temporary store.

    Overrides the store and service dependencies so requests never touch
    the configured TODO_DIR.
    """
    from api.v1.dependencies import get_store, get_todo_service
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_todo_service] = lambda: todo_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
