"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.todo_service import TodoService
from infrastructure.storage.date_store import DateShardedStore, StoreConfig
from infrastructure.storage.json_uow import JsonFileUnitOfWork


@lru_cache
def get_store() -> DateShardedStore:
    """Get the store configured from settings."""
    return DateShardedStore(
        StoreConfig(directory=settings.todo_dir, legacy_file=settings.legacy_todo_file)
    )


def get_uow_factory(store: DateShardedStore | None = None) -> Callable[[], JsonFileUnitOfWork]:
    """Factory for creating Unit of Work instances."""
    target = store or get_store()

    def factory() -> JsonFileUnitOfWork:
        return JsonFileUnitOfWork(target)

    return factory


@lru_cache
def get_todo_service() -> TodoService:
    """Get Todo service instance."""
    return TodoService(get_uow_factory())
