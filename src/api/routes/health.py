"""Health check endpoints."""

import os
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.v1.dependencies import get_store
from core.config import settings
from infrastructure.storage.date_store import DateShardedStore

APP_VERSION = "1.0.0"

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    storage: str | None = None
    date_files: int | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """
    Basic liveness check.

    Returns service status without touching the storage directory.
    """
    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        timestamp=_now(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    store: DateShardedStore = Depends(get_store),
) -> HealthResponse:
    """
    Health check including the storage directory.

    A directory that does not exist yet is fine (it is created on the first
    save); one that exists but is not writable degrades the status.
    """
    directory = store.config.directory
    if not directory.exists():
        storage_status = "empty"
    elif not directory.is_dir():
        storage_status = "unhealthy: not a directory"
    elif not os.access(directory, os.W_OK):
        storage_status = "unhealthy: not writable"
    else:
        storage_status = "healthy"

    overall_status = "degraded" if storage_status.startswith("unhealthy") else "healthy"

    return HealthResponse(
        status=overall_status,
        version=APP_VERSION,
        timestamp=_now(),
        environment=settings.app_env,
        storage=storage_status,
        date_files=len(store.data_files()),
    )
