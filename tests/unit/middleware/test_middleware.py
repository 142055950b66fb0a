"""Unit tests for middleware."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from structlog.testing import capture_logs

from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware


def _create_app_with_middleware() -> FastAPI:
    """Create a minimal FastAPI app with logging and request ID middleware."""
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/test")
    async def _():
        return {"ok": True}

    @app.get("/health")
    async def _health():
        return {"status": "healthy"}

    return app


class TestRequestIDMiddleware:
    """Tests for RequestIDMiddleware."""

    @pytest.mark.asyncio
    async def test_generates_request_id_when_not_provided(self):
        """Response includes a generated X-Request-ID header."""
        app = _create_app_with_middleware()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/test")

        assert len(response.headers["x-request-id"]) == 12

    @pytest.mark.asyncio
    async def test_propagates_existing_request_id(self):
        """Provided X-Request-ID is propagated to response."""
        app = _create_app_with_middleware()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/test", headers={"X-Request-ID": "custom-req-123"})

        assert response.headers["x-request-id"] == "custom-req-123"

    @pytest.mark.asyncio
    async def test_generated_ids_differ(self):
        app = _create_app_with_middleware()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            r1 = await c.get("/test")
            r2 = await c.get("/test")

        assert r1.headers["x-request-id"] != r2.headers["x-request-id"]


class TestRequestLoggingMiddleware:
    @pytest.mark.asyncio
    async def test_logs_completed_request(self):
        app = _create_app_with_middleware()
        transport = ASGITransport(app=app)
        with capture_logs() as logs:
            async with AsyncClient(transport=transport, base_url="http://test") as c:
                await c.get("/test")

        completed = [e for e in logs if e["event"] == "request_completed"]
        assert len(completed) == 1
        assert completed[0]["status_code"] == 200

    @pytest.mark.asyncio
    async def test_health_checks_are_not_logged(self):
        app = _create_app_with_middleware()
        transport = ASGITransport(app=app)
        with capture_logs() as logs:
            async with AsyncClient(transport=transport, base_url="http://test") as c:
                await c.get("/health")

        assert not [e for e in logs if e["event"] == "request_completed"]
