"""
Unit tests for server exception handlers.

Covers the mapping of domain errors to client errors and the global handler
for unexpected failures.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from clawdesk.agent_core.errors import (
    AgentNotFoundError,
    ApprovalAlreadyResolvedError,
    SessionNotFoundError,
)
from clawdesk.server.exception_handlers import setup_exception_handlers
from clawdesk.server.exception_handlers.global_handler import (
    already_resolved_handler,
    global_exception_handler,
    not_found_handler,
)


@pytest.fixture
def mock_request():
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/test"
    request.query_params = {}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


class TestDomainErrorHandlers:
    @pytest.mark.asyncio
    async def test_not_found_maps_to_404(self, mock_request):
        response = await not_found_handler(mock_request, SessionNotFoundError("s-1"))
        assert response.status_code == 404
        assert json.loads(response.body) == {"detail": "session not found: s-1", "kind": "session", "id": "s-1"}

    @pytest.mark.asyncio
    async def test_already_resolved_maps_to_409(self, mock_request):
        response = await already_resolved_handler(mock_request, ApprovalAlreadyResolvedError("a-1", "approved"))
        assert response.status_code == 409
        assert json.loads(response.body)["status"] == "approved"


class TestGlobalExceptionHandler:
    @pytest.mark.asyncio
    async def test_logs_and_returns_error_id(self, mock_request):
        exc = RuntimeError("boom")

        with patch("clawdesk.server.exception_handlers.global_handler.logger") as mock_logger:
            response = await global_exception_handler(mock_request, exc)

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body == {"detail": "Internal server error", "error_id": id(exc), "error_type": "RuntimeError"}
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.kwargs["extra"]["path"] == "/api/v1/test"


class TestRegisteredHandlers:
    @pytest.fixture
    def app(self) -> FastAPI:
        app = FastAPI()
        setup_exception_handlers(app)

        @app.get("/missing")
        async def missing():
            raise AgentNotFoundError("agent-1")

        @app.get("/invalid")
        async def invalid():
            raise ValueError("bad decision")

        @app.get("/crash")
        async def crash():
            raise RuntimeError("unexpected")

        return app

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path, status", [("/missing", 404), ("/invalid", 422), ("/crash", 500)]
    )
    async def test_status_codes(self, app: FastAPI, path: str, status: int):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get(path)
        assert response.status_code == status
