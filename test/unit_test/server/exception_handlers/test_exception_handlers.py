"""
Unit tests for server exception handlers.

Tests cover the error envelope produced for each handled exception type,
both by calling the handlers directly and through a small FastAPI app.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from vidtube.core.errors import ApiError
from vidtube.core.media import MediaStorageError
from vidtube.server.exception_handlers import setup_exception_handlers
from vidtube.server.exception_handlers.global_handler import (
    api_error_handler,
    error_response,
    global_exception_handler,
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


class Payload(BaseModel):
    content: str


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/api-error")
    async def raise_api_error():
        raise ApiError(409, "Already exists", errors=[{"field": "email"}])

    @app.get("/media-error")
    async def raise_media_error():
        raise MediaStorageError("Media upload failed: 401", status_code=401, details="Invalid Signature")

    @app.post("/validate")
    async def validate(payload: Payload):
        return payload

    @app.get("/boom")
    async def boom():
        raise RuntimeError("unexpected")

    return app


@pytest.fixture
async def client(app: FastAPI):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://localhost") as client:
        yield client


class TestErrorResponse:
    def test_envelope_shape(self):
        response = error_response(404, "Video not found")
        assert response.status_code == 404
        assert json.loads(response.body) == {
            "status_code": 404,
            "data": None,
            "message": "Video not found",
            "success": False,
            "errors": [],
        }

    def test_extra_fields_and_headers(self):
        response = error_response(401, "Unauthorized request", headers={"WWW-Authenticate": "Bearer"}, error_id=7)
        assert response.headers["www-authenticate"] == "Bearer"
        assert json.loads(response.body)["error_id"] == 7


class TestHandlersDirectly:
    @pytest.mark.asyncio
    async def test_api_error(self, mock_request):
        response = await api_error_handler(mock_request, ApiError(403, "Forbidden", errors=["nope"]))
        body = json.loads(response.body)
        assert response.status_code == 403
        assert body["message"] == "Forbidden"
        assert body["errors"] == ["nope"]

    @pytest.mark.asyncio
    async def test_global_handler_logs_and_hides_details(self, mock_request):
        exc = ValueError("secret internals")
        with patch("vidtube.server.exception_handlers.global_handler.logger") as mock_logger:
            response = await global_exception_handler(mock_request, exc)

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args[1]["extra"]["error_type"] == "ValueError"
        body = json.loads(response.body)
        assert response.status_code == 500
        assert body["message"] == "Internal server error"
        assert body["error_id"] == id(exc)
        assert body["error_type"] == "ValueError"
        assert "secret internals" not in response.body.decode()


@pytest.mark.asyncio
class TestHandlersThroughApp:
    async def test_api_error(self, client: AsyncClient):
        response = await client.get("/api-error")
        assert response.status_code == 409
        assert response.json()["errors"] == [{"field": "email"}]

    async def test_media_error_is_bad_gateway(self, client: AsyncClient):
        response = await client.get("/media-error")
        assert response.status_code == 502
        body = response.json()
        assert body["message"] == "Media storage request failed"
        assert body["errors"] == ["Media upload failed: 401"]

    async def test_validation_error(self, client: AsyncClient):
        response = await client.post("/validate", json={})
        assert response.status_code == 422
        body = response.json()
        assert body["message"] == "Validation failed"
        assert body["errors"][0]["loc"] == ["body", "content"]

    async def test_unknown_route(self, client: AsyncClient):
        response = await client.get("/missing")
        assert response.status_code == 404
        assert response.json()["message"] == "Not Found"

    async def test_method_not_allowed(self, client: AsyncClient):
        response = await client.delete("/api-error")
        assert response.status_code == 405
        assert response.json()["success"] is False

    async def test_unhandled_exception(self, client: AsyncClient):
        response = await client.get("/boom")
        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Internal server error"
        assert body["error_type"] == "RuntimeError"
