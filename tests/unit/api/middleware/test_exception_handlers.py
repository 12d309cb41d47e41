"""Tests for the service exception handlers."""

import pytest

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from authkit.api.middleware.exception_handlers import register_exception_handlers
from authkit.api.middleware.request_context import RequestContextMiddleware
from authkit.core.exceptions import ConfigurationError, RemoteCallError, ResponseValidationError
from authkit.models.error_models import ErrorCode


@pytest.fixture
def test_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)
    return app


@pytest.fixture
def client(test_app: FastAPI) -> TestClient:
    # raise_server_exceptions=False ensures that we get the 500 response
    # instead of the client re-raising the exception.
    return TestClient(test_app, raise_server_exceptions=False)


def test_authkit_error(test_app: FastAPI, client: TestClient) -> None:
    @test_app.get("/remote_error")
    def raise_remote_error() -> None:
        raise RemoteCallError("get_settings", "Connection refused")

    response = client.get("/remote_error")
    assert response.status_code == 500
    assert response.json() == {"message": "Connection refused"}


def test_response_validation_error(test_app: FastAPI, client: TestClient) -> None:
    @test_app.get("/bad_response")
    def raise_bad_response() -> None:
        raise ResponseValidationError("create_event_link", ["token"])

    response = client.get("/bad_response")
    assert response.status_code == 500
    assert response.json()["message"] == "Invalid create_event_link response: missing or invalid token"


def test_debug_mode_adds_code(
    test_app: FastAPI, client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("AUTHKIT_DEBUG", "true")

    @test_app.get("/config_error")
    def raise_config_error() -> None:
        raise ConfigurationError("missing secret")

    response = client.get("/config_error", headers={"X-Request-ID": "req_debug"})
    data = response.json()
    assert response.status_code == 500
    assert data["code"] == ErrorCode.INTERNAL_CONFIGURATION_ERROR.value
    assert data["request_id"] == "req_debug"
    assert data["path"] == "/config_error"


def test_http_exception(test_app: FastAPI, client: TestClient) -> None:
    @test_app.get("/missing")
    def raise_http() -> None:
        raise HTTPException(status_code=404, detail="Not here")

    response = client.get("/missing")
    assert response.status_code == 404
    assert response.json() == {"message": "Not here"}


def test_request_validation_error(test_app: FastAPI, client: TestClient) -> None:
    class Payload(BaseModel):
        group: str

    @test_app.post("/validate")
    def validate(payload: Payload) -> Payload:
        return payload

    response = client.post("/validate", json={})
    assert response.status_code == 422
    assert response.json() == {"message": "Request validation failed"}


def test_unhandled_exception(test_app: FastAPI, client: TestClient) -> None:
    @test_app.get("/crash")
    def crash() -> None:
        raise RuntimeError("database password is hunter2")

    response = client.get("/crash")
    assert response.status_code == 500
    assert response.json() == {"message": "An unexpected error occurred"}
