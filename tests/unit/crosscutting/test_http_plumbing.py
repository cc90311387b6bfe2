"""
Name: HTTP Plumbing Tests

Responsibilities:
  - RFC7807 problem+json rendering (request_id, codes, WWW-Authenticate)
  - X-Request-Id propagation
  - Body limit middleware (413)
  - Security headers
"""

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from task_api.api.exception_handlers import register_exception_handlers
from task_api.crosscutting.error_responses import (
    PROBLEM_JSON_MEDIA_TYPE,
    conflict,
    not_found,
    unauthorized,
)
from task_api.crosscutting.exceptions import DatabaseError
from task_api.crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from task_api.crosscutting.security import SecurityHeadersMiddleware
from pydantic import BaseModel

pytestmark = pytest.mark.unit


class _Body(BaseModel):
    name: str


def _build_app(*, max_body_bytes: int = 1024, is_production: bool = False) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.add_middleware(SecurityHeadersMiddleware, is_production=is_production)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(BodyLimitMiddleware, max_body_bytes=max_body_bytes)

    @app.get("/missing")
    def missing():
        raise not_found("Task", "42")

    @app.get("/dup")
    def dup():
        raise conflict("Email is already in use", field="email")

    @app.get("/anon")
    def anon():
        raise unauthorized()

    @app.get("/db")
    def db():
        raise DatabaseError("connection refused")

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    @app.post("/echo")
    def echo(body: _Body, request: Request):
        return {"name": body.name, "request_id": request.state.request_id}

    return app


@pytest.fixture
def client():
    return TestClient(_build_app(), raise_server_exceptions=False)


def test_not_found_is_problem_json(client):
    response = client.get("/missing", headers={"X-Request-Id": "req-123"})

    assert response.status_code == 404
    assert response.headers["content-type"].startswith(PROBLEM_JSON_MEDIA_TYPE)
    body = response.json()
    assert body["code"] == "NOT_FOUND"
    assert body["detail"] == "Task not found with id: 42"
    assert {"request_id": "req-123"} in body["errors"]


def test_conflict_is_400_with_field(client):
    response = client.get("/dup")

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "CONFLICT"
    assert body["errors"][0] == {"field": "email", "msg": "Email is already in use"}


def test_unauthorized_sets_www_authenticate(client):
    response = client.get("/anon")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_database_error_is_503(client):
    response = client.get("/db")

    assert response.status_code == 503
    assert response.json()["code"] == "DATABASE_ERROR"


def test_unhandled_error_is_500(client):
    response = client.get("/boom")

    assert response.status_code == 500
    assert response.json()["code"] == "INTERNAL_ERROR"


def test_validation_error_is_400_with_fields(client):
    response = client.post("/echo", json={})

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert any(item.get("field") == "name" for item in body["errors"])


def test_unknown_route_is_problem_json(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_request_id_is_generated_and_echoed(client):
    response = client.post("/echo", json={"name": "x"})

    request_id = response.headers["x-request-id"]
    assert request_id
    assert response.json()["request_id"] == request_id


def test_incoming_request_id_is_kept(client):
    response = client.post("/echo", json={"name": "x"}, headers={"X-Request-Id": "abc"})

    assert response.headers["x-request-id"] == "abc"


def test_body_over_limit_is_413():
    client = TestClient(_build_app(max_body_bytes=16))

    response = client.post("/echo", json={"name": "x" * 64})

    assert response.status_code == 413
    assert response.json()["code"] == "PAYLOAD_TOO_LARGE"


def test_security_headers(client):
    response = client.post("/echo", json={"name": "x"})

    assert response.headers["x-content-type-options"] == "nosniff"
    assert "content-security-policy" in response.headers
    assert "strict-transport-security" not in response.headers


def test_hsts_only_in_production_over_https():
    client = TestClient(_build_app(is_production=True), base_url="https://testserver")

    response = client.post("/echo", json={"name": "x"})

    assert "strict-transport-security" in response.headers
