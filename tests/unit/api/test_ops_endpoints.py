"""
Name: Ops Endpoints Tests

Responsibilities:
  - /healthz and /readyz are public
  - /metrics is public by default, ADMIN-only with METRICS_REQUIRE_AUTH=true
  - OpenAPI documents BearerAuth and marks public operations
"""

import pytest
from fastapi.testclient import TestClient
from task_api.api.main import create_app
from task_api.container import reset_container
from task_api.crosscutting.config import get_settings

pytestmark = pytest.mark.unit


def test_healthz(client):
    response = client.get("/healthz", headers={"X-Request-Id": "hz-1"})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "request_id": "hz-1"}


def test_readyz(client):
    response = client.get("/readyz")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["store"] == "connected"


def test_metrics_public_by_default(client):
    client.get("/healthz")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "task_api_requests_total" in response.text


@pytest.fixture
def protected_client(monkeypatch):
    monkeypatch.setenv("METRICS_REQUIRE_AUTH", "true")
    monkeypatch.setenv("DEV_SEED_DEMO", "true")
    get_settings.cache_clear()
    reset_container()
    with TestClient(create_app(), raise_server_exceptions=False) as test_client:
        yield test_client


def _login(test_client, username: str) -> dict:
    token = test_client.post(
        "/api/auth/login", json={"username": username, "password": "password"}
    ).json()["token"]
    return {"Authorization": f"Bearer {token}"}


def test_protected_metrics_requires_token(protected_client):
    assert protected_client.get("/metrics").status_code == 401


def test_protected_metrics_forbids_plain_user(protected_client):
    response = protected_client.get("/metrics", headers=_login(protected_client, "user"))

    assert response.status_code == 403


def test_protected_metrics_allows_admin(protected_client):
    response = protected_client.get("/metrics", headers=_login(protected_client, "admin"))

    assert response.status_code == 200


def test_openapi_security(client):
    schema = client.get("/openapi.json").json()

    assert "BearerAuth" in schema["components"]["securitySchemes"]
    assert schema["paths"]["/api/auth/login"]["post"]["security"] == []
    assert schema["paths"]["/api/tasks"]["get"]["security"] == [{"BearerAuth": []}]
