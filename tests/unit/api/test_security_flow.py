"""
Name: Security Flow Tests

Responsibilities:
  - End-to-end checks of the identity filter plus the access policy
  - Missing / malformed / tampered tokens -> 401 problem+json
  - USER may read and write tasks, only ADMIN deletes
"""

import pytest

pytestmark = pytest.mark.unit

TASK = {"title": "Flow", "status": "OPEN", "priority": "LOW"}


def test_protected_route_without_token(client):
    response = client.get("/api/tasks")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json()["code"] == "UNAUTHORIZED"


@pytest.mark.parametrize(
    "header",
    ["Bearer not-a-jwt", "Bearer ", "Basic YWRtaW46cGFzc3dvcmQ=", "bearer"],
)
def test_invalid_authorization_header(client, header):
    response = client.get("/api/tasks", headers={"Authorization": header})

    assert response.status_code == 401


def test_tampered_token(client, admin_headers):
    token = admin_headers["Authorization"].removeprefix("Bearer ")
    head, payload, signature = token.split(".")
    flipped = ("A" if signature[0] != "A" else "B") + signature[1:]

    response = client.get(
        "/api/tasks", headers={"Authorization": f"Bearer {head}.{payload}.{flipped}"}
    )

    assert response.status_code == 401


def test_token_for_deleted_user_is_rejected(client, login_as, admin_headers):
    headers = login_as("user")
    client.delete("/api/users/2", headers=admin_headers)

    response = client.get("/api/tasks", headers=headers)

    assert response.status_code == 401


def test_user_can_create_and_update(client, user_headers):
    created = client.post("/api/tasks", json=TASK, headers=user_headers)
    assert created.status_code == 201

    task_id = created.json()["id"]
    updated = client.put(
        f"/api/tasks/{task_id}",
        json={**TASK, "status": "IN_PROGRESS"},
        headers=user_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "IN_PROGRESS"


def test_only_admin_deletes(client, user_headers, admin_headers):
    task_id = client.post("/api/tasks", json=TASK, headers=user_headers).json()["id"]

    assert client.delete(f"/api/tasks/{task_id}", headers=user_headers).status_code == 403
    assert client.delete(f"/api/tasks/{task_id}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/tasks/{task_id}", headers=user_headers).status_code == 404


def test_denied_request_has_no_side_effects(client, user_headers):
    before = client.get("/api/tasks", headers=user_headers).json()["pageInfo"]["total"]

    client.post("/api/tasks", json=TASK)

    after = client.get("/api/tasks", headers=user_headers).json()["pageInfo"]["total"]
    assert after == before


def test_public_routes_need_no_token(client):
    registered = client.post(
        "/api/auth/register",
        json={"username": "newcomer", "email": "newcomer@example.com", "password": "secret1"},
    )
    login = client.post(
        "/api/auth/login", json={"username": "newcomer", "password": "secret1"}
    )

    assert client.get("/healthz").status_code == 200
    assert registered.status_code == 201
    assert login.status_code == 200


def test_admin_only_routes_reject_plain_user(client, user_headers):
    assert client.get("/api/users", headers=user_headers).status_code == 403
    assert client.delete("/api/users/1", headers=user_headers).status_code == 403
    assert client.delete("/api/tasks/1", headers=user_headers).status_code == 403
    assert client.get("/api/tasks/1", headers=user_headers).status_code == 200
