"""
Name: Task Routes Tests

Responsibilities:
  - CRUD over /api/tasks with camelCase JSON
  - Paging, status filter and per-user listing
  - Role guard: only ADMIN deletes
"""

import pytest

pytestmark = pytest.mark.unit


def _task_body(**overrides) -> dict:
    body = {
        "title": "Prepare release",
        "description": "Tag and publish",
        "status": "OPEN",
        "priority": "HIGH",
    }
    body.update(overrides)
    return body


def test_list_seeded_tasks(client, user_headers):
    response = client.get("/api/tasks", headers=user_headers)

    assert response.status_code == 200
    body = response.json()
    assert [t["id"] for t in body["items"]] == [1, 2, 3]
    assert body["pageInfo"]["total"] == 3
    assert body["items"][0]["assignedToUsername"] == "admin"
    assert "createdAt" in body["items"][0]


def test_list_pages_with_cursor(client, user_headers):
    first = client.get("/api/tasks", params={"limit": 2}, headers=user_headers).json()

    assert len(first["items"]) == 2
    assert first["pageInfo"]["hasNext"]

    second = client.get(
        "/api/tasks",
        params={"limit": 2, "cursor": first["pageInfo"]["nextCursor"]},
        headers=user_headers,
    ).json()

    assert [t["id"] for t in second["items"]] == [3]
    assert not second["pageInfo"]["hasNext"]
    assert second["pageInfo"]["hasPrev"]


def test_list_filters_by_status(client, user_headers):
    response = client.get("/api/tasks", params={"status": "COMPLETED"}, headers=user_headers)

    assert [t["status"] for t in response.json()["items"]] == ["COMPLETED"]


def test_list_rejects_unknown_status(client, user_headers):
    response = client.get("/api/tasks", params={"status": "DONE"}, headers=user_headers)

    assert response.status_code == 400


def test_list_tasks_for_user(client, user_headers):
    response = client.get("/api/tasks/user/2", headers=user_headers)

    items = response.json()["items"]
    assert [t["assignedToUsername"] for t in items] == ["user"]


def test_list_tasks_for_unknown_user_is_empty(client, user_headers):
    response = client.get("/api/tasks/user/999", headers=user_headers)

    assert response.status_code == 200
    assert response.json()["items"] == []


def test_create_and_get(client, user_headers):
    created = client.post(
        "/api/tasks", json=_task_body(assignedToId=2), headers=user_headers
    )

    assert created.status_code == 201
    body = created.json()
    assert body["id"] == 4
    assert body["assignedToId"] == 2
    assert body["assignedToUsername"] == "user"

    fetched = client.get(f"/api/tasks/{body['id']}", headers=user_headers)
    assert fetched.json()["title"] == "Prepare release"


def test_create_accepts_snake_case(client, user_headers):
    response = client.post(
        "/api/tasks", json=_task_body(assigned_to_id=1), headers=user_headers
    )

    assert response.status_code == 201
    assert response.json()["assignedToUsername"] == "admin"


def test_create_with_unknown_assignee(client, user_headers):
    response = client.post(
        "/api/tasks", json=_task_body(assignedToId=404), headers=user_headers
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "User not found with id: 404"


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": ""},
        {"title": "   "},
        {"title": "x" * 201},
        {"description": "d" * 2001},
        {"status": None},
        {"priority": "URGENT"},
    ],
)
def test_create_validation(client, user_headers, overrides):
    response = client.post("/api/tasks", json=_task_body(**overrides), headers=user_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_update_replaces_and_unassigns(client, user_headers):
    response = client.put(
        "/api/tasks/2",
        json=_task_body(title="Docs done", status="COMPLETED", assignedToId=None),
        headers=user_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Docs done"
    assert body["status"] == "COMPLETED"
    assert body["assignedToId"] is None


def test_update_missing_task(client, user_headers):
    response = client.put("/api/tasks/999", json=_task_body(), headers=user_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Task not found with id: 999"


def test_get_missing_task(client, user_headers):
    response = client.get("/api/tasks/999", headers=user_headers)

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_delete_requires_admin(client, user_headers):
    response = client.delete("/api/tasks/1", headers=user_headers)

    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"
    assert client.get("/api/tasks/1", headers=user_headers).status_code == 200


def test_admin_deletes_then_not_found(client, admin_headers):
    response = client.delete("/api/tasks/1", headers=admin_headers)

    assert response.status_code == 204
    assert response.content == b""
    assert client.get("/api/tasks/1", headers=admin_headers).status_code == 404
    assert client.delete("/api/tasks/1", headers=admin_headers).status_code == 404


def test_page_keys_are_camel_case(client, user_headers):
    body = client.get("/api/tasks", headers=user_headers).json()

    assert "page_info" not in body
    assert set(body["pageInfo"]) == {"hasNext", "hasPrev", "nextCursor", "prevCursor", "total"}
