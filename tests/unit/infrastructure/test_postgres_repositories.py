"""
Name: Postgres Repository Tests (offline)

Responsibilities:
  - Row mapping for users/tasks
  - Parametrized SQL (never interpolated input)
  - psycopg errors -> DatabaseError; UniqueViolation -> DuplicateUserError

Notes:
  - Uses a MagicMock pool; no real DB
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import psycopg
import pytest
from psycopg import errors as pg_errors
from task_api.crosscutting.exceptions import DatabaseError
from task_api.domain.entities import TaskPriority, TaskStatus
from task_api.domain.repositories import DuplicateUserError
from task_api.infrastructure.repositories import (
    PostgresTaskRepository,
    PostgresUserRepository,
)

pytestmark = pytest.mark.unit

CREATED = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _pool_with(cursor: MagicMock) -> tuple[MagicMock, MagicMock]:
    pool = MagicMock()
    conn = MagicMock()
    conn.execute.return_value = cursor
    pool.connection.return_value.__enter__.return_value = conn
    return pool, conn


def test_get_user_by_username_maps_row():
    cursor = MagicMock()
    cursor.fetchone.return_value = (1, "admin", "admin@demo.com", "h", "USER,ADMIN", CREATED)
    pool, conn = _pool_with(cursor)

    user = PostgresUserRepository(pool=pool).get_user_by_username("admin")

    assert user.id == 1
    assert user.roles == "USER,ADMIN"
    query, params = conn.execute.call_args.args
    assert "WHERE username = %s" in query
    assert params == ("admin",)


def test_missing_user_returns_none():
    cursor = MagicMock()
    cursor.fetchone.return_value = None
    pool, _ = _pool_with(cursor)

    assert PostgresUserRepository(pool=pool).get_user_by_id(9) is None


def test_unique_violation_becomes_duplicate_error():
    pool, conn = _pool_with(MagicMock())
    conn.execute.side_effect = pg_errors.UniqueViolation("duplicate key")

    with pytest.raises(DuplicateUserError):
        PostgresUserRepository(pool=pool).create_user(
            username="admin", email="a@b.co", password_hash="h", roles="USER"
        )


def test_driver_error_becomes_database_error():
    pool, conn = _pool_with(MagicMock())
    conn.execute.side_effect = psycopg.OperationalError("connection lost")

    with pytest.raises(DatabaseError):
        PostgresUserRepository(pool=pool).count_users()


def test_list_tasks_builds_filters():
    cursor = MagicMock()
    cursor.fetchall.return_value = [
        (3, "t", None, "OPEN", "HIGH", 2, "user", CREATED, CREATED),
    ]
    pool, conn = _pool_with(cursor)

    tasks = PostgresTaskRepository(pool=pool).list_tasks(
        limit=5, offset=10, status=TaskStatus.OPEN, assigned_to_id=2
    )

    assert tasks[0].status == TaskStatus.OPEN
    assert tasks[0].priority == TaskPriority.HIGH
    assert tasks[0].assigned_to_username == "user"
    query, params = conn.execute.call_args.args
    assert "t.status = %s AND t.assigned_to_id = %s" in query
    assert params == ("OPEN", 2, 5, 10)


def test_delete_task_uses_rowcount():
    cursor = MagicMock()
    cursor.rowcount = 0
    pool, _ = _pool_with(cursor)

    assert PostgresTaskRepository(pool=pool).delete_task(1) is False


def test_ping():
    cursor = MagicMock()
    cursor.fetchone.return_value = (1,)
    pool, _ = _pool_with(cursor)

    assert PostgresTaskRepository(pool=pool).ping()
