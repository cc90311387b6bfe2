"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/task.py
============================================================
Class: PostgresTaskRepository

Responsibilities:
  - CRUD de tareas sobre la tabla `tasks`.
  - Resolver assigned_to_username con LEFT JOIN a `users`.
  - Filtros opcionales por status / assigned_to_id + paginado por offset.

Collaborators:
  - psycopg_pool.ConnectionPool
  - postgres/sql.py (ejecución + errores)
  - domain.entities.Task / TaskStatus / TaskPriority

Constraints / Notes:
  - Cada sentencia corre en su propia transacción (sin unit-of-work).
  - updated_at lo fija la sentencia (now()), no el caller.
  - Orden estable: t.id ASC.
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Task, TaskPriority, TaskStatus
from ....domain.repositories import TaskRepository
from . import sql

_TASK_SELECT = """
    SELECT t.id, t.title, t.description, t.status, t.priority,
           t.assigned_to_id, u.username, t.created_at, t.updated_at
    FROM tasks t
    LEFT JOIN users u ON u.id = t.assigned_to_id
"""


def _row_to_task(row: tuple) -> Task:
    return Task(
        id=row[0],
        title=row[1],
        description=row[2],
        status=TaskStatus(row[3]),
        priority=TaskPriority(row[4]),
        assigned_to_id=row[5],
        assigned_to_username=row[6],
        created_at=row[7],
        updated_at=row[8],
    )


def _filters(
    status: TaskStatus | None, assigned_to_id: int | None
) -> tuple[str, list[object]]:
    clauses: list[str] = []
    params: list[object] = []
    if status is not None:
        clauses.append("t.status = %s")
        params.append(status.value)
    if assigned_to_id is not None:
        clauses.append("t.assigned_to_id = %s")
        params.append(assigned_to_id)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


class PostgresTaskRepository(TaskRepository):
    """Repositorio de tareas sobre PostgreSQL."""

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._pool = pool

    # =========================================================
    # Lecturas
    # =========================================================
    def get_task(self, task_id: int) -> Optional[Task]:
        row = sql.execute(
            self._pool,
            query=f"{_TASK_SELECT} WHERE t.id = %s",
            params=(task_id,),
            fetch="one",
            log_msg="PostgresTaskRepository: get_task failed",
            log_extra={"task_id": task_id},
        )
        return _row_to_task(row) if row else None

    def list_tasks(
        self,
        *,
        limit: int,
        offset: int = 0,
        status: TaskStatus | None = None,
        assigned_to_id: int | None = None,
    ) -> List[Task]:
        if limit <= 0:
            return []
        where, params = _filters(status, assigned_to_id)
        rows = sql.execute(
            self._pool,
            query=f"{_TASK_SELECT} {where} ORDER BY t.id ASC LIMIT %s OFFSET %s",
            params=(*params, limit, max(0, offset)),
            fetch="all",
            log_msg="PostgresTaskRepository: list_tasks failed",
            log_extra={"limit": limit, "offset": offset},
        )
        return [_row_to_task(r) for r in rows]

    def count_tasks(
        self,
        *,
        status: TaskStatus | None = None,
        assigned_to_id: int | None = None,
    ) -> int:
        where, params = _filters(status, assigned_to_id)
        row = sql.execute(
            self._pool,
            query=f"SELECT COUNT(*) FROM tasks t {where}",
            params=params,
            fetch="one",
            log_msg="PostgresTaskRepository: count_tasks failed",
        )
        return int(row[0]) if row else 0

    # =========================================================
    # Escrituras
    # =========================================================
    def create_task(self, task: Task) -> Task:
        row = sql.execute(
            self._pool,
            query="""
                INSERT INTO tasks (title, description, status, priority, assigned_to_id)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING id
            """,
            params=(
                task.title,
                task.description,
                task.status.value,
                task.priority.value,
                task.assigned_to_id,
            ),
            fetch="one",
            log_msg="PostgresTaskRepository: create_task failed",
        )
        created = self.get_task(row[0])
        if created is None:
            raise DatabaseError("PostgresTaskRepository: created task vanished")
        return created

    def update_task(self, task: Task) -> Optional[Task]:
        row = sql.execute(
            self._pool,
            query="""
                UPDATE tasks
                SET title = %s,
                    description = %s,
                    status = %s,
                    priority = %s,
                    assigned_to_id = %s,
                    updated_at = now()
                WHERE id = %s
                RETURNING id
            """,
            params=(
                task.title,
                task.description,
                task.status.value,
                task.priority.value,
                task.assigned_to_id,
                task.id,
            ),
            fetch="one",
            log_msg="PostgresTaskRepository: update_task failed",
            log_extra={"task_id": task.id},
        )
        return self.get_task(row[0]) if row else None

    def delete_task(self, task_id: int) -> bool:
        deleted = sql.execute(
            self._pool,
            query="DELETE FROM tasks WHERE id = %s",
            params=(task_id,),
            fetch="rowcount",
            log_msg="PostgresTaskRepository: delete_task failed",
            log_extra={"task_id": task_id},
        )
        return deleted > 0

    def unassign_user_tasks(self, user_id: int) -> int:
        return sql.execute(
            self._pool,
            query="""
                UPDATE tasks
                SET assigned_to_id = NULL, updated_at = now()
                WHERE assigned_to_id = %s
            """,
            params=(user_id,),
            fetch="rowcount",
            log_msg="PostgresTaskRepository: unassign_user_tasks failed",
            log_extra={"user_id": user_id},
        )

    def ping(self) -> bool:
        return sql.ping(self._pool)
