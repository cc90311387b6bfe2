"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/task.py
============================================================
Class: InMemoryTaskRepository

Responsibilities:
  - Almacenar tareas en memoria (default local / tests).
  - Resolver assigned_to_username en cada lectura (emula el JOIN de Postgres).
  - Ordering determinístico por id ascendente.

Collaborators:
  - domain.entities.Task / TaskStatus
  - domain.repositories.TaskRepository / UserRepository

Constraints:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: Task es mutable, nunca se entrega la instancia guardada.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional

from ....domain.entities import Task, TaskStatus
from ....domain.repositories import TaskRepository, UserRepository


class InMemoryTaskRepository(TaskRepository):
    """Repositorio in-memory, thread-safe, para tareas."""

    def __init__(self, users: UserRepository | None = None) -> None:
        self._lock = Lock()
        self._tasks: Dict[int, Task] = {}
        self._next_id = 1
        self._users = users

    # =========================================================
    # Helpers internos
    # =========================================================
    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _with_assignee(self, task: Task) -> Task:
        """R: Copia con el username del asignado resuelto."""
        username = None
        if task.assigned_to_id is not None and self._users is not None:
            user = self._users.get_user_by_id(task.assigned_to_id)
            username = user.username if user else None
        return replace(task, assigned_to_username=username)

    @staticmethod
    def _matches(
        task: Task, status: TaskStatus | None, assigned_to_id: int | None
    ) -> bool:
        if status is not None and task.status != status:
            return False
        if assigned_to_id is not None and task.assigned_to_id != assigned_to_id:
            return False
        return True

    def _filtered(
        self, status: TaskStatus | None, assigned_to_id: int | None
    ) -> List[Task]:
        with self._lock:
            values = list(self._tasks.values())
        return sorted(
            (t for t in values if self._matches(t, status, assigned_to_id)),
            key=lambda t: t.id,
        )

    # =========================================================
    # Lecturas
    # =========================================================
    def get_task(self, task_id: int) -> Optional[Task]:
        with self._lock:
            task = self._tasks.get(task_id)
        return self._with_assignee(task) if task else None

    def list_tasks(
        self,
        *,
        limit: int,
        offset: int = 0,
        status: TaskStatus | None = None,
        assigned_to_id: int | None = None,
    ) -> List[Task]:
        page = self._filtered(status, assigned_to_id)[offset : offset + limit]
        return [self._with_assignee(t) for t in page]

    def count_tasks(
        self,
        *,
        status: TaskStatus | None = None,
        assigned_to_id: int | None = None,
    ) -> int:
        return len(self._filtered(status, assigned_to_id))

    # =========================================================
    # Escrituras
    # =========================================================
    def create_task(self, task: Task) -> Task:
        now = self._now()
        with self._lock:
            stored = replace(
                task,
                id=self._next_id,
                assigned_to_username=None,
                created_at=now,
                updated_at=now,
            )
            self._tasks[stored.id] = stored
            self._next_id += 1
        return self._with_assignee(stored)

    def update_task(self, task: Task) -> Optional[Task]:
        with self._lock:
            current = self._tasks.get(task.id)
            if current is None:
                return None
            stored = replace(
                current,
                title=task.title,
                description=task.description,
                status=task.status,
                priority=task.priority,
                assigned_to_id=task.assigned_to_id,
                updated_at=self._now(),
            )
            self._tasks[stored.id] = stored
        return self._with_assignee(stored)

    def delete_task(self, task_id: int) -> bool:
        with self._lock:
            return self._tasks.pop(task_id, None) is not None

    def unassign_user_tasks(self, user_id: int) -> int:
        now = self._now()
        with self._lock:
            affected = [t for t in self._tasks.values() if t.assigned_to_id == user_id]
            for task in affected:
                self._tasks[task.id] = replace(
                    task, assigned_to_id=None, updated_at=now
                )
        return len(affected)

    def ping(self) -> bool:
        return True
