"""
===============================================================================
USE CASE: List Tasks
===============================================================================

Class:
    ListTasksUseCase

Responsibilities:
    - Listar una página de tareas ordenada por id, con total.
    - Filtros opcionales: status, assigned_to_id (tareas de un usuario).

Notas:
    - Filtrar por un assigned_to_id inexistente devuelve una página vacía,
      no NOT_FOUND.
    - Se pide limit+1 filas para que la capa HTTP calcule has_next.
===============================================================================
"""

from __future__ import annotations

from ....domain.entities import TaskStatus
from ....domain.repositories import TaskRepository
from .task_results import TaskListResult


class ListTasksUseCase:
    def __init__(self, task_repository: TaskRepository) -> None:
        self._tasks = task_repository

    def execute(
        self,
        *,
        limit: int,
        offset: int = 0,
        status: TaskStatus | None = None,
        assigned_to_id: int | None = None,
    ) -> TaskListResult:
        tasks = self._tasks.list_tasks(
            limit=limit + 1,
            offset=offset,
            status=status,
            assigned_to_id=assigned_to_id,
        )
        total = self._tasks.count_tasks(status=status, assigned_to_id=assigned_to_id)
        return TaskListResult(tasks=tasks, total=total)
