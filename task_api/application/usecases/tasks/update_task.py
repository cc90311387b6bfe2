"""
===============================================================================
USE CASE: Update Task
===============================================================================

Class:
    UpdateTaskUseCase

Responsibilities:
    - Reemplazar title/description/status/priority de una tarea existente.
    - assigned_to_id=None desasigna; un id inexistente => NOT_FOUND (User).

Error Mapping:
    - NOT_FOUND (Task): la tarea no existe (también si se borró en paralelo).
    - NOT_FOUND (User): el asignado no existe.
    - VALIDATION_ERROR: input inválido.
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.repositories import TaskRepository, UserRepository
from .task_input import TaskInput, apply_input, resolve_assignee, validate_task_input
from .task_results import TaskResult, task_not_found


class UpdateTaskUseCase:
    def __init__(
        self, task_repository: TaskRepository, user_repository: UserRepository
    ) -> None:
        self._tasks = task_repository
        self._users = user_repository

    def execute(self, task_id: int, input_data: TaskInput) -> TaskResult:
        task = self._tasks.get_task(task_id)
        if task is None:
            return TaskResult(error=task_not_found(task_id))

        error = validate_task_input(input_data)
        if error is not None:
            return TaskResult(error=error)

        username, error = resolve_assignee(self._users, input_data.assigned_to_id)
        if error is not None:
            return TaskResult(error=error)

        apply_input(task, input_data, username)

        updated = self._tasks.update_task(task)
        if updated is None:
            return TaskResult(error=task_not_found(task_id))

        logger.info("Tarea actualizada", extra={"task_id": task_id})
        return TaskResult(task=updated)
