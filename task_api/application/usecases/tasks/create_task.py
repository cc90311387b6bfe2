"""
===============================================================================
USE CASE: Create Task
===============================================================================

Class:
    CreateTaskUseCase

Responsibilities:
    - Validar el input.
    - Resolver el usuario asignado por id (NOT_FOUND resource=User si no existe).
    - Persistir la tarea; id y timestamps los asigna el store.

Collaborators:
    - TaskRepository.create_task
    - UserRepository.get_user_by_id
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.entities import Task
from ....domain.repositories import TaskRepository, UserRepository
from .task_input import TaskInput, apply_input, resolve_assignee, validate_task_input
from .task_results import TaskResult


class CreateTaskUseCase:
    def __init__(
        self, task_repository: TaskRepository, user_repository: UserRepository
    ) -> None:
        self._tasks = task_repository
        self._users = user_repository

    def execute(self, input_data: TaskInput) -> TaskResult:
        error = validate_task_input(input_data)
        if error is not None:
            return TaskResult(error=error)

        username, error = resolve_assignee(self._users, input_data.assigned_to_id)
        if error is not None:
            return TaskResult(error=error)

        draft = Task(
            title=input_data.title,
            status=input_data.status,
            priority=input_data.priority,
        )
        apply_input(draft, input_data, username)

        task = self._tasks.create_task(draft)
        logger.info("Tarea creada", extra={"task_id": task.id})
        return TaskResult(task=task)
