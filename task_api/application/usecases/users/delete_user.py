"""
USE CASE: Delete User

Desasigna las tareas del usuario y después borra la cuenta (hard delete).
Con Postgres la FK ON DELETE SET NULL cubre el mismo caso; el unassign
explícito mantiene al store in-memory con la misma semántica.
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.repositories import TaskRepository, UserRepository
from .user_results import DeleteUserResult, user_not_found


class DeleteUserUseCase:
    def __init__(
        self, user_repository: UserRepository, task_repository: TaskRepository
    ) -> None:
        self._users = user_repository
        self._tasks = task_repository

    def execute(self, user_id: int) -> DeleteUserResult:
        if self._users.get_user_by_id(user_id) is None:
            return DeleteUserResult(deleted=False, error=user_not_found(user_id))

        unassigned = self._tasks.unassign_user_tasks(user_id)
        if not self._users.delete_user(user_id):
            return DeleteUserResult(deleted=False, error=user_not_found(user_id))

        logger.info(
            "Usuario eliminado",
            extra={"user_id": user_id, "unassigned_tasks": unassigned},
        )
        return DeleteUserResult(deleted=True, unassigned_tasks=unassigned)
