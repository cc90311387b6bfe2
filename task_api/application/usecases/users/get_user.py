"""USE CASE: Get User (por id; NOT_FOUND si no existe)."""

from __future__ import annotations

from ....domain.repositories import UserRepository
from .user_results import UserResult, user_not_found


class GetUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, user_id: int) -> UserResult:
        user = self._users.get_user_by_id(user_id)
        if user is None:
            return UserResult(error=user_not_found(user_id))
        return UserResult(user=user)
