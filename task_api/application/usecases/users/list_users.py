"""USE CASE: List Users (por id + total; ADMIN lo resuelve AccessPolicy)."""

from __future__ import annotations

from typing import Optional

from ....domain.repositories import UserRepository
from .user_results import UserListResult


class ListUsersUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, *, limit: Optional[int] = None, offset: int = 0) -> UserListResult:
        """Sin `limit` devuelve todas las cuentas desde `offset`."""
        total = self._users.count_users()
        if limit is None:
            users = self._users.list_users(limit=max(total - offset, 0), offset=offset)
        else:
            # R: limit+1 para que la capa HTTP calcule has_next.
            users = self._users.list_users(limit=limit + 1, offset=offset)
        return UserListResult(users=users, total=total)
