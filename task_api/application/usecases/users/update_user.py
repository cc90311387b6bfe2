"""
===============================================================================
USE CASE: Update User
===============================================================================

Class:
    UpdateUserUseCase

Responsibilities:
    - Cambiar el email de una cuenta (único campo mutable por la API).
    - Rechazar emails que ya pertenecen a otra cuenta.

Collaborators:
    - UserRepository: get_user_by_id / get_user_by_email / update_user_email

Error Mapping:
    - NOT_FOUND: la cuenta no existe
    - CONFLICT (field=email): email en uso por otra cuenta
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.repositories import DuplicateUserError, UserRepository
from ..auth.register_user import EMAIL_IN_USE
from .user_results import UserError, UserErrorCode, UserResult, user_not_found


class UpdateUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, user_id: int, *, email: str) -> UserResult:
        current = self._users.get_user_by_id(user_id)
        if current is None:
            return UserResult(error=user_not_found(user_id))

        if email == current.email:
            return UserResult(user=current)

        owner = self._users.get_user_by_email(email)
        if owner is not None and owner.id != user_id:
            return self._conflict()

        try:
            updated = self._users.update_user_email(user_id, email)
        except DuplicateUserError:
            return self._conflict()

        if updated is None:
            return UserResult(error=user_not_found(user_id))

        logger.info("Email de usuario actualizado", extra={"user_id": user_id})
        return UserResult(user=updated)

    @staticmethod
    def _conflict() -> UserResult:
        return UserResult(
            error=UserError(
                code=UserErrorCode.CONFLICT, message=EMAIL_IN_USE, field="email"
            )
        )
