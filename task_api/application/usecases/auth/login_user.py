"""
===============================================================================
USE CASE: Login User
===============================================================================

Class:
    LoginUserUseCase

Responsibilities:
    - Buscar la cuenta por username.
    - Verificar el password contra el hash almacenado (argon2, nunca en claro).
    - Emitir token para el username.

Collaborators:
    - UserRepository.get_user_by_username
    - password_verifier: Callable[[password, password_hash], bool]
    - TokenCodec.issue
    - crosscutting.metrics.record_auth_event

Seguridad:
    - Username desconocido y password incorrecto devuelven el MISMO error.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_auth_event
from ....domain.repositories import UserRepository
from ....identity.token_codec import TokenCodec
from .auth_results import AuthError, AuthErrorCode, AuthResult

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"


@dataclass(frozen=True)
class LoginUserInput:
    username: str
    password: str


class LoginUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        token_codec: TokenCodec,
        password_verifier: Callable[[str, str], bool],
    ) -> None:
        self._users = user_repository
        self._codec = token_codec
        self._verify = password_verifier

    def execute(self, input_data: LoginUserInput) -> AuthResult:
        user = (
            self._users.get_user_by_username(input_data.username)
            if input_data.username
            else None
        )
        if user is None or not self._verify(input_data.password, user.password_hash):
            record_auth_event("login_failure")
            logger.warning("Login fallido", extra={"username": input_data.username})
            return AuthResult(
                error=AuthError(
                    code=AuthErrorCode.INVALID_CREDENTIALS,
                    message=INVALID_CREDENTIALS_MESSAGE,
                )
            )

        token = self._codec.issue(user.username)
        record_auth_event("login_success")
        logger.info("Login exitoso", extra={"user_id": user.id})
        return AuthResult(token=token, user=user)
