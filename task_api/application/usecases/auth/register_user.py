"""
===============================================================================
USE CASE: Register User
===============================================================================

Business Goal:
    Crear una cuenta nueva con rol USER y devolver un token de acceso
    para el username registrado.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    RegisterUserUseCase

Responsibilities:
    - Rechazar username duplicado (se chequea primero) y email duplicado.
    - Hashear el password (nunca se guarda en claro).
    - Persistir la cuenta con roles "USER".
    - Emitir el token para el username.

Collaborators:
    - UserRepository: exists_by_username / exists_by_email / create_user
    - TokenCodec: issue(subject)
    - password_hasher: Callable[[str], str]
    - crosscutting.metrics: record_auth_event("register")

Error Mapping:
    - CONFLICT (field=username): "Username is already taken"
    - CONFLICT (field=email): "Email is already in use"
    - VALIDATION_ERROR: campos vacíos
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_auth_event
from ....domain.repositories import DuplicateUserError, UserRepository
from ....identity.token_codec import TokenCodec
from ....identity.users import DEFAULT_ROLES
from .auth_results import AuthError, AuthErrorCode, AuthResult

USERNAME_TAKEN = "Username is already taken"
EMAIL_IN_USE = "Email is already in use"

_CONFLICT_MESSAGES = {"username": USERNAME_TAKEN, "email": EMAIL_IN_USE}


@dataclass(frozen=True)
class RegisterUserInput:
    username: str
    email: str
    password: str


class RegisterUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        token_codec: TokenCodec,
        password_hasher: Callable[[str], str],
    ) -> None:
        self._users = user_repository
        self._codec = token_codec
        self._hash = password_hasher

    def execute(self, input_data: RegisterUserInput) -> AuthResult:
        if not input_data.username or not input_data.email or not input_data.password:
            return AuthResult(
                error=AuthError(
                    code=AuthErrorCode.VALIDATION_ERROR,
                    message="username, email and password are required",
                )
            )

        # 1) Unicidad: username primero, después email.
        if self._users.exists_by_username(input_data.username):
            return self._conflict("username")
        if self._users.exists_by_email(input_data.email):
            return self._conflict("email")

        # 2) Persistir. Una carrera entre el check y el insert la resuelve el store.
        try:
            user = self._users.create_user(
                username=input_data.username,
                email=input_data.email,
                password_hash=self._hash(input_data.password),
                roles=DEFAULT_ROLES,
            )
        except DuplicateUserError as exc:
            return self._conflict(exc.field)

        # 3) Token para el username registrado.
        token = self._codec.issue(user.username)

        record_auth_event("register")
        logger.info(
            "Usuario registrado",
            extra={"user_id": user.id, "username": user.username},
        )
        return AuthResult(token=token, user=user)

    @staticmethod
    def _conflict(field: str) -> AuthResult:
        return AuthResult(
            error=AuthError(
                code=AuthErrorCode.CONFLICT,
                message=_CONFLICT_MESSAGES.get(field, USERNAME_TAKEN),
                field=field,
            )
        )
