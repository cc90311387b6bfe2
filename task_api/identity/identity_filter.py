"""
===============================================================================
TARJETA CRC — identity/identity_filter.py
===============================================================================

Módulo:
    Request Identity Filter (middleware)

Responsabilidades:
    - Una vez por request: leer `Authorization: Bearer <token>`.
    - Verificar el token (TokenCodec) y cargar la cuenta por username.
    - Dejar la Identity en request.state.identity (None = anónimo).
    - Nunca cortar el request: cualquier falla se loguea y el request sigue
      como anónimo. El rechazo (401/403) lo decide AccessPolicy.

Colaboradores:
    - identity/token_codec.py: parse_and_verify
    - domain.repositories.UserRepository: get_user_by_username
    - context.set_user_context: username para logs
    - crosscutting.metrics.record_auth_event("token_rejected")

Notas:
    - Sin cache entre requests: cada request vuelve a cargar la cuenta.
    - El acceso al repositorio corre en threadpool (repos son sync).
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import set_user_context
from ..crosscutting.exceptions import DatabaseError
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_auth_event
from ..domain.repositories import UserRepository
from .auth_users import extract_bearer_token
from .token_codec import TokenCodec
from .users import Identity

CodecProvider = Callable[[], TokenCodec]
UserRepositoryProvider = Callable[[], UserRepository]


def resolve_identity(
    token: str, *, codec: TokenCodec, users: UserRepository
) -> Identity | None:
    """Token -> Identity, o None ante cualquier falla (ya logueada)."""
    verification = codec.parse_and_verify(token)
    if not verification.is_valid:
        record_auth_event("token_rejected")
        logger.warning(
            "Token rechazado",
            extra={"reason": verification.reason.value if verification.reason else None},
        )
        return None

    try:
        user = users.get_user_by_username(verification.subject)
    except DatabaseError:
        logger.exception("No se pudo cargar la cuenta del token")
        return None

    if user is None:
        record_auth_event("token_rejected")
        logger.warning(
            "Token válido para una cuenta inexistente",
            extra={"subject": verification.subject},
        )
        return None

    return Identity.from_user(user)


class IdentityMiddleware(BaseHTTPMiddleware):
    """Adjunta request.state.identity antes del ruteo."""

    def __init__(
        self,
        app,
        *,
        codec_provider: CodecProvider | None = None,
        users_provider: UserRepositoryProvider | None = None,
    ):
        super().__init__(app)
        if codec_provider is None or users_provider is None:
            from .. import container

            codec_provider = codec_provider or container.get_token_codec
            users_provider = users_provider or container.get_user_repository
        self._codec_provider = codec_provider
        self._users_provider = users_provider

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.identity = None

        token = extract_bearer_token(request.headers.get("Authorization"))
        if token:
            identity = await run_in_threadpool(
                resolve_identity,
                token,
                codec=self._codec_provider(),
                users=self._users_provider(),
            )
            request.state.identity = identity
            if identity is not None:
                set_user_context(identity.username)

        return await call_next(request)
