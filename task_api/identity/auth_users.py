"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Helpers de autenticación (passwords + bearer + dependencias FastAPI)

Responsabilidades:
    - Hashear/verificar passwords (Argon2).
    - Extraer el token desde `Authorization: Bearer <token>`.
    - Exponer dependencias FastAPI que leen la Identity ya resuelta por
      IdentityMiddleware (require_identity / optional_identity).

Colaboradores:
    - argon2-cffi: PasswordHasher.
    - identity/identity_filter.py: deja Identity en request.state.identity.
    - crosscutting.error_responses: unauthorized estándar.
    - application/usecases/auth: recibe hash_password / verify_password.

Decisiones:
    - La lógica criptográfica vive acá (borde de identidad), NO en dominio.
    - No loguear passwords ni tokens.
===============================================================================
"""

from __future__ import annotations

from typing import Final

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Request

from ..crosscutting.error_responses import unauthorized
from .users import Identity

BEARER_PREFIX: Final[str] = "Bearer "

_password_hasher = PasswordHasher()


# ---------------------------------------------------------------------------
# Passwords (Argon2)
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado (False ante cualquier mismatch)."""
    if not password_hash:
        return False
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


# ---------------------------------------------------------------------------
# Extracción de token
# ---------------------------------------------------------------------------


def extract_bearer_token(authorization: str | None) -> str | None:
    """`Bearer <token>` -> token; cualquier otro formato -> None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def get_request_identity(request: Request) -> Identity | None:
    return getattr(request.state, "identity", None)


def optional_identity(request: Request) -> Identity | None:
    """Dependency: Identity del request o None (anónimo)."""
    return get_request_identity(request)


def require_identity(request: Request) -> Identity:
    """Dependency: Identity obligatoria (401 si el request es anónimo)."""
    identity = get_request_identity(request)
    if identity is None:
        raise unauthorized()
    return identity
