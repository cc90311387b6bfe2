"""
===============================================================================
AUTH USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Contrato compartido por RegisterUserUseCase y LoginUserUseCase.

Los use cases devuelven resultados tipados en lugar de lanzar excepciones:
la capa HTTP mapea AuthErrorCode -> status (ver interfaces/api/http/error_mapping.py).

Códigos:
  - VALIDATION_ERROR: inputs inválidos (defensa en profundidad; el DTO ya valida).
  - CONFLICT: username o email ya registrados (`field` indica cuál).
  - INVALID_CREDENTIALS: username desconocido o password incorrecto
    (no se distingue cuál de los dos).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....identity.users import User


class AuthErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"


@dataclass(frozen=True)
class AuthError:
    code: AuthErrorCode
    message: str
    field: str | None = None


@dataclass
class AuthResult:
    """
    Éxito: token + user presentes.
    Falla: error presente.
    """

    token: str | None = None
    user: User | None = None
    error: AuthError | None = None
