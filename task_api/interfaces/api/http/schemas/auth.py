"""
===============================================================================
TARJETA CRC — schemas/auth.py
===============================================================================

Módulo:
    Schemas HTTP para registro y login

Responsabilidades:
    - Validar el body de /api/auth/register y /api/auth/login.
    - Definir JwtResponse {token, type, username, email}.

Colaboradores:
    - interfaces/api/http/schemas/common.py (validación de email)
===============================================================================
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .common import normalize_email

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class RegisterRequest(BaseModel):
    username: str = Field(
        ..., min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH
    )
    email: str = Field(..., min_length=3, max_length=EMAIL_MAX_LENGTH)
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH
    )

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < USERNAME_MIN_LENGTH:
            raise ValueError(
                f"Username must be between {USERNAME_MIN_LENGTH} "
                f"and {USERNAME_MAX_LENGTH} characters"
            )
        return v

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return normalize_email(v)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LENGTH)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return v.strip()


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class JwtResponse(BaseModel):
    """Token emitido + datos mínimos del usuario."""

    token: str
    type: str = "Bearer"
    username: str
    email: str
