"""
===============================================================================
TARJETA CRC — api/auth_routes.py (Registro, Login y /me)
===============================================================================

Responsabilidades:
  - Exponer /api/auth/register (201) y /api/auth/login (200) con JWT.
  - Exponer /api/auth/me: la cuenta del usuario autenticado.
  - Traducir AuthError -> RFC7807 (error_mapping).

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP ↔ caso de uso.
  - Fail-safe security: credenciales inválidas => 401 con mensaje genérico.

Colaboradores:
  - application.usecases.auth: RegisterUserUseCase, LoginUserUseCase
  - identity.auth_users.require_identity
  - interfaces/api/http/schemas/auth.py (DTOs)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..application.usecases.auth import (
    AuthResult,
    LoginUserInput,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
)
from ..application.usecases.users import GetUserUseCase
from ..container import (
    get_get_user_use_case,
    get_login_user_use_case,
    get_register_user_use_case,
)
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES, unauthorized
from ..identity.auth_users import require_identity
from ..identity.users import Identity
from ..interfaces.api.http.error_mapping import raise_auth_error
from ..interfaces.api.http.routers.users import to_user_response
from ..interfaces.api.http.schemas.auth import (
    JwtResponse,
    LoginRequest,
    RegisterRequest,
)
from ..interfaces.api.http.schemas.users import UserResponse

router = APIRouter(prefix="/auth", tags=["auth"], responses=OPENAPI_ERROR_RESPONSES)


def _to_jwt_response(result: AuthResult) -> JwtResponse:
    return JwtResponse(
        token=result.token,
        username=result.user.username,
        email=result.user.email,
    )


@router.post(
    "/register", response_model=JwtResponse, status_code=status.HTTP_201_CREATED
)
def register(
    req: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    """Crea una cuenta (rol USER) y devuelve un token para ella."""
    result = use_case.execute(
        RegisterUserInput(username=req.username, email=req.email, password=req.password)
    )
    if result.error is not None:
        raise_auth_error(result.error)
    return _to_jwt_response(result)


@router.post("/login", response_model=JwtResponse)
def login(
    req: LoginRequest,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    """Autentica username/password y devuelve JWT."""
    result = use_case.execute(
        LoginUserInput(username=req.username, password=req.password)
    )
    if result.error is not None:
        raise_auth_error(result.error)
    return _to_jwt_response(result)


@router.get("/me", response_model=UserResponse)
def me(
    identity: Identity = Depends(require_identity),
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    """Devuelve la cuenta del usuario autenticado."""
    result = use_case.execute(identity.user_id)
    if result.user is None:
        # R: la cuenta pudo borrarse después de resolver la identidad.
        raise unauthorized()
    return to_user_response(result.user)


__all__ = ["router"]
