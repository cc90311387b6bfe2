"""
===============================================================================
TARJETA CRC — api/exception_handlers.py
===============================================================================

Responsabilidades:
  - Convertir toda excepción que llegue a FastAPI en problem+json.
  - 400 por campo para validación de pydantic (nunca 422).
  - Loguear errores internos con su error_id; el cliente recibe el mismo id.

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, problem_response
  - crosscutting.exceptions: TaskApiError / DatabaseError
  - crosscutting.config.get_settings (detalle de 500 fuera de producción)
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    problem_response,
)
from ..crosscutting.exceptions import DatabaseError, TaskApiError
from ..crosscutting.logger import logger

_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header"})

_FRAMEWORK_CODES = {
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    413: ErrorCode.PAYLOAD_TOO_LARGE,
}


def _field_from_loc(loc: tuple[Any, ...]) -> str:
    # ("body", "assignedToId") -> "assignedToId"
    return ".".join(str(p) for p in loc if p not in _LOCATION_PREFIXES) or "request"


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return problem_response(
        request,
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        detail="Validation failed",
        errors=[
            {"field": _field_from_loc(tuple(err.get("loc", ()))), "msg": err.get("msg")}
            for err in exc.errors()
        ],
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """404 de ruta, 405 y demás HTTPException del framework."""
    default = (
        ErrorCode.VALIDATION_ERROR if exc.status_code < 500 else ErrorCode.INTERNAL_ERROR
    )
    return problem_response(
        request,
        status_code=exc.status_code,
        code=_FRAMEWORK_CODES.get(exc.status_code, default),
        detail=str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def internal_error_handler(request: Request, exc: TaskApiError) -> JSONResponse:
    """DatabaseError -> 503; cualquier otro TaskApiError -> 500."""
    if isinstance(exc, DatabaseError):
        status_code, code = 503, ErrorCode.DATABASE_ERROR
    else:
        status_code, code = 500, ErrorCode.INTERNAL_ERROR

    logger.error(
        "Error interno: %s",
        exc.error_code,
        extra={"error_id": exc.error_id, "error_message": exc.message},
    )
    return await app_exception_handler(
        request,
        AppHTTPException(
            status_code,
            code,
            exc.message,
            errors=[{"error_id": exc.error_id}],
        ),
    )


def _is_production() -> bool:
    # R: si la config no valida, asumimos producción y no mostramos detalles.
    try:
        return get_settings().is_production()
    except ValueError:
        return True


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Excepción no controlada", exc_info=exc)
    return problem_response(
        request,
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail="Internal server error" if _is_production() else str(exc),
    )


def register_exception_handlers(app) -> None:
    """AppHTTPException antes que StarletteHTTPException; Exception como fallback."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(TaskApiError, internal_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
