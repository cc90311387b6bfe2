"""
===============================================================================
MÓDULO: Respuestas de error estándar (RFC 7807 / Problem Details)
===============================================================================

Todo error HTTP sale como application/problem+json con:
- `code` estable (ErrorCode) para que el cliente decida sin parsear texto
- `errors[]` con el detalle por campo y el request_id para correlación

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  ErrorCode + ErrorDetail + AppHTTPException

Responsabilidades:
  - Catálogo de códigos de error
  - Factories para los errores que emiten routers y dependencias
  - Serializar el payload (compartido con BodyLimitMiddleware)

Colaboradores:
  - api/exception_handlers.py (registra app_exception_handler)
  - interfaces/api/http/error_mapping.py (Result -> AppHTTPException)
  - crosscutting/middleware.py (413 fuera de FastAPI)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class ErrorDetail(BaseModel):
    """Problem Details + `code` y `errors` propios de la API."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


def build_problem(
    *,
    status_code: int,
    code: ErrorCode,
    detail: str,
    instance: str | None,
    errors: list[dict[str, Any]] | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    items = [*(errors or []), *([{"request_id": request_id}] if request_id else [])]
    return ErrorDetail(
        type=f"about:blank/{code.value.lower()}",
        title=code.value.replace("_", " ").title(),
        status=status_code,
        detail=detail,
        code=code,
        instance=instance,
        errors=items or None,
    ).model_dump(mode="json", exclude_none=True)


def _openapi_error(description: str) -> dict[str, Any]:
    return {
        "description": f"{description} (RFC7807)",
        "model": ErrorDetail,
        "content": {
            PROBLEM_JSON_MEDIA_TYPE: {
                "schema": {"$ref": "#/components/schemas/ErrorDetail"}
            }
        },
    }


OPENAPI_ERROR_RESPONSES = {
    "400": _openapi_error("Validation error or duplicate username/email"),
    "401": _openapi_error("Missing, invalid or expired token"),
    "403": _openapi_error("Role not allowed"),
    "404": _openapi_error("Resource not found"),
    "413": _openapi_error("Body exceeds MAX_BODY_BYTES"),
    "default": _openapi_error("Error"),
}


class AppHTTPException(HTTPException):
    """HTTPException con ErrorCode y errors[] (ej. campo en conflicto)."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.errors = errors


def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return AppHTTPException(
        404, ErrorCode.NOT_FOUND, f"{resource} not found with id: {identifier}"
    )


def conflict(detail: str, field: str | None = None) -> AppHTTPException:
    # R: Duplicados responden 400 (contrato público) con el campo en conflicto.
    errors = [{"field": field, "msg": detail}] if field else None
    return AppHTTPException(400, ErrorCode.CONFLICT, detail, errors)


def unauthorized(detail: str = "Authentication required") -> AppHTTPException:
    return AppHTTPException(
        401, ErrorCode.UNAUTHORIZED, detail, headers={"WWW-Authenticate": "Bearer"}
    )


def forbidden(detail: str = "Access denied") -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def problem_response(
    request: Request,
    *,
    status_code: int,
    code: ErrorCode,
    detail: str,
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_problem(
            status_code=status_code,
            code=code,
            detail=detail,
            instance=str(request.url),
            errors=errors,
            request_id=getattr(request.state, "request_id", None),
        ),
        headers=headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    return problem_response(
        request,
        status_code=exc.status_code,
        code=exc.code,
        detail=str(exc.detail),
        errors=exc.errors,
        headers=exc.headers,
    )
