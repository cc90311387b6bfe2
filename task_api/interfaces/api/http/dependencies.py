"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias comunes de routers)
===============================================================================

Responsabilidades:
  - enforce_access_policy: dependencia global que aplica AccessPolicy a la
    ruta matcheada ANTES de ejecutar el handler (sin side effects si rechaza).
  - PageParams: parseo de limit/cursor -> offset (limit opcional en
    optional_page_params).

Colaboradores:
  - container.get_access_policy
  - identity.access_policy (AccessDecision)
  - identity.auth_users.get_request_identity
  - crosscutting.pagination (decode_cursor)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Query, Request

from task_api.container import get_access_policy
from task_api.crosscutting.error_responses import forbidden, unauthorized
from task_api.crosscutting.logger import logger
from task_api.crosscutting.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    decode_cursor,
)
from task_api.identity.access_policy import AccessDecision, AccessPolicy
from task_api.identity.auth_users import get_request_identity


def _request_path(request: Request) -> str:
    # R: path de la app, sin el root_path del proxy.
    path = request.scope.get("path", "")
    root_path = request.scope.get("root_path", "")
    if root_path and path.startswith(root_path):
        return path[len(root_path):] or "/"
    return path


def enforce_access_policy(
    request: Request,
    policy: AccessPolicy = Depends(get_access_policy),
) -> None:
    """
    Evalúa (método, path del request) contra la tabla de reglas.

    - UNAUTHENTICATED -> 401
    - FORBIDDEN -> 403
    """
    path = _request_path(request)
    identity = get_request_identity(request)

    decision = policy.decide(request.method, path, identity)
    if decision is AccessDecision.ALLOW:
        return

    logger.info(
        "Acceso rechazado",
        extra={"decision": decision.value, "path": path},
    )
    if decision is AccessDecision.UNAUTHENTICATED:
        raise unauthorized()
    raise forbidden()


@dataclass(frozen=True)
class PageParams:
    limit: int | None
    cursor: str | None
    offset: int


def page_params(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    cursor: str | None = Query(None, description="Cursor opaco de paginación"),
) -> PageParams:
    return PageParams(
        limit=limit,
        cursor=cursor,
        offset=decode_cursor(cursor) if cursor else 0,
    )


def optional_page_params(
    limit: int | None = Query(
        None, ge=1, le=MAX_PAGE_SIZE, description="Sin limit: lista completa"
    ),
    cursor: str | None = Query(None, description="Cursor opaco de paginación"),
) -> PageParams:
    return PageParams(
        limit=limit,
        cursor=cursor,
        offset=decode_cursor(cursor) if cursor else 0,
    )
