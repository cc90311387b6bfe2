"""
===============================================================================
MÓDULO: Middlewares HTTP (contexto + límites de payload)
===============================================================================

RequestContextMiddleware
  - X-Request-Id: acepta el del cliente o genera un UUID, y lo devuelve.
  - Abre el contexto de logs y lo limpia al terminar.
  - Un log + métricas Prometheus por request.

BodyLimitMiddleware (ASGI puro, el más externo)
  - 413 problem+json si el body supera MAX_BODY_BYTES, ya sea por
    Content-Length o contando los chunks recibidos.

Colaboradores:
  - task_api/context.py
  - crosscutting/metrics.py
  - crosscutting/error_responses.py (build_problem)
===============================================================================
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..context import clear_context, set_request_context
from .error_responses import PROBLEM_JSON_MEDIA_TYPE, ErrorCode, build_problem
from .logger import logger
from .metrics import record_request_metrics

REQUEST_ID_HEADER = "X-Request-Id"
_MAX_REQUEST_ID_LEN = 128

# Health checks y scrapes no generan log por request.
_QUIET_PATHS = frozenset({"/healthz", "/readyz", "/metrics"})


def _resolve_request_id(incoming: str | None) -> str:
    value = (incoming or "").strip()
    if 0 < len(value) <= _MAX_REQUEST_ID_LEN:
        return value
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Correlación por request: request_id, contexto de logs y métricas."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = _resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )

        started_at = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Request abortado por excepción")
            raise
        else:
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            self._observe(request, status_code, time.perf_counter() - started_at)
            clear_context()

    @staticmethod
    def _observe(request: Request, status_code: int, elapsed: float) -> None:
        record_request_metrics(
            endpoint=request.url.path,
            method=request.method,
            status_code=status_code,
            latency_seconds=elapsed,
        )
        if request.url.path in _QUIET_PATHS:
            return
        logger.info(
            "Request %s %s -> %s",
            request.method,
            request.url.path,
            status_code,
            extra={"status_code": status_code, "latency_ms": round(elapsed * 1000, 2)},
        )


class _BodyTooLarge(Exception):
    pass


class BodyLimitMiddleware:
    """ASGI: corta requests cuyo body supere `max_body_bytes`."""

    def __init__(self, app, max_body_bytes: int | None = None):
        if max_body_bytes is None:
            from .config import get_settings

            max_body_bytes = get_settings().max_body_bytes
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        declared = headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_body_bytes:
            logger.warning(
                "Body rechazado por Content-Length",
                extra={"content_length": int(declared), "max_bytes": self.max_body_bytes},
            )
            await self._reject(scope, receive, send, headers)
            return

        received = 0
        response_started = False

        async def counting_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body") or b"")
                if received > self.max_body_bytes:
                    raise _BodyTooLarge
            return message

        async def tracking_send(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, counting_receive, tracking_send)
        except _BodyTooLarge:
            # R: con la respuesta ya iniciada no se puede emitir otra.
            if response_started:
                raise
            logger.warning(
                "Body rechazado durante la lectura",
                extra={"received_bytes": received, "max_bytes": self.max_body_bytes},
            )
            await self._reject(scope, receive, send, headers)

    async def _reject(self, scope, receive, send, headers: Headers) -> None:
        request_id = _resolve_request_id(headers.get(REQUEST_ID_HEADER))
        content = build_problem(
            status_code=413,
            code=ErrorCode.PAYLOAD_TOO_LARGE,
            detail=(
                f"Request body too large. Maximum allowed: {self.max_body_bytes} bytes"
            ),
            instance=scope.get("path", ""),
            request_id=request_id,
        )
        response = JSONResponse(
            content,
            status_code=413,
            media_type=PROBLEM_JSON_MEDIA_TYPE,
            headers={REQUEST_ID_HEADER: request_id},
        )
        await response(scope, receive, send)
