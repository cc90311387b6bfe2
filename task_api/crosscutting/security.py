"""
===============================================================================
MÓDULO: Security headers (OWASP hardening)
===============================================================================

Objetivo
--------
Agregar headers de seguridad a todas las respuestas de la API:
- CSP (más laxa en dev para Swagger UI)
- HSTS solo en producción detrás de HTTPS
- Anti-clickjacking / anti-sniffing

Colaboradores:
  - crosscutting.config.get_settings
===============================================================================
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

_SWAGGER_CDN = "https://cdn.jsdelivr.net"

_STATIC_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def _build_csp(is_production: bool) -> str:
    if is_production:
        return "default-src 'none'; frame-ancestors 'none'"

    # /docs carga assets desde el CDN de Swagger UI.
    return (
        "default-src 'self'; "
        f"script-src 'self' 'unsafe-inline' {_SWAGGER_CDN}; "
        f"style-src 'self' 'unsafe-inline' {_SWAGGER_CDN}; "
        "img-src 'self' data: https://fastapi.tiangolo.com; "
        "frame-ancestors 'none'"
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Agrega headers de hardening; HSTS solo si producción + HTTPS."""

    def __init__(self, app, is_production: bool | None = None):
        super().__init__(app)
        if is_production is None:
            from .config import get_settings

            is_production = get_settings().is_production()
        self._is_production = is_production
        self._csp = _build_csp(is_production)

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        for name, value in _STATIC_HEADERS.items():
            response.headers.setdefault(name, value)
        response.headers["Content-Security-Policy"] = self._csp

        if self._is_production:
            proto = (
                request.headers.get("x-forwarded-proto") or request.url.scheme or ""
            ).lower()
            if proto == "https":
                response.headers["Strict-Transport-Security"] = (
                    "max-age=31536000; includeSubDomains"
                )

        return response
