"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (body limit, CORS, request context, security headers,
    identity)
  - Apply the access policy to every route as an app-level dependency
  - Mount auth routes and resource routes under /api
  - Expose health, readiness and metrics endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - identity.identity_filter.IdentityMiddleware: Bearer token -> Identity
  - interfaces.api.http.dependencies.enforce_access_policy: 401/403 gate
  - interfaces.api.http.router: /api/tasks, /api/users
  - api.auth_routes: /api/auth/*

Notes:
  - Middleware order matters (outermost first): BodyLimit → CORS →
    RequestContext → SecurityHeaders → Identity → routes
  - /healthz and /readyz follow Kubernetes health check conventions
  - /metrics exposes Prometheus metrics (ADMIN when METRICS_REQUIRE_AUTH=true)

Production Readiness:
  - Env validation enforced at startup (via lifespan, not import time)
  - Request tracing with X-Request-Id header
  - Structured JSON logging with request correlation
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from ..application.dev_seed_demo import ensure_dev_seed
from ..container import get_access_policy, get_task_repository, get_user_repository
from ..crosscutting.config import Settings, get_settings
from ..crosscutting.exceptions import DatabaseError
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..crosscutting.security import SecurityHeadersMiddleware
from ..identity.auth_users import hash_password
from ..identity.identity_filter import IdentityMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.dependencies import enforce_access_policy
from ..interfaces.api.http.router import router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers

API_TITLE = "Task API"
API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes pool."""
    settings = get_settings()

    if settings.uses_postgres():
        # R: el pool debe existir antes de cualquier uso de repositorios.
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )

    try:
        ensure_dev_seed(
            settings,
            users=get_user_repository(),
            tasks=get_task_repository(),
            password_hasher=hash_password,
        )

        logger.info(
            "Task API starting up",
            extra={
                "app_env": settings.app_env,
                "storage_backend": settings.storage_backend,
                "jwt_access_ttl_minutes": settings.jwt_access_ttl_minutes,
                "metrics_require_auth": settings.metrics_require_auth,
            },
        )

        yield

    finally:
        if settings.uses_postgres():
            close_pool()
        logger.info("Task API shutting down")


def _load_settings() -> Settings | None:
    # R: en import-time toleramos env inválido; el lifespan falla después.
    try:
        return get_settings()
    except ValueError:
        return None


def _install_openapi(app: FastAPI) -> None:
    """BearerAuth global; operaciones públicas con security=[]."""

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
            tags=app.openapi_tags,
        )
        components = openapi_schema.setdefault("components", {})
        components["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "JWT access token via Authorization: Bearer <token>.",
            }
        }
        openapi_schema["security"] = [{"BearerAuth": []}]

        policy = get_access_policy()
        for path, methods in openapi_schema.get("paths", {}).items():
            for method, operation in methods.items():
                if not isinstance(operation, dict):
                    continue
                if policy.is_public(method, path):
                    operation["security"] = []
                else:
                    operation["security"] = [{"BearerAuth": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi


def _ping_store() -> bool:
    try:
        return get_user_repository().ping() and get_task_repository().ping()
    except DatabaseError as exc:
        logger.warning("Ready check: store unavailable", extra={"error": str(exc)})
        return False


def create_app() -> FastAPI:
    settings = _load_settings()

    app = FastAPI(
        title=API_TITLE,
        version=API_VERSION,
        lifespan=lifespan,
        dependencies=[Depends(enforce_access_policy)],
        openapi_tags=[
            {"name": "auth", "description": "Registration, login (JWT)"},
            {"name": "tasks", "description": "Task management"},
            {"name": "users", "description": "User management"},
        ],
    )
    _install_openapi(app)

    # R: add_middleware apila hacia afuera: el último agregado corre primero.
    app.add_middleware(IdentityMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=(
            settings.get_allowed_origins_list()
            if settings
            else ["http://localhost:3000"]
        ),
        allow_credentials=settings.cors_allow_credentials if settings else False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )
    app.add_middleware(BodyLimitMiddleware)

    app.include_router(auth_router, prefix="/api")
    app.include_router(router, prefix="/api")

    register_exception_handlers(app)

    @app.get("/healthz", tags=["health"])
    def healthz(request: Request):
        """Liveness: el proceso responde."""
        return {"ok": True, "request_id": getattr(request.state, "request_id", None)}

    @app.get("/readyz", tags=["health"])
    def readyz(request: Request):
        """Readiness: el store (memoria o PostgreSQL) responde a ping."""
        ready = _ping_store()
        return {
            "ok": ready,
            "store": "connected" if ready else "disconnected",
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/metrics", tags=["health"])
    def metrics():
        """Prometheus text format metrics."""
        content, media_type = get_metrics_response()
        return Response(content=content, media_type=media_type)

    return app


app = create_app()
