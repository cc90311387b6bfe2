"""
Name: Application Configuration (Settings)

Responsibilities:
  - Typed configuration from environment variables (pydantic-settings)
  - Reject inconsistent combinations at startup (storage, pool, production)

Collaborators:
  - api/main.py: CORS, lifespan (pool + dev seed)
  - container.py: storage adapter, token codec TTL, access policy
  - crosscutting/logger.py: LOG_LEVEL / LOG_JSON

Notes:
  - Singleton via lru_cache; tests call get_settings.cache_clear()
  - APP_ENV=production refuses the development defaults
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STORAGE_MEMORY = "memory"
STORAGE_POSTGRES = "postgres"

DEV_JWT_SECRET = "dev-secret"
MIN_PRODUCTION_SECRET_LENGTH = 32

# Valores de ejemplo que nunca deben firmar tokens en producción.
_PLACEHOLDER_SECRETS = frozenset({DEV_JWT_SECRET, "changeme", "change-me", "secret"})


class Settings(BaseSettings):
    """
    Environment-driven settings.

    Attributes:
        storage_backend: memory | postgres
        database_url: PostgreSQL DSN (required with the postgres backend)
        allowed_origins: Comma-separated CORS origins
        max_body_bytes: Request body cap enforced by BodyLimitMiddleware
        metrics_require_auth: /metrics needs an ADMIN token
        jwt_access_ttl_minutes: Access token lifetime (default: 24h)
        dev_seed_demo: Seed demo accounts and tasks on an empty store
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = "development"

    storage_backend: Literal["memory", "postgres"] = STORAGE_MEMORY
    database_url: str = ""
    db_pool_min_size: int = Field(1, gt=0)
    db_pool_max_size: int = Field(10, gt=0)
    db_statement_timeout_ms: int = Field(30_000, ge=0)

    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False
    max_body_bytes: int = Field(1024 * 1024, gt=0)
    metrics_require_auth: bool = False

    jwt_secret: str = DEV_JWT_SECRET
    jwt_access_ttl_minutes: int = Field(1440, gt=0)

    log_level: str = "INFO"
    log_json: bool = True

    dev_seed_demo: bool = False
    dev_seed_password: str = "password"

    @field_validator("storage_backend", mode="before")
    @classmethod
    def _normalize_backend(cls, v):
        return v.strip().lower() if isinstance(v, str) and v.strip() else STORAGE_MEMORY

    @model_validator(mode="after")
    def _check_storage(self):
        if self.uses_postgres() and not self.database_url.strip():
            raise ValueError("DATABASE_URL is required when STORAGE_BACKEND=postgres")
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"DB_POOL_MIN_SIZE ({self.db_pool_min_size}) cannot exceed "
                f"DB_POOL_MAX_SIZE ({self.db_pool_max_size})"
            )
        return self

    @model_validator(mode="after")
    def _check_production(self):
        if not self.is_production():
            return self

        secret = self.jwt_secret.strip()
        problems: list[str] = []
        if not secret or secret in _PLACEHOLDER_SECRETS:
            problems.append("JWT_SECRET must be set to a non-default value")
        elif len(secret) < MIN_PRODUCTION_SECRET_LENGTH:
            problems.append(
                f"JWT_SECRET must be at least {MIN_PRODUCTION_SECRET_LENGTH} characters"
            )
        if not self.metrics_require_auth:
            problems.append("METRICS_REQUIRE_AUTH must be true")
        if self.dev_seed_demo:
            problems.append("DEV_SEED_DEMO must be false")

        if problems:
            raise ValueError("Insecure production settings: " + "; ".join(problems))
        return self

    def get_allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def uses_postgres(self) -> bool:
        return self.storage_backend == STORAGE_POSTGRES


@lru_cache
def get_settings() -> Settings:
    """Singleton; raises pydantic.ValidationError (a ValueError) on bad env."""
    return Settings()
