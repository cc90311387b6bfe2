"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Cada evento sale como una línea JSON con:
- el contexto del request (request_id / method / path / user)
- los campos pasados en `extra=`
- el stacktrace, si el registro trae exc_info

password, token y Authorization nunca salen en claro.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Colaboradores:
  - task_api/context.py (snapshot del request)
  - crosscutting/config.py (LOG_LEVEL, LOG_JSON)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from ..context import get_context_dict

REDACTED = "***REDACTADO***"

# R: Atributos estándar de LogRecord; lo demás vino por `extra=`.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

_SENSITIVE_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "secret",
        "jwt_secret",
        "token",
        "authorization",
        "cookie",
    }
)

_MAX_STR = 2_000
_MAX_DEPTH = 4


def _is_sensitive(key: str) -> bool:
    return key.lower() in _SENSITIVE_KEYS


def _scrub(value: Any, depth: int = 0) -> Any:
    if depth >= _MAX_DEPTH:
        return "…"
    if isinstance(value, Mapping):
        return {
            str(k): REDACTED if _is_sensitive(str(k)) else _scrub(v, depth + 1)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple, set)):
        return [_scrub(v, depth + 1) for v in value]
    if isinstance(value, str) and len(value) > _MAX_STR:
        return f"{value[:_MAX_STR]}…"
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


class JSONFormatter(logging.Formatter):
    """LogRecord -> una línea JSON (contexto + extras saneados)."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
            **get_context_dict(),
        }

        for key, value in vars(record).items():
            if key in _RESERVED_ATTRS:
                continue
            entry[key] = REDACTED if _is_sensitive(key) else _scrub(value)

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "detail": str(record.exc_info[1]),
                "stacktrace": self.formatException(record.exc_info),
            }

        return json.dumps(entry, ensure_ascii=False, default=str)


def _configured_level_and_format() -> tuple[int, bool]:
    from .config import get_settings

    # R: settings inválidos los reporta el lifespan; acá caemos a defaults.
    try:
        settings = get_settings()
    except ValueError:
        return logging.INFO, True
    level = logging.getLevelName((settings.log_level or "INFO").upper())
    return (level if isinstance(level, int) else logging.INFO), settings.log_json


def setup_logger(name: str = "task-api") -> logging.Logger:
    """Logger del servicio; idempotente ante reimports."""
    log = logging.getLogger(name)
    level, use_json = _configured_level_and_format()
    log.setLevel(level)

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)

    return log


logger = setup_logger()
