"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/sql.py
============================================================
Module: helpers de ejecución SQL compartidos por los repos Postgres

Responsibilities:
  - Resolver el pool (inyectado o global).
  - Ejecutar SQL parametrizado con manejo consistente de errores:
      psycopg.Error -> log estructurado + DatabaseError.
  - Traducir UniqueViolation a la excepción que pida el caller.

Collaborators:
  - psycopg / psycopg_pool
  - infrastructure.db.pool.get_pool
  - crosscutting.exceptions.DatabaseError
============================================================
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

import psycopg
from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ...db.pool import get_pool

UniqueViolationHandler = Callable[[Optional[str]], Exception]


def resolve_pool(pool: ConnectionPool | None) -> ConnectionPool:
    return pool if pool is not None else get_pool()


def execute(
    pool: ConnectionPool | None,
    *,
    query: str,
    params: Iterable[object] = (),
    fetch: str = "none",
    log_msg: str,
    log_extra: dict[str, object] | None = None,
    on_unique_violation: UniqueViolationHandler | None = None,
):
    """
    Ejecuta una sentencia en su propia transacción.

    fetch:
      - "one": fetchone()
      - "all": fetchall()
      - "rowcount": cantidad de filas afectadas
      - "none": sin resultado
    """
    try:
        with resolve_pool(pool).connection() as conn:
            cur = conn.execute(query, tuple(params))
            if fetch == "one":
                return cur.fetchone()
            if fetch == "all":
                return cur.fetchall()
            if fetch == "rowcount":
                return cur.rowcount
            return None
    except pg_errors.UniqueViolation as exc:
        if on_unique_violation is None:
            logger.exception(log_msg, extra=log_extra or {})
            raise DatabaseError(f"{log_msg}: {exc}") from exc
        raise on_unique_violation(exc.diag.constraint_name) from exc
    except psycopg.Error as exc:
        logger.exception(log_msg, extra={**(log_extra or {}), "error": str(exc)})
        raise DatabaseError(f"{log_msg}: {exc}", original_error=exc) from exc


def ping(pool: ConnectionPool | None) -> bool:
    row = execute(pool, query="SELECT 1", fetch="one", log_msg="Postgres ping failed")
    return bool(row and row[0] == 1)
