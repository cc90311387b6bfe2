"""
===============================================================================
TARJETA CRC — task_api/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar un RequestContext inmutable por request en un único ContextVar.
  - Permitir correlación de logs sin pasar parámetros por todo el stack.

Colaboradores:
  - crosscutting.middleware: abre el contexto (request_id, method, path).
  - identity.identity_filter: agrega el username autenticado.
  - crosscutting.logger: lee get_context_dict() en cada registro.

Notas:
  - Un solo ContextVar: set_user_context() reemplaza el snapshot completo,
    así una task hija nunca ve un contexto a medio escribir.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import asdict, dataclass, replace


@dataclass(frozen=True, slots=True)
class RequestContext:
    request_id: str = ""
    method: str = ""
    path: str = ""
    user: str = ""


_EMPTY = RequestContext()

_current: ContextVar[RequestContext] = ContextVar("request_context", default=_EMPTY)


def current_context() -> RequestContext:
    return _current.get()


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    """Abre el contexto del request; el usuario arranca anónimo."""
    _current.set(
        RequestContext(request_id=request_id or "", method=method or "", path=path or "")
    )


def set_user_context(username: str = "") -> None:
    _current.set(replace(_current.get(), user=username or ""))


def get_context_dict() -> dict[str, str]:
    """Snapshot para logs: solo las claves con valor."""
    return {key: value for key, value in asdict(_current.get()).items() if value}


def clear_context() -> None:
    _current.set(_EMPTY)
