"""
===============================================================================
MÓDULO: Paginación por cursor opaco (tasks / users)
===============================================================================

El cursor es "offset:<n>" en base64 url-safe: el cliente lo trata como opaco
y el servidor lo traduce a LIMIT/OFFSET. Un cursor ilegible equivale a la
primera página (nunca 400).

Los listados piden `limit + 1` filas: la fila extra solo indica has_next.
===============================================================================
"""

from __future__ import annotations

import base64
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

_CURSOR_PREFIX = "offset:"

# R: mismo wire format camelCase que los DTOs (pageInfo, hasNext, nextCursor).
_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageInfo(BaseModel):
    model_config = _CAMEL

    has_next: bool
    has_prev: bool
    next_cursor: Optional[str] = Field(None, description="Cursor de la página siguiente")
    prev_cursor: Optional[str] = Field(None, description="Cursor de la página anterior")
    total: Optional[int] = Field(None, description="Cantidad total de items")


class Page(BaseModel, Generic[T]):
    model_config = _CAMEL

    items: List[T]
    page_info: PageInfo


def encode_cursor(offset: int) -> str:
    token = f"{_CURSOR_PREFIX}{max(offset, 0)}"
    return base64.urlsafe_b64encode(token.encode("ascii")).decode("ascii")


def decode_cursor(cursor: str) -> int:
    try:
        token = base64.urlsafe_b64decode(cursor).decode("ascii")
        prefix, _, value = token.partition(":")
        if f"{prefix}:" != _CURSOR_PREFIX:
            return 0
        return max(int(value), 0)
    except ValueError:
        return 0


def paginate(
    items: List[T],
    limit: int,
    cursor: Optional[str] = None,
    total: Optional[int] = None,
) -> Page[T]:
    """Recorta `items` (limit + 1) a una página y arma los cursores vecinos."""
    limit = max(limit, 1)
    offset = decode_cursor(cursor) if cursor else 0
    has_next = len(items) > limit

    info = PageInfo(has_next=has_next, has_prev=offset > 0, total=total)
    if has_next:
        info.next_cursor = encode_cursor(offset + limit)
    if offset > 0:
        info.prev_cursor = encode_cursor(offset - limit)

    return Page(items=items[:limit], page_info=info)
