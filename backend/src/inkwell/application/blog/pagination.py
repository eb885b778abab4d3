"""Pagination translation shared by every transport.

Clients speak either ``limit/offset`` (REST, client library) or ``page/page_size``
(RPC). The post service speaks ``limit/offset``; the store speaks ``page/page_size``.
All of the arithmetic and the bounds live here so both adapters enforce the same cap.
"""
from inkwell.domain.blog.entities import Pagination
from inkwell.domain.blog.value_objects import MAX_ROW_NUMBER
from inkwell.domain.errors import ValidationError

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def resolve_window(limit: int | None, offset: int | None) -> tuple[int, int]:
    """Apply defaults and bounds to a client-supplied ``limit/offset`` window."""
    limit = DEFAULT_LIMIT if limit is None else limit
    offset = 0 if offset is None else offset
    if not 1 <= limit <= MAX_LIMIT:
        raise ValidationError("limit", f"must be in 1..={MAX_LIMIT}")
    if offset < 0:
        raise ValidationError("offset", "must be >= 0")
    if offset > MAX_ROW_NUMBER - limit:
        raise ValidationError("offset", "out of range")
    return limit, offset


def window_from_page(page: int, page_size: int) -> tuple[int, int]:
    """Translate RPC's native ``page/page_size`` into ``limit/offset``.

    Zero values mean "unset" (proto3 defaults): ``page_size=0`` is the default limit,
    ``page=0`` is the first page.
    """
    if page < 0:
        raise ValidationError("page", "must be >= 0")
    page_size = DEFAULT_LIMIT if page_size == 0 else page_size
    if not 1 <= page_size <= MAX_LIMIT:
        raise ValidationError("page_size", f"must be in 1..={MAX_LIMIT}")
    page = max(page, 1)
    if (page - 1) * page_size > MAX_ROW_NUMBER - page_size:
        raise ValidationError("page", "out of range")
    return page_size, (page - 1) * page_size


def to_pagination(limit: int, offset: int) -> Pagination:
    """Service-side translation. An offset inside a page rounds down to that page."""
    page_size = max(limit, 1)
    return Pagination(page=offset // page_size + 1, page_size=page_size)
