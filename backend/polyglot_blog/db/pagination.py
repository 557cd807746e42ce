from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .errors import DbValidation

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(slots=True)
class PaginationParams:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: str | None = None
    sort_order: str = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(slots=True)
class PaginationResult(Generic[T]):
    data: list[T] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return math.ceil(self.total / self.limit)

    def meta(self) -> dict[str, int]:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }


def _positive_int(v: Any, default: int) -> int:
    # Junk, zero and negatives fall back to the default.
    try:
        n = int(str(v).strip())
    except (TypeError, ValueError):
        return default
    return n if n >= 1 else default


def parse_pagination(
    *,
    page: Any = None,
    limit: Any = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> PaginationParams:
    order = str(sort_order or "desc").strip().lower()
    if order not in ("asc", "desc"):
        raise DbValidation(message="sortOrder must be 'asc' or 'desc'")
    return PaginationParams(
        page=_positive_int(page, DEFAULT_PAGE),
        limit=min(_positive_int(limit, default_limit), max_limit),
        sort_by=(str(sort_by).strip() or None) if sort_by is not None else None,
        sort_order=order,
    )


def paginate_list(items: list[T], params: PaginationParams) -> PaginationResult[T]:
    start = params.offset
    return PaginationResult(
        data=items[start : start + params.limit],
        total=len(items),
        page=params.page,
        limit=params.limit,
    )
