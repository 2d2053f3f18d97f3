# =============================================================================
# core/services/pagination.py - Offset Pagination
# =============================================================================
# Page-number pagination over a Repository. Produces the meta block used by
# every list endpoint:
#   {"total", "lastPage", "currentPage", "perPage", "prev", "next"}
# =============================================================================

from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Awaitable, Callable

from lib.repository import OrderBy, Record, Repository


@dataclass
class PaginationMeta:
    total: int
    last_page: int
    current_page: int
    per_page: int
    prev: int | None = None
    next: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "lastPage": self.last_page,
            "currentPage": self.current_page,
            "perPage": self.per_page,
            "prev": self.prev,
            "next": self.next,
        }


@dataclass
class PaginatedResult:
    """One page of records plus its meta block."""
    data: list[Record] = field(default_factory=list)
    meta: PaginationMeta | None = None


def build_meta(total: int, page: int, per_page: int) -> PaginationMeta:
    """
    Compute the meta block for a page.

    Example:
        build_meta(total=25, page=2, per_page=10)
        # lastPage=3, prev=1, next=3
    """
    last_page = math.ceil(total / per_page) if per_page else 0
    return PaginationMeta(
        total=total,
        last_page=last_page,
        current_page=page,
        per_page=per_page,
        prev=page - 1 if page > 1 else None,
        next=page + 1 if page < last_page else None,
    )


async def paginate(
    repository: Repository,
    page: int = 1,
    per_page: int = 10,
    where: Record | None = None,
    order_by: OrderBy | None = None,
    select: list[str] | None = None,
) -> PaginatedResult:
    """
    Fetch one page of records.

    Args:
        repository: Data-access object to query
        page: 1-based page number (values below 1 are treated as 1)
        per_page: Page size
        where: Equality filter
        order_by: Column -> "asc" / "desc"
        select: Columns to return

    Returns:
        PaginatedResult with the records and their meta block
    """
    page = max(int(page or 1), 1)
    per_page = max(int(per_page), 1)
    skip = (page - 1) * per_page

    total = await repository.count(where)
    data = await repository.find_many(
        where=where,
        order_by=order_by,
        skip=skip,
        take=per_page,
        select=select,
    )
    return PaginatedResult(data=data, meta=build_meta(total, page, per_page))


def create_paginator(per_page: int = 10) -> Callable[..., Awaitable[PaginatedResult]]:
    """Return paginate() with a default page size bound."""
    return partial(paginate, per_page=per_page)
