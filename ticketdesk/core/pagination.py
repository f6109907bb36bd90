# ticketdesk/core/pagination.py
import math

from fastapi import Query
from pydantic import BaseModel

from ticketdesk.core.config import get_settings


class Pagination(BaseModel):
    total_items: int
    total_pages: int
    current_page: int
    items_per_page: int


class PageParams:
    """``page``/``limit`` query parameters, usable as a dependency."""

    def __init__(
        self,
        page: int = Query(default=1, ge=1),
        limit: int | None = Query(default=None, ge=1),
    ):
        settings = get_settings()
        self.page = page
        self.limit = min(limit or settings.PAGE_SIZE_DEFAULT, settings.PAGE_SIZE_MAX)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def paginate(query, params: PageParams):
    """Return ``(items, Pagination)`` for an already filtered and ordered query."""
    total = query.order_by(None).count()
    items = query.offset(params.offset).limit(params.limit).all()
    pagination = Pagination(
        total_items=total,
        total_pages=math.ceil(total / params.limit),
        current_page=params.page,
        items_per_page=params.limit,
    )
    return items, pagination
