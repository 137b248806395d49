"""Pagination resolver: offset/limit from query parameters, with defaults and a cap."""

from typing import Optional

from fastapi import Query
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from teamkeys.config.settings import settings


class Pagination(BaseModel):
    """Resolved pagination window, echoed back in list responses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    offset: int
    limit: int
    total: Optional[int] = None
    next_path: Optional[str] = None

    def with_total(self, total: int, path: str) -> "Pagination":
        """
        Return a copy carrying the total count and the path to the next page, if any.

        The path holds only ``offset`` and ``limit``. Filters travel in the
        request body, so a client following it sends the same body again.
        """
        next_offset = self.offset + self.limit
        next_path = f"{path}?offset={next_offset}&limit={self.limit}" if next_offset < total else None
        return self.model_copy(update={"total": total, "next_path": next_path})


def get_pagination(
    offset: int = Query(0, ge=0),
    limit: int = Query(settings.PAGINATION_DEFAULT_LIMIT, ge=1, le=settings.PAGINATION_MAX_LIMIT),
) -> Pagination:
    """Dependency resolving the pagination window for a list endpoint."""
    return Pagination(offset=offset, limit=limit)
