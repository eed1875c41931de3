"""Pagination, ordering and filtering value objects shared by client and server."""

import math
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class OrderBy(BaseModel):
    """Single ordering clause."""

    field: str
    direction: Literal["asc", "desc"] = "asc"


class ListParams(BaseModel):
    """Parameters for listing a whole collection."""

    order_by: list[OrderBy] | None = None
    filters: dict[str, Any] | None = None
    search_term: str | None = None


class PaginationParams(ListParams):
    """Parameters for listing one page of a collection."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def cache_segment(self) -> dict[str, Any]:
        """Return the parameters as a plain mapping for use in a query key."""
        return self.model_dump(mode="json", exclude_none=True)


class PaginationMeta(BaseModel):
    """Pagination metadata returned with every page."""

    current_page: int
    page_size: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def create(cls, total_count: int, page: int, page_size: int) -> "PaginationMeta":
        """Compute the metadata for a page.

        Args:
            total_count: Number of records matching the query.
            page: One-based page number.
            page_size: Records per page.

        Returns:
            The pagination metadata.
        """
        total_pages = math.ceil(total_count / page_size) if total_count else 0
        return cls(
            current_page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )


class ListResult(BaseModel, Generic[T]):
    """Unpaginated list response."""

    data: list[T]


class PaginatedResult(BaseModel, Generic[T]):
    """One page of records plus pagination metadata."""

    data: list[T]
    pagination: PaginationMeta
