"""Common schemas used across the API."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from reading_tracker.config import settings
from reading_tracker.core.exceptions import InvalidArgumentError

T = TypeVar("T")

# Largest value a 64-bit SQL integer (OFFSET / LIMIT) can hold
MAX_SQL_INTEGER = 2**63 - 1


class Pagination(BaseModel):
    """Pagination metadata."""

    page: int = Field(ge=1, description="Current page number")
    limit: int = Field(ge=1, description="Items per page")
    total: int = Field(ge=0, description="Total number of items")
    total_pages: int = Field(ge=0, description="Total number of pages")
    has_next: bool = Field(description="Whether there's a next page")
    has_prev: bool = Field(description="Whether there's a previous page")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "page": 1,
                "limit": 10,
                "total": 15,
                "total_pages": 2,
                "has_next": True,
                "has_prev": False,
            }
        }
    )


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response wrapper."""

    data: list[T]
    pagination: Pagination


class PageRequest(BaseModel):
    """Resolved paging window: 1-indexed page, page size and sort direction."""

    page: int
    limit: int
    ascending: bool = True


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(description="Error code")
    message: str = Field(description="Human-readable error message")
    details: Any | None = Field(default=None, description="Additional error details")
    request_id: str | None = Field(default=None, alias="requestId", description="Request ID for tracing")


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: ErrorDetail

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": {
                    "code": "FORBIDDEN",
                    "message": "You do not own this reading",
                    "details": None,
                    "requestId": "req_abc123",
                }
            }
        }
    )


def resolve_page(
    page: int | None,
    limit: int | None,
    sort: str | None = None,
) -> PageRequest:
    """Normalize raw paging query values.

    Missing or non-positive values fall back to the configured defaults
    (page 1, limit 10). ``sort`` is ascending unless it equals ``"desc"``.

    Raises:
        InvalidArgumentError: The resulting offset does not fit a SQL integer
    """
    if page is None or page < 1:
        page = settings.default_page
    if limit is None or limit < 1:
        limit = settings.default_page_size
    if settings.max_page_size is not None:
        limit = min(limit, settings.max_page_size)
    if limit > MAX_SQL_INTEGER or (page - 1) * limit > MAX_SQL_INTEGER:
        raise InvalidArgumentError("page or limit out of range", {"page": page, "limit": limit})

    return PageRequest(page=page, limit=limit, ascending=(sort or "asc").lower() != "desc")


def create_pagination(
    page: int,
    limit: int,
    total: int,
) -> Pagination:
    """Create pagination metadata."""
    total_pages = (total + limit - 1) // limit if total > 0 else 0

    return Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )
