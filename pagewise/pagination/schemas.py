"""Request and response models for cursor pagination."""

from typing import Any, Callable, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .cursor import Direction

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class PaginationRequest(BaseModel):
    """Pagination options used to fetch a batch."""

    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Number of items per page")
    cursor: Optional[str] = Field(default=None, description="Opaque cursor from a previous page")
    default_direction: Direction = Field(
        default=Direction.FORWARD,
        description="Direction used when no valid cursor is supplied"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "limit": 20,
                "cursor": "eyJ2IjoiaWQtMjAiLCJkIjoiZm9yd2FyZCJ9",
            }
        }
    )


class PaginationMeta(BaseModel):
    """Navigation metadata sent alongside a page of data."""

    next_cursor: Optional[str] = Field(default=None, description="Cursor for the next page")
    prev_cursor: Optional[str] = Field(default=None, description="Cursor for the previous page")
    has_next_page: bool = Field(default=False, description="Whether a next page exists")
    has_prev_page: bool = Field(default=False, description="Whether a previous page exists")
    count: int = Field(default=0, ge=0, description="Number of items in this page")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Page(BaseModel, Generic[T]):
    """A window of records plus the tokens to move around it."""

    data: List[T] = Field(default_factory=list)
    next_cursor: Optional[str] = None
    prev_cursor: Optional[str] = None
    has_next_page: bool = False
    has_prev_page: bool = False
    count: int = 0

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def check_count(self) -> "Page[T]":
        if self.count != len(self.data):
            raise ValueError(f"count ({self.count}) must equal the number of items ({len(self.data)})")
        return self

    @property
    def meta(self) -> PaginationMeta:
        return PaginationMeta(
            next_cursor=self.next_cursor,
            prev_cursor=self.prev_cursor,
            has_next_page=self.has_next_page,
            has_prev_page=self.has_prev_page,
            count=self.count,
        )


class PaginatedResponse(BaseModel, Generic[T]):
    """Wire envelope for a paginated list endpoint."""

    data: List[T] = Field(description="Items in this page")
    pagination: PaginationMeta = Field(description="Navigation metadata")


R = TypeVar("R", bound=PaginatedResponse)


def map_page(page: Page[T], mapper: Callable[[T], U]) -> Page[U]:
    """Map every item of a page through mapper, keeping its navigation metadata.

    Args:
        page: Page produced by the paginator
        mapper: Conversion applied to each item (e.g. domain object to DTO)

    Returns:
        A new page with converted items
    """
    return Page[Any](
        data=[mapper(item) for item in page.data],
        next_cursor=page.next_cursor,
        prev_cursor=page.prev_cursor,
        has_next_page=page.has_next_page,
        has_prev_page=page.has_prev_page,
        count=page.count,
    )


def to_paginated_response(
    page: Page[Any],
    mapper: Optional[Callable[[Any], Any]] = None,
    response_class: Type[R] = PaginatedResponse[Any]
) -> R:
    """Build the wire envelope for a page.

    Args:
        page: Page produced by the paginator
        mapper: Optional conversion applied to each item first
        response_class: Envelope model to build, e.g. a PaginatedResponse
            subclass declared for one endpoint

    Returns:
        An instance of response_class
    """
    items = [mapper(item) for item in page.data] if mapper else list(page.data)
    return response_class(data=items, pagination=page.meta)
