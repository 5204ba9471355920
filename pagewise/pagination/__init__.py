"""Pagination module for cursor-based pagination."""

from .cursor import (
    Direction,
    Cursor,
    CursorCodec,
    KeyStrategy,
    STRING_KEY,
    DATETIME_KEY,
    UUID_KEY,
    encode_cursor,
    decode_cursor
)
from .schemas import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    PaginationRequest,
    PaginationMeta,
    Page,
    PaginatedResponse,
    map_page,
    to_paginated_response
)
from .paginator import (
    CursorKeyError,
    CursorPaginator,
    create_id_paginator,
    create_date_paginator
)
from .links import create_link_header

__all__ = [
    "Direction",
    "Cursor",
    "CursorCodec",
    "KeyStrategy",
    "STRING_KEY",
    "DATETIME_KEY",
    "UUID_KEY",
    "encode_cursor",
    "decode_cursor",
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "PaginationRequest",
    "PaginationMeta",
    "Page",
    "PaginatedResponse",
    "map_page",
    "to_paginated_response",
    "CursorKeyError",
    "CursorPaginator",
    "create_id_paginator",
    "create_date_paginator",
    "create_link_header"
]
