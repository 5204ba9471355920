"""FastAPI dependencies shared by the API routes."""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Query, Request

from ..config import Settings, get_settings
from ..db.repository import PostRepository, post_paginator
from ..errors.problem_details import BadRequestError, InvalidCursorError
from ..pagination import MAX_LIMIT, PaginationRequest


logger = logging.getLogger(__name__)


def get_post_repository(request: Request) -> PostRepository:
    """Return the repository created at application startup."""
    return request.app.state.post_repository


async def get_pagination(
    settings: Annotated[Settings, Depends(get_settings)],
    limit: Annotated[Optional[int], Query(ge=1, le=MAX_LIMIT, description="Number of items per page")] = None,
    cursor: Annotated[Optional[str], Query(description="Opaque cursor from a previous page")] = None
) -> PaginationRequest:
    """Resolve query parameters into pagination options.

    A cursor that does not decode is rejected with 400 when
    ``strict_cursors`` is enabled; otherwise it is dropped and the first
    page is served.

    Raises:
        BadRequestError: If limit exceeds the configured maximum page size
        InvalidCursorError: If the cursor is malformed and cursors are strict
    """
    if limit is None:
        limit = min(settings.default_page_size, settings.max_page_size)
    elif limit > settings.max_page_size:
        raise BadRequestError(
            f"limit must not exceed {settings.max_page_size}",
            max_page_size=settings.max_page_size
        )

    if cursor and post_paginator.decode(cursor) is None:
        if settings.strict_cursors:
            raise InvalidCursorError()
        logger.info("Ignoring invalid pagination cursor")
        cursor = None

    return PaginationRequest(limit=limit, cursor=cursor or None)


PostRepo = Annotated[PostRepository, Depends(get_post_repository)]
Pagination = Annotated[PaginationRequest, Depends(get_pagination)]
