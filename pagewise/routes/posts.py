"""Posts API endpoints."""

import logging

from fastapi import APIRouter, Request, Response

from ..models.posts import Post, PostCreate, PostUpdate, PostListResponse
from ..pagination import create_link_header, to_paginated_response
from ..db.repository import describe_cursor
from ..errors.problem_details import NotFoundError
from .dependencies import Pagination, PostRepo


logger = logging.getLogger(__name__)

posts_router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
    responses={
        404: {"description": "Not Found"},
        422: {"description": "Validation Error"}
    }
)


@posts_router.post(
    "",
    response_model=Post,
    status_code=201,
    summary="Create a post",
    responses={
        201: {"description": "Post created successfully"}
    }
)
async def create_post(post_data: PostCreate, repository: PostRepo) -> Post:
    """Create a new post.

    The id and timestamps are assigned by the storage backend.
    """
    post = await repository.create(post_data)
    logger.info(f"Successfully created post {post.id}")
    return post


@posts_router.get(
    "",
    response_model=PostListResponse,
    summary="List posts",
    description="List posts ordered by id with bidirectional cursor pagination.",
    responses={
        200: {"description": "Posts retrieved successfully"},
        400: {"description": "Bad Request - Invalid pagination cursor or limit"}
    }
)
async def list_posts(
    request: Request,
    response: Response,
    repository: PostRepo,
    pagination: Pagination
) -> PostListResponse:
    """List posts with cursor pagination.

    Each page carries ``nextCursor`` and ``prevCursor`` tokens. Passing one
    back as ``cursor`` moves one page in that direction; the items in a page
    are always in ascending id order regardless of direction.

    Args:
        request: FastAPI request object
        response: FastAPI response object for adding headers
        repository: Configured post storage backend
        pagination: Resolved limit and cursor

    Returns:
        Page of posts with navigation metadata and a Link header
    """
    logger.debug(f"Listing posts: limit={pagination.limit}, cursor={describe_cursor(pagination)}")
    page = await repository.list_page(pagination)

    link_header = create_link_header(
        base_url=str(request.url).split("?")[0],
        params={"limit": str(pagination.limit)},
        next_cursor=page.next_cursor,
        prev_cursor=page.prev_cursor
    )
    if link_header:
        response.headers["Link"] = link_header

    logger.info(f"Retrieved {page.count} posts (next={page.has_next_page}, prev={page.has_prev_page})")
    return to_paginated_response(page, response_class=PostListResponse)


@posts_router.get(
    "/{post_id}",
    response_model=Post,
    summary="Get a post",
    responses={
        200: {"description": "Post retrieved successfully"}
    }
)
async def get_post(post_id: str, repository: PostRepo) -> Post:
    """Get a specific post by id."""
    return await repository.get(post_id)


@posts_router.patch(
    "/{post_id}",
    response_model=Post,
    summary="Update a post",
    description="Partially update a post. updated_at is refreshed automatically.",
    responses={
        200: {"description": "Post updated successfully"}
    }
)
async def update_post(post_id: str, update_data: PostUpdate, repository: PostRepo) -> Post:
    """Update a post (supports partial updates)."""
    post = await repository.update(post_id, update_data)
    logger.info(f"Successfully updated post {post_id}")
    return post


@posts_router.delete(
    "/{post_id}",
    status_code=204,
    summary="Delete a post",
    responses={
        204: {"description": "Post deleted successfully"}
    }
)
async def delete_post(post_id: str, repository: PostRepo) -> Response:
    """Delete a post."""
    deleted = await repository.delete(post_id)

    if not deleted:
        raise NotFoundError(f"Post '{post_id}' not found")

    logger.info(f"Successfully deleted post {post_id}")
    return Response(status_code=204)


__all__ = ["posts_router"]
