"""PostgreSQL post storage backed by asyncpg."""

import logging
from typing import Any, Awaitable, Callable, List, Optional
from uuid import UUID

import asyncpg

from ..models.posts import Post, PostCreate, PostUpdate
from ..pagination import Direction, Page, PaginationRequest
from ..errors.problem_details import (
    ConflictError, InternalServerError, InvalidCursorError, NotFoundError
)
from .connection import get_db_pool
from .repository import post_paginator


logger = logging.getLogger(__name__)

POST_COLUMNS = "id::text AS id, title, content, published, created_at, updated_at"


def _parse_uuid(value: str) -> Optional[UUID]:
    try:
        return UUID(value)
    except (TypeError, ValueError):
        return None


def build_list_query(cursor_id: Optional[UUID], direction: Direction) -> tuple[str, List[Any]]:
    """Build the keyset query for one page of posts.

    The LIMIT parameter is always last; callers append ``limit + 1``.

    Args:
        cursor_id: Id the page continues from, or None for the first page
        direction: Traversal direction

    Returns:
        Tuple of (query, parameters without the limit)
    """
    conditions = []
    params: List[Any] = []

    if cursor_id is not None:
        params.append(cursor_id)
        operator = ">" if direction is Direction.FORWARD else "<"
        conditions.append(f"id {operator} $1::uuid")

    where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""
    order = "ASC" if direction is Direction.FORWARD else "DESC"

    query = f"""
        SELECT {POST_COLUMNS}
        FROM posts
        {where_clause}
        ORDER BY id {order}
        LIMIT ${len(params) + 1}
    """
    return query, params


class PostgresPostRepository:
    """asyncpg implementation of PostRepository."""

    def __init__(self, get_pool: Callable[[], Awaitable[asyncpg.Pool]] = get_db_pool):
        self._get_pool = get_pool

    async def create(self, data: PostCreate) -> Post:
        pool = await self._get_pool()

        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                        INSERT INTO posts (title, content, published)
                        VALUES ($1, $2, $3)
                        RETURNING {POST_COLUMNS}
                    """,
                    data.title,
                    data.content,
                    data.published
                )
        except asyncpg.UniqueViolationError as e:
            logger.warning(f"Duplicate post: {e}")
            raise ConflictError("Post already exists")
        except asyncpg.PostgresError as e:
            logger.error(f"Database error creating post: {e}")
            raise InternalServerError(f"Database error: {e}")

        if not row:
            raise InternalServerError("Failed to create post")

        post = Post.model_validate(dict(row))
        logger.info(f"Created post {post.id}")
        return post

    async def get(self, post_id: str) -> Post:
        uuid = _parse_uuid(post_id)
        if uuid is None:
            raise NotFoundError(f"Post '{post_id}' not found")

        pool = await self._get_pool()

        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT {POST_COLUMNS} FROM posts WHERE id = $1",
                    uuid
                )
        except asyncpg.PostgresError as e:
            logger.error(f"Database error retrieving post: {e}")
            raise InternalServerError(f"Database error: {e}")

        if not row:
            raise NotFoundError(f"Post '{post_id}' not found")

        return Post.model_validate(dict(row))

    async def update(self, post_id: str, data: PostUpdate) -> Post:
        uuid = _parse_uuid(post_id)
        if uuid is None:
            raise NotFoundError(f"Post '{post_id}' not found")

        changes = data.changes()
        assignments = ["updated_at = now()"]
        params: List[Any] = [uuid]
        for column, value in changes.items():
            params.append(value)
            assignments.append(f"{column} = ${len(params)}")

        pool = await self._get_pool()

        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                        UPDATE posts
                        SET {', '.join(assignments)}
                        WHERE id = $1
                        RETURNING {POST_COLUMNS}
                    """,
                    *params
                )
        except asyncpg.PostgresError as e:
            logger.error(f"Database error updating post: {e}")
            raise InternalServerError(f"Database error: {e}")

        if not row:
            raise NotFoundError(f"Post '{post_id}' not found")

        post = Post.model_validate(dict(row))
        logger.info(f"Updated post {post.id}")
        return post

    async def delete(self, post_id: str) -> bool:
        uuid = _parse_uuid(post_id)
        if uuid is None:
            return False

        pool = await self._get_pool()

        try:
            async with pool.acquire() as conn:
                result = await conn.execute("DELETE FROM posts WHERE id = $1", uuid)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error deleting post: {e}")
            raise InternalServerError(f"Database error: {e}")

        # "DELETE 1" means one row deleted
        deleted = result.split()[-1] == "1"
        if deleted:
            logger.info(f"Deleted post {post_id}")
        return deleted

    async def count(self) -> int:
        pool = await self._get_pool()

        try:
            async with pool.acquire() as conn:
                count = await conn.fetchval("SELECT COUNT(*) FROM posts")
        except asyncpg.PostgresError as e:
            logger.error(f"Database error counting posts: {e}")
            raise InternalServerError(f"Database error: {e}")

        return count or 0

    async def list_page(self, options: PaginationRequest) -> Page[Post]:
        cursor = post_paginator.decode(options.cursor)
        direction = cursor.direction if cursor else options.default_direction

        cursor_id = None
        if cursor is not None:
            cursor_id = _parse_uuid(cursor.value)
            if cursor_id is None:
                raise InvalidCursorError("Cursor does not point at a post")

        query, params = build_list_query(cursor_id, direction)
        pool = await self._get_pool()

        try:
            async with pool.acquire() as conn:
                rows = await conn.fetch(query, *params, options.limit + 1)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error listing posts: {e}")
            raise InternalServerError(f"Database error: {e}")

        posts = [Post.model_validate(dict(row)) for row in rows]
        logger.debug(f"Fetched {len(posts)} posts ({direction.value}) for limit {options.limit}")
        return post_paginator.build_result(posts, options)
