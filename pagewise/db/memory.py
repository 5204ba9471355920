"""In-memory post storage.

Used as the default backend and in tests. Records live in a dict keyed by
id; every list call sorts the ids and slices around the cursor, which is
fine for the data volumes this backend is meant for.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional
from uuid import uuid4

from ..errors.problem_details import ConflictError, NotFoundError
from ..models.posts import Post, PostCreate, PostUpdate
from ..pagination import Direction, Page, PaginationRequest
from .repository import post_paginator


logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryPostRepository:
    """Dict-backed implementation of PostRepository."""

    def __init__(self, id_factory: Callable[[], str] = _new_id, clock: Callable[[], datetime] = _now):
        self._posts: Dict[str, Post] = {}
        self._lock = asyncio.Lock()
        self._id_factory = id_factory
        self._clock = clock

    async def create(self, data: PostCreate) -> Post:
        async with self._lock:
            post_id = self._id_factory()
            if post_id in self._posts:
                raise ConflictError(f"Post '{post_id}' already exists")

            now = self._clock()
            post = Post(id=post_id, created_at=now, updated_at=now, **data.model_dump())
            self._posts[post_id] = post

        logger.info(f"Created post {post_id}")
        return post

    async def get(self, post_id: str) -> Post:
        post = self._posts.get(post_id)
        if post is None:
            raise NotFoundError(f"Post '{post_id}' not found")
        return post

    async def update(self, post_id: str, data: PostUpdate) -> Post:
        async with self._lock:
            current = await self.get(post_id)
            updated = current.model_copy(update={**data.changes(), "updated_at": self._clock()})
            self._posts[post_id] = updated

        logger.info(f"Updated post {post_id}")
        return updated

    async def delete(self, post_id: str) -> bool:
        async with self._lock:
            deleted = self._posts.pop(post_id, None) is not None

        if deleted:
            logger.info(f"Deleted post {post_id}")
        else:
            logger.debug(f"Post {post_id} not found for deletion")
        return deleted

    async def count(self) -> int:
        return len(self._posts)

    async def list_page(self, options: PaginationRequest) -> Page[Post]:
        cursor = post_paginator.decode(options.cursor)
        direction = cursor.direction if cursor else options.default_direction
        fetch_size = options.limit + 1

        async with self._lock:
            ids = sorted(self._posts)
            batch = self._window(ids, cursor.value if cursor else None, direction, fetch_size)
            posts = [self._posts[post_id] for post_id in batch]

        logger.debug(f"Fetched {len(posts)} posts ({direction.value}) for limit {options.limit}")
        return post_paginator.build_result(posts, options)

    @staticmethod
    def _window(ids: List[str], after: Optional[str], direction: Direction, size: int) -> List[str]:
        """Select up to size ids past the cursor, in traversal order."""
        if direction is Direction.FORWARD:
            candidates = [i for i in ids if after is None or i > after]
            return candidates[:size]

        candidates = [i for i in reversed(ids) if after is None or i < after]
        return candidates[:size]
