"""Storage-independent contract for post persistence."""

from typing import Optional, Protocol, runtime_checkable

from ..models.posts import Post, PostCreate, PostUpdate
from ..pagination import CursorPaginator, Page, PaginationRequest, create_id_paginator

# Posts are paginated by their string id in ascending order
post_paginator: CursorPaginator[Post] = create_id_paginator()


@runtime_checkable
class PostRepository(Protocol):
    """Operations every post storage adapter provides.

    Adapters implement this independently; the only thing they share is
    ``post_paginator``, which turns their ``limit + 1`` batch into a page.
    """

    async def create(self, data: PostCreate) -> Post:
        ...

    async def get(self, post_id: str) -> Post:
        """Return the post or raise NotFoundError."""
        ...

    async def update(self, post_id: str, data: PostUpdate) -> Post:
        ...

    async def delete(self, post_id: str) -> bool:
        """Return False when nothing was deleted."""
        ...

    async def count(self) -> int:
        ...

    async def list_page(self, options: PaginationRequest) -> Page[Post]:
        """Fetch one page of posts ordered by id.

        ``options.cursor`` is either absent or a token that decodes; callers
        resolve invalid tokens before reaching the repository.
        """
        ...


def describe_cursor(options: PaginationRequest) -> Optional[str]:
    """Human-readable cursor for log lines."""
    decoded = post_paginator.decode(options.cursor)
    return str(decoded) if decoded else None
