"""Post storage backends."""

from .repository import PostRepository, post_paginator
from .memory import InMemoryPostRepository
from .posts import PostgresPostRepository


def create_repository(backend: str) -> PostRepository:
    """Create the repository for a configured storage backend."""
    if backend == "postgres":
        return PostgresPostRepository()
    return InMemoryPostRepository()


__all__ = [
    "PostRepository",
    "post_paginator",
    "InMemoryPostRepository",
    "PostgresPostRepository",
    "create_repository"
]
