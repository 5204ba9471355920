"""Data models for the Pagewise API."""

from .posts import (
    Post,
    PostBase,
    PostCreate,
    PostUpdate,
    PostListResponse
)

__all__ = [
    "Post",
    "PostBase",
    "PostCreate",
    "PostUpdate",
    "PostListResponse"
]
