"""API routes for the Pagewise API."""

from .health import health_router
from .posts import posts_router

__all__ = ["health_router", "posts_router"]
