"""Service probes and API information."""

import logging
from typing import Any, Annotated, Dict

from fastapi import APIRouter, Depends

from .. import __version__
from ..config import Settings, get_settings
from ..errors.problem_details import ServiceUnavailableError
from .dependencies import PostRepo


logger = logging.getLogger(__name__)

SERVICE_NAME = "Pagewise API"
SERVICE_VERSION = __version__

health_router = APIRouter(tags=["Health"])


@health_router.get("/health")
async def health_check(
    repository: PostRepo,
    settings: Annotated[Settings, Depends(get_settings)]
) -> Dict[str, Any]:
    """Readiness probe: the storage backend must answer a count.

    Raises:
        ServiceUnavailableError: If the storage backend fails
    """
    try:
        posts = await repository.count()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise ServiceUnavailableError(
            "Storage backend unavailable",
            storage_error=str(e)
        )

    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "storage": settings.storage_backend,
        "posts": posts
    }


@health_router.get("/live")
async def liveness_check() -> Dict[str, str]:
    return {"status": "alive", "service": SERVICE_NAME}


@health_router.get("/", tags=["Root"])
async def root() -> Dict[str, str]:
    """Service name, version and where to look next."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "docs": "/docs",
        "health": "/health"
    }
