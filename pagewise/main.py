"""FastAPI application factory for the Pagewise API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .db import create_repository
from .db.connection import db_manager
from .errors import register_exception_handlers
from .middleware.request_logging import RequestLoggingMiddleware
from .routes import health_router, posts_router
from .routes.health import SERVICE_NAME, SERVICE_VERSION

logging.basicConfig(
    level=logging.INFO,
    format=get_settings().log_format
)
logger = logging.getLogger(__name__)


async def _open_storage(settings: Settings) -> None:
    """Create the connection pool and verify the database answers."""
    if settings.storage_backend != "postgres":
        logger.info("Using in-memory post storage")
        return

    try:
        await db_manager.initialize()
        async with db_manager.pool.acquire() as conn:
            await conn.execute("SELECT 1")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise
    logger.info("Database connectivity verified")


async def _close_storage(settings: Settings) -> None:
    if settings.storage_backend != "postgres":
        return

    try:
        await db_manager.close()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error closing database connections: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open storage on startup and release it on shutdown."""
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)

    logger.info(f"Starting {SERVICE_NAME} {SERVICE_VERSION}")
    await _open_storage(settings)

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")
    await _close_storage(settings)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    The post repository is created here from ``STORAGE_BACKEND`` and stored
    on ``app.state``; tests replace it there.
    """
    settings = get_settings()

    app = FastAPI(
        title=SERVICE_NAME,
        description="CRUD service with opaque-cursor bidirectional pagination",
        version=SERVICE_VERSION,
        lifespan=lifespan
    )
    app.state.post_repository = create_repository(settings.storage_backend)

    app.add_middleware(RequestLoggingMiddleware, skip_paths=["/health", "/live"])
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(posts_router, prefix="/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "pagewise.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
