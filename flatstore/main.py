"""
FastAPI application entry point.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from flatstore.api.routes import build_router
from flatstore.core.config import Settings, get_settings
from flatstore.core.logging import configure_logging
from flatstore.models.bookmark import BookmarkModel
from flatstore.repositories.base import Repository
from flatstore.repositories.query import set_collation_locale

logger = structlog.get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)
    if not set_collation_locale(settings.collation_locale):
        logger.warning("Collation locale unavailable, keeping current one", locale=settings.collation_locale)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # One repository per collection, shared by every request
    repositories = {
        "bookmarks": Repository(BookmarkModel(), settings=settings.store),
    }
    app.state.repositories = repositories

    # Routes
    app.include_router(build_router(repositories), prefix="/api")

    # Exception handlers
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": str(exc) if settings.debug else "An error occurred",
            },
        )

    @app.get("/health")
    async def health_check():
        """Quick health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
            "collections": {
                name: repository.storage.location
                for name, repository in repositories.items()
            },
        }

    return app
