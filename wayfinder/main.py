"""
FastAPI application setup for the Wayfinder API.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from contextlib import asynccontextmanager

from wayfinder.config import get_settings
from wayfinder.core.db import dispose_engine
from wayfinder.core.error_handlers import setup_error_handlers
from wayfinder.core.logging import configure_logging
from wayfinder.middleware import RequestContextMiddleware

settings = get_settings()

configure_logging(settings.log_level.value, settings.log_format)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    The application owns the database engine; it is disposed on shutdown.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    try:
        yield
    finally:
        logger.info("Shutting down application")
        await dispose_engine()
        logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=None if settings.is_production() else "/docs",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    from wayfinder.api import health_router, trips_router, partner_router
    app.include_router(health_router)
    app.include_router(trips_router)
    app.include_router(partner_router)

    return app


# Create application instance
app = create_app()


@app.get("/")
async def root():
    """Root endpoint for basic health check."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "status": "running"
    }
