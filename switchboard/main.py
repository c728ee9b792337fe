"""
Switchboard API - FastAPI Application

Main entry point for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from switchboard import __version__
from switchboard.catalog.registry import get_catalog
from switchboard.config import get_settings
from switchboard.core.database import close_db, init_db
from switchboard.routers import (
    agents_router,
    billing_router,
    catalog_router,
    health_router,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Suppress noisy third-party loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting Switchboard API...")
    settings = get_settings()
    logging.getLogger("switchboard").setLevel(settings.log_level.upper())

    # Initialize database
    logger.info("Initializing database connection...")
    await init_db()
    logger.info("Database connection established")

    # Load the integration catalog once; a broken schema file aborts startup
    catalog = get_catalog()
    logger.info(f"Integration catalog ready ({len(catalog)} apps)")

    if not settings.billing_configured:
        logger.warning("No payment provider key configured; checkout and portal are disabled")

    logger.info(f"Switchboard API started in {settings.environment} mode")

    yield

    # Shutdown
    logger.info("Shutting down Switchboard API...")
    await close_db()
    logger.info("Switchboard API shutdown complete")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and return a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Switchboard API",
        description="AI agent dashboard, billing and integration catalog API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Register routers
    app.include_router(health_router)
    app.include_router(agents_router)
    app.include_router(billing_router)
    app.include_router(catalog_router)

    # Root endpoint
    @app.get("/")
    async def root():
        return {
            "name": "Switchboard API",
            "version": __version__,
            "docs": "/docs",
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "switchboard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
