"""Main FastAPI application entry point.

This module serves as the primary entry point for the catalogue curation
service. It handles core application setup including:
- FastAPI application initialization and configuration
- Middleware setup for CORS, correlation ids and request logging
- Redis and database lifecycle management
- Route registration and API versioning
- Health check endpoint
"""

# Standard library imports
import time
from contextlib import asynccontextmanager

# FastAPI imports
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis import asyncio as aioredis

# Internal imports
from curator.core.config import get_settings
from curator.core.exceptions import AppException
from curator.core.logging import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
    get_logger,
    setup_logging
)
from curator.database.session import get_session_manager
from curator.api.v1.router import api_router

logger = get_logger(__name__)
settings = get_settings()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handle application startup and shutdown events.
    This context manager ensures proper resource management.
    """
    setup_logging()
    logger.info("Starting up application...")

    app.state.redis = None
    if settings.caching_enabled:
        app.state.redis = aioredis.from_url(settings.REDIS_URL)
        logger.info("Statistics cache enabled")

    try:
        yield  # Application runs here
    finally:
        logger.info("Shutting down application...")
        if app.state.redis is not None:
            await app.state.redis.aclose()
        await get_session_manager().dispose()
        logger.info("Cleanup completed")

def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    Handles all application setup including middleware, routes, and error handlers.
    """
    app = FastAPI(
        title="Catalogue Curator API",
        description="Curation analysis and optimization for creator catalogues",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        docs_url=settings.DOCS_URL if not settings.PROD else None,
        redoc_url=None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register exception handlers
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        """Handle custom application exceptions"""
        logger.warning(
            "Request rejected",
            path=request.url.path,
            status_code=exc.status_code,
            detail=exc.detail
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail}
        )

    # Register routers
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint for monitoring systems.
        Checks the database connection.
        """
        if await get_session_manager().healthcheck():
            return {
                "status": "healthy",
                "timestamp": time.time(),
                "version": app.version,
            }
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy"}
        )

    return app

# Create the application instance
app = create_application()

# Only run the server directly in development
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "curator.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not settings.PROD,
        log_level="debug" if settings.DEBUG else "info"
    )
