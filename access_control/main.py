"""
Access Control Management Entry Point

FastAPI application setup with all routers and middleware.

Admin API for physical access control: servers, devices, groups, rules,
attendance definitions, people and dashboard users, mounted at /api/v1.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from access_control import __version__
from access_control.api.router import router as api_router
from access_control.config.settings import settings
from access_control.core.logging import logger
from access_control.db.migrations import run_migrations
from access_control.db.session import close_db, engine, init_db
from access_control.middleware.error_handler import setup_exception_handlers
from access_control.middleware.logging import LoggingMiddleware
from access_control.schemas.common import HealthResponse


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    await init_db()
    await run_migrations()  # Run migrations if RUN_MIGRATIONS_ON_STARTUP=true
    yield
    await close_db()


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Administration API for access control.\n\n"
            "Manages servers, devices, groups with schedules, rules, "
            "attendance definitions, people with cards and plates, and "
            "dashboard users with permission bundles."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS Middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Custom Middleware
    application.add_middleware(LoggingMiddleware)

    # Exception Handlers
    setup_exception_handlers(application)

    # Routers
    application.include_router(api_router, prefix="/api/v1")

    # Health Check
    @application.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(service=settings.APP_NAME, version=__version__)

    @application.get("/health/detailed", tags=["Health"])
    async def detailed_health_check() -> dict:
        """Detailed health check including database connectivity."""
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            database = {"status": "healthy"}
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database health check failed", error=str(e))
            database = {"status": "unhealthy"}

        return {
            "status": "healthy" if database["status"] == "healthy" else "degraded",
            "service": settings.APP_NAME,
            "version": __version__,
            "environment": settings.APP_ENV,
            "components": {"database": database},
        }

    return application


app = create_application()
