"""
Lifecycle Marketing API - FastAPI Application Entry Point.

Serves lifecycle decisions (stage, missions, next email) for storefront
customers. The database client is constructed in the lifespan and released
at shutdown; routes receive sessions through dependencies.

Run with: uvicorn lifecycle_api.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from lifecycle_api.config import Settings, get_settings
from lifecycle_api.database import Database
from lifecycle_api.routers import health, lifecycle

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown events."""
        # Startup: construct the database client
        database = Database.from_settings(settings)
        if settings.CREATE_TABLES_ON_STARTUP:
            await database.create_tables()
        app.state.database = database

        yield

        # Shutdown: Cleanup
        await database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Lifecycle stage, mission and next-email decisions for storefront customers",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Include Routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(lifecycle.router, prefix="/api/lifecycle", tags=["Lifecycle"])

    @app.get("/")
    async def root():
        """Root endpoint with system info."""
        return {
            "name": settings.APP_NAME,
            "status": "operational",
        }

    return app
