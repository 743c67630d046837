"""
Router Dependencies
====================

Shared FastAPI dependencies. The ``Database`` is built by the application
lifespan and read from ``app.state``; nothing here creates connections.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from lifecycle_api.config import Settings, get_settings
from lifecycle_api.database import Database
from lifecycle_api.services.lifecycle_engine import LifecycleRules
from lifecycle_api.services.lifecycle_service import LifecycleService


def get_database(request: Request) -> Database:
    """The process-wide Database owned by the app lifespan."""
    return request.app.state.database


async def get_db(database: Database = Depends(get_database)) -> AsyncSession:
    """Dependency for FastAPI routes to get database session."""
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_lifecycle_rules(settings: Settings = Depends(get_settings)) -> LifecycleRules:
    return LifecycleRules.from_settings(settings)


def get_lifecycle_service(
    db: AsyncSession = Depends(get_db),
    rules: LifecycleRules = Depends(get_lifecycle_rules),
) -> LifecycleService:
    return LifecycleService(db, rules=rules)
