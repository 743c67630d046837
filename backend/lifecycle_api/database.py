"""
SQLAlchemy Async Database Configuration.

The engine and session factory live on an explicitly constructed
``Database`` owned by the application lifespan, not on module globals.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from lifecycle_api.config import Settings
from lifecycle_api.models.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and session factory for one process."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DEBUG,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_pre_ping=True,    # Verify connections before use
        )
        logger.info("Database engine created")
        return cls(engine)

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    def session(self) -> AsyncSession:
        return self.session_maker()

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connection closed")
