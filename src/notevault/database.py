# Database handle: engine + session factory, owned by the app lifespan
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import Settings
from .core.logging import get_logger
from .core.models import BaseModel

logger = get_logger("database")


class Database:
    """Explicit store handle.

    Created once by the process entry point, handed to request handlers via
    ``app.state.database`` and disposed at shutdown. Repositories never touch
    it directly; they get an ``AsyncSession`` built from ``session_factory``.
    """

    def __init__(self, url: str, echo: bool = False, engine: Optional[AsyncEngine] = None):
        self.url = url
        self.engine = engine or create_async_engine(url, echo=echo, pool_pre_ping=True)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, echo=settings.database_echo)

    async def create_tables(self) -> None:
        """Create all tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Session scope; an exception rolls back the open transaction and its locks."""
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Get database session."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
