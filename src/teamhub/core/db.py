"""Database resource: async engine, session factory and lifecycle.

A ``Database`` is constructed once by the application factory, stored on
``app.state`` and handed to request handlers through a dependency. Tests build
their own instance against a throwaway database.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from src.teamhub.core.config import Settings
from src.teamhub.core.logging import get_logger

logger = get_logger(__name__)


class Database:
    """Owns one async engine and the sessions opened against it."""

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self._engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build the production database with pooling taken from settings."""
        engine_kwargs: dict[str, Any] = {"echo": settings.database_echo}
        if make_url(settings.database_url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=settings.database_pool_size,
                max_overflow=settings.database_max_overflow,
                pool_pre_ping=True,
            )
        return cls(settings.database_url, **engine_kwargs)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        """Open a session. Callers own commit/rollback."""
        async with self._session_factory() as session:
            yield session

    async def create_all(self) -> None:
        """Create every table registered on SQLModel.metadata."""
        # Register table models before touching metadata
        import src.teamhub.models  # noqa: F401

        async with self._engine.begin() as connection:
            await connection.run_sync(SQLModel.metadata.create_all)

    async def ping(self) -> None:
        async with self._engine.connect() as connection:
            await connection.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Dispose the engine. Call during shutdown."""
        await self._engine.dispose()
        logger.info("Database engine disposed")
