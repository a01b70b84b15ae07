"""
Database connection factory.

Supports both SQLite (local use) and PostgreSQL (production). Each
DatabaseConnection owns one async engine; stores receive it explicitly.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config import DatabaseType, Settings, settings as default_settings
from config.logging_config import get_logger
from betledger.database.schema import Base

logger = get_logger(__name__)

ASYNC_DRIVERS = {
    DatabaseType.SQLITE: "sqlite+aiosqlite",
    DatabaseType.POSTGRESQL: "postgresql+asyncpg",
}


class DatabaseConnection:
    """Manages the async engine and session factory for the bets table."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or default_settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_initialized(self) -> bool:
        return self._session_factory is not None

    def _get_connection_url(self) -> URL:
        """
        Swap the configured URL onto the async driver for the database type.

        A URL that already names a driver (sqlite+aiosqlite://...) is kept.
        """
        url = make_url(self.settings.database_url)
        database_type = self.settings.database_type

        if "+" not in url.drivername:
            url = url.set(drivername=ASYNC_DRIVERS[database_type])

        if database_type == DatabaseType.SQLITE and url.database not in (None, "", ":memory:"):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        return url

    async def initialize(self) -> None:
        """Create the engine and the bets table. Does nothing when already initialized."""
        if self.is_initialized:
            return

        url = self._get_connection_url()
        logger.info("Initializing database", url=url.render_as_string(hide_password=True))

        self._engine = create_async_engine(
            url,
            echo=self.settings.log_level == "DEBUG",
            pool_pre_ping=self.settings.database_type == DatabaseType.POSTGRESQL,
        )
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database initialized", tables=sorted(Base.metadata.tables))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Session scoped to one unit of work.

        Commits when the block exits cleanly, rolls back and re-raises otherwise.
        """
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def close(self) -> None:
        """Dispose of the engine. initialize() may be called again afterwards."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connection closed")
