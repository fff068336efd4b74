"""Database session management for the catalogue curation service.

This module handles database connection management including:
- Async SQLAlchemy session management
- Connection pooling configuration
- Transaction handling
- Error recovery and logging
- Slow query detection

The engine is created on first use so importing the package never opens
a connection or requires a database driver.
"""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator, Optional
import time
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    AsyncEngine,
    async_sessionmaker
)

from curator.core.config import get_settings
from curator.core.logging import get_logger

logger = get_logger(__name__)

SLOW_QUERY_THRESHOLD_SECONDS = 1.0

class SessionManager:
    """Manage database sessions and connections."""

    def __init__(self, database_url: Optional[str] = None, engine: Optional[AsyncEngine] = None):
        """Initialize session manager from a URL, an engine, or settings."""
        self.engine = engine or self._create_engine(database_url)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )
        self._setup_engine_events()

    @staticmethod
    def _create_engine(database_url: Optional[str]) -> AsyncEngine:
        """Create SQLAlchemy engine with proper configuration."""
        settings = get_settings()
        url = database_url or settings.DATABASE_URL
        if url.startswith("sqlite"):
            return create_async_engine(url, echo=settings.SQL_ECHO)
        return create_async_engine(
            url,
            echo=settings.SQL_ECHO,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=True
        )

    def _setup_engine_events(self):
        """Set up SQLAlchemy engine event listeners."""
        sync_engine = self.engine.sync_engine

        @event.listens_for(sync_engine, 'before_cursor_execute')
        def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            conn.info.setdefault('query_start_time', []).append(time.perf_counter())

        @event.listens_for(sync_engine, 'after_cursor_execute')
        def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            duration = time.perf_counter() - conn.info['query_start_time'].pop()
            if duration > SLOW_QUERY_THRESHOLD_SECONDS:
                logger.warning(
                    "Slow query detected",
                    duration=round(duration, 3),
                    statement=statement
                )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get database session with automatic cleanup."""
        session: AsyncSession = self.session_factory()
        try:
            yield session
        except Exception as e:
            logger.error("Session error", error=e)
            await session.rollback()
            raise
        finally:
            await session.close()

    async def healthcheck(self) -> bool:
        """Perform database health check."""
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Database health check failed", error=e)
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()

@lru_cache()
def get_session_manager() -> SessionManager:
    """Get the process-wide session manager."""
    return SessionManager()
