"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: keeps the engine bound to the running event loop
2. Base: declarative base for every ORM model
3. create_db_and_tables(): idempotent schema creation at startup
4. Database: session factory injected into the unit of work
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class AsyncEngineManager:
    """
    Ensures the engine is always bound to the current event loop to prevent
    "Task got Future attached to a different loop" errors (TestClient and
    pytest-asyncio each run their own loop).
    """

    def __init__(self) -> None:
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

        if self._loop is not current_loop:
            if self._engine is not None:
                Logger.base.warning('[DB] Event loop changed, dropping old engine')
                self._session_maker = None
            Logger.base.info(f'[DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._loop = current_loop

        return self._engine  # type: ignore[return-value]

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        self._loop = None

    @staticmethod
    def _create_engine() -> AsyncEngine:
        return create_async_engine(
            settings.DATABASE_URL_ASYNC,
            echo=False,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
        )


# Global engine manager
_engine_manager = AsyncEngineManager()


def get_engine() -> AsyncEngine:
    return _engine_manager.get_engine()


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return _engine_manager.get_session_maker()


async def dispose_engine() -> None:
    await _engine_manager.dispose()


class Base(DeclarativeBase):
    pass


async def create_db_and_tables() -> None:
    """Create database tables if they don't exist"""
    # Models must be imported so their tables are registered on Base.metadata
    from src.service.event_registration.driven_adapter.model import (  # noqa: F401
        event_model,
        registration_model,
    )

    try:
        async with get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    except Exception as e:
        error_msg = str(e).lower()
        if any(keyword in error_msg for keyword in ['already exists', 'duplicate key']):
            Logger.base.info('Tables already exist, skipping creation')
        else:
            Logger.base.error(f'Error creating tables: {e}')
            raise


class Database:
    """Session factory for the SQLAlchemy unit of work."""

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Rolls back automatically on exception."""
        session_maker = get_session_maker()
        async with session_maker() as session:
            yield session
