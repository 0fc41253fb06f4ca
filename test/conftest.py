"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads settings
- In-memory store, unit of work and capacity ledger fixtures for unit tests
- A TestClient wired to the in-memory backend for HTTP tests
- PostgreSQL database setup and cleanup for tests marked ``integration``

Architecture:
- Unit tests (test/**/unit/): in-memory store only, no infrastructure
- Integration tests: real PostgreSQL, skipped when it cannot be reached
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read once at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'event_registration_test_db'
    else:
        os.environ['POSTGRES_DB'] = f'event_registration_test_db_{worker_id}'

    # HTTP tests run against the in-memory document store
    os.environ['STORE_BACKEND'] = 'memory'

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Pool size settings for tests
    os.environ.setdefault('DB_POOL_SIZE', '2')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '2')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncGenerator, Generator  # noqa: E402
from typing import Optional  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.exc import DBAPIError  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.database.orm_db_setting import dispose_engine  # noqa: E402
from src.service.event_registration.app.service.capacity_ledger import (  # noqa: E402
    CapacityLedger,
)
from src.service.event_registration.driven_adapter.memory.in_memory_document_store import (  # noqa: E402
    InMemoryDocumentStore,
)
from src.service.event_registration.driven_adapter.memory.in_memory_unit_of_work import (  # noqa: E402
    InMemoryUnitOfWork,
)


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if item.get_closest_marker('integration'):
            item.fixturenames.append('clean_database')


# =============================================================================
# Unit fixtures
# =============================================================================
@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def uow(document_store: InMemoryDocumentStore) -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork(store=document_store)


@pytest.fixture
def capacity_ledger() -> CapacityLedger:
    """Generous retry budget without backoff so races resolve quickly"""
    return CapacityLedger(max_attempts=100, backoff_base_seconds=0, backoff_max_seconds=0)


# =============================================================================
# HTTP fixtures
# =============================================================================
@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    container.document_store().reset()


# =============================================================================
# PostgreSQL (integration tests only)
# =============================================================================
_postgres_ready: Optional[bool] = None


def _server_url(database: str) -> str:
    return (
        f'postgresql+asyncpg://{settings.POSTGRES_USER}:'
        f'{settings.POSTGRES_PASSWORD.get_secret_value()}@'
        f'{settings.POSTGRES_SERVER}:{settings.POSTGRES_PORT}/{database}'
    )


async def _setup_test_database() -> None:
    from src.platform.database.orm_db_setting import Base
    from src.service.event_registration.driven_adapter.model import (  # noqa: F401
        event_model,
        registration_model,
    )

    admin_engine = create_async_engine(_server_url('postgres'), isolation_level='AUTOCOMMIT')
    try:
        async with admin_engine.connect() as conn:
            exists = await conn.scalar(
                text('SELECT 1 FROM pg_database WHERE datname = :name'),
                {'name': settings.POSTGRES_DB},
            )
            if not exists:
                await conn.execute(text(f'CREATE DATABASE "{settings.POSTGRES_DB}"'))
    finally:
        await admin_engine.dispose()

    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _clean_all_tables() -> None:
    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            await conn.execute(text('TRUNCATE TABLE registration, event RESTART IDENTITY'))
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def clean_database() -> AsyncGenerator[None, None]:
    """Skip when PostgreSQL is unreachable; otherwise start from empty tables"""
    global _postgres_ready
    if _postgres_ready is None:
        try:
            await _setup_test_database()
            _postgres_ready = True
        except (OSError, DBAPIError):
            _postgres_ready = False

    if not _postgres_ready:
        pytest.skip('PostgreSQL is not reachable')

    await _clean_all_tables()
    yield
    await dispose_engine()
