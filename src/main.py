"""
Production FastAPI Application

Run with:
    uvicorn src.main:app --host 0.0.0.0 --port 8000
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import StoreBackend, settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_engine,
)
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Registration Service] Starting up...')

    tracing = TracingConfig(service_name='event-registration-service')
    tracing.setup()
    Logger.base.info('📊 [Registration Service] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Registration Service] Dependency injection wired')

    backend = settings.STORE_BACKEND
    if backend == StoreBackend.POSTGRES:
        tracing.instrument_sqlalchemy(engine=get_engine())
        await create_db_and_tables()
        Logger.base.info('🗄️  [Registration Service] PostgreSQL schema ready + instrumented')
    elif backend == StoreBackend.FIXTURE:
        Logger.base.warning(
            '⚠️ [Registration Service] Running in read-only fixture mode, writes return 503'
        )
    else:
        Logger.base.info('🧠 [Registration Service] Using in-memory document store')

    Logger.base.info('✅ [Registration Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Registration Service] Shutting down...')

    if backend == StoreBackend.POSTGRES:
        await dispose_engine()
        Logger.base.info('🗄️  [Registration Service] Database engine disposed')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Registration Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
