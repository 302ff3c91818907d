"""
Production FastAPI Application

Run with: granian --interface asgi src.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables, dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Marketplace] Starting up...')

    tracing = TracingConfig(service_name='marketplace-service')
    tracing.setup()

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Marketplace] Dependency injection wired')

    if settings.STORAGE_BACKEND == 'sqlalchemy':
        engine = get_engine()
        tracing.instrument_sqlalchemy(engine=engine)
        if settings.DB_AUTO_CREATE_TABLES:
            await create_db_and_tables(engine)
        Logger.base.info('🗄️  [Marketplace] Database engine ready')
    else:
        Logger.base.warning('🧪 [Marketplace] Using in-memory storage, data is not persisted')

    Logger.base.info('✅ [Marketplace] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Marketplace] Shutting down...')

    await dispose_engine()
    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Marketplace] Shutdown complete')


app = create_app(
    lifespan=lifespan,
    description='Farm Marketplace - product listings, stock reservation and order lifecycle',
)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
