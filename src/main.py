"""
Production FastAPI Application

Run with any ASGI server, e.g. `uvicorn src.main:app`
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Rental Service] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Rental Service] Dependency injection wired')

    database = container.database()
    await database.create_tables()
    Logger.base.info('✅ [Rental Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Rental Service] Shutting down...')
    await database.dispose()
    container.unwire()
    Logger.base.info('👋 [Rental Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
