"""
Production FastAPI Application
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.logging.loguru_io_config import intercept_std_logging
from src.platform.observability.tracing import TracingConfig

# Register ORM models on Base.metadata before create_all
import src.service.event_hub.driven_adapter.model  # noqa: F401


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Event Hub] Starting up...')
    intercept_std_logging()

    # Setup OpenTelemetry tracing
    tracing = TracingConfig(service_name='event-hub')
    tracing.setup()
    tracing.instrument_httpx()
    Logger.base.info('📊 [Event Hub] OpenTelemetry tracing configured')

    # Wire dependency injection for all modules
    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Event Hub] Dependency injection wired')

    # Initialize database
    engine = get_engine()
    tracing.instrument_sqlalchemy(engine=engine)
    await create_db_and_tables()
    Logger.base.info('🗄️  [Event Hub] Database engine ready + instrumented')

    Logger.base.info('✅ [Event Hub] All services initialized')

    yield

    Logger.base.info('🛑 [Event Hub] Shutting down...')

    await cleanup()
    Logger.base.info('📊 [Event Hub] Stats client closed')

    await dispose_engine()
    Logger.base.info('🗄️  [Event Hub] Database engine disposed')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Event Hub] Shutdown complete')


# Create FastAPI app using shared factory
app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
