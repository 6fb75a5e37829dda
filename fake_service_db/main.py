"""fake-service-db — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Settings and the store handle live on app.state; nothing request-scoped is global
    - Global error handlers map every failure to an envelope response
    - A store that cannot be created or reached at startup is logged, not fatal:
      GET / then answers 500 envelopes until it recovers
    - The startup ping runs as a background task, so probes answer while it waits
"""

import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from fake_service_db.api.error_handlers import register_error_handlers
from fake_service_db.api.routes import customers, health
from fake_service_db.config import Settings, get_settings
from fake_service_db.core.errors import StoreConnectionError
from fake_service_db.infrastructure.database import (
    DatabaseSessionManager, connect_store,
)
from fake_service_db.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


async def ping_store(store: DatabaseSessionManager, settings: Settings) -> bool:
    """Startup connectivity check, run beside the server; logs, never raises."""
    timeout = settings.query_timeout_seconds
    try:
        if timeout > 0:
            reachable = await asyncio.wait_for(store.health_check(), timeout)
        else:
            reachable = await store.health_check()
    except asyncio.TimeoutError:
        logger.error(
            f"Database ping timed out after {timeout:g}s",
            extra={"host": settings.database_host},
        )
        return False
    if not reachable:
        logger.error(
            "Database is not reachable; requests will report the failure",
            extra={"host": settings.database_host},
        )
    return reachable


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Starting fake-service-db")

    try:
        store = connect_store(settings)
    except StoreConnectionError as exc:
        logger.error(exc.message, extra=exc.log_fields())
        store = None
    app.state.store = store
    app.state.store_ping = None
    if store is not None:
        app.state.store_ping = asyncio.create_task(ping_store(store, settings))

    yield

    logger.info("fake-service-db shutting down")
    ping = app.state.store_ping
    if ping is not None and not ping.done():
        ping.cancel()
        await asyncio.gather(ping, return_exceptions=True)
    if store is not None:
        await store.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit Settings instance."""
    app = FastAPI(title="fake-service-db", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings or get_settings()
    app.state.store = None

    app.include_router(health.router)
    app.include_router(customers.router)
    register_error_handlers(app)
    return app


def run() -> None:
    """Console entry point: serve on LISTEN_ADDR."""
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.listen_host,
        port=settings.listen_port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
