"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from relay.interface.api.routes import follows, health, messages, users
from relay.interface.realtime import gateway
from relay.persistence.database import ping
from relay.util.di.container import create_container, setup_di
from relay.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; when omitted a production
            container is built and the database is pinged on startup
    """
    check_database = container is None
    if container is None:
        container = create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if check_database:
            engine = await container.get(AsyncEngine)
            await ping(engine)
            logfire.info("Database reachable")
        yield
        await container.close()

    # Instrument httpx for outbound push requests
    # (Logfire must be configured before instrumentation)
    instrument_httpx()

    app_instance = FastAPI(
        title="Relay",
        description="Realtime messaging relay with presence, push fallback and a follow graph",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(users.router)
    app_instance.include_router(follows.router)
    app_instance.include_router(messages.router)
    app_instance.include_router(gateway.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
