"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logfire

from portal.config import Settings
from portal.interface.api.routes import health, invites
from portal.interface.scheduler import create_cleanup_scheduler
from portal.util.di.container import create_container, setup_di
from portal.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


def create_app(
    container: AsyncContainer | None = None, settings: Settings | None = None
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, configure in conftest.py if needed.

    Args:
        container: DI container (production container when omitted)
        settings: Application settings (loaded from environment when omitted)
    """
    settings = settings or Settings()
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        scheduler = None
        app.state.scheduler = None
        if settings.scheduler.enabled:
            scheduler = create_cleanup_scheduler(container, settings.scheduler)
            scheduler.start()
            app.state.scheduler = scheduler
            logfire.info(
                "Cleanup scheduler started", cron=settings.scheduler.cleanup_cron
            )
        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.shutdown(wait=False)
            await container.close()

    # Instrument httpx for outbound HTTP requests
    # (Logfire must be configured before instrumentation)
    instrument_httpx()

    app_instance = FastAPI(
        title="School Portal Invites API",
        description="Invitation issuance and acceptance for the school portal",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(invites.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
