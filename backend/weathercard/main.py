"""FastAPI application factory and lifespan for the forecast card service."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .api.router import api_router
from .factory import build_service, close_service
from .services.forecast_card import ForecastCardService
from .services.scheduler import RefreshScheduler

# Configure logging for our app (uvicorn only configures its own loggers)
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:     %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: start/stop the scheduled refresh."""
    service: ForecastCardService = app.state.card_service
    scheduler: Optional[RefreshScheduler] = None
    scheduler_task: Optional[asyncio.Task] = None

    if app.state.refresh_enabled:
        scheduler = RefreshScheduler(service, interval=settings.refresh_interval_sec)
        scheduler_task = asyncio.create_task(scheduler.run(), name="forecast-refresh")
        app.state.scheduler = scheduler
        logger.info(
            "Refresh scheduler started for %d zip codes (%ds interval)",
            len(service.config.zip_codes), settings.refresh_interval_sec,
        )

    yield

    logger.info("Shutting down...")
    if scheduler:
        scheduler.stop()
    if scheduler_task:
        scheduler_task.cancel()
        try:
            await asyncio.wait_for(asyncio.shield(scheduler_task), timeout=6.0)
        except (asyncio.CancelledError, asyncio.TimeoutError):
            pass
    if app.state.owns_service:
        await close_service(service)
    logger.info("Application shutdown complete")


def create_app(
    service: Optional[ForecastCardService] = None,
    refresh_enabled: Optional[bool] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``service`` overrides the settings-built service, e.g. in tests.
    """
    app = FastAPI(
        title="Weekly Forecast Card",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.owns_service = service is None
    app.state.card_service = service or build_service(settings)
    app.state.refresh_enabled = (
        settings.refresh_enabled if refresh_enabled is None else refresh_enabled
    )
    app.state.scheduler = None

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
