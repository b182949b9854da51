"""Build the forecast card service from settings."""

import asyncio
import logging

from .config import Settings
from .services.forecast_card import ForecastCardService
from .services.forecast_owm import ForecastFetcher, OpenWeatherClient
from .services.kv_store import build_store

logger = logging.getLogger(__name__)


def build_service(cfg: Settings) -> ForecastCardService:
    """Wire the OpenWeather client, cache store and renderer from settings."""
    if not cfg.openweather_api_key:
        logger.warning("WEATHERCARD_OPENWEATHER_API_KEY is not set; upstream requests will fail")
    client = OpenWeatherClient(
        cfg.openweather_api_key,
        country_code=cfg.country_code,
        geocode_url=cfg.geocode_url,
        day_summary_url=cfg.day_summary_url,
        timeout=cfg.request_timeout,
    )
    return ForecastCardService(
        fetcher=ForecastFetcher(client),
        store=build_store(cfg.redis_url),
        config=cfg.card_config(),
    )


async def close_service(service: ForecastCardService) -> None:
    """Release the HTTP client and cache connection, if the service owns any."""
    for resource in (service.fetcher.provider, service.store):
        closer = getattr(resource, "aclose", None) or getattr(resource, "close", None)
        if closer is None:
            continue
        try:
            result = closer()
            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            logger.warning("Error closing %s: %s", type(resource).__name__, e)
