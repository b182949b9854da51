"""OpenWeather forecast client and multi-day forecast fetcher.

The One Call "day summary" endpoint returns aggregates (cloud cover,
precipitation total, temperature range) for a single date, so a 7-day
forecast is assembled from one geocoding lookup plus one request per day,
issued concurrently.

API docs:
    https://openweathermap.org/api/geocoding-api#direct_zip
    https://openweathermap.org/api/one-call-3#history_daily_aggregation
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Optional, Protocol

import httpx

from ..errors import UpstreamError
from ..schemas.forecast import DayForecast, Forecast, Location, WeatherCondition

logger = logging.getLogger(__name__)

OWM_GEOCODE_URL = "http://api.openweathermap.org/geo/1.0/zip"
OWM_DAY_SUMMARY_URL = "https://api.openweathermap.org/data/3.0/onecall/day_summary"

# HTTP timeout for OpenWeather requests (seconds).
REQUEST_TIMEOUT = 15.0

GEOCODING_STAGE = "geocoding"


@dataclass
class Coordinates:
    """Geocoded location for a postal code."""
    lat: float
    lon: float
    name: str
    region: str


@dataclass
class DailySummary:
    """Aggregated weather for one calendar day."""
    date: date
    cloud_cover: float  # Afternoon cloud cover, percent
    precipitation_total: float  # mm
    temp_max: float  # Degrees F
    temp_min: float  # Degrees F


class WeatherProvider(Protocol):
    async def resolve_coordinates(self, postal_code: str) -> Coordinates:
        ...

    async def fetch_daily_summary(self, lat: float, lon: float, day: date) -> DailySummary:
        ...


def synthesize_condition(cloud_cover: float, precipitation: float) -> WeatherCondition:
    """Derive a condition from cloud cover (percent) and precipitation (mm).

    The day summary carries no condition code, so one is picked from the
    OpenWeather taxonomy. Precipitation takes priority over cloud cover.
    """
    if precipitation > 30:
        return WeatherCondition(text="Rain", code=500)
    if precipitation > 0:
        return WeatherCondition(text="Light rain", code=300)
    if cloud_cover > 80:
        return WeatherCondition(text="Overcast", code=804)
    if cloud_cover > 50:
        return WeatherCondition(text="Partly cloudy", code=802)
    if cloud_cover > 20:
        return WeatherCondition(text="Few clouds", code=801)
    return WeatherCondition(text="Clear sky", code=800)


class OpenWeatherClient:
    """Async OpenWeather client for geocoding and daily summaries."""

    def __init__(
        self,
        api_key: str,
        *,
        country_code: str = "US",
        geocode_url: str = OWM_GEOCODE_URL,
        day_summary_url: str = OWM_DAY_SUMMARY_URL,
        timeout: float = REQUEST_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.country_code = country_code
        self.geocode_url = geocode_url
        self.day_summary_url = day_summary_url
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def resolve_coordinates(self, postal_code: str) -> Coordinates:
        params = {
            "zip": f"{postal_code},{self.country_code}",
            "appid": self.api_key,
        }
        data = await self._get_json(self.geocode_url, params, GEOCODING_STAGE)

        lat = data.get("lat")
        lon = data.get("lon")
        if lat is None or lon is None:
            raise UpstreamError(GEOCODING_STAGE, f"no coordinates for {postal_code}")

        return Coordinates(
            lat=float(lat),
            lon=float(lon),
            name=data.get("name") or "",
            region=data.get("state") or "",
        )

    async def fetch_daily_summary(self, lat: float, lon: float, day: date) -> DailySummary:
        stage = day.isoformat()
        params = {
            "lat": lat,
            "lon": lon,
            "date": stage,
            "appid": self.api_key,
            "units": "imperial",
        }
        data = await self._get_json(self.day_summary_url, params, stage)

        cloud_cover = data.get("cloud_cover") or {}
        precipitation = data.get("precipitation") or {}
        temperature = data.get("temperature") or {}
        return DailySummary(
            date=day,
            cloud_cover=_number(cloud_cover.get("afternoon")),
            precipitation_total=_number(precipitation.get("total")),
            temp_max=_number(temperature.get("max")),
            temp_min=_number(temperature.get("min")),
        )

    async def _get_json(self, url: str, params: dict[str, Any], stage: str) -> dict:
        try:
            resp = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("OpenWeather %s request failed: %s", stage, exc)
            raise UpstreamError(stage, str(exc)) from exc

        if not resp.is_success:
            logger.warning(
                "OpenWeather %s request returned %d: %s",
                stage, resp.status_code, resp.text,
            )
            raise UpstreamError(stage, resp.text)

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError(stage, "invalid JSON in response") from exc
        if not isinstance(data, dict):
            raise UpstreamError(stage, "unexpected response shape")
        return data


class ForecastFetcher:
    """Assemble a multi-day ``Forecast`` from a weather provider."""

    def __init__(self, provider: WeatherProvider) -> None:
        self.provider = provider

    async def fetch(self, postal_code: str, start_date: date, horizon_days: int = 7) -> Forecast:
        """Fetch ``horizon_days`` consecutive days starting at ``start_date``.

        All day requests run concurrently. The first failure propagates as
        ``UpstreamError``; results of the remaining requests are discarded.
        Day ``i`` of the result is always ``start_date + i``.
        """
        coords = await self.provider.resolve_coordinates(postal_code)

        dates = [start_date + timedelta(days=i) for i in range(horizon_days)]
        summaries = await asyncio.gather(
            *(self.provider.fetch_daily_summary(coords.lat, coords.lon, d) for d in dates)
        )

        days = tuple(
            DayForecast(
                date=day,
                max_temp_f=summary.temp_max,
                min_temp_f=summary.temp_min,
                condition=synthesize_condition(
                    summary.cloud_cover, summary.precipitation_total,
                ),
            )
            for day, summary in zip(dates, summaries)
        )

        logger.info(
            "Forecast fetched for %s (%s) from %s: %d days",
            postal_code, coords.name, start_date.isoformat(), len(days),
        )
        return Forecast(
            postal_code=postal_code,
            location=Location(name=coords.name, region=coords.region),
            days=days,
        )


def _number(value: Any) -> float:
    """Coerce a provider value to float; missing or non-numeric becomes 0."""
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
