"""Shared fakes for the forecast card tests."""

import asyncio
from datetime import date

import pytest

from weathercard.config import CardConfig
from weathercard.errors import CacheError, UpstreamError
from weathercard.services.forecast_card import ForecastCardService
from weathercard.services.forecast_owm import Coordinates, DailySummary, ForecastFetcher
from weathercard.services.kv_store import MemoryStore


class FakeProvider:
    """In-memory weather provider recording every call.

    With ``reverse=True`` later days resolve before earlier ones.
    """

    def __init__(self, *, fail_geocoding=False, fail_dates=(), reverse=False, weather=None):
        self.fail_geocoding = fail_geocoding
        self.fail_dates = set(fail_dates)
        self.reverse = reverse
        self.weather = weather or {}
        self.geocode_calls: list[str] = []
        self.summary_calls: list[date] = []
        self.completed: list[date] = []

    async def resolve_coordinates(self, postal_code):
        self.geocode_calls.append(postal_code)
        if self.fail_geocoding:
            raise UpstreamError("geocoding", '{"cod":"404","message":"not found"}')
        return Coordinates(lat=29.8833, lon=-97.9414, name="San Marcos", region="TX")

    async def fetch_daily_summary(self, lat, lon, day):
        index = len(self.summary_calls)
        self.summary_calls.append(day)
        if self.reverse:
            await asyncio.sleep((10 - index) * 0.005)
        else:
            await asyncio.sleep(0)
        if day in self.fail_dates:
            raise UpstreamError(day.isoformat(), "Internal error")
        cloud, precip = self.weather.get(day, (90.0, 0.0))
        self.completed.append(day)
        return DailySummary(
            date=day,
            cloud_cover=cloud,
            precipitation_total=precip,
            temp_max=70.4 + index,
            temp_min=50.6,
        )

    @property
    def fetch_count(self) -> int:
        return len(self.geocode_calls)


class BrokenStore:
    """A store whose backend is unreachable."""

    def __init__(self):
        self.puts = 0

    async def get(self, key):
        raise CacheError("connection refused")

    async def put(self, key, value, ttl_seconds):
        self.puts += 1
        raise CacheError("connection refused")


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def card_config() -> CardConfig:
    return CardConfig(zip_codes=("78666", "10001"))


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> MemoryStore:
    return MemoryStore(clock=clock)


@pytest.fixture
def service(provider, store, card_config, clock) -> ForecastCardService:
    return ForecastCardService(
        fetcher=ForecastFetcher(provider),
        store=store,
        config=card_config,
        clock=clock,
    )
