"""Pydantic schemas for forecasts and cached forecast cards."""

import datetime

from pydantic import BaseModel, ConfigDict


class WeatherCondition(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    code: int


class DayForecast(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime.date
    max_temp_f: float
    min_temp_f: float
    condition: WeatherCondition


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    region: str = ""


class Forecast(BaseModel):
    """A normalized multi-day forecast, days in chronological order."""

    model_config = ConfigDict(frozen=True)

    postal_code: str
    location: Location
    days: tuple[DayForecast, ...]


class CacheEntry(BaseModel):
    """What the key-value store holds for one cache key."""

    model_config = ConfigDict(frozen=True)

    svg: str
    forecast: Forecast
    generated_at: float  # Unix timestamp
