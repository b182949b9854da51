"""Application configuration using Pydantic Settings."""

from dataclasses import dataclass
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# Resolve config: prefer system config (installed), fall back to repo .env (dev)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_SYSTEM_CONF = Path("/etc/weathercard/weathercard.conf")
_ENV_FILE = _SYSTEM_CONF if _SYSTEM_CONF.exists() else _PROJECT_ROOT / ".env"


@dataclass(frozen=True)
class CardConfig:
    """Runtime configuration handed to the forecast card service."""

    zip_codes: tuple[str, ...] = ("78666",)
    default_width: int = 800
    default_height: int = 200
    horizon_days: int = 7
    ttl_seconds: int = 3600
    cadence_weekday: int = 0  # Monday


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    # OpenWeather
    openweather_api_key: str = ""
    country_code: str = "US"
    geocode_url: str = "http://api.openweathermap.org/geo/1.0/zip"
    day_summary_url: str = "https://api.openweathermap.org/data/3.0/onecall/day_summary"
    request_timeout: float = 15.0

    # Forecast card
    zip_codes: list[str] = ["78666"]
    default_width: int = 800
    default_height: int = 200
    horizon_days: int = 7

    # Cache (empty redis_url = in-process memory store)
    redis_url: str = ""
    cache_ttl_sec: int = 3600

    # Scheduled refresh
    refresh_enabled: bool = False
    refresh_interval_sec: int = 3600
    cadence_weekday: int = 0  # 0 = Monday ... 6 = Sunday

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_prefix": "WEATHERCARD_", "env_file": str(_ENV_FILE)}

    @field_validator("cadence_weekday")
    @classmethod
    def _check_weekday(cls, value: int) -> int:
        if not 0 <= value <= 6:
            raise ValueError("cadence_weekday must be between 0 (Monday) and 6 (Sunday)")
        return value

    def card_config(self) -> CardConfig:
        return CardConfig(
            zip_codes=tuple(self.zip_codes),
            default_width=self.default_width,
            default_height=self.default_height,
            horizon_days=self.horizon_days,
            ttl_seconds=self.cache_ttl_sec,
            cadence_weekday=self.cadence_weekday,
        )


settings = Settings()
