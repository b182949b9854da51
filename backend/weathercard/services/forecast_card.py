"""Cache-aside forecast card service.

Both entry points live here:

- ``refresh()`` runs on a schedule and pre-renders the upcoming issue for
  every configured postal code at the default size.
- ``get_card()`` serves one HTTP request: look up the cache, re-render a
  cached forecast when a non-default size is asked for, or fetch, render
  and store on a miss.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional

from pydantic import ValidationError

from ..config import CardConfig
from ..errors import CacheError, InvalidInput, WeatherCardError
from ..output.svg import render_forecast_svg
from ..schemas.forecast import CacheEntry, Forecast
from .cache_keys import make_key
from .forecast_owm import ForecastFetcher
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)

Renderer = Callable[[Forecast, int, int], str]


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def next_issue_date(today: date, cadence_weekday: int = 0) -> date:
    """Return the next ``cadence_weekday`` strictly after ``today``.

    Weekdays use ``date.weekday()`` numbering (Monday = 0). The result is
    always 1 to 7 days ahead; on the cadence day itself it is a week out.
    """
    days_ahead = (cadence_weekday - today.weekday()) % 7 or 7
    return today + timedelta(days=days_ahead)


def _parse_dimension(name: str, raw: Optional[str], default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidInput(f"Invalid {name}: {raw!r}") from None
    if value <= 0:
        raise InvalidInput(f"Invalid {name}: {raw!r}")
    return value


@dataclass(frozen=True)
class CardRequest:
    """A validated on-demand card request."""

    postal_code: str
    issue_date: date
    width: int
    height: int
    version_tag: Optional[str] = None

    @classmethod
    def from_query(
        cls,
        config: CardConfig,
        *,
        zip_code: Optional[str],
        issue: Optional[str] = None,
        width: Optional[str] = None,
        height: Optional[str] = None,
        version: Optional[str] = None,
        today: Optional[date] = None,
    ) -> "CardRequest":
        """Parse raw query-string values, failing with ``InvalidInput``."""
        postal_code = (zip_code or "").strip()
        if not postal_code:
            raise InvalidInput("Missing zip code")

        if issue:
            try:
                issue_date = date.fromisoformat(issue)
            except ValueError:
                raise InvalidInput(f"Invalid issue date: {issue!r}") from None
        else:
            issue_date = today or utc_today()

        return cls(
            postal_code=postal_code,
            issue_date=issue_date,
            width=_parse_dimension("width", width, config.default_width),
            height=_parse_dimension("height", height, config.default_height),
            version_tag=version or None,
        )


@dataclass(frozen=True)
class CardResult:
    svg: str
    key: str
    cache_hit: bool
    rerendered: bool = False


@dataclass
class RefreshReport:
    """Outcome of one scheduled refresh pass."""

    issue_date: date
    refreshed: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)


class ForecastCardService:
    """Get-or-compute forecast cards against a TTL'd key-value store."""

    def __init__(
        self,
        fetcher: ForecastFetcher,
        store: KeyValueStore,
        config: CardConfig,
        renderer: Renderer = render_forecast_svg,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.fetcher = fetcher
        self.store = store
        self.config = config
        self.renderer = renderer
        self._clock = clock

    # --- On-demand ---

    async def get_card(self, request: CardRequest) -> CardResult:
        """Return the rendered card for ``request``.

        Raises ``UpstreamError`` when a cache miss cannot be filled.
        """
        key = make_key(request.postal_code, request.issue_date, request.version_tag)
        entry = await self._load(key)

        if entry is not None:
            if self._is_default_size(request.width, request.height):
                logger.debug("Cache hit for %s", key)
                return CardResult(svg=entry.svg, key=key, cache_hit=True)
            logger.debug(
                "Cache hit for %s, re-rendering at %dx%d",
                key, request.width, request.height,
            )
            svg = self.renderer(entry.forecast, request.width, request.height)
            return CardResult(svg=svg, key=key, cache_hit=True, rerendered=True)

        logger.info("Cache miss for %s, fetching forecast", key)
        forecast = await self.fetcher.fetch(
            request.postal_code, request.issue_date, self.config.horizon_days,
        )
        svg = self.renderer(forecast, request.width, request.height)
        # Stores the render at the requested size, even when non-default.
        try:
            await self._store(key, svg, forecast)
        except CacheError as exc:
            logger.warning("Could not cache %s: %s", key, exc)
        return CardResult(svg=svg, key=key, cache_hit=False)

    # --- Scheduled ---

    async def refresh(self, today: Optional[date] = None) -> RefreshReport:
        """Pre-render the next issue for every configured postal code.

        A failure for one postal code is logged and the batch continues.
        """
        issue_date = next_issue_date(today or utc_today(), self.config.cadence_weekday)
        report = RefreshReport(issue_date=issue_date)

        for postal_code in self.config.zip_codes:
            try:
                forecast = await self.fetcher.fetch(
                    postal_code, issue_date, self.config.horizon_days,
                )
                svg = self.renderer(
                    forecast, self.config.default_width, self.config.default_height,
                )
                await self._store(make_key(postal_code, issue_date), svg, forecast)
            except WeatherCardError as exc:
                logger.error("Failed to generate forecast for %s: %s", postal_code, exc)
                report.failed[postal_code] = str(exc)
                continue
            except Exception as exc:
                logger.exception("Failed to generate forecast for %s", postal_code)
                report.failed[postal_code] = str(exc)
                continue
            report.refreshed.append(postal_code)

        logger.info(
            "Refresh for issue %s: %d ok, %d failed",
            issue_date.isoformat(), len(report.refreshed), len(report.failed),
        )
        return report

    # --- Helpers ---

    def _is_default_size(self, width: int, height: int) -> bool:
        return width == self.config.default_width and height == self.config.default_height

    async def _load(self, key: str) -> Optional[CacheEntry]:
        """Read and validate a cache entry; any store problem reads as a miss."""
        try:
            raw = await self.store.get(key)
        except CacheError as exc:
            logger.warning("Cache read failed for %s, treating as miss: %s", key, exc)
            return None
        if raw is None:
            return None
        try:
            return CacheEntry.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Malformed cache entry for %s, treating as miss: %s", key, exc)
            return None

    async def _store(self, key: str, svg: str, forecast: Forecast) -> None:
        entry = CacheEntry(svg=svg, forecast=forecast, generated_at=self._clock())
        await self.store.put(key, entry.model_dump(mode="json"), self.config.ttl_seconds)
