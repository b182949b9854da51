"""Background loop that periodically pre-renders forecast cards.

Runs as an asyncio task inside the FastAPI app when refresh is enabled.
External cron can use ``weathercard-refresh`` for a one-shot pass instead.
"""

import asyncio
import logging
from typing import Optional

from .forecast_card import ForecastCardService, RefreshReport

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Manages the scheduled refresh lifecycle."""

    def __init__(self, service: ForecastCardService, interval: int = 3600):
        self.service = service
        self.interval = interval
        self._running = False
        self._runs = 0
        self._last_report: Optional[RefreshReport] = None

    @property
    def stats(self) -> dict:
        report = self._last_report
        return {
            "runs": self._runs,
            "last_issue_date": report.issue_date.isoformat() if report else None,
            "last_failed": sorted(report.failed) if report else [],
        }

    async def run(self) -> None:
        """Refresh loop. Runs until stopped or cancelled."""
        self._running = True
        logger.info("Refresh scheduler starting with %ds interval", self.interval)

        while self._running:
            try:
                self._last_report = await self.service.refresh()
                self._runs += 1
            except asyncio.CancelledError:
                break
            except Exception as e:
                if not self._running:
                    break
                logger.error("Refresh pass failed: %s", e, exc_info=True)

            try:
                await asyncio.sleep(self.interval)
            except asyncio.CancelledError:
                break

    def stop(self) -> None:
        self._running = False
