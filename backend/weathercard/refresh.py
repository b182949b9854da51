"""Scheduled refresh entry point for external cron.

Pre-renders the upcoming weekly issue for every configured postal code and
stores it in the cache. Exits non-zero when any postal code failed.

Usage:
    weathercard-refresh                 One refresh pass, then exit
    weathercard-refresh --loop          Keep refreshing every interval
    weathercard-refresh --zip 78666     Override the configured postal codes
"""

import argparse
import asyncio
import dataclasses
import logging
import sys
from datetime import date
from typing import Optional

from .config import settings
from .factory import build_service, close_service
from .services.scheduler import RefreshScheduler

logger = logging.getLogger("weathercard.refresh")


async def _run(args: argparse.Namespace) -> int:
    service = build_service(settings)
    if args.zip:
        service.config = dataclasses.replace(service.config, zip_codes=tuple(args.zip))

    try:
        if args.loop:
            scheduler = RefreshScheduler(service, interval=settings.refresh_interval_sec)
            await scheduler.run()
            return 0

        report = await service.refresh(today=args.today)
        for postal_code, error in report.failed.items():
            logger.error("%s: %s", postal_code, error)
        logger.info(
            "Issue %s: refreshed %s",
            report.issue_date.isoformat(), ", ".join(report.refreshed) or "nothing",
        )
        return 1 if report.failed else 0
    finally:
        await close_service(service)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Pre-render weekly forecast cards into the cache.",
    )
    parser.add_argument(
        "--loop", action="store_true",
        help="Keep running, refreshing every WEATHERCARD_REFRESH_INTERVAL_SEC",
    )
    parser.add_argument(
        "--today", type=date.fromisoformat, default=None,
        help="Pretend today is this ISO date (default: current UTC date)",
    )
    parser.add_argument(
        "--zip", action="append", metavar="ZIP",
        help="Postal code to refresh (repeatable; default: configured list)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
