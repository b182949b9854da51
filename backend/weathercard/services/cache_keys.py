"""Deterministic cache keys for rendered forecast cards."""

from datetime import date
from typing import Optional

from ..errors import InvalidInput

KEY_PREFIX = "forecast"
KEY_DELIMITER = ":"


def make_key(postal_code: str, issue_date: date, version_tag: Optional[str] = None) -> str:
    """Build the cache key for a (postal code, issue date, version tag) triple.

    The version tag is the last field, so it may hold any character without
    making two keys collide. The postal code must not contain the delimiter.
    """
    if KEY_DELIMITER in postal_code:
        raise InvalidInput(f"Invalid zip code: {postal_code!r}")
    return KEY_DELIMITER.join(
        (KEY_PREFIX, postal_code, issue_date.isoformat(), version_tag or "")
    )
