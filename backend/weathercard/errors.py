"""Exception types raised by the forecast card pipeline."""


class WeatherCardError(Exception):
    """Base class for all forecast card failures."""


class InvalidInput(WeatherCardError):
    """A required request parameter is missing or malformed."""


class UpstreamError(WeatherCardError):
    """The weather provider returned a non-success response.

    ``stage`` is ``"geocoding"`` for the coordinate lookup, or the ISO date
    of the day-summary request that failed.
    """

    def __init__(self, stage: str, detail: str) -> None:
        self.stage = stage
        self.detail = detail
        if stage == "geocoding":
            message = f"Geocoding API request failed: {detail}"
        else:
            message = f"Weather API request failed for {stage}: {detail}"
        super().__init__(message)


class CacheError(WeatherCardError):
    """The key-value store is unavailable or returned a malformed value."""
