"""Map OpenWeather condition codes onto the five card icon categories.

Codes follow the OpenWeather condition taxonomy
(https://openweathermap.org/weather-conditions). Only the groups the card
draws are listed; every other code falls back to cloudy.
"""

from enum import Enum


class IconCategory(str, Enum):
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAIN = "rain"
    STORM = "storm"
    SNOW = "snow"


CLEAR_CODES = frozenset({800})
CLOUD_CODES = frozenset({801, 802, 803, 804})
# Drizzle (3xx) and rain (5xx)
RAIN_CODES = frozenset({
    300, 301, 302, 310, 311, 312, 313, 314, 321,
    500, 501, 502, 503, 504, 511, 520, 521, 522, 531,
})
STORM_CODES = frozenset({200, 201, 202, 210, 211, 212, 221, 230, 231, 232})
SNOW_CODES = frozenset({600, 601, 602, 611, 612, 613, 615, 616, 620, 621, 622})

# Checked in order, first match wins.
_POLICY: tuple[tuple[frozenset[int], IconCategory], ...] = (
    (CLEAR_CODES, IconCategory.SUNNY),
    (CLOUD_CODES, IconCategory.CLOUDY),
    (RAIN_CODES, IconCategory.RAIN),
    (STORM_CODES, IconCategory.STORM),
    (SNOW_CODES, IconCategory.SNOW),
)


def classify(code: int) -> IconCategory:
    """Return the icon category for a weather condition code.

    Unknown codes map to cloudy rather than raising.
    """
    for codes, category in _POLICY:
        if code in codes:
            return category
    return IconCategory.CLOUDY
