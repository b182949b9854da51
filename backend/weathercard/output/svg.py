"""SVG forecast card renderer.

Lays a forecast out as a horizontal band of seven equal day cells:

    Mon 8      Tue 9      ...
    [icon]     [icon]
    64° / 41°  70° / 48°
    Overcast   Clear sky

The document carries its own width, height and matching viewBox so it can
be embedded directly as an ``<img>`` source.
"""

import math
from datetime import date
from typing import Any
from xml.sax.saxutils import escape

from ..schemas.forecast import DayForecast, Forecast
from ..services.conditions import classify
from .icons import ICONS

CELLS = 7
DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

_STYLE = """    <filter id="blur">
      <feGaussianBlur in="SourceGraphic" stdDeviation="1" />
    </filter>
    <style>
      .weather-text { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; }
      .day { font-size: 18px; fill: #000; font-weight: bold; }
      .temp { font-size: 16px; fill: #000; }
      .description { font-size: 14px; fill: #000; text-transform: capitalize; }
      .am-weather-sun { animation: rotate 9s linear infinite; }
      @keyframes rotate {
        from { transform: rotate(0deg); }
        to { transform: rotate(360deg); }
      }
    </style>"""


def _fmt(value: float) -> str:
    """Format a coordinate without a trailing ``.0`` for whole numbers."""
    if value == int(value):
        return str(int(value))
    return repr(round(value, 4))


def _temp(value: Any) -> str:
    """Round a temperature for display; unusable values render as ``--``."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "--"
    if math.isnan(number) or math.isinf(number):
        return "--"
    return str(int(math.floor(number + 0.5)))


def _day_label(value: Any) -> str:
    if isinstance(value, date):
        return f"{DAY_NAMES[value.weekday()]} {value.day}"
    try:
        parsed = date.fromisoformat(str(value))
    except ValueError:
        return ""
    return f"{DAY_NAMES[parsed.weekday()]} {parsed.day}"


def _render_day(index: int, day: DayForecast, cell_width: float) -> str:
    x = index * cell_width + cell_width / 2
    icon = ICONS[classify(day.condition.code)]
    return f"""
  <!-- Day {index + 1} -->
  <g transform="translate({_fmt(x - 50)}, 20)">
    <text x="50" y="0" text-anchor="middle" class="weather-text day">
      {_day_label(day.date)}
    </text>
    <g transform="translate(10, 0) scale(1.25)">
      {icon}
    </g>
    <text x="50" y="100" text-anchor="middle" class="weather-text temp">
      {_temp(day.max_temp_f)}° / {_temp(day.min_temp_f)}°
    </text>
    <text x="50" y="120" text-anchor="middle" class="weather-text description">
      {escape(day.condition.text)}
    </text>
  </g>"""


def render_forecast_svg(forecast: Forecast, width: int, height: int) -> str:
    """Render ``forecast`` as a standalone SVG document of the given size.

    The band is always split into seven cells, whatever the number of days.
    """
    cell_width = width / CELLS
    place = ", ".join(p for p in (forecast.location.name, forecast.location.region) if p)
    title = f"{CELLS}-day forecast for {place or forecast.postal_code}"
    days = "".join(
        _render_day(i, day, cell_width) for i, day in enumerate(forecast.days)
    )
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 {width} {height}">
  <title>{escape(title)}</title>
  <defs>
{_STYLE}
  </defs>{days}
</svg>"""
