"""SVG icon glyphs for the forecast card.

Each glyph is a markup fragment drawn in a 64x64 box and placed by the
renderer with a ``translate``/``scale`` transform. The sun rays carry the
``am-weather-sun`` class so the card stylesheet can animate them.
"""

from ..services.conditions import IconCategory

_CLOUD = (
    '<path d="M18 44 h30 a10 10 0 0 0 0 -20 a14 14 0 0 0 -26 -4 '
    'a10 10 0 0 0 -4 24 z" fill="#c9d1d9" stroke="#57606a" stroke-width="2" />'
)

SUN = """<g class="am-weather-sun" style="transform-origin: 32px 34px;">
        <line x1="32" y1="12" x2="32" y2="18" stroke="#f4a300" stroke-width="3" stroke-linecap="round" />
        <line x1="32" y1="50" x2="32" y2="56" stroke="#f4a300" stroke-width="3" stroke-linecap="round" />
        <line x1="10" y1="34" x2="16" y2="34" stroke="#f4a300" stroke-width="3" stroke-linecap="round" />
        <line x1="48" y1="34" x2="54" y2="34" stroke="#f4a300" stroke-width="3" stroke-linecap="round" />
        <line x1="16.4" y1="18.4" x2="20.7" y2="22.7" stroke="#f4a300" stroke-width="3" stroke-linecap="round" />
        <line x1="43.3" y1="45.3" x2="47.6" y2="49.6" stroke="#f4a300" stroke-width="3" stroke-linecap="round" />
        <line x1="16.4" y1="49.6" x2="20.7" y2="45.3" stroke="#f4a300" stroke-width="3" stroke-linecap="round" />
        <line x1="43.3" y1="22.7" x2="47.6" y2="18.4" stroke="#f4a300" stroke-width="3" stroke-linecap="round" />
      </g>
      <circle cx="32" cy="34" r="10" fill="#ffc61a" stroke="#f4a300" stroke-width="2" />"""

CLOUDY = f"""<g transform="translate(0, 4)">
        {_CLOUD}
      </g>"""

RAINY = f"""<g>
        {_CLOUD}
        <line x1="24" y1="50" x2="21" y2="58" stroke="#0969da" stroke-width="2" stroke-linecap="round" />
        <line x1="33" y1="50" x2="30" y2="58" stroke="#0969da" stroke-width="2" stroke-linecap="round" />
        <line x1="42" y1="50" x2="39" y2="58" stroke="#0969da" stroke-width="2" stroke-linecap="round" />
      </g>"""

STORMY = f"""<g>
        {_CLOUD}
        <polygon points="34,44 26,54 32,54 28,62 40,50 34,50 38,44" fill="#f4a300" stroke="#9a6700" stroke-width="1" />
      </g>"""

SNOWY = f"""<g>
        {_CLOUD}
        <circle cx="22" cy="53" r="2.5" fill="#8c959f" />
        <circle cx="32" cy="57" r="2.5" fill="#8c959f" />
        <circle cx="42" cy="53" r="2.5" fill="#8c959f" />
      </g>"""

ICONS: dict[IconCategory, str] = {
    IconCategory.SUNNY: SUN,
    IconCategory.CLOUDY: CLOUDY,
    IconCategory.RAIN: RAINY,
    IconCategory.STORM: STORMY,
    IconCategory.SNOW: SNOWY,
}
