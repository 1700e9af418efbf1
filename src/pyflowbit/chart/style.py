import re
from dataclasses import dataclass
from typing import Optional, Tuple

from matplotlib.colors import to_hex, to_rgba

# Alpha used for area fills when a series gives no explicit area colour
DEFAULT_AREA_ALPHA = 0.16

_CSS_RGB_PATTERN = re.compile(
    r"^\s*rgba?\(\s*([^,\s]+)\s*,\s*([^,\s]+)\s*,\s*([^,\s]+)\s*(?:,\s*([^,\s]+)\s*)?\)\s*$"
)

RGBA = Tuple[float, float, float, float]


def parse_color(color: str) -> RGBA:
    """
    Convert a colour string into an RGBA tuple with components in [0, 1].

    Accepts CSS-style ``rgb(r, g, b)`` / ``rgba(r, g, b, a)`` strings in
    addition to everything matplotlib understands (named colours, ``#rgb``,
    ``#rrggbb``, ``#rrggbbaa``).

    Parameters
    ----------
    color : str
        Colour specification.

    Returns
    -------
    RGBA
        Red, green, blue and alpha components.

    Raises
    ------
    ValueError
        If the colour cannot be parsed.
    """
    match = _CSS_RGB_PATTERN.match(color)
    if match:
        r, g, b, a = match.groups()
        try:
            channels = [float(c) / 255.0 for c in (r, g, b)]
            alpha = float(a) if a is not None else 1.0
        except ValueError:
            raise ValueError(f"Invalid colour: {color!r}") from None
        if any(c < 0.0 or c > 1.0 for c in channels) or not 0.0 <= alpha <= 1.0:
            raise ValueError(f"Colour component out of range: {color!r}")
        return (channels[0], channels[1], channels[2], alpha)

    try:
        return tuple(to_rgba(color))
    except ValueError:
        raise ValueError(f"Invalid colour: {color!r}") from None


def translucent(color: str, alpha: float = DEFAULT_AREA_ALPHA) -> str:
    """Return ``color`` as an ``#rrggbbaa`` string with the given alpha."""
    r, g, b, _ = parse_color(color)
    return to_hex((r, g, b, alpha), keep_alpha=True)


@dataclass(frozen=True)
class StrokeStyle:
    color: str
    width: float = 1.0
    dash: Optional[Tuple[float, ...]] = None
    cap: str = "round"
    join: str = "round"


@dataclass(frozen=True)
class FillStyle:
    color: str


@dataclass(frozen=True)
class CircleStyle:
    fill: str
    stroke: str
    stroke_width: float = 2.0


@dataclass(frozen=True)
class TextStyle:
    color: str = "#666666"
    font_size: float = 12.0
    # "start", "middle" or "end", measured along the text direction
    anchor: str = "start"
    # "baseline" or "middle"
    baseline: str = "baseline"
