import logging
from typing import Any, Tuple

logger = logging.getLogger(__name__)

# A fully resolved, render-ready RGBA color with components in 0..1.
ColorRGBA = Tuple[float, float, float, float]

BLACK: ColorRGBA = (0.0, 0.0, 0.0, 1.0)
WHITE: ColorRGBA = (1.0, 1.0, 1.0, 1.0)
RED: ColorRGBA = (1.0, 0.0, 0.0, 1.0)
BLUE: ColorRGBA = (0.0, 0.0, 1.0, 1.0)


def rgb255(r: int, g: int, b: int, a: int = 255) -> ColorRGBA:
    """Builds a ColorRGBA from 0..255 integer components."""
    return r / 255.0, g / 255.0, b / 255.0, a / 255.0


# Overlay colors
HIGHLIGHT: ColorRGBA = rgb255(50, 150, 255)
GRID: ColorRGBA = rgb255(235, 235, 235)
AXIS: ColorRGBA = rgb255(200, 200, 200)
MARQUEE_FILL: ColorRGBA = rgb255(0, 120, 255, 50)
MARQUEE_STROKE: ColorRGBA = rgb255(0, 120, 255)


def to_rgba(value: Any) -> ColorRGBA:
    """
    Coerces a sequence of three or four numbers into a ColorRGBA.
    Components are clamped to 0..1 and a missing alpha defaults to opaque.
    Raises a ValueError for anything else.
    """
    try:
        components = [float(c) for c in value]
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid color value {value!r}: {e}")
    if len(components) == 3:
        components.append(1.0)
    if len(components) != 4:
        raise ValueError(
            f"Color needs 3 or 4 components, got {len(components)}"
        )
    r, g, b, a = (max(0.0, min(1.0, c)) for c in components)
    return r, g, b, a


def to_hex(color: ColorRGBA) -> str:
    """Formats a color as #RRGGBBAA."""
    return "#" + "".join(f"{round(c * 255):02x}" for c in color)


def from_hex(text: str) -> ColorRGBA:
    """Parses #RRGGBB or #RRGGBBAA into a ColorRGBA."""
    digits = text.strip().lstrip("#")
    if len(digits) not in (6, 8):
        raise ValueError(f"Invalid hex color {text!r}")
    try:
        values = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
    except ValueError:
        raise ValueError(f"Invalid hex color {text!r}")
    return rgb255(*values)
