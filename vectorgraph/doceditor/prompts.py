import math
from abc import abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Tuple
from ..shared.util.colors import ColorRGBA


@dataclass(frozen=True)
class PolygonParams:
    sides: int
    edge_length: float

    @classmethod
    def parse(cls, sides: Any, edge_length: Any) -> "PolygonParams":
        """
        Validates raw user input for the polygon tool.

        Raises:
            ValueError: With a user-facing message if either value is
                unusable.
        """
        try:
            n = int(str(sides).strip())
        except ValueError:
            raise ValueError(
                _("The number of sides must be a whole number.")
            )
        if n < 3:
            raise ValueError(_("A polygon needs at least 3 sides."))
        try:
            length = float(str(edge_length).strip())
        except ValueError:
            raise ValueError(_("The edge length must be a number."))
        if not math.isfinite(length) or length <= 0:
            raise ValueError(_("The edge length must be positive."))
        return cls(n, length)


def parse_stroke_width(text: Any) -> float:
    """Parses a stroke width typed by the user. Raises ValueError."""
    try:
        width = float(str(text).strip())
    except ValueError:
        raise ValueError(_("The stroke width must be a number."))
    if not math.isfinite(width) or width <= 0:
        raise ValueError(_("The stroke width must be positive."))
    return width


class Prompter(Protocol):
    """
    Asks the user for values. The host shell implements this with real
    dialogs. Every method returns None when the user cancels.
    """

    @abstractmethod
    def ask_color(self, initial: ColorRGBA) -> Optional[ColorRGBA]:
        raise NotImplementedError

    @abstractmethod
    def ask_text(self, title: str, initial: str = "") -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def ask_polygon_params(self) -> Optional[Tuple[Any, Any]]:
        """
        Returns the raw (sides, edge length) input, to be validated with
        PolygonParams.parse().
        """
        raise NotImplementedError


class NullPrompter:
    """A Prompter that cancels every question. Used when running headless."""

    def ask_color(self, initial: ColorRGBA) -> Optional[ColorRGBA]:
        return None

    def ask_text(self, title: str, initial: str = "") -> Optional[str]:
        return None

    def ask_polygon_params(self) -> Optional[Tuple[Any, Any]]:
        return None
