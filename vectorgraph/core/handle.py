from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Set


class HandleKind(Enum):
    """Defines the kinds of manipulable control points on a shape."""

    NONE = auto()
    # Rectangle corners
    TOP_LEFT = auto()
    TOP_RIGHT = auto()
    BOTTOM_RIGHT = auto()
    BOTTOM_LEFT = auto()
    # Line endpoints
    START = auto()
    END = auto()
    # Circle
    RADIUS = auto()
    # Polygon, paired with a vertex index
    VERTEX = auto()


CORNER_HANDLES: Set[HandleKind] = {
    HandleKind.TOP_LEFT,
    HandleKind.TOP_RIGHT,
    HandleKind.BOTTOM_RIGHT,
    HandleKind.BOTTOM_LEFT,
}

LEFT_HANDLES: Set[HandleKind] = {HandleKind.TOP_LEFT, HandleKind.BOTTOM_LEFT}
TOP_HANDLES: Set[HandleKind] = {HandleKind.TOP_LEFT, HandleKind.TOP_RIGHT}


@dataclass(frozen=True)
class Handle:
    """
    Identifies one handle of a shape. `index` is only meaningful for
    VERTEX handles, where it selects the polygon vertex.
    """

    kind: HandleKind
    index: int = 0

    @staticmethod
    def vertex(index: int) -> "Handle":
        return Handle(HandleKind.VERTEX, index)

    def is_none(self) -> bool:
        return self.kind == HandleKind.NONE

    def __str__(self) -> str:
        if self.kind == HandleKind.VERTEX:
            return f"VERTEX_{self.index}"
        return self.kind.name


NO_HANDLE = Handle(HandleKind.NONE)
