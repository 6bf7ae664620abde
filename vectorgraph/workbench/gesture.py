from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple
from ..core.handle import Handle, NO_HANDLE
from ..core.shapes import GeometryObject
from .events import MouseButton
from .state import ToolMode


class GestureKind(Enum):
    PAN = auto()
    DRAW = auto()
    RESIZE = auto()
    MOVE = auto()
    MARQUEE = auto()


@dataclass
class Gesture:
    """
    Everything the controller remembers between the press, drag and
    release events of a single pointer gesture.
    """

    kind: GestureKind
    mode: ToolMode
    button: MouseButton = MouseButton.PRIMARY
    # Object being resized, or the object that started a move
    target: Optional[GeometryObject] = None
    handle: Handle = NO_HANDLE
    # World point where a draw gesture started
    anchor: Tuple[float, float] = (0.0, 0.0)
    # Last (snapped) world point seen by a move or resize
    last_world: Tuple[float, float] = (0.0, 0.0)
    start_screen: Tuple[float, float] = (0.0, 0.0)
    last_screen: Tuple[float, float] = (0.0, 0.0)
    # Scene state captured at press, pushed to history at release
    before: Optional[List[GeometryObject]] = None
    changed: bool = False
    shift: bool = False
    selection_before: List[GeometryObject] = field(default_factory=list)
