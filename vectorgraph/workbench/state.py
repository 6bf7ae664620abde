from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple, TYPE_CHECKING
from ..core.shapes import DEFAULT_STROKE_WIDTH
from ..core.viewport import DEFAULT_GRID_SIZE, snap_to_grid
from ..shared.util.colors import BLACK, ColorRGBA

if TYPE_CHECKING:
    from ..core.config import EditorConfig


class ToolMode(Enum):
    PAN = auto()
    SELECT = auto()
    RECTANGLE = auto()
    LINE = auto()
    CIRCLE = auto()
    POLYGON = auto()
    POINT = auto()


DRAW_MODES = {ToolMode.RECTANGLE, ToolMode.LINE, ToolMode.CIRCLE}


@dataclass
class EditorState:
    """
    The user-selected tool and drawing style. It is passed into every
    call of the interaction controller rather than read from globals.
    """

    mode: ToolMode = ToolMode.SELECT
    color: ColorRGBA = BLACK
    stroke_width: float = DEFAULT_STROKE_WIDTH
    snap_to_grid: bool = False
    grid_size: float = DEFAULT_GRID_SIZE

    @classmethod
    def from_config(cls, config: "EditorConfig") -> "EditorState":
        return cls(
            color=config.default_color,
            stroke_width=config.default_stroke_width,
            snap_to_grid=config.snap_to_grid,
            grid_size=config.grid_size,
        )

    def snap(self, point: Tuple[float, float]) -> Tuple[float, float]:
        """Applies grid snapping if it is enabled."""
        if not self.snap_to_grid:
            return point
        return snap_to_grid(point, self.grid_size)
