import logging
from typing import Optional, Tuple
from blinker import Signal
from .matrix import Matrix

logger = logging.getLogger(__name__)

MIN_SCALE = 0.1
MAX_SCALE = 5.0
# Multiplicative wheel zoom factors
ZOOM_IN_FACTOR = 1.1
ZOOM_OUT_FACTOR = 0.9
# Additive step for the zoom buttons
ZOOM_STEP = 0.1
DEFAULT_GRID_SIZE = 50.0


def clamp_scale(scale: float) -> float:
    return max(MIN_SCALE, min(MAX_SCALE, scale))


def snap_to_grid(
    point: Tuple[float, float], grid_size: float = DEFAULT_GRID_SIZE
) -> Tuple[float, float]:
    """Rounds both coordinates to the nearest multiple of grid_size."""
    if grid_size <= 0:
        return point
    return (
        round(point[0] / grid_size) * grid_size,
        round(point[1] / grid_size) * grid_size,
    )


class Viewport:
    """
    Maps between world and screen coordinates.

    The mapping is a single affine transform, a uniform scale followed by
    a translation: screen = translate(tx, ty) @ scale(s). Input mapping
    uses its exact inverse.
    """

    def __init__(
        self, tx: float = 0.0, ty: float = 0.0, scale: float = 1.0
    ):
        self.tx = tx
        self.ty = ty
        self.scale = clamp_scale(scale)
        # Canvas size in pixels, if known. Used to anchor button zoom.
        self.width: Optional[float] = None
        self.height: Optional[float] = None
        self.changed = Signal()

    def __repr__(self) -> str:
        return (
            f"Viewport(tx={self.tx}, ty={self.ty}, scale={self.scale})"
        )

    def get_matrix(self) -> Matrix:
        """The world-to-screen transform."""
        return Matrix.translation(self.tx, self.ty) @ Matrix.scale(
            self.scale, self.scale
        )

    def world_to_screen(
        self, point: Tuple[float, float]
    ) -> Tuple[float, float]:
        return self.get_matrix().transform_point(point)

    def screen_to_world(
        self, point: Tuple[float, float]
    ) -> Tuple[float, float]:
        """
        Maps a screen point back to world coordinates.

        Raises `numpy.linalg.LinAlgError` if the transform is singular.
        """
        return self.get_matrix().invert().transform_point(point)

    def set_size(self, width: float, height: float):
        self.width, self.height = width, height

    def pan(self, dx: float, dy: float):
        """Shifts the view by a screen-space delta."""
        if dx == 0 and dy == 0:
            return
        self.tx += dx
        self.ty += dy
        self.changed.send(self)

    def set_offset(self, tx: float, ty: float):
        self.tx, self.ty = tx, ty
        self.changed.send(self)

    def set_scale(
        self,
        scale: float,
        pivot: Optional[Tuple[float, float]] = None,
    ):
        """
        Sets an absolute scale, clamped to the allowed range. The world
        point under the screen-space `pivot` stays where it is.
        """
        if pivot is None:
            pivot = (0.0, 0.0)
        wx, wy = self.screen_to_world(pivot)
        self.scale = clamp_scale(scale)
        self.tx = pivot[0] - wx * self.scale
        self.ty = pivot[1] - wy * self.scale
        logger.debug(f"Viewport scale set to {self.scale:.3f}")
        self.changed.send(self)

    def zoom_at(self, screen_point: Tuple[float, float], wheel_delta: float):
        """
        Wheel zoom anchored on the cursor. A negative delta zooms in.
        """
        if wheel_delta < 0:
            factor = ZOOM_IN_FACTOR
        elif wheel_delta > 0:
            factor = ZOOM_OUT_FACTOR
        else:
            return
        self.set_scale(self.scale * factor, screen_point)

    def _center_pivot(self) -> Optional[Tuple[float, float]]:
        if self.width is None or self.height is None:
            return None
        return self.width / 2, self.height / 2

    def zoom_in(self):
        self.set_scale(self.scale + ZOOM_STEP, self._center_pivot())

    def zoom_out(self):
        self.set_scale(self.scale - ZOOM_STEP, self._center_pivot())

    def center_on(self, width: float, height: float):
        """Places the world origin at the center of the canvas."""
        self.set_size(width, height)
        self.set_offset(width / 2, height / 2)

    def world_rect_to_screen(
        self, rect: Tuple[float, float, float, float]
    ) -> Tuple[float, float, float, float]:
        return self.get_matrix().transform_rect(rect)
