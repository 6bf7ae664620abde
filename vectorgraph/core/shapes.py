from __future__ import annotations
import copy
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence, Tuple, Type, TYPE_CHECKING
from ..shared.util.colors import BLACK, RED, ColorRGBA, to_rgba
from .geo.primitives import (
    Rect,
    bounding_rect,
    distance,
    is_point_in_polygon,
    point_segment_distance,
    regular_polygon_vertices,
)
from .handle import (
    CORNER_HANDLES,
    Handle,
    HandleKind,
    LEFT_HANDLES,
    NO_HANDLE,
    TOP_HANDLES,
)

if TYPE_CHECKING:
    import cairo


logger = logging.getLogger(__name__)

# Default stroke width for newly drawn shapes
DEFAULT_STROKE_WIDTH = 2.0
# A circle never gets smaller than this
MIN_RADIUS = 2.0
# Maximum distance from a line segment that still counts as a hit
LINE_TOLERANCE = 5.0
# Pick radius of a Point, generous since points render small
POINT_PICK_RADIUS = 8.0
# Half the edge of the box a Point occupies
POINT_HALF_SIZE = 4.0


class GeometryObject(ABC):
    """
    Abstract base for everything that can be placed in a Scene.

    Only the raw geometry fields are stored. Anything derived from them,
    such as the outline, the bounds or the handle positions, is computed
    on demand, so mutating a field is all it takes to change the shape.
    """

    # Discriminator used by to_dict()/from_dict()
    type_name: str = ""
    # Distance within which a handle is picked
    handle_radius: float = 4.0

    def __init__(
        self,
        name: str = "",
        color: ColorRGBA = BLACK,
        stroke_width: float = DEFAULT_STROKE_WIDTH,
    ):
        self.name: str = name
        self.color: ColorRGBA = color
        self.stroke_width: float = stroke_width
        self.selected: bool = False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

    @abstractmethod
    def contains(self, point: Tuple[float, float]) -> bool:
        """Tests whether a world point hits this object."""
        pass

    @abstractmethod
    def handle_positions(self) -> List[Tuple[Handle, Tuple[float, float]]]:
        """Returns (handle, world position) pairs in pick order."""
        pass

    @abstractmethod
    def resize(self, handle: Handle, dx: float, dy: float):
        """
        Applies a world-space delta to the given handle. Handles that do
        not belong to this kind of object are ignored.
        """
        pass

    @abstractmethod
    def move(self, dx: float, dy: float):
        pass

    @abstractmethod
    def bounds(self) -> Rect:
        """Axis-aligned world bounds as (x, y, w, h)."""
        pass

    @abstractmethod
    def trace(self, ctx: "cairo.Context"):
        """Appends the outline of this object to the current path."""
        pass

    @abstractmethod
    def _geometry_to_dict(self) -> Dict[str, Any]:
        pass

    @classmethod
    @abstractmethod
    def _from_geometry(cls, data: Dict[str, Any]) -> "GeometryObject":
        pass

    def get_handle_at(self, point: Tuple[float, float]) -> Handle:
        """Returns the first handle within the pick radius, or NO_HANDLE."""
        for handle, pos in self.handle_positions():
            if distance(point, pos) < self.handle_radius:
                return handle
        return NO_HANDLE

    def copy(self) -> "GeometryObject":
        """Returns an independent duplicate, including the selection flag."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializes the object to a plain dict. The selection flag is
        transient and not included.
        """
        data: Dict[str, Any] = {
            "type": self.type_name,
            "name": self.name,
            "color": list(self.color),
            "stroke_width": self.stroke_width,
        }
        data.update(self._geometry_to_dict())
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "GeometryObject":
        """
        Creates an object of the right kind from a dict produced by
        to_dict().

        Raises:
            ValueError: If the type is unknown or a field is malformed.
        """
        type_name = data.get("type")
        shape_class = shape_by_type.get(str(type_name))
        if shape_class is None:
            raise ValueError(f"Unknown object type: {type_name!r}")
        try:
            obj = shape_class._from_geometry(data)
            obj.name = str(data.get("name", ""))
            if "color" in data:
                obj.color = to_rgba(data["color"])
            if "stroke_width" in data:
                obj.stroke_width = float(data["stroke_width"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed {type_name} entry: {e}")
        if obj.stroke_width <= 0:
            raise ValueError(
                f"Stroke width must be positive, got {obj.stroke_width}"
            )
        return obj


class Rectangle(GeometryObject):
    type_name = "rectangle"
    handle_radius = 4.0

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        name: str = "Rectangle",
        color: ColorRGBA = BLACK,
        stroke_width: float = DEFAULT_STROKE_WIDTH,
    ):
        super().__init__(name, color, stroke_width)
        self.x = x
        self.y = y
        self.width = max(0.0, width)
        self.height = max(0.0, height)

    def contains(self, point: Tuple[float, float]) -> bool:
        px, py = point
        return (
            self.x <= px <= self.x + self.width
            and self.y <= py <= self.y + self.height
        )

    def handle_positions(self) -> List[Tuple[Handle, Tuple[float, float]]]:
        x, y, w, h = self.x, self.y, self.width, self.height
        return [
            (Handle(HandleKind.TOP_LEFT), (x, y)),
            (Handle(HandleKind.TOP_RIGHT), (x + w, y)),
            (Handle(HandleKind.BOTTOM_RIGHT), (x + w, y + h)),
            (Handle(HandleKind.BOTTOM_LEFT), (x, y + h)),
        ]

    def resize(self, handle: Handle, dx: float, dy: float):
        if handle.kind not in CORNER_HANDLES:
            return

        # Moving an edge past the opposite one collapses the size to zero
        # instead of flipping, so the opposite corner never moves.
        if handle.kind in LEFT_HANDLES:
            right = self.x + self.width
            self.x = min(self.x + dx, right)
            self.width = right - self.x
        else:
            self.width = max(0.0, self.width + dx)

        if handle.kind in TOP_HANDLES:
            bottom = self.y + self.height
            self.y = min(self.y + dy, bottom)
            self.height = bottom - self.y
        else:
            self.height = max(0.0, self.height + dy)

    def move(self, dx: float, dy: float):
        self.x += dx
        self.y += dy

    def bounds(self) -> Rect:
        return self.x, self.y, self.width, self.height

    def trace(self, ctx: "cairo.Context"):
        ctx.rectangle(self.x, self.y, self.width, self.height)

    def _geometry_to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def _from_geometry(cls, data: Dict[str, Any]) -> "Rectangle":
        return cls(
            float(data["x"]),
            float(data["y"]),
            float(data["width"]),
            float(data["height"]),
        )


class Line(GeometryObject):
    type_name = "line"
    handle_radius = 5.0

    def __init__(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        name: str = "Line",
        color: ColorRGBA = BLACK,
        stroke_width: float = DEFAULT_STROKE_WIDTH,
    ):
        super().__init__(name, color, stroke_width)
        self.x1, self.y1 = x1, y1
        self.x2, self.y2 = x2, y2

    @property
    def start(self) -> Tuple[float, float]:
        return self.x1, self.y1

    @property
    def end(self) -> Tuple[float, float]:
        return self.x2, self.y2

    def contains(self, point: Tuple[float, float]) -> bool:
        return (
            point_segment_distance(point, self.start, self.end)
            <= LINE_TOLERANCE
        )

    def handle_positions(self) -> List[Tuple[Handle, Tuple[float, float]]]:
        return [
            (Handle(HandleKind.START), self.start),
            (Handle(HandleKind.END), self.end),
        ]

    def resize(self, handle: Handle, dx: float, dy: float):
        if handle.kind == HandleKind.START:
            self.x1 += dx
            self.y1 += dy
        elif handle.kind == HandleKind.END:
            self.x2 += dx
            self.y2 += dy

    def move(self, dx: float, dy: float):
        self.x1 += dx
        self.y1 += dy
        self.x2 += dx
        self.y2 += dy

    def bounds(self) -> Rect:
        return bounding_rect([self.start, self.end])

    def trace(self, ctx: "cairo.Context"):
        ctx.move_to(self.x1, self.y1)
        ctx.line_to(self.x2, self.y2)

    def _geometry_to_dict(self) -> Dict[str, Any]:
        return {"x1": self.x1, "y1": self.y1, "x2": self.x2, "y2": self.y2}

    @classmethod
    def _from_geometry(cls, data: Dict[str, Any]) -> "Line":
        return cls(
            float(data["x1"]),
            float(data["y1"]),
            float(data["x2"]),
            float(data["y2"]),
        )


class Circle(GeometryObject):
    type_name = "circle"
    handle_radius = 6.0

    def __init__(
        self,
        x: float,
        y: float,
        radius: float,
        name: str = "Circle",
        color: ColorRGBA = BLACK,
        stroke_width: float = DEFAULT_STROKE_WIDTH,
    ):
        super().__init__(name, color, stroke_width)
        self.x = x
        self.y = y
        self.radius = max(MIN_RADIUS, radius)

    @property
    def center(self) -> Tuple[float, float]:
        return self.x, self.y

    def contains(self, point: Tuple[float, float]) -> bool:
        return distance(point, self.center) <= self.radius

    def handle_positions(self) -> List[Tuple[Handle, Tuple[float, float]]]:
        return [(Handle(HandleKind.RADIUS), (self.x + self.radius, self.y))]

    def resize(self, handle: Handle, dx: float, dy: float):
        # Only the horizontal component changes the radius.
        if handle.kind == HandleKind.RADIUS:
            self.radius = max(MIN_RADIUS, self.radius + dx)

    def move(self, dx: float, dy: float):
        self.x += dx
        self.y += dy

    def bounds(self) -> Rect:
        r = self.radius
        return self.x - r, self.y - r, 2 * r, 2 * r

    def trace(self, ctx: "cairo.Context"):
        ctx.new_sub_path()
        ctx.arc(self.x, self.y, self.radius, 0, 2 * math.pi)
        ctx.close_path()

    def _geometry_to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "radius": self.radius}

    @classmethod
    def _from_geometry(cls, data: Dict[str, Any]) -> "Circle":
        return cls(float(data["x"]), float(data["y"]), float(data["radius"]))


class Polygon(GeometryObject):
    """
    A closed polygon. The vertex order is the winding order; the closing
    edge from the last vertex back to the first is implicit.
    """

    type_name = "polygon"
    handle_radius = 6.0

    def __init__(
        self,
        points: Sequence[Tuple[float, float]],
        name: str = "Polygon",
        color: ColorRGBA = BLACK,
        stroke_width: float = DEFAULT_STROKE_WIDTH,
    ):
        if len(points) < 3:
            raise ValueError(
                f"A polygon needs at least 3 vertices, got {len(points)}"
            )
        super().__init__(name, color, stroke_width)
        self.points: List[Tuple[float, float]] = [
            (float(x), float(y)) for x, y in points
        ]

    @classmethod
    def regular(
        cls,
        center: Tuple[float, float],
        sides: int,
        edge_length: float,
        name: str = "Polygon",
        color: ColorRGBA = BLACK,
        stroke_width: float = DEFAULT_STROKE_WIDTH,
    ) -> "Polygon":
        """
        Builds a regular polygon around `center` with its first vertex
        pointing up.
        """
        if edge_length <= 0:
            raise ValueError("Edge length must be positive.")
        points = regular_polygon_vertices(center, sides, edge_length)
        return cls(points, name, color, stroke_width)

    def contains(self, point: Tuple[float, float]) -> bool:
        return is_point_in_polygon(point, self.points)

    def handle_positions(self) -> List[Tuple[Handle, Tuple[float, float]]]:
        return [(Handle.vertex(i), p) for i, p in enumerate(self.points)]

    def resize(self, handle: Handle, dx: float, dy: float):
        if handle.kind != HandleKind.VERTEX:
            return
        if not 0 <= handle.index < len(self.points):
            return
        x, y = self.points[handle.index]
        self.points[handle.index] = (x + dx, y + dy)

    def move(self, dx: float, dy: float):
        self.points = [(x + dx, y + dy) for x, y in self.points]

    def bounds(self) -> Rect:
        return bounding_rect(self.points)

    def trace(self, ctx: "cairo.Context"):
        first, *rest = self.points
        ctx.move_to(*first)
        for p in rest:
            ctx.line_to(*p)
        ctx.close_path()

    def _geometry_to_dict(self) -> Dict[str, Any]:
        return {"points": [[x, y] for x, y in self.points]}

    @classmethod
    def _from_geometry(cls, data: Dict[str, Any]) -> "Polygon":
        return cls([(float(x), float(y)) for x, y in data["points"]])


class Point(GeometryObject):
    """
    A labeled location. The label is the object's name. Points are always
    drawn in a fixed color, whatever their `color` says.
    """

    type_name = "point"

    def __init__(
        self,
        x: float,
        y: float,
        name: str = "",
        color: ColorRGBA = RED,
        stroke_width: float = DEFAULT_STROKE_WIDTH,
    ):
        super().__init__(name, color, stroke_width)
        self.x = x
        self.y = y

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def label(self) -> str:
        return self.name

    def contains(self, point: Tuple[float, float]) -> bool:
        return distance(point, self.position) <= POINT_PICK_RADIUS

    def handle_positions(self) -> List[Tuple[Handle, Tuple[float, float]]]:
        return []

    def resize(self, handle: Handle, dx: float, dy: float):
        pass

    def move(self, dx: float, dy: float):
        self.x += dx
        self.y += dy

    def bounds(self) -> Rect:
        s = POINT_HALF_SIZE
        return self.x - s, self.y - s, 2 * s, 2 * s

    def trace(self, ctx: "cairo.Context"):
        s = POINT_HALF_SIZE
        ctx.move_to(self.x - s, self.y - s)
        ctx.line_to(self.x + s, self.y + s)
        ctx.move_to(self.x + s, self.y - s)
        ctx.line_to(self.x - s, self.y + s)

    def _geometry_to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def _from_geometry(cls, data: Dict[str, Any]) -> "Point":
        return cls(float(data["x"]), float(data["y"]))


shape_by_type: Dict[str, Type[GeometryObject]] = {
    cls.type_name: cls for cls in (Rectangle, Line, Circle, Polygon, Point)
}
