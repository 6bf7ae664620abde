import math
import pytest
import cairo
from vectorgraph.core.handle import Handle, HandleKind, NO_HANDLE
from vectorgraph.core.shapes import (
    Circle,
    GeometryObject,
    Line,
    MIN_RADIUS,
    Point,
    Polygon,
    Rectangle,
)
from vectorgraph.shared.util.colors import BLUE, RED


TL = Handle(HandleKind.TOP_LEFT)
TR = Handle(HandleKind.TOP_RIGHT)
BR = Handle(HandleKind.BOTTOM_RIGHT)
BL = Handle(HandleKind.BOTTOM_LEFT)


@pytest.fixture
def rect():
    return Rectangle(0, 0, 100, 50)


@pytest.fixture
def square():
    return Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])


class TestRectangle:
    def test_contains_is_closed(self, rect):
        assert rect.contains((50, 25))
        assert rect.contains((0, 0))
        assert rect.contains((100, 50))
        assert not rect.contains((100.1, 25))
        assert not rect.contains((-1, 25))

    def test_get_handle_at(self, rect):
        assert rect.get_handle_at((1, 1)) == TL
        assert rect.get_handle_at((99, 1)) == TR
        assert rect.get_handle_at((100, 52)) == BR
        assert rect.get_handle_at((2, 50)) == BL
        assert rect.get_handle_at((50, 25)) == NO_HANDLE
        # The pick radius is 4
        assert rect.get_handle_at((4, 0)) == NO_HANDLE

    def test_resize_bottom_right_keeps_origin(self, rect):
        rect.resize(BR, 20, -10)
        assert (rect.x, rect.y) == (0, 0)
        assert (rect.width, rect.height) == (120, 40)

    def test_resize_top_left_keeps_bottom_right(self, rect):
        rect.resize(TL, 10, 5)
        assert (rect.x, rect.y) == (10, 5)
        assert rect.x + rect.width == pytest.approx(100)
        assert rect.y + rect.height == pytest.approx(50)

    def test_resize_mixed_corners(self, rect):
        rect.resize(TR, 10, 10)
        assert (rect.x, rect.y, rect.width, rect.height) == (0, 10, 110, 40)
        rect.resize(BL, -10, 10)
        assert (rect.x, rect.y, rect.width, rect.height) == (-10, 10, 120, 50)

    def test_resize_clamps_at_zero(self, rect):
        rect.resize(TL, 500, 500)
        assert rect.width == 0
        assert rect.height == 0
        # The bottom-right corner did not move
        assert (rect.x, rect.y) == (100, 50)

        other = Rectangle(0, 0, 10, 10)
        other.resize(BR, -50, -50)
        assert (other.x, other.y, other.width, other.height) == (0, 0, 0, 0)

    def test_resize_ignores_foreign_handles(self, rect):
        rect.resize(Handle(HandleKind.RADIUS), 10, 10)
        rect.resize(NO_HANDLE, 10, 10)
        assert rect.bounds() == (0, 0, 100, 50)

    def test_move(self, rect):
        rect.move(10, -5)
        assert rect.bounds() == (10, -5, 100, 50)


class TestLine:
    def test_contains_uses_distance_tolerance(self):
        line = Line(0, 0, 100, 0)
        assert line.contains((50, 0))
        assert line.contains((50, 5))
        assert not line.contains((50, 5.1))
        # Beyond the end point, distance is measured to the end point
        assert line.contains((103, 4))
        assert not line.contains((106, 0))

    def test_handles_and_resize(self):
        line = Line(0, 0, 100, 0)
        start = Handle(HandleKind.START)
        end = Handle(HandleKind.END)
        assert line.get_handle_at((2, 2)) == start
        assert line.get_handle_at((98, -2)) == end
        assert line.get_handle_at((50, 0)) == NO_HANDLE

        line.resize(end, 0, 50)
        assert line.start == (0, 0)
        assert line.end == (100, 50)
        line.resize(start, 10, 10)
        assert line.start == (10, 10)
        assert line.end == (100, 50)

    def test_bounds_and_move(self):
        line = Line(10, 50, 0, 20)
        assert line.bounds() == (0, 20, 10, 30)
        line.move(5, 5)
        assert (line.x1, line.y1, line.x2, line.y2) == (15, 55, 5, 25)


class TestCircle:
    def test_contains(self):
        circle = Circle(10, 10, 20)
        assert circle.contains((10, 10))
        assert circle.contains((30, 10))
        assert not circle.contains((10 + 21, 10))

    def test_radius_is_clamped_on_creation(self):
        assert Circle(0, 0, 0).radius == MIN_RADIUS
        assert Circle(0, 0, 1.5).radius == MIN_RADIUS

    def test_resize_uses_dx_and_clamps(self):
        circle = Circle(0, 0, 10)
        handle = circle.get_handle_at((10, 1))
        assert handle == Handle(HandleKind.RADIUS)

        circle.resize(handle, 5, 100)
        assert circle.radius == 15
        circle.resize(handle, -100, 0)
        assert circle.radius == MIN_RADIUS

    def test_bounds(self):
        assert Circle(10, 20, 5).bounds() == (5, 15, 10, 10)


class TestPolygon:
    def test_needs_three_vertices(self):
        with pytest.raises(ValueError):
            Polygon([(0, 0), (1, 1)])

    def test_contains(self, square):
        assert square.contains((5, 5))
        assert not square.contains((15, 5))

    def test_vertex_handles_in_index_order(self, square):
        assert square.get_handle_at((10, 1)) == Handle.vertex(1)
        assert square.get_handle_at((1, 9)) == Handle.vertex(3)
        assert square.get_handle_at((5, 5)) == NO_HANDLE
        assert len(square.handle_positions()) == 4

    def test_resize_moves_only_one_vertex(self, square):
        square.resize(Handle.vertex(2), 5, 5)
        assert square.points == [(0, 0), (10, 0), (15, 15), (0, 10)]
        # Out of range indexes and foreign handles are ignored
        square.resize(Handle.vertex(7), 5, 5)
        square.resize(Handle(HandleKind.START), 5, 5)
        assert square.points == [(0, 0), (10, 0), (15, 15), (0, 10)]
        # The outline follows the vertices
        assert square.contains((12, 12))

    def test_move(self, square):
        square.move(1, 2)
        assert square.points[0] == (1, 2)
        assert square.bounds() == (1, 2, 10, 10)

    def test_regular(self):
        poly = Polygon.regular((0, 0), 6, 10)
        assert len(poly.points) == 6
        # For a hexagon the circumradius equals the edge length
        assert poly.points[0] == pytest.approx((0, -10))
        assert poly.contains((0, 0))

    def test_regular_rejects_bad_parameters(self):
        with pytest.raises(ValueError):
            Polygon.regular((0, 0), 2, 10)
        with pytest.raises(ValueError):
            Polygon.regular((0, 0), 5, 0)


class TestPoint:
    def test_defaults(self):
        p = Point(20, 30, name="P0")
        assert p.color == RED
        assert p.stroke_width == 2
        assert p.label == "P0"

    def test_contains_uses_pick_radius(self):
        p = Point(0, 0)
        assert p.contains((5, 5))
        assert p.contains((8, 0))
        assert not p.contains((8.1, 0))

    def test_has_no_handles(self):
        p = Point(0, 0)
        assert p.get_handle_at((0, 0)) == NO_HANDLE
        p.resize(Handle(HandleKind.TOP_LEFT), 10, 10)
        assert p.position == (0, 0)

    def test_bounds(self):
        assert Point(10, 10).bounds() == (6, 6, 8, 8)


def test_copy_is_independent(square):
    square.selected = True
    square.name = "Hex"
    square.color = BLUE
    dup = square.copy()
    assert dup is not square
    assert dup.selected
    assert dup.to_dict() == square.to_dict()

    dup.move(100, 100)
    assert square.points[0] == (0, 0)


@pytest.mark.parametrize(
    "obj",
    [
        Rectangle(1, 2, 3, 4, name="R", stroke_width=3),
        Line(0, 0, 5, 5, color=BLUE),
        Circle(7, 8, 9),
        Polygon([(0, 0), (4, 0), (2, 3)], name="tri"),
        Point(3, 4, name="P7"),
    ],
)
def test_dict_round_trip(obj):
    obj.selected = True
    data = obj.to_dict()
    assert "selected" not in data
    restored = GeometryObject.from_dict(data)
    assert type(restored) is type(obj)
    assert restored.to_dict() == data
    assert restored.selected is False


def test_from_dict_rejects_bad_data():
    with pytest.raises(ValueError):
        GeometryObject.from_dict({"type": "hexagon"})
    with pytest.raises(ValueError):
        GeometryObject.from_dict({"type": "circle", "x": 0})
    with pytest.raises(ValueError):
        GeometryObject.from_dict(
            {"type": "line", "x1": 0, "y1": 0, "x2": "a", "y2": 0}
        )
    with pytest.raises(ValueError):
        GeometryObject.from_dict(
            {"type": "point", "x": 0, "y": 0, "stroke_width": -1}
        )
    with pytest.raises(ValueError):
        GeometryObject.from_dict(
            {"type": "polygon", "points": [[0, 0], [1, 1]]}
        )


def test_trace_produces_a_path():
    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, 10, 10)
    ctx = cairo.Context(surface)
    for obj in (
        Rectangle(0, 0, 5, 5),
        Line(0, 0, 5, 5),
        Circle(5, 5, 3),
        Polygon([(0, 0), (4, 0), (2, 3)]),
        Point(5, 5),
    ):
        ctx.new_path()
        obj.trace(ctx)
        x1, y1, x2, y2 = ctx.path_extents()
        assert x2 > x1 or y2 > y1
    assert math.isfinite(x1)
