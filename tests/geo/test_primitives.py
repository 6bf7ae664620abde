import math
import pytest

from vectorgraph.core.geo.primitives import (
    bounding_rect,
    closest_point_on_segment,
    distance,
    is_point_in_polygon,
    normalize_rect,
    point_segment_distance,
    rects_intersect,
    regular_polygon_vertices,
)


@pytest.fixture
def square_polygon():
    return [(0, 0), (10, 0), (10, 10), (0, 10)]


def test_distance():
    assert distance((0, 0), (3, 4)) == pytest.approx(5.0)
    assert distance((1, 1), (1, 1)) == 0.0


def test_is_point_in_polygon(square_polygon):
    # Points inside
    assert is_point_in_polygon((5, 5), square_polygon) is True
    assert is_point_in_polygon((0.1, 0.1), square_polygon) is True

    # Points outside
    assert is_point_in_polygon((15, 5), square_polygon) is False
    assert is_point_in_polygon((-5, 5), square_polygon) is False
    assert is_point_in_polygon((5, 15), square_polygon) is False
    assert is_point_in_polygon((5, -5), square_polygon) is False


def test_is_point_in_concave_polygon():
    # An L shape; the notch at the top right is outside.
    l_shape = [(0, 0), (10, 0), (10, 5), (5, 5), (5, 10), (0, 10)]
    assert is_point_in_polygon((2, 8), l_shape) is True
    assert is_point_in_polygon((8, 2), l_shape) is True
    assert is_point_in_polygon((8, 8), l_shape) is False


def test_is_point_in_polygon_uses_even_odd_rule():
    star = [
        (10 * math.cos(math.radians(a)), 10 * math.sin(math.radians(a)))
        for a in (-90, 54, 198, 342, 126)
    ]
    # The pentagon in the middle of a pentagram is wound twice.
    assert is_point_in_polygon((0, 0), star) is False
    # A tip is wound once.
    assert is_point_in_polygon((0, -8), star) is True


def test_is_point_in_degenerate_polygon():
    assert is_point_in_polygon((0, 0), []) is False
    assert is_point_in_polygon((0, 0), [(0, 0), (1, 1)]) is False


def test_closest_point_on_segment():
    t, p = closest_point_on_segment((5, 5), (0, 0), (10, 0))
    assert t == pytest.approx(0.5)
    assert p == pytest.approx((5, 0))

    # Beyond the end is clamped to the end point
    t, p = closest_point_on_segment((20, 3), (0, 0), (10, 0))
    assert t == 1.0
    assert p == pytest.approx((10, 0))

    # Degenerate segment
    t, p = closest_point_on_segment((3, 4), (0, 0), (0, 0))
    assert t == 0.0
    assert p == (0, 0)


def test_point_segment_distance():
    assert point_segment_distance((5, 3), (0, 0), (10, 0)) == pytest.approx(
        3.0
    )
    assert point_segment_distance((13, 4), (0, 0), (10, 0)) == pytest.approx(
        5.0
    )


def test_normalize_rect():
    assert normalize_rect((10, 20), (0, 5)) == (0, 5, 10, 15)
    assert normalize_rect((0, 0), (0, 0)) == (0, 0, 0, 0)


def test_rects_intersect():
    a = (0, 0, 10, 10)
    assert rects_intersect(a, (5, 5, 10, 10))
    assert rects_intersect(a, (2, 2, 1, 1))  # Contained
    assert rects_intersect(a, (10, 0, 5, 5))  # Touching edge
    assert not rects_intersect(a, (11, 0, 5, 5))
    # Zero-height rectangles, such as the bounds of a horizontal line
    assert rects_intersect((0, 5, 10, 0), (4, 0, 2, 10))


def test_bounding_rect():
    points = [(1, 5), (-2, 3), (4, -1)]
    assert bounding_rect(points) == (-2, -1, 6, 6)


def test_regular_polygon_vertices():
    vertices = regular_polygon_vertices((100, 100), 4, 10)
    assert len(vertices) == 4
    # First vertex points up (negative y)
    radius = 10 / (2 * math.sin(math.pi / 4))
    assert vertices[0] == pytest.approx((100, 100 - radius))
    # All edges have the requested length
    for i in range(4):
        a, b = vertices[i], vertices[(i + 1) % 4]
        assert distance(a, b) == pytest.approx(10)


def test_regular_polygon_vertices_rejects_too_few_sides():
    with pytest.raises(ValueError):
        regular_polygon_vertices((0, 0), 2, 10)
