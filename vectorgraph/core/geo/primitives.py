import math
from typing import List, Sequence, Tuple

Point = Tuple[float, float]
Rect = Tuple[float, float, float, float]


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def closest_point_on_segment(
    point: Point, p1: Point, p2: Point
) -> Tuple[float, Point]:
    """
    Projects a point onto the segment p1-p2.

    Returns:
        A tuple of the clamped parameter `t` (0.0 at p1, 1.0 at p2) and the
        closest point on the segment.
    """
    dx, dy = p2[0] - p1[0], p2[1] - p1[1]
    len_sq = dx * dx + dy * dy
    if len_sq < 1e-12:  # Degenerate segment, treat as a point
        return 0.0, (p1[0], p1[1])
    t = ((point[0] - p1[0]) * dx + (point[1] - p1[1]) * dy) / len_sq
    t = max(0.0, min(1.0, t))
    return t, (p1[0] + t * dx, p1[1] + t * dy)


def point_segment_distance(point: Point, p1: Point, p2: Point) -> float:
    """Shortest distance from a point to the segment p1-p2."""
    _t, closest = closest_point_on_segment(point, p1, p2)
    return distance(point, closest)


def is_point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """
    Checks if a point is inside a closed polygon using the even-odd ray
    casting rule.
    """
    n = len(polygon)
    if n < 3:
        return False
    x, y = point
    inside = False
    p1x, p1y = polygon[0]
    for i in range(n + 1):
        p2x, p2y = polygon[i % n]
        if min(p1y, p2y) < y <= max(p1y, p2y) and x <= max(p1x, p2x):
            xinters = (y - p1y) * (p2x - p1x) / (p2y - p1y) + p1x
            if p1x == p2x or x <= xinters:
                inside = not inside
        p1x, p1y = p2x, p2y
    return inside


def normalize_rect(p1: Point, p2: Point) -> Rect:
    """
    Returns the (x, y, w, h) rectangle spanned by two opposite corners,
    with non-negative width and height.
    """
    x = min(p1[0], p2[0])
    y = min(p1[1], p2[1])
    return x, y, abs(p1[0] - p2[0]), abs(p1[1] - p2[1])


def rects_intersect(a: Rect, b: Rect) -> bool:
    """
    Checks whether two (x, y, w, h) rectangles overlap. Edges are
    inclusive, so a zero-height rectangle (e.g. the bounds of a horizontal
    line) can still intersect.
    """
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return (
        ax <= bx + bw
        and bx <= ax + aw
        and ay <= by + bh
        and by <= ay + ah
    )


def bounding_rect(points: Sequence[Point]) -> Rect:
    """Axis-aligned bounding box of a non-empty point sequence."""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys)


def regular_polygon_vertices(
    center: Point, sides: int, edge_length: float
) -> List[Point]:
    """
    Computes the vertices of a regular polygon centered on `center`.

    The first vertex points straight up (in a y-down coordinate system)
    and the rest follow clockwise on screen. The circumradius is derived
    from the edge length: r = len / (2 * sin(pi / sides)).
    """
    if sides < 3:
        raise ValueError("A polygon needs at least 3 sides.")
    cx, cy = center
    radius = edge_length / (2 * math.sin(math.pi / sides))
    vertices = []
    for i in range(sides):
        angle = 2 * math.pi * i / sides - math.pi / 2
        vertices.append(
            (cx + radius * math.cos(angle), cy + radius * math.sin(angle))
        )
    return vertices
