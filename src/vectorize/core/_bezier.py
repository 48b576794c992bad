"""Internal cubic Bezier helpers used by bezier_flatten.

Not intended for public use.
"""

import math

from vectorize.domain import Point

MAX_DEPTH = 16


def _midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def _distance_to_chord(point: Point, start: Point, end: Point) -> float:
    """Distance from point to the segment start-end."""
    dx, dy = end.x - start.x, end.y - start.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(point.x - start.x, point.y - start.y)
    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / length_sq
    t = min(max(t, 0.0), 1.0)
    return math.hypot(point.x - (start.x + t * dx), point.y - (start.y + t * dy))


def split_cubic(points: list[Point]) -> tuple[list[Point], list[Point]]:
    """Split a cubic at t=0.5 with De Casteljau's construction.

    Args:
        points: Control points [p0, p1, p2, p3]

    Returns:
        Control points of the left and right halves
    """
    p0, p1, p2, p3 = points
    a, b, c = _midpoint(p0, p1), _midpoint(p1, p2), _midpoint(p2, p3)
    d, e = _midpoint(a, b), _midpoint(b, c)
    mid = _midpoint(d, e)
    return [p0, a, d, mid], [mid, e, c, p3]


def flatten_cubic(points: list[Point], tolerance: float, depth: int = 0) -> list[Point]:
    """Approximate a cubic by a polyline.

    A piece is flat once both control points lie within tolerance of its
    chord; the control polygon bounds the curve, so the polyline is then
    within tolerance as well.

    Args:
        points: Control points [p0, p1, p2, p3]
        tolerance: Maximum distance from the true curve
        depth: Current recursion depth

    Returns:
        Points from p0 to p3 inclusive
    """
    p0, p1, p2, p3 = points
    flat = max(_distance_to_chord(p1, p0, p3), _distance_to_chord(p2, p0, p3)) <= tolerance
    if flat or depth >= MAX_DEPTH:
        return [p0, p3]

    left, right = split_cubic(points)
    return flatten_cubic(left, tolerance, depth + 1)[:-1] + flatten_cubic(
        right, tolerance, depth + 1
    )
