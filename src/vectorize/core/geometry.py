"""Geometric operations used by curve reconstruction and rendering.

This module provides small mathematical utilities for:
- Cross products and collinearity tests
- Bezier curve flattening
- Curve flattening for raster previews

All functions are pure and stateless.
"""

from vectorize.core._bezier import flatten_cubic as _flatten_cubic
from vectorize.domain import CubicSegment, Curve, Point

# Collinearity tolerance in pixel units
COLLINEAR_TOLERANCE = 1e-9


def cross(origin: Point, a: Point, b: Point) -> float:
    """Z component of (a - origin) x (b - origin).

    Positive when origin -> a -> b turns counter-clockwise.
    """
    return (a.x - origin.x) * (b.y - origin.y) - (a.y - origin.y) * (b.x - origin.x)


def is_collinear(a: Point, b: Point, c: Point, tolerance: float = COLLINEAR_TOLERANCE) -> bool:
    """Check whether three points lie on one line.

    The test is scale aware: the cross product is compared against the
    product of the two edge lengths.
    """
    scale = a.distance_to(b) * b.distance_to(c)
    if scale == 0.0:
        return True
    return abs(cross(a, b, c)) <= tolerance * max(1.0, scale)


def continues_straight(a: Point, b: Point, c: Point, tolerance: float = COLLINEAR_TOLERANCE) -> bool:
    """True if a -> b -> c is collinear and does not double back at b."""
    if not is_collinear(a, b, c, tolerance):
        return False
    dot = (b.x - a.x) * (c.x - b.x) + (b.y - a.y) * (c.y - b.y)
    return dot > 0.0


def bezier_flatten(points: list[Point], tolerance: float = 0.25) -> list[Point]:
    """Convert a line or cubic Bezier curve to line segments.

    Args:
        points: Control points (2 for a line, 4 for a cubic)
        tolerance: Maximum distance from true curve

    Returns:
        List of points forming line segments that approximate the curve

    Raises:
        ValueError: If points list is not of length 2 or 4
    """
    if len(points) == 2:
        return list(points)
    elif len(points) == 4:
        return _flatten_cubic(points, tolerance)
    else:
        raise ValueError(f"Expected 2 or 4 points for Bezier curve, got {len(points)}")


def flatten_curve(curve: Curve, tolerance: float = 0.25) -> list[Point]:
    """Approximate a whole curve as a polyline.

    Args:
        curve: Curve to flatten
        tolerance: Maximum deviation of the polyline from the curve

    Returns:
        Points of the polyline, starting at curve.start
    """
    if not curve.pieces:
        return []
    result: list[Point] = [curve.start]
    for piece in curve.pieces:
        if isinstance(piece, CubicSegment):
            result.extend(bezier_flatten(list(piece.points), tolerance)[1:])
        else:
            result.append(piece.end)
    return result


