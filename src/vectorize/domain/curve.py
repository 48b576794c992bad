"""Core geometric types for traced curve representation.

This module defines the geometric types produced by segment reconstruction:
- Point: An immutable 2D point
- LineSegment / CubicSegment: The two piece kinds a curve is built from
- Curve: An ordered, continuous sequence of pieces
- BoundingBox: Axis-aligned extents of one or more curves

Curves draw themselves through the fontTools pen protocol (moveTo, lineTo,
curveTo, closePath), which is how bounds, SVG output and affine transforms
are computed without duplicating that machinery here.
"""

import math
from dataclasses import dataclass
from typing import Any, Union

from fontTools.misc.transform import Transform
from fontTools.pens.basePen import AbstractPen
from fontTools.pens.boundsPen import BoundsPen

# Tolerance used when comparing coordinates produced by the tracer
POINT_TOLERANCE = 1e-9


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D cartesian space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in bitmap pixels (or output units after scaling)
        y: Y coordinate, origin at the bottom-left of the bitmap
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_close(self, other: "Point", tolerance: float = POINT_TOLERANCE) -> bool:
        """Check whether two points coincide within a tolerance.

        The tolerance is relative to the coordinate magnitude so that scaled
        curves compare the same way as curves in pixel units.

        Args:
            other: Point to compare against
            tolerance: Base tolerance

        Returns:
            True if both coordinates match within tolerance
        """
        scale = max(1.0, abs(self.x), abs(self.y), abs(other.x), abs(other.y))
        limit = tolerance * scale
        return abs(self.x - other.x) <= limit and abs(self.y - other.y) <= limit

    def transformed(self, transform: Transform) -> "Point":
        """Apply an affine transform and return the new point."""
        x, y = transform.transformPoint((self.x, self.y))
        return Point(x, y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class LineSegment:
    """A straight piece between two points."""

    start: Point
    end: Point

    @property
    def points(self) -> tuple[Point, ...]:
        return (self.start, self.end)

    def is_degenerate(self) -> bool:
        """True if the segment has zero length."""
        return self.start.is_close(self.end)

    def transformed(self, transform: Transform) -> "LineSegment":
        return LineSegment(self.start.transformed(transform), self.end.transformed(transform))

    def to_dict(self) -> dict[str, Any]:
        return {"type": "line", "points": [p.to_dict() for p in self.points]}


@dataclass(frozen=True, slots=True)
class CubicSegment:
    """A cubic Bezier piece: start, two control points, end."""

    start: Point
    c1: Point
    c2: Point
    end: Point

    @property
    def points(self) -> tuple[Point, ...]:
        return (self.start, self.c1, self.c2, self.end)

    def is_degenerate(self) -> bool:
        """True if all four control points collapse to one location."""
        return all(self.start.is_close(p) for p in (self.c1, self.c2, self.end))

    def point_at(self, t: float) -> Point:
        """Evaluate the curve at parameter t in [0, 1]."""
        mt = 1.0 - t
        a = mt * mt * mt
        b = 3 * mt * mt * t
        c = 3 * mt * t * t
        d = t * t * t
        return Point(
            a * self.start.x + b * self.c1.x + c * self.c2.x + d * self.end.x,
            a * self.start.y + b * self.c1.y + c * self.c2.y + d * self.end.y,
        )

    def transformed(self, transform: Transform) -> "CubicSegment":
        return CubicSegment(*(p.transformed(transform) for p in self.points))

    def to_dict(self) -> dict[str, Any]:
        return {"type": "cubic", "points": [p.to_dict() for p in self.points]}


CurvePiece = Union[LineSegment, CubicSegment]


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box.

    Attributes:
        min_x: Left edge
        min_y: Bottom edge
        max_x: Right edge
        max_y: Top edge
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)


class Curve:
    """An ordered, continuous sequence of line and cubic pieces.

    Each piece starts where the previous one ended. Curves are immutable
    once built: transforms return new instances.

    Example:
        curve = Curve([LineSegment(Point(0, 0), Point(1, 0))])
        curve.scaled(2.0, 2.0).end  # Point(2.0, 0.0)
    """

    __slots__ = ("_pieces",)

    def __init__(self, pieces: list[CurvePiece] | tuple[CurvePiece, ...]) -> None:
        self._pieces: tuple[CurvePiece, ...] = tuple(pieces)

    @classmethod
    def polyline(cls, points: list[Point]) -> "Curve":
        """Build a curve of straight pieces through the given points."""
        return cls([LineSegment(a, b) for a, b in zip(points, points[1:])])

    @property
    def pieces(self) -> tuple[CurvePiece, ...]:
        return self._pieces

    def __len__(self) -> int:
        return len(self._pieces)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Curve):
            return NotImplemented
        return self._pieces == other._pieces

    def __hash__(self) -> int:
        return hash(self._pieces)

    def __repr__(self) -> str:
        return f"Curve(pieces={len(self._pieces)}, closed={self.is_closed})"

    @property
    def start(self) -> Point:
        """First point of the curve."""
        if not self._pieces:
            raise ValueError("Empty curve has no start point")
        return self._pieces[0].start

    @property
    def end(self) -> Point:
        """Last point of the curve."""
        if not self._pieces:
            raise ValueError("Empty curve has no end point")
        return self._pieces[-1].end

    @property
    def is_closed(self) -> bool:
        """True if the curve ends where it starts."""
        return bool(self._pieces) and self.start.is_close(self.end)

    def is_continuous(self) -> bool:
        """True if every piece starts where the previous piece ended."""
        return all(
            prev.end.is_close(piece.start)
            for prev, piece in zip(self._pieces, self._pieces[1:])
        )

    def points(self) -> list[Point]:
        """Points the curve passes through, in order.

        Control points of cubic pieces are not included.
        """
        if not self._pieces:
            return []
        return [self._pieces[0].start] + [piece.end for piece in self._pieces]

    def draw(self, pen: AbstractPen) -> None:
        """Draw the curve onto a fontTools pen.

        Args:
            pen: Any object implementing the fontTools pen protocol
        """
        if not self._pieces:
            return
        pen.moveTo(self.start.to_tuple())
        for piece in self._pieces:
            if isinstance(piece, CubicSegment):
                pen.curveTo(piece.c1.to_tuple(), piece.c2.to_tuple(), piece.end.to_tuple())
            else:
                pen.lineTo(piece.end.to_tuple())
        if self.is_closed:
            pen.closePath()
        else:
            pen.endPath()

    def bounding_box(self) -> BoundingBox:
        """Exact bounds of the curve, including cubic extrema.

        Returns:
            BoundingBox of the curve

        Raises:
            ValueError: If the curve has no pieces
        """
        pen = BoundsPen(None)
        self.draw(pen)
        if pen.bounds is None:
            raise ValueError("Empty curve has no bounding box")
        return BoundingBox(*pen.bounds)

    def transformed(self, transform: Transform) -> "Curve":
        """Return a copy with an affine transform applied to every point."""
        return Curve([piece.transformed(transform) for piece in self._pieces])

    def scaled(self, scale_x: float, scale_y: float) -> "Curve":
        """Return a copy scaled about the origin by independent X/Y factors."""
        return self.transformed(Transform().scale(scale_x, scale_y))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with the piece list and closure flag
        """
        return {
            "closed": self.is_closed,
            "pieces": [piece.to_dict() for piece in self._pieces],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Curve":
        """Deserialize from dictionary.

        Args:
            data: Dictionary produced by to_dict()

        Returns:
            Curve instance

        Raises:
            ValueError: If a piece has an unknown type
        """
        pieces: list[CurvePiece] = []
        for item in data["pieces"]:
            points = [Point.from_dict(p) for p in item["points"]]
            if item["type"] == "line":
                pieces.append(LineSegment(*points))
            elif item["type"] == "cubic":
                pieces.append(CubicSegment(*points))
            else:
                raise ValueError(f"Unknown curve piece type: {item['type']}")
        return cls(pieces)
