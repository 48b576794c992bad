"""Path segment types emitted by the tracer.

The tracer turns a binary bitmap into a list of closed paths. Each path is
an ordered sequence of typed segments:
- CORNER: three points (start, vertex, end), drawn as two straight pieces
- CURVE_TO: four points (start, control 1, control 2, end), a cubic Bezier

Segments are read-only; the reconstructor consumes them in order.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from vectorize.domain.curve import Point


class SegmentKind(Enum):
    """Segment tag, numbered as in the tracer library."""

    CURVE_TO = 1
    CORNER = 2


_POINT_COUNTS = {
    SegmentKind.CORNER: 3,
    SegmentKind.CURVE_TO: 4,
}


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One typed segment of a traced path.

    Attributes:
        kind: Corner or curve-to
        points: 3 points for a corner, 4 for a curve-to
    """

    kind: SegmentKind
    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        expected = _POINT_COUNTS[self.kind]
        if len(self.points) != expected:
            raise ValueError(
                f"{self.kind.name} segment needs {expected} points, got {len(self.points)}"
            )

    @classmethod
    def corner(cls, start: Point, vertex: Point, end: Point) -> "PathSegment":
        return cls(SegmentKind.CORNER, (start, vertex, end))

    @classmethod
    def curve_to(cls, start: Point, c1: Point, c2: Point, end: Point) -> "PathSegment":
        return cls(SegmentKind.CURVE_TO, (start, c1, c2, end))

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]


@dataclass(frozen=True)
class TracedPath:
    """A closed path produced by the tracer.

    Attributes:
        segments: Ordered segments; each starts where the previous ended
        area: Approximate magnitude of the enclosed area, in pixels
        sign: True for an outer ('+') path, False for a hole ('-')
    """

    segments: tuple[PathSegment, ...]
    area: int = 0
    sign: bool = True

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)
