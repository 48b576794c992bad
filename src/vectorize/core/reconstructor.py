"""Segment reconstruction: tracer segments to continuous curves.

The tracer emits each closed path as a flat sequence of typed segments.
This module turns one such sequence into a single Curve:

- CORNER (start, vertex, end) becomes two straight pieces
- CURVE_TO (start, c1, c2, end) becomes a cubic piece, or a polyline through
  start, c2 and end when the control handles have collapsed

Consecutive segments are assumed to share end points; the tracer guarantees
this, so only the composite's overall shape is validated.
"""

from collections.abc import Callable, Iterable, Sequence

from vectorize.core.simplify import simplify_curve
from vectorize.domain import (
    CubicSegment,
    Curve,
    CurvePiece,
    LineSegment,
    PathSegment,
    Point,
    SegmentKind,
    TracedPath,
)
from vectorize.exceptions import CurveSimplificationError, ReconstructionError
from vectorize.utils.logging import get_logger

logger = get_logger("vectorize.reconstructor")


def has_degenerate_handles(start: Point, c1: Point, c2: Point, end: Point) -> bool:
    """Check whether a cubic's control handles have collapsed.

    Handles are degenerate when both control points coincide (the curve is
    really a corner at that point) or when both handles have zero length
    (the curve is really a straight line).
    """
    if c1.is_close(c2):
        return True
    return c1.is_close(start) and c2.is_close(end)


def segment_pieces(segment: PathSegment) -> list[CurvePiece]:
    """Geometry for one tracer segment.

    Args:
        segment: Corner or curve-to segment

    Returns:
        Two line pieces, or one cubic piece
    """
    if segment.kind is SegmentKind.CORNER:
        start, vertex, end = segment.points
        return [LineSegment(start, vertex), LineSegment(vertex, end)]

    start, c1, c2, end = segment.points
    if has_degenerate_handles(start, c1, c2, end):
        return [LineSegment(start, c2), LineSegment(c2, end)]
    return [CubicSegment(start, c1, c2, end)]


class SegmentReconstructor:
    """Rebuilds traced paths into simplified curves.

    Example:
        reconstructor = SegmentReconstructor()
        curves = reconstructor.reconstruct_paths(paths)
    """

    def __init__(self, simplify: bool = True) -> None:
        """Initialize the reconstructor.

        Args:
            simplify: Run the simplification pass on each composite
        """
        self.simplify = simplify

    def build(
        self,
        segments: Iterable[PathSegment],
        *,
        require_closed: bool = False,
        path_index: int = 0,
    ) -> Curve:
        """Build the curve for one path.

        Args:
            segments: Ordered segments of one path
            require_closed: Reject composites whose first and last points differ
            path_index: Position of the path in the trace result, for errors

        Returns:
            The reconstructed (and possibly simplified) curve

        Raises:
            ReconstructionError: If the composite is not valid geometry
        """
        pieces: list[CurvePiece] = []
        for segment in segments:
            pieces.extend(segment_pieces(segment))

        if not pieces:
            raise ReconstructionError(path_index, "path has no segments")

        composite = Curve(pieces)
        if require_closed and not composite.is_closed:
            raise ReconstructionError(
                path_index,
                f"path is not closed: starts at {composite.start.to_tuple()}, "
                f"ends at {composite.end.to_tuple()}",
            )
        if all(piece.is_degenerate() for piece in pieces):
            raise ReconstructionError(path_index, "all pieces are degenerate")

        if not self.simplify:
            return composite

        try:
            return simplify_curve(composite)
        except CurveSimplificationError as e:
            logger.debug("Keeping unsimplified curve", path=path_index, reason=str(e))
            return composite

    def reconstruct(
        self,
        segments: Iterable[PathSegment],
        *,
        require_closed: bool = False,
    ) -> Curve | None:
        """Build the curve for one path, or None if it is not valid.

        Args:
            segments: Ordered segments of one path
            require_closed: Reject composites whose first and last points differ

        Returns:
            The curve, or None
        """
        try:
            return self.build(segments, require_closed=require_closed)
        except ReconstructionError:
            return None

    def reconstruct_paths(
        self,
        paths: Sequence[TracedPath],
        on_skip: Callable[[ReconstructionError], None] | None = None,
    ) -> list[Curve]:
        """Build curves for every path of a trace result, in tracer order.

        Paths that fail to reconstruct are skipped.

        Args:
            paths: Trace result
            on_skip: Optional callback receiving the error for each skipped path

        Returns:
            Curves of the paths that reconstructed successfully
        """
        curves: list[Curve] = []
        for index, path in enumerate(paths):
            try:
                curves.append(self.build(path.segments, require_closed=True, path_index=index))
            except ReconstructionError as e:
                if on_skip is not None:
                    on_skip(e)
        return curves


def reconstruct(segments: Iterable[PathSegment], *, require_closed: bool = False) -> Curve | None:
    """Reconstruct one path with a default SegmentReconstructor."""
    return SegmentReconstructor().reconstruct(segments, require_closed=require_closed)
