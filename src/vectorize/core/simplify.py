"""Curve simplification.

Removes pieces that add no geometry and merges straight runs:
- zero-length line pieces
- cubic pieces whose control points all coincide
- consecutive line pieces that continue in the same direction

The result passes through the same points in the same order, minus the
interior vertices of merged straight runs.
"""

from vectorize.core.geometry import continues_straight
from vectorize.domain import Curve, CurvePiece, LineSegment
from vectorize.exceptions import CurveSimplificationError


def drop_degenerate_pieces(pieces: tuple[CurvePiece, ...]) -> list[CurvePiece]:
    """Remove pieces that collapse to a single point."""
    return [piece for piece in pieces if not piece.is_degenerate()]


def merge_collinear_lines(pieces: list[CurvePiece]) -> list[CurvePiece]:
    """Merge consecutive straight pieces that run in one direction.

    The seam of a closed curve is left alone so the start point is kept.
    """
    merged: list[CurvePiece] = []
    for piece in pieces:
        if merged and isinstance(piece, LineSegment) and isinstance(merged[-1], LineSegment):
            prev = merged[-1]
            if continues_straight(prev.start, prev.end, piece.end):
                merged[-1] = LineSegment(prev.start, piece.end)
                continue
        merged.append(piece)
    return merged


def simplify_curve(curve: Curve) -> Curve:
    """Return the minimal equivalent representation of a curve.

    Args:
        curve: Curve to simplify

    Returns:
        Simplified curve (may be the same pieces if nothing changed)

    Raises:
        CurveSimplificationError: If no non-degenerate piece remains
    """
    pieces = drop_degenerate_pieces(curve.pieces)
    if not pieces:
        raise CurveSimplificationError(
            f"All {len(curve)} pieces are degenerate; nothing left to simplify"
        )
    return Curve(merge_collinear_lines(pieces))
