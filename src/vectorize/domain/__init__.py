"""Domain models for vectorize.

This module contains the core domain models representing bitmaps, traced
path segments and reconstructed curves. All models are designed to be:

- Immutable (frozen dataclasses, read-only arrays)
- Independent of the tracer library and of Pillow

Key classes:
- Color: One RGBA pixel
- BinaryBitmap: Thresholded bitmap in cartesian orientation
- PathSegment / TracedPath: Tracer output
- Point, LineSegment, CubicSegment, Curve: Reconstructed geometry
- CurveSet: Published retrace result
"""

from vectorize.domain.bitmap import BinaryBitmap, BitmapSource, Color
from vectorize.domain.curve import (
    BoundingBox,
    CubicSegment,
    Curve,
    CurvePiece,
    LineSegment,
    Point,
)
from vectorize.domain.curve_set import CurveSet
from vectorize.domain.segment import PathSegment, SegmentKind, TracedPath

__all__: list[str] = [
    # Enums
    "SegmentKind",
    # Bitmaps
    "BinaryBitmap",
    "BitmapSource",
    "Color",
    # Geometry
    "BoundingBox",
    "CubicSegment",
    "Curve",
    "CurvePiece",
    "LineSegment",
    "Point",
    # Tracer output
    "PathSegment",
    "TracedPath",
    "CurveSet",
]
