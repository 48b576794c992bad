"""Core tracing pipeline for vectorize.

This module contains the algorithms for:

- Binarization (alpha-weighted brightness threshold, cartesian flip)
- Tracing (potracer adapter behind the Tracer protocol)
- Segment reconstruction (corner and curve-to segments to curves)
- Curve simplification and flattening
- Retrace orchestration (state machine, caching, publication)

Key functions:
- binarize: Threshold a bitmap source into a BinaryBitmap
- reconstruct: Rebuild one traced path into a Curve
- simplify_curve: Drop degenerate pieces and merge straight runs
- compute_scale: Pixel to unit scale factors from image resolution
- trace_scope: Run one tracer call with failure mapping and release

Key classes:
- Binarizer: Brightness thresholding
- PotraceTracer: Default Tracer implementation
- SegmentReconstructor: Path to curve reconstruction
- Retracer: Tracing session orchestrator
"""

from vectorize.core.binarizer import Binarizer, binarize, brightness_cutoff, pixel_brightness
from vectorize.core.geometry import bezier_flatten, flatten_curve, is_collinear
from vectorize.core.reconstructor import SegmentReconstructor, reconstruct, segment_pieces
from vectorize.core.retracer import (
    RetraceResult,
    Retracer,
    RetraceState,
    RetraceStatus,
    border_curve,
)
from vectorize.core.simplify import simplify_curve
from vectorize.core.tracer import PotraceTracer, Tracer, convert_curve, trace_scope
from vectorize.core.units import DEFAULT_DPI, compute_scale, unit_scale

__all__ = [
    "DEFAULT_DPI",
    # Binarizer
    "Binarizer",
    "binarize",
    "brightness_cutoff",
    "pixel_brightness",
    # Tracer
    "PotraceTracer",
    "Tracer",
    "convert_curve",
    "trace_scope",
    # Reconstruction
    "SegmentReconstructor",
    "reconstruct",
    "segment_pieces",
    "simplify_curve",
    # Geometry
    "bezier_flatten",
    "flatten_curve",
    "is_collinear",
    # Orchestration
    "RetraceResult",
    "RetraceState",
    "RetraceStatus",
    "Retracer",
    "border_curve",
    # Units
    "compute_scale",
    "unit_scale",
]
