"""Tracer protocol and the potracer adapter.

The tracer turns a BinaryBitmap into closed paths made of corner and
curve-to segments. The decomposition algorithm lives in the potracer
library (import name ``potrace``); this module only adapts its input and
output to the domain types.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol, runtime_checkable

import potrace

from vectorize.config import TracingParameters
from vectorize.domain import BinaryBitmap, PathSegment, Point, TracedPath
from vectorize.exceptions import TracerFailureError, TracingError


@runtime_checkable
class Tracer(Protocol):
    """Turns a binary bitmap into an ordered list of closed paths.

    Returns None when tracing produced no result.
    """

    def trace(
        self, bitmap: BinaryBitmap, parameters: TracingParameters
    ) -> list[TracedPath] | None: ...


def _point(native: Any) -> Point:
    return Point(float(native.x), float(native.y))


def convert_curve(curve: Any) -> TracedPath:
    """Convert one potracer curve into a TracedPath.

    potracer segments only carry their end point; the start of each segment
    is the end of the previous one, and the first segment starts at the
    curve's start_point.

    Args:
        curve: potrace.Curve instance

    Returns:
        TracedPath with explicit start points on every segment
    """
    segments: list[PathSegment] = []
    start = curve.start_point
    if start is not None:
        current = _point(start)
        for segment in curve.segments:
            end = _point(segment.end_point)
            if segment.is_corner:
                segments.append(PathSegment.corner(current, _point(segment.c), end))
            else:
                segments.append(
                    PathSegment.curve_to(current, _point(segment.c1), _point(segment.c2), end)
                )
            current = end

    # potracer keeps the decomposition metadata on the private path object
    native_path = getattr(curve, "_path", None)
    area = int(getattr(native_path, "area", 0))
    sign = bool(getattr(native_path, "sign", True))
    return TracedPath(segments=tuple(segments), area=area, sign=sign)


class PotraceTracer:
    """Tracer backed by the potracer library.

    Example:
        tracer = PotraceTracer()
        paths = tracer.trace(bitmap, TracingParameters())
    """

    def __init__(self) -> None:
        self._native: potrace.Bitmap | None = None

    def trace(
        self, bitmap: BinaryBitmap, parameters: TracingParameters
    ) -> list[TracedPath] | None:
        """Trace a bitmap.

        Args:
            bitmap: Binary bitmap in cartesian orientation
            parameters: Tracing parameters

        Returns:
            Paths in the order potracer emits them
        """
        # potracer traces False pixels, so the foreground mask goes in inverted
        self._native = potrace.Bitmap(~bitmap.to_array())
        result = self._native.trace(
            turdsize=parameters.turd_size,
            turnpolicy=int(parameters.turn_policy),
            alphamax=parameters.corner_threshold,
            opticurve=parameters.optimize_curves,
            opttolerance=parameters.optimize_tolerance,
        )
        if result is None:
            return None
        return [convert_curve(curve) for curve in result]

    def release(self) -> None:
        """Drop the native bitmap held since the last trace."""
        self._native = None


@contextmanager
def trace_scope(
    tracer: Tracer, bitmap: BinaryBitmap, parameters: TracingParameters
) -> Iterator[list[TracedPath]]:
    """Run one tracer invocation and expose its paths for the block.

    Any exception raised by the tracer, or a None result, is reported as
    TracerFailureError. Tracers that hold per-call state expose release(),
    which is called when the scope exits, whether or not tracing succeeded.

    Args:
        tracer: Tracer to invoke
        bitmap: Binary bitmap to trace
        parameters: Tracing parameters

    Yields:
        The traced paths

    Raises:
        TracerFailureError: If tracing failed or returned no result
    """
    try:
        try:
            paths = tracer.trace(bitmap, parameters)
        except TracingError:
            raise
        except Exception as e:
            raise TracerFailureError(f"{type(e).__name__}: {e}") from e

        if paths is None:
            raise TracerFailureError("tracer returned no result")

        yield paths
    finally:
        release = getattr(tracer, "release", None)
        if callable(release):
            release()
