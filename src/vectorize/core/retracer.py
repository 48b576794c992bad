"""Retrace orchestration.

The Retracer owns one tracing session: a bitmap source, the live tracing
parameters, the cached binary bitmap and the last published CurveSet.
Each retrace runs the full pipeline:

1. Rebuild the binary bitmap when the brightness threshold changed
2. Trace it inside trace_scope
3. Prepend the border rectangle as curve 0
4. Reconstruct every traced path, skipping the ones that fail
5. Scale to the target units and publish a new CurveSet

A retrace that fails leaves the previous CurveSet in place.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from types import TracebackType

from vectorize.config import TracingParameters
from vectorize.core.binarizer import Binarizer
from vectorize.core.reconstructor import SegmentReconstructor
from vectorize.core.tracer import PotraceTracer, Tracer, trace_scope
from vectorize.domain import BinaryBitmap, BitmapSource, Curve, CurveSet, Point
from vectorize.exceptions import InvalidInputError, ReconstructionError, VectorizeError
from vectorize.utils import RetraceLogger, RetraceStats


class RetraceState(Enum):
    """Lifecycle of a Retracer."""

    IDLE = "idle"
    RETRACING = "retracing"
    DISABLED = "disabled"


class RetraceStatus(Enum):
    """Outcome of one retrace request."""

    TRACED = "traced"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class RetraceResult:
    """What a retrace request did.

    Attributes:
        status: TRACED, SKIPPED or FAILED
        curve_set: The CurveSet published after the request
        error: Failure cause when status is FAILED
        duration_ms: Wall time spent in the request
        paths_skipped: Traced paths that did not reconstruct
    """

    status: RetraceStatus
    curve_set: CurveSet
    error: VectorizeError | None = None
    duration_ms: float = 0.0
    paths_skipped: int = 0

    @property
    def ok(self) -> bool:
        return self.status is RetraceStatus.TRACED


def border_curve(width: int, height: int) -> Curve:
    """Closed rectangle around a width x height bitmap."""
    corners = [
        Point(0.0, 0.0),
        Point(float(width), 0.0),
        Point(float(width), float(height)),
        Point(0.0, float(height)),
        Point(0.0, 0.0),
    ]
    return Curve.polyline(corners)


class Retracer:
    """Coordinates binarization, tracing and reconstruction for one source.

    Retraces are synchronous. A request that arrives while a retrace is
    running (for example from a tracer callback) or while the session is
    disabled is dropped and reported as SKIPPED.

    Example:
        with Retracer(source, TracingParameters()) as retracer:
            result = retracer.retrace()
            if result.ok:
                writer.write(result.curve_set, output_path)
    """

    def __init__(
        self,
        source: BitmapSource | None,
        parameters: TracingParameters | None = None,
        tracer: Tracer | None = None,
        scale_x: float = 1.0,
        scale_y: float | None = None,
        logger: RetraceLogger | None = None,
    ) -> None:
        """Initialize a tracing session.

        Args:
            source: Bitmap to trace, top-left raster order
            parameters: Live tracing parameters (defaults if None)
            tracer: External tracer (PotraceTracer if None)
            scale_x: Horizontal scale applied to published curves
            scale_y: Vertical scale (same as scale_x if None)
            logger: Progress logger (a fresh RetraceLogger if None)
        """
        self._source = source
        self._parameters = parameters if parameters is not None else TracingParameters()
        self._tracer: Tracer = tracer if tracer is not None else PotraceTracer()
        self.scale_x = scale_x
        self.scale_y = scale_y if scale_y is not None else scale_x
        self._logger = logger if logger is not None else RetraceLogger()

        self._binarizer = Binarizer()
        self._reconstructor = SegmentReconstructor()
        self._bitmap: BinaryBitmap | None = None
        self._curve_set = CurveSet.empty()
        self._state = RetraceState.IDLE

    def __enter__(self) -> "Retracer":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.disable()
        release = getattr(self._tracer, "release", None)
        if callable(release):
            release()

    @property
    def state(self) -> RetraceState:
        return self._state

    @property
    def parameters(self) -> TracingParameters:
        return self._parameters

    @property
    def curve_set(self) -> CurveSet:
        """Most recently published curves."""
        return self._curve_set

    @property
    def binary_bitmap(self) -> BinaryBitmap | None:
        """Cached binarization of the source, None until the first retrace."""
        return self._bitmap

    @property
    def stats(self) -> RetraceStats:
        return self._logger.stats

    def retrace(self) -> RetraceResult:
        """Run the pipeline once and publish the result.

        Returns:
            RetraceResult; on FAILED the previous CurveSet is still published
        """
        if self._state is not RetraceState.IDLE:
            return self._skip(f"retracer is {self._state.value}")

        self._state = RetraceState.RETRACING
        started = time.perf_counter()
        skipped: list[ReconstructionError] = []
        try:
            curve_set = self._run(skipped.append)
        except VectorizeError as e:
            self._logger.log_retrace_failed(e)
            return RetraceResult(
                status=RetraceStatus.FAILED,
                curve_set=self._curve_set,
                error=e,
                duration_ms=(time.perf_counter() - started) * 1000,
            )
        else:
            self._curve_set = curve_set
            duration_ms = (time.perf_counter() - started) * 1000
            self._logger.log_retrace_complete(len(curve_set), len(skipped), duration_ms)
            return RetraceResult(
                status=RetraceStatus.TRACED,
                curve_set=curve_set,
                duration_ms=duration_ms,
                paths_skipped=len(skipped),
            )
        finally:
            # disable() may have been called while tracing
            if self._state is RetraceState.RETRACING:
                self._state = RetraceState.IDLE

    def on_parameter_changed(self, name: str, value: object) -> RetraceResult:
        """Apply an interactive parameter edit and retrace.

        Edits that arrive while a retrace is running are dropped.

        Args:
            name: TracingParameters field name
            value: New value, clamped into range

        Returns:
            Result of the triggered retrace, or SKIPPED if the edit was dropped

        Raises:
            InvalidParameterError: If the field does not exist
        """
        if self._state is RetraceState.RETRACING:
            return self._skip(f"edit to {name} arrived during a retrace")
        self._parameters.set_clamped(name, value)
        return self.retrace()

    def restore_defaults(self) -> RetraceResult:
        """Reset every parameter to its default and retrace."""
        if self._state is RetraceState.RETRACING:
            return self._skip("restore defaults arrived during a retrace")
        self._parameters.restore_defaults()
        return self.retrace()

    def set_source(self, source: BitmapSource | None) -> None:
        """Replace the bitmap source; the next retrace rebinarizes."""
        self._source = source
        self._bitmap = None

    def disable(self) -> None:
        """Stop accepting retrace requests."""
        self._state = RetraceState.DISABLED

    def enable(self) -> None:
        """Accept retrace requests again after disable()."""
        if self._state is RetraceState.DISABLED:
            self._state = RetraceState.IDLE

    def _skip(self, reason: str) -> RetraceResult:
        self._logger.log_retrace_skipped(reason)
        return RetraceResult(status=RetraceStatus.SKIPPED, curve_set=self._curve_set)

    def _binary_bitmap(self) -> BinaryBitmap:
        """Return the cached bitmap, rebuilding it if the threshold moved."""
        threshold = self._parameters.brightness_threshold
        if self._bitmap is not None and self._bitmap.threshold_used == threshold:
            return self._bitmap

        if self._source is None:
            raise InvalidInputError("no source bitmap")

        bitmap = self._binarizer.binarize(self._source, threshold)
        if bitmap is None:
            raise InvalidInputError(
                f"source has a zero dimension ({self._source.width}x{self._source.height})"
            )

        self._bitmap = bitmap
        self._logger.log_bitmap_rebuilt(
            bitmap.width, bitmap.height, threshold, bitmap.foreground_count
        )
        return bitmap

    def _run(self, on_skip: Callable[[ReconstructionError], None]) -> CurveSet:
        params = self._parameters
        bitmap = self._binary_bitmap()
        self._logger.log_retrace_start(
            params.brightness_threshold, params.turd_size, params.corner_threshold
        )

        def skip_path(error: ReconstructionError) -> None:
            self._logger.log_path_skipped(error.path_index, error.reason)
            on_skip(error)

        with trace_scope(self._tracer, bitmap, params) as paths:
            traced = self._reconstructor.reconstruct_paths(paths, on_skip=skip_path)

        curves = [border_curve(bitmap.width, bitmap.height), *traced]
        if self.scale_x != 1.0 or self.scale_y != 1.0:
            curves = [curve.scaled(self.scale_x, self.scale_y) for curve in curves]

        return CurveSet(
            curves=tuple(curves),
            bounding_box=curves[0].bounding_box(),
            include_border=params.include_border,
        )
