"""Published result of a retrace."""

from dataclasses import dataclass
from typing import Any

from vectorize.domain.curve import BoundingBox, Curve


@dataclass(frozen=True)
class CurveSet:
    """Curves produced by one retrace, border first.

    Index 0 is always the synthesized border rectangle so consumers can
    index curves consistently. Whether the border is shown or written is
    decided by consumers through visible(); storage never drops it.

    Attributes:
        curves: Border followed by traced curves in tracer order
        bounding_box: Extents of curve 0, None when there are no curves
        include_border: Whether consumers should emit curve 0
    """

    curves: tuple[Curve, ...] = ()
    bounding_box: BoundingBox | None = None
    include_border: bool = True

    @classmethod
    def empty(cls) -> "CurveSet":
        return cls()

    def __len__(self) -> int:
        return len(self.curves)

    @property
    def border(self) -> Curve | None:
        return self.curves[0] if self.curves else None

    @property
    def traced_curves(self) -> tuple[Curve, ...]:
        """Curves after the border."""
        return self.curves[1:]

    def visible(self) -> tuple[Curve, ...]:
        """Curves a renderer or writer should emit.

        Returns:
            All curves, or all but index 0 when include_border is False
        """
        if self.include_border:
            return self.curves
        return self.curves[1:]

    def to_dict(self) -> dict[str, Any]:
        """Serialize the visible curves and bounds."""
        return {
            "bounding_box": list(self.bounding_box.to_tuple()) if self.bounding_box else None,
            "include_border": self.include_border,
            "curves": [curve.to_dict() for curve in self.visible()],
        }
