"""Pixel to document-unit scaling."""

import math

from vectorize.config import UnitSystem

# Assumed resolution when the image carries none
DEFAULT_DPI = 96.0

# Size of one inch in each unit system
INCH_IN_UNITS: dict[UnitSystem, float] = {
    UnitSystem.INCHES: 1.0,
    UnitSystem.MILLIMETERS: 25.4,
    UnitSystem.CENTIMETERS: 2.54,
    UnitSystem.METERS: 0.0254,
    UnitSystem.POINTS: 72.0,
    UnitSystem.FEET: 1.0 / 12.0,
}


def _usable_dpi(dpi: float | None) -> float:
    if dpi is None or not math.isfinite(dpi) or dpi <= 0:
        return DEFAULT_DPI
    return float(dpi)


def unit_scale(dpi: float | None, units: UnitSystem) -> float:
    """Size of one pixel in the target units along one axis."""
    if units is UnitSystem.PIXELS:
        return 1.0
    return INCH_IN_UNITS[units] / _usable_dpi(dpi)


def compute_scale(
    dpi_x: float | None, dpi_y: float | None, units: UnitSystem
) -> tuple[float, float]:
    """Compute independent X/Y scale factors for traced curves.

    Args:
        dpi_x: Horizontal resolution, or None if unknown
        dpi_y: Vertical resolution, or None if unknown
        units: Target unit system

    Returns:
        (sx, sy) to multiply pixel coordinates by
    """
    return unit_scale(dpi_x, units), unit_scale(dpi_y, units)
