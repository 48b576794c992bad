"""Brightness thresholding of color bitmaps.

Brightness is an alpha-weighted channel sum blended against a white
background:

    brightness = (R + G + B) * alpha // 256 + 3 * (255 - alpha)

A pixel becomes foreground when 0 <= brightness < 3 * threshold * 256.
Transparent pixels are therefore biased toward white. The formula uses
integer arithmetic and must stay bit-for-bit stable, since traced output
depends on it.
"""

import numpy as np

from vectorize.domain import BinaryBitmap, BitmapSource

BRIGHTNESS_FLOOR = 0.0


def pixel_brightness(r: int, g: int, b: int, alpha: int) -> int:
    """Alpha-weighted brightness of one pixel, 0 (black) to 765 (white).

    Examples:
        >>> pixel_brightness(0, 0, 0, 255)
        0
        >>> pixel_brightness(0, 0, 0, 0)
        765
    """
    white = 3 * (255 - alpha)
    return (r + g + b) * alpha // 256 + white


def brightness_cutoff(threshold: float) -> float:
    """Brightness below which a pixel counts as foreground."""
    return 3.0 * threshold * 256.0


class Binarizer:
    """Converts color or indexed bitmaps into binary bitmaps.

    The output is in cartesian orientation: the source's raster rows are
    filled first and the result is flipped vertically exactly once.

    Example:
        bitmap = Binarizer().binarize(source, 0.5)
        if bitmap is not None:
            paths = tracer.trace(bitmap, parameters)
    """

    def binarize(self, source: BitmapSource, brightness_threshold: float) -> BinaryBitmap | None:
        """Threshold a bitmap source.

        Args:
            source: Pixel accessor in top-left raster order
            brightness_threshold: Cutoff in [0, 1]; clamped if outside

        Returns:
            A new BinaryBitmap, or None when the source has a zero dimension
        """
        width, height = source.width, source.height
        if width <= 0 or height <= 0:
            return None

        threshold = min(max(brightness_threshold, 0.0), 1.0)

        to_rgba = getattr(source, "to_rgba_array", None)
        if callable(to_rgba):
            raster = self._threshold_array(to_rgba(), threshold)
        else:
            raster = self._threshold_pixels(source, width, height, threshold)

        # Tracer bitmaps use a cartesian coordinate system
        return BinaryBitmap(np.flipud(raster), threshold)

    def _threshold_pixels(
        self,
        source: BitmapSource,
        width: int,
        height: int,
        threshold: float,
    ) -> np.ndarray:
        """Threshold pixel by pixel through get_pixel()."""
        floor = 3.0 * BRIGHTNESS_FLOOR * 256.0
        cutoff = brightness_cutoff(threshold)

        raster = np.zeros((height, width), dtype=bool)
        for y in range(height):
            for x in range(width):
                color = source.get_pixel(x, y)
                brightness = pixel_brightness(color.r, color.g, color.b, color.alpha)
                raster[y, x] = floor <= brightness < cutoff
        return raster

    def _threshold_array(self, rgba: np.ndarray, threshold: float) -> np.ndarray:
        """Threshold a (height, width, 4) uint8 array in one pass."""
        floor = 3.0 * BRIGHTNESS_FLOOR * 256.0
        cutoff = brightness_cutoff(threshold)

        channels = rgba.astype(np.int64)
        alpha = channels[..., 3]
        sample = channels[..., 0] + channels[..., 1] + channels[..., 2]
        brightness = sample * alpha // 256 + 3 * (255 - alpha)
        return (brightness >= floor) & (brightness < cutoff)


def binarize(source: BitmapSource, brightness_threshold: float) -> BinaryBitmap | None:
    """Threshold a bitmap source with a default Binarizer."""
    return Binarizer().binarize(source, brightness_threshold)
