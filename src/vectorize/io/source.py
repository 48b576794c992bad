"""Bitmap sources backed by Pillow images and numpy arrays.

Both sources hold the pixels as a (height, width, 4) uint8 RGBA array in
raster order, so the binarizer can threshold the whole image at once
through to_rgba_array().
"""

import numpy as np
from PIL import Image

from vectorize.domain import Color
from vectorize.exceptions import IncompatiblePixelFormatError

# Pillow modes the pixel accessor reads directly
SUPPORTED_MODES = frozenset({"RGB", "RGBA", "P"})


class _RgbaArraySource:
    """Pixel accessor over an RGBA array."""

    def __init__(self, rgba: np.ndarray) -> None:
        self._rgba = rgba
        self._rgba.flags.writeable = False

    @property
    def width(self) -> int:
        return int(self._rgba.shape[1])

    @property
    def height(self) -> int:
        return int(self._rgba.shape[0])

    def get_pixel(self, x: int, y: int) -> Color:
        """Color at column x, row y (origin top-left).

        Raises:
            IndexError: If the coordinates are outside the image
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        r, g, b, a = (int(c) for c in self._rgba[y, x])
        return Color(r, g, b, a)

    def to_rgba_array(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view of the pixels."""
        return self._rgba


class PillowBitmapSource(_RgbaArraySource):
    """Bitmap source over a decoded Pillow image.

    Indexed (mode P) images are resolved through their palette, including
    palette transparency.

    Example:
        source = PillowBitmapSource(Image.open("logo.png").convert("RGB"))
        bitmap = binarize(source, 0.5)
    """

    def __init__(self, image: Image.Image) -> None:
        """Initialize from a Pillow image.

        Args:
            image: Image in mode RGB, RGBA or P

        Raises:
            IncompatiblePixelFormatError: If the image mode is not supported
        """
        if image.mode not in SUPPORTED_MODES:
            raise IncompatiblePixelFormatError(image.mode)
        self.mode = image.mode
        super().__init__(np.array(image.convert("RGBA"), dtype=np.uint8))


class ArrayBitmapSource(_RgbaArraySource):
    """Bitmap source over an in-memory (height, width, 3 or 4) uint8 array."""

    def __init__(self, array: np.ndarray) -> None:
        """Initialize from a numpy array.

        Args:
            array: RGB or RGBA pixels in raster order

        Raises:
            IncompatiblePixelFormatError: If the array is not (H, W, 3|4) uint8
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4) or array.dtype != np.uint8:
            raise IncompatiblePixelFormatError(f"array{array.shape} of {array.dtype}")

        if array.shape[2] == 3:
            opaque = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            rgba = np.concatenate([array, opaque], axis=2)
        else:
            rgba = array.copy()
        super().__init__(rgba)
