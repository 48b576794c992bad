"""Bitmap types shared by the binarizer and the tracer.

- Color: One RGBA pixel as read from a bitmap source
- BitmapSource: Protocol for top-left-origin pixel accessors
- BinaryBitmap: Immutable black/white bitmap in cartesian orientation
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np


@dataclass(frozen=True, slots=True)
class Color:
    """An 8-bit RGBA pixel.

    Attributes:
        r: Red channel, 0-255
        g: Green channel, 0-255
        b: Blue channel, 0-255
        alpha: Opacity, 0 (transparent) to 255 (opaque)
    """

    r: int
    g: int
    b: int
    alpha: int = 255


@runtime_checkable
class BitmapSource(Protocol):
    """Pixel accessor over a decoded image.

    Coordinates are raster order: origin at the top-left, y grows downward.
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_pixel(self, x: int, y: int) -> Color: ...


class BinaryBitmap:
    """A black/white bitmap in the cartesian orientation the tracer expects.

    The origin is the bottom-left corner, so row 0 of the backing array is the
    bottom row of the source image. Pixels that are set are foreground
    (black). Instances are immutable: the backing array is read-only.

    Attributes:
        width: Bitmap width in pixels
        height: Bitmap height in pixels
        threshold_used: Brightness threshold baked into the pixels
    """

    __slots__ = ("_data", "threshold_used")

    def __init__(self, data: np.ndarray, threshold_used: float) -> None:
        """Wrap a boolean array indexed as data[y, x] with y pointing up.

        Args:
            data: 2D boolean array in cartesian row order
            threshold_used: Threshold the pixels were produced with

        Raises:
            ValueError: If the array is not 2D or has a zero dimension
        """
        if data.ndim != 2 or data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"Binary bitmap needs a non-empty 2D array, got shape {data.shape}")
        array = np.array(data, dtype=bool, copy=True)
        array.flags.writeable = False
        self._data = array
        self.threshold_used = threshold_used

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def foreground_count(self) -> int:
        """Number of set (black) pixels."""
        return int(np.count_nonzero(self._data))

    def get_pixel(self, x: int, y: int) -> bool:
        """Read a pixel in cartesian coordinates.

        Args:
            x: Column, 0 at the left edge
            y: Row, 0 at the bottom edge

        Returns:
            True if the pixel is set (black), False if clear (white)

        Raises:
            IndexError: If the coordinates are outside the bitmap
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} bitmap")
        return bool(self._data[y, x])

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the pixels, indexed [y, x] with y up."""
        return self._data.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryBitmap):
            return NotImplemented
        return (
            self.threshold_used == other.threshold_used
            and np.array_equal(self._data, other._data)
        )

    def __repr__(self) -> str:
        return (
            f"BinaryBitmap({self.width}x{self.height}, "
            f"threshold={self.threshold_used}, set={self.foreground_count})"
        )
