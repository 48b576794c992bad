"""Image reader for loading raster images.

This module provides the ImageReader class for loading image files with
Pillow and turning them into bitmap sources the binarizer can read.
"""

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from vectorize.exceptions import (
    ImageLoadError,
    IncompatiblePixelFormatError,
    InvalidInputError,
)
from vectorize.io.source import SUPPORTED_MODES, PillowBitmapSource


def is_compatible_image(image: Image.Image | None) -> bool:
    """Check whether the pixel accessor can read an image as is.

    Compatible images have 24 or 32 bits per pixel (RGB, RGBA) or are
    8-bit indexed (P).
    """
    if image is None:
        return False
    return image.mode in SUPPORTED_MODES


def make_compatible_image(image: Image.Image) -> Image.Image:
    """Redraw an image into 24-bit RGB.

    Args:
        image: Image in any Pillow mode

    Returns:
        The image itself if already compatible, otherwise an RGB copy

    Raises:
        IncompatiblePixelFormatError: If Pillow cannot convert the mode
    """
    if is_compatible_image(image):
        return image
    try:
        return image.convert("RGB")
    except (ValueError, OSError) as e:
        raise IncompatiblePixelFormatError(image.mode) from e


class ImageReader:
    """Loads raster images and exposes them as bitmap sources.

    Example:
        reader = ImageReader(Path("logo.png"))
        reader.load()
        source = reader.bitmap_source()
        print(reader.width, reader.height, reader.dpi)
    """

    def __init__(self, image_path: Path) -> None:
        """Initialize the image reader.

        Args:
            image_path: Path to any image format Pillow can decode
        """
        self._image_path = image_path
        self._image: Image.Image | None = None

    def load(self) -> None:
        """Load and decode the image file.

        Raises:
            FileNotFoundError: If the image file does not exist
            ImageLoadError: If the file cannot be decoded
            InvalidInputError: If the image has a zero dimension
        """
        if not self._image_path.exists():
            raise FileNotFoundError(f"Image file not found: {self._image_path}")

        try:
            image = Image.open(self._image_path)
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ImageLoadError(str(self._image_path), str(e)) from e

        if image.width == 0 or image.height == 0:
            raise InvalidInputError(f"image is {image.width}x{image.height}")

        self._image = image

    @property
    def image(self) -> Image.Image:
        """Decoded image.

        Raises:
            RuntimeError: If the image has not been loaded yet
        """
        if self._image is None:
            raise RuntimeError("Image not loaded. Call load() first.")
        return self._image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def mode(self) -> str:
        return self.image.mode

    @property
    def dpi(self) -> tuple[float | None, float | None]:
        """Horizontal and vertical resolution stored in the file.

        Returns:
            (dpi_x, dpi_y); entries are None when the file has no resolution
        """
        dpi = self.image.info.get("dpi")
        if not dpi:
            return None, None
        dpi_x, dpi_y = dpi
        return float(dpi_x) or None, float(dpi_y) or None

    def bitmap_source(self) -> PillowBitmapSource:
        """Bitmap source over the loaded image, converted if needed.

        Raises:
            IncompatiblePixelFormatError: If the image cannot be converted
        """
        return PillowBitmapSource(make_compatible_image(self.image))
