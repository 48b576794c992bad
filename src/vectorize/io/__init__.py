"""Image and curve I/O layer for vectorize.

This module handles reading raster images with Pillow and writing traced
curves. It keeps Pillow and file formats out of the tracing pipeline.

Key responsibilities:
- Load images and report their resolution
- Check and convert pixel formats the accessor can read
- Write curves as SVG or JSON
- Render PNG previews of traced curves

Key classes:
- ImageReader: Load images and build bitmap sources
- PillowBitmapSource / ArrayBitmapSource: Pixel accessors
- SvgWriter / JsonWriter: Save curves
- PreviewRenderer: Draw curves over the source image
"""

from vectorize.io.preview import PreviewRenderer
from vectorize.io.reader import ImageReader, is_compatible_image, make_compatible_image
from vectorize.io.source import ArrayBitmapSource, PillowBitmapSource
from vectorize.io.writer import JsonWriter, SvgWriter, get_output_path, get_writer

__all__ = [
    "ArrayBitmapSource",
    "ImageReader",
    "JsonWriter",
    "PillowBitmapSource",
    "PreviewRenderer",
    "SvgWriter",
    "get_output_path",
    "get_writer",
    "is_compatible_image",
    "make_compatible_image",
]
