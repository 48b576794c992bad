"""Vectorize - Trace raster images into vector curves.

Vectorize binarizes a raster image with a brightness threshold, traces the
resulting black/white bitmap into corner and curve segments, and rebuilds
those segments into continuous 2D curves. Tracing can be repeated cheaply
whenever a parameter changes, which keeps interactive tuning responsive.

Example:
    $ vectorize logo.png --threshold 0.45 --no-border

This will create logo.svg containing one path per traced region.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
