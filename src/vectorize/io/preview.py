"""Raster preview of traced curves over the source image."""

from pathlib import Path

from PIL import Image, ImageDraw

from vectorize.core.geometry import flatten_curve
from vectorize.domain import CurveSet


class PreviewRenderer:
    """Draws a CurveSet on top of the image it was traced from.

    Curves are stored in scaled cartesian coordinates; the renderer undoes
    the unit scale and flips y back to raster order before drawing.

    Example:
        renderer = PreviewRenderer(scale_x=sx, scale_y=sy)
        renderer.save(reader.image, result.curve_set, Path("preview.png"))
    """

    def __init__(
        self,
        scale_x: float = 1.0,
        scale_y: float | None = None,
        color: tuple[int, int, int] = (220, 30, 30),
        line_width: int = 1,
        background_opacity: float = 0.35,
        tolerance: float = 0.25,
    ) -> None:
        """Initialize the renderer.

        Args:
            scale_x: Horizontal scale the curves were published with
            scale_y: Vertical scale (same as scale_x if None)
            color: Stroke color of the curves
            line_width: Stroke width in pixels
            background_opacity: How strongly the source image shows through
            tolerance: Flattening tolerance for cubic pieces, in pixels
        """
        self.scale_x = scale_x
        self.scale_y = scale_y if scale_y is not None else scale_x
        self.color = color
        self.line_width = line_width
        self.background_opacity = background_opacity
        self.tolerance = tolerance

    def render(self, image: Image.Image, curve_set: CurveSet) -> Image.Image:
        """Draw the visible curves over a faded copy of the image.

        Args:
            image: Source image the curves were traced from
            curve_set: Published curves

        Returns:
            New RGB image the size of the source
        """
        base = image.convert("RGB")
        white = Image.new("RGB", base.size, (255, 255, 255))
        canvas = Image.blend(white, base, self.background_opacity)
        draw = ImageDraw.Draw(canvas)

        height = base.height
        for curve in curve_set.visible():
            pixels = curve.scaled(1.0 / self.scale_x, 1.0 / self.scale_y)
            points = [(p.x, height - p.y) for p in flatten_curve(pixels, self.tolerance)]
            if len(points) >= 2:
                draw.line(points, fill=self.color, width=self.line_width)
        return canvas

    def save(self, image: Image.Image, curve_set: CurveSet, output_path: Path) -> None:
        """Render and save the preview as PNG.

        Raises:
            OSError: If the file cannot be written
        """
        self.render(image, curve_set).save(output_path, format="PNG")
