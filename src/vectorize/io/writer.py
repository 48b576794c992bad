"""Curve writers for saving traced results.

This module provides writers that commit a CurveSet to disk. Writers emit
curve_set.visible(), so the border rectangle is only written when the
set was traced with include_border.
"""

import json
from pathlib import Path
from xml.etree import ElementTree as ET

from fontTools.misc.transform import Transform
from fontTools.pens.svgPathPen import SVGPathPen

from vectorize.config import OutputFormat
from vectorize.domain import CurveSet

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def _format_number(value: float) -> str:
    """Shortest SVG-friendly form of a coordinate."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


class SvgWriter:
    """Writes curves as an SVG document.

    Curves are in cartesian coordinates (y up). SVG's y axis points down,
    so every curve is mirrored about the bounding box before it is drawn.

    Example:
        SvgWriter(stroke_width=0.5).write(result.curve_set, Path("logo.svg"))
    """

    def __init__(self, stroke: str = "black", stroke_width: float = 1.0) -> None:
        self.stroke = stroke
        self.stroke_width = stroke_width

    def render(self, curve_set: CurveSet) -> str:
        """Build the SVG document text.

        Args:
            curve_set: Curves to render

        Returns:
            SVG document as a string
        """
        box = curve_set.bounding_box
        min_x, min_y, max_x, max_y = box.to_tuple() if box is not None else (0, 0, 0, 0)
        width, height = max_x - min_x, max_y - min_y

        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NAMESPACE,
                "version": "1.1",
                "width": _format_number(width),
                "height": _format_number(height),
                "viewBox": " ".join(_format_number(v) for v in (min_x, min_y, width, height)),
            },
        )
        group = ET.SubElement(
            root,
            "g",
            {
                "fill": "none",
                "stroke": self.stroke,
                "stroke-width": _format_number(self.stroke_width),
            },
        )

        # Mirror y about the box so the top edge lands on min_y
        flip = Transform(1, 0, 0, -1, 0, min_y + max_y)
        for curve in curve_set.visible():
            pen = SVGPathPen(None, ntos=_format_number)
            curve.transformed(flip).draw(pen)
            ET.SubElement(group, "path", {"d": pen.getCommands()})

        ET.indent(root)
        return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"

    def write(self, curve_set: CurveSet, output_path: Path) -> None:
        """Write the SVG document.

        Raises:
            OSError: If the file cannot be written
        """
        output_path.write_text(self.render(curve_set), encoding="utf-8")


class JsonWriter:
    """Writes curves as JSON using Curve.to_dict()."""

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def render(self, curve_set: CurveSet) -> str:
        return json.dumps(curve_set.to_dict(), indent=self.indent) + "\n"

    def write(self, curve_set: CurveSet, output_path: Path) -> None:
        """Write the JSON document.

        Raises:
            OSError: If the file cannot be written
        """
        output_path.write_text(self.render(curve_set), encoding="utf-8")


def get_writer(output_format: OutputFormat) -> SvgWriter | JsonWriter:
    """Writer instance for an output format."""
    if output_format is OutputFormat.JSON:
        return JsonWriter()
    return SvgWriter()


def get_output_path(input_path: Path, output_format: OutputFormat) -> Path:
    """Default output path next to the input image.

    Converts: logo.png -> logo.svg
              scan.tif -> scan.json (for JSON output)
    """
    return input_path.with_suffix(f".{output_format.value}")
