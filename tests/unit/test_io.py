"""Unit tests for the image and curve I/O layer.

Tests for ImageReader, bitmap sources, writers and the preview renderer.
"""

import json
from pathlib import Path
from xml.etree import ElementTree as ET

import numpy as np
import pytest
from PIL import Image

from vectorize.config import OutputFormat
from vectorize.domain import BoundingBox, Color, CubicSegment, Curve, CurveSet, Point
from vectorize.exceptions import ImageLoadError, IncompatiblePixelFormatError
from vectorize.io import (
    ArrayBitmapSource,
    ImageReader,
    JsonWriter,
    PillowBitmapSource,
    PreviewRenderer,
    SvgWriter,
    get_output_path,
    get_writer,
    is_compatible_image,
    make_compatible_image,
)

SVG = "{http://www.w3.org/2000/svg}"


def rect(x0: float, y0: float, x1: float, y1: float) -> Curve:
    return Curve.polyline(
        [Point(x0, y0), Point(x1, y0), Point(x1, y1), Point(x0, y1), Point(x0, y0)]
    )


@pytest.fixture
def curve_set() -> CurveSet:
    return CurveSet(
        curves=(rect(0, 0, 10, 8), rect(2, 2, 4, 4)),
        bounding_box=BoundingBox(0, 0, 10, 8),
        include_border=True,
    )


class TestImageReader:
    """Tests for ImageReader class."""

    def test_init(self):
        path = Path("logo.png")
        reader = ImageReader(path)
        assert reader._image_path == path
        assert reader._image is None

    def test_load_nonexistent_file(self):
        with pytest.raises(FileNotFoundError):
            ImageReader(Path("nonexistent.png")).load()

    def test_image_before_load(self):
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = ImageReader(Path("logo.png")).image

    def test_load_undecodable(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")
        with pytest.raises(ImageLoadError):
            ImageReader(path).load()

    def test_load_png_with_dpi(self, tmp_path):
        path = tmp_path / "logo.png"
        Image.new("RGB", (6, 4), "white").save(path, dpi=(300, 150))

        reader = ImageReader(path)
        reader.load()

        assert (reader.width, reader.height) == (6, 4)
        assert reader.mode == "RGB"
        dpi_x, dpi_y = reader.dpi
        assert dpi_x == pytest.approx(300, abs=0.5)
        assert dpi_y == pytest.approx(150, abs=0.5)

    def test_dpi_missing(self, tmp_path):
        path = tmp_path / "plain.png"
        Image.new("RGB", (2, 2)).save(path)
        reader = ImageReader(path)
        reader.load()
        assert reader.dpi == (None, None)

    def test_bitmap_source_converts_grayscale(self, tmp_path):
        path = tmp_path / "gray.png"
        Image.new("L", (3, 2), 0).save(path)
        reader = ImageReader(path)
        reader.load()
        source = reader.bitmap_source()
        assert source.mode == "RGB"
        assert source.get_pixel(0, 0) == Color(0, 0, 0, 255)


class TestCompatibility:
    """Tests for pixel format compatibility helpers."""

    @pytest.mark.parametrize("mode", ["RGB", "RGBA", "P"])
    def test_compatible_modes(self, mode):
        assert is_compatible_image(Image.new(mode, (1, 1)))

    @pytest.mark.parametrize("mode", ["L", "1", "CMYK", "LA", "I"])
    def test_incompatible_modes(self, mode):
        assert not is_compatible_image(Image.new(mode, (1, 1)))

    def test_none_is_incompatible(self):
        assert not is_compatible_image(None)

    def test_make_compatible_returns_same_image(self):
        image = Image.new("RGBA", (1, 1))
        assert make_compatible_image(image) is image

    def test_make_compatible_converts_to_rgb(self):
        converted = make_compatible_image(Image.new("CMYK", (2, 2)))
        assert converted.mode == "RGB"
        assert converted.size == (2, 2)


class TestBitmapSources:
    """Tests for pixel accessors."""

    def test_pillow_source_rejects_unsupported_mode(self):
        with pytest.raises(IncompatiblePixelFormatError) as exc_info:
            PillowBitmapSource(Image.new("L", (1, 1)))
        assert exc_info.value.pixel_format == "L"

    def test_palette_colors_resolved(self):
        image = Image.new("P", (2, 1))
        image.putpalette([0, 0, 0, 200, 100, 50] + [0] * (256 * 3 - 6))
        image.putpixel((1, 0), 1)

        source = PillowBitmapSource(image)

        assert source.get_pixel(0, 0) == Color(0, 0, 0, 255)
        assert source.get_pixel(1, 0) == Color(200, 100, 50, 255)

    def test_rgba_alpha_preserved(self):
        source = PillowBitmapSource(Image.new("RGBA", (1, 1), (10, 20, 30, 40)))
        assert source.get_pixel(0, 0) == Color(10, 20, 30, 40)

    def test_array_source_rgb(self):
        array = np.zeros((2, 3, 3), dtype=np.uint8)
        array[1, 2] = (9, 8, 7)
        source = ArrayBitmapSource(array)
        assert (source.width, source.height) == (3, 2)
        assert source.get_pixel(2, 1) == Color(9, 8, 7, 255)
        assert source.to_rgba_array().shape == (2, 3, 4)

    @pytest.mark.parametrize(
        "array",
        [
            np.zeros((2, 2), dtype=np.uint8),
            np.zeros((2, 2, 2), dtype=np.uint8),
            np.zeros((2, 2, 3), dtype=np.float32),
        ],
    )
    def test_array_source_rejects_bad_layout(self, array):
        with pytest.raises(IncompatiblePixelFormatError):
            ArrayBitmapSource(array)

    def test_out_of_bounds(self):
        source = ArrayBitmapSource(np.zeros((1, 1, 4), dtype=np.uint8))
        with pytest.raises(IndexError):
            source.get_pixel(1, 0)

    def test_pixels_read_only(self):
        source = ArrayBitmapSource(np.zeros((1, 1, 4), dtype=np.uint8))
        with pytest.raises(ValueError):
            source.to_rgba_array()[0, 0, 0] = 1


class TestSvgWriter:
    """Tests for SvgWriter class."""

    def test_document_size_and_paths(self, curve_set):
        root = ET.fromstring(SvgWriter().render(curve_set))
        assert root.tag == f"{SVG}svg"
        assert root.get("width") == "10"
        assert root.get("height") == "8"
        assert root.get("viewBox") == "0 0 10 8"
        assert len(root.findall(f"{SVG}g/{SVG}path")) == 2

    def test_y_axis_flipped(self, curve_set):
        root = ET.fromstring(SvgWriter().render(curve_set))
        inner = root.findall(f"{SVG}g/{SVG}path")[1].get("d")
        # Cartesian (2, 2) is 2 units above the bottom edge of an 8 tall image
        assert inner.startswith("M2 6")
        assert inner.endswith("Z")

    def test_border_skipped(self, curve_set):
        without = CurveSet(curve_set.curves, curve_set.bounding_box, include_border=False)
        root = ET.fromstring(SvgWriter().render(without))
        assert len(root.findall(f"{SVG}g/{SVG}path")) == 1

    def test_cubic_written(self):
        curve = Curve([CubicSegment(Point(0, 0), Point(0, 4), Point(4, 4), Point(4, 0))])
        curve_set = CurveSet((curve,), BoundingBox(0, 0, 4, 4), True)
        d = ET.fromstring(SvgWriter().render(curve_set)).find(f"{SVG}g/{SVG}path").get("d")
        assert "C" in d

    def test_write(self, curve_set, tmp_path):
        path = tmp_path / "out.svg"
        SvgWriter().write(curve_set, path)
        assert path.read_text(encoding="utf-8").startswith("<?xml")


class TestJsonWriter:
    """Tests for JsonWriter class."""

    def test_write(self, curve_set, tmp_path):
        path = tmp_path / "out.json"
        JsonWriter().write(curve_set, path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["include_border"] is True
        assert len(data["curves"]) == 2
        assert Curve.from_dict(data["curves"][1]) == curve_set.curves[1]


class TestWriterHelpers:
    """Tests for writer selection and output naming."""

    def test_get_writer(self):
        assert isinstance(get_writer(OutputFormat.SVG), SvgWriter)
        assert isinstance(get_writer(OutputFormat.JSON), JsonWriter)

    def test_get_output_path(self):
        assert get_output_path(Path("a/logo.png"), OutputFormat.SVG) == Path("a/logo.svg")
        assert get_output_path(Path("scan.tif"), OutputFormat.JSON) == Path("scan.json")


class TestPreviewRenderer:
    """Tests for PreviewRenderer class."""

    def test_render_draws_curves(self, curve_set):
        image = Image.new("RGB", (10, 8), "white")
        preview = PreviewRenderer(color=(255, 0, 0)).render(image, curve_set)
        assert preview.size == (10, 8)
        # Left edge of the inner square, x = 2 at raster row 8 - 3 = 5
        assert preview.getpixel((2, 5)) == (255, 0, 0)
        assert preview.getpixel((7, 5)) == (255, 255, 255)

    def test_render_undoes_scale(self):
        scaled = CurveSet(
            curves=(rect(0, 0, 5, 4), rect(1, 1, 2, 2)),
            bounding_box=BoundingBox(0, 0, 5, 4),
            include_border=False,
        )
        image = Image.new("RGB", (10, 8), "white")
        preview = PreviewRenderer(scale_x=0.5, color=(0, 0, 255)).render(image, scaled)
        assert preview.getpixel((2, 5)) == (0, 0, 255)

    def test_save(self, curve_set, tmp_path):
        path = tmp_path / "preview.png"
        PreviewRenderer().save(Image.new("RGB", (10, 8)), curve_set, path)
        with Image.open(path) as saved:
            assert saved.format == "PNG"
