"""Unit tests for the command-line interface."""

import json
import logging
from unittest.mock import patch

import pytest
from PIL import Image
from typer.testing import CliRunner

from vectorize import __version__
from vectorize.cli.app import app
from vectorize.utils import logging as vectorize_logging

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to the runner's streams once a test is done."""
    yield
    root = logging.getLogger()
    for handler in vectorize_logging._installed_handlers:
        root.removeHandler(handler)
        handler.close()
    vectorize_logging._installed_handlers.clear()


@pytest.fixture
def image_path(tmp_path):
    """24x16 white image with a black block, saved at 100 dpi."""
    image = Image.new("RGB", (24, 16), "white")
    for x in range(6, 14):
        for y in range(4, 12):
            image.putpixel((x, y), (0, 0, 0))
    path = tmp_path / "block.png"
    image.save(path, dpi=(100, 100))
    return path


class TestCliBasics:
    """Tests for argument handling."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_input(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path / "missing.png")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_directory_input(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path)])
        assert result.exit_code == 1
        assert "not a file" in result.output

    def test_verbose_and_quiet(self, image_path):
        result = runner.invoke(app, [str(image_path), "-v", "-q"])
        assert result.exit_code == 1

    def test_save_settings_requires_file(self, image_path):
        result = runner.invoke(app, [str(image_path), "--save-settings"])
        assert result.exit_code == 1
        assert "--settings" in result.output

    @pytest.mark.parametrize(
        "args",
        [
            ["--threshold", "1.5"],
            ["--speckles", "101"],
            ["--corners", "2.0"],
            ["--optimize-tolerance", "-0.5"],
            ["--turn-policy", "sideways"],
            ["--units", "furlongs"],
            ["--format", "pdf"],
            ["--dpi", "0"],
        ],
    )
    def test_rejects_bad_values(self, image_path, args):
        result = runner.invoke(app, [str(image_path), *args])
        assert result.exit_code == 1
        assert not image_path.with_suffix(".svg").exists()

    def test_out_of_range_parameter_named(self, image_path):
        result = runner.invoke(app, [str(image_path), "--speckles", "101"])
        assert result.exit_code == 1
        assert "Invalid value 101" in result.output
        assert "turd_size" in result.output

    def test_negative_dpi_named(self, image_path):
        result = runner.invoke(app, [str(image_path), "--dpi", "-5"])
        assert result.exit_code == 1
        assert "output.dpi" in result.output
        assert not image_path.with_suffix(".svg").exists()

    def test_unknown_log_level(self, image_path):
        result = runner.invoke(app, [str(image_path), "--log-level", "chatty"])
        assert result.exit_code == 1
        assert "logging.log_level" in result.output

    def test_undecodable_image(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"garbage")
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 1
        assert "Could not read image" in result.output


class TestCliTracing:
    """Tests for complete runs."""

    def test_writes_svg_next_to_image(self, image_path):
        result = runner.invoke(app, [str(image_path)])
        assert result.exit_code == 0, result.output
        output = image_path.with_suffix(".svg")
        assert output.exists()
        assert "<svg" in output.read_text(encoding="utf-8")

    def test_json_without_border(self, image_path, tmp_path):
        output = tmp_path / "curves.json"
        result = runner.invoke(
            app,
            [str(image_path), "-o", str(output), "--format", "json", "--no-border", "-q"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["include_border"] is False
        assert len(data["curves"]) == 1
        assert data["curves"][0]["closed"] is True

    def test_units_scale_output(self, image_path, tmp_path):
        output = tmp_path / "inches.json"
        result = runner.invoke(
            app,
            [str(image_path), "-o", str(output), "-f", "json", "--units", "inches", "-q"],
        )
        assert result.exit_code == 0, result.output
        box = json.loads(output.read_text(encoding="utf-8"))["bounding_box"]
        assert box[2] == pytest.approx(0.24, rel=1e-3)
        assert box[3] == pytest.approx(0.16, rel=1e-3)

    def test_dpi_override(self, image_path, tmp_path):
        output = tmp_path / "mm.json"
        result = runner.invoke(
            app,
            [str(image_path), "-o", str(output), "-f", "json", "-u", "mm", "-q"],
        )
        # "mm" is not a unit name
        assert result.exit_code == 1

        result = runner.invoke(
            app,
            [
                str(image_path), "-o", str(output), "-f", "json",
                "-u", "millimeters", "--dpi", "25.4", "-q",
            ],
        )
        assert result.exit_code == 0, result.output
        box = json.loads(output.read_text(encoding="utf-8"))["bounding_box"]
        assert box[2] == pytest.approx(24.0, rel=1e-6)

    def test_preview(self, image_path, tmp_path):
        preview = tmp_path / "preview.png"
        result = runner.invoke(app, [str(image_path), "--preview", str(preview), "-q"])
        assert result.exit_code == 0, result.output
        with Image.open(preview) as image:
            assert image.size == (24, 16)

    def test_settings_round_trip(self, image_path, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"TurdSize": 9, "Threshold": 0.3}), encoding="utf-8")

        result = runner.invoke(
            app,
            [
                str(image_path), "--settings", str(settings),
                "--corners", "0.5", "--save-settings", "-q",
            ],
        )

        assert result.exit_code == 0, result.output
        stored = json.loads(settings.read_text(encoding="utf-8"))
        assert stored["TurdSize"] == 9
        assert stored["Threshold"] == 0.3
        assert stored["AlphaMax"] == 0.5
        assert stored["TurnPolicy"] == 4

    def test_restore_defaults_ignores_settings(self, image_path, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"TurdSize": 9}), encoding="utf-8")

        result = runner.invoke(
            app,
            [
                str(image_path), "--settings", str(settings),
                "--restore-defaults", "--save-settings", "-q",
            ],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(settings.read_text(encoding="utf-8"))["TurdSize"] == 2

    def test_bad_settings_file(self, image_path, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text("[]", encoding="utf-8")
        result = runner.invoke(app, [str(image_path), "--settings", str(settings)])
        assert result.exit_code == 1
        assert "settings" in result.output

    def test_tracer_failure(self, image_path):
        with patch("vectorize.core.retracer.PotraceTracer") as mock_cls:
            mock_cls.return_value.trace.return_value = None
            result = runner.invoke(app, [str(image_path)])
        assert result.exit_code == 1
        assert "Tracing failed" in result.output
        assert not image_path.with_suffix(".svg").exists()

    def test_verbose_shows_parameters(self, image_path):
        result = runner.invoke(app, [str(image_path), "-v", "--turn-policy", "black"])
        assert result.exit_code == 0, result.output
        assert "Turn policy" in result.output
        assert "black" in result.output

    def test_log_file(self, image_path, tmp_path):
        log_file = tmp_path / "run.log"
        result = runner.invoke(app, [str(image_path), "--log-file", str(log_file), "-q"])
        assert result.exit_code == 0, result.output
        assert "Retrace complete" in log_file.read_text(encoding="utf-8")
