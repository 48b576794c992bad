"""CLI application entry point for vectorize.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from vectorize import __version__
from vectorize.cli.output import (
    console,
    print_document_size,
    print_error,
    print_header,
    print_image_info,
    print_parameters,
    print_step,
    print_success,
)
from vectorize.config import (
    JsonSettingsStore,
    LoggingConfig,
    OutputConfig,
    OutputFormat,
    TurnPolicy,
    UnitSystem,
    VectorizeSettings,
)
from vectorize.core import Retracer, compute_scale
from vectorize.exceptions import (
    BitmapError,
    InvalidParameterError,
    SettingsStoreError,
    VectorizeError,
)
from vectorize.io import ImageReader, PreviewRenderer, get_output_path, get_writer
from vectorize.utils import RetraceLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="vectorize",
    help="Trace raster images into vector curves.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Vectorize[/bold blue] v{__version__}")
        raise typer.Exit()


def _parse_choice(enum_type: Any, value: str, option: str) -> Any:
    """Look up an enum member by name or value, exiting on a bad choice."""
    key = value.strip().lower()
    for member in enum_type:
        if key in (member.name.lower(), str(member.value).lower()):
            return member
    valid = ", ".join(member.name.lower() for member in enum_type)
    print_error(f"Invalid {option}: {value}", details=f"Valid values: {valid}")
    raise typer.Exit(code=1)


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return f"{field}: {first['msg']}"


@app.command()
def vectorize(
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image (PNG, JPEG, BMP, TIFF, GIF, ...)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}.svg)",
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format (svg|json)",
        ),
    ] = "svg",
    threshold: Annotated[
        float | None,
        typer.Option(
            "--threshold",
            "-t",
            help="Brightness threshold (0-1); darker pixels are traced",
        ),
    ] = None,
    speckles: Annotated[
        int | None,
        typer.Option(
            "--speckles",
            "-s",
            help="Suppress speckles of up to this many pixels (0-100)",
        ),
    ] = None,
    corners: Annotated[
        float | None,
        typer.Option(
            "--corners",
            "-c",
            help="Corner threshold, 0 (polygons) to 1.333 (no corners)",
        ),
    ] = None,
    optimize_tolerance: Annotated[
        float | None,
        typer.Option(
            "--optimize-tolerance",
            help="Curve optimization tolerance (0-1)",
        ),
    ] = None,
    optimize: Annotated[
        bool | None,
        typer.Option(
            "--optimize/--no-optimize",
            help="Merge adjacent Bezier segments",
            show_default=False,
        ),
    ] = None,
    turn_policy: Annotated[
        str | None,
        typer.Option(
            "--turn-policy",
            help="Ambiguity policy (black|white|left|right|minority|majority|random)",
        ),
    ] = None,
    border: Annotated[
        bool | None,
        typer.Option(
            "--border/--no-border",
            help="Include a rectangle bounding the image",
            show_default=False,
        ),
    ] = None,
    units: Annotated[
        str,
        typer.Option(
            "--units",
            "-u",
            help="Output units (pixels|inches|millimeters|centimeters|meters|points|feet)",
        ),
    ] = "pixels",
    dpi: Annotated[
        float | None,
        typer.Option(
            "--dpi",
            help="Image resolution override (default: read from file, else 96)",
        ),
    ] = None,
    settings_file: Annotated[
        Path | None,
        typer.Option(
            "--settings",
            help="JSON file to load tracing parameters from",
        ),
    ] = None,
    save_settings: Annotated[
        bool,
        typer.Option(
            "--save-settings",
            help="Write the final tracing parameters back to --settings",
        ),
    ] = False,
    restore_defaults: Annotated[
        bool,
        typer.Option(
            "--restore-defaults",
            help="Ignore stored parameters and start from defaults",
        ),
    ] = False,
    preview: Annotated[
        Path | None,
        typer.Option(
            "--preview",
            help="Also write a PNG of the curves drawn over the image",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Trace a raster image into vector curves.

    Dark regions of the image are traced into closed outlines made of
    straight lines and cubic Bezier curves.

    Example:
        vectorize logo.png --threshold 0.4 --units millimeters

    This will create logo.svg next to the image.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if save_settings and settings_file is None:
        print_error("--save-settings requires --settings FILE")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_image.exists():
        print_error(
            f"Input file not found: {input_image}",
            details=f"The file '{input_image}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_image.is_file():
        print_error(
            f"Input path is not a file: {input_image}",
            details="Please provide a path to an image file.",
        )
        raise typer.Exit(code=1)

    fmt: OutputFormat = _parse_choice(OutputFormat, output_format, "format")
    unit_system: UnitSystem = _parse_choice(UnitSystem, units, "units")
    policy: TurnPolicy | None = (
        _parse_choice(TurnPolicy, turn_policy, "turn policy") if turn_policy else None
    )

    if threshold is not None and not 0.0 <= threshold <= 1.0:
        print_error(f"Threshold must be between 0 and 1, got {threshold}")
        raise typer.Exit(code=1)

    # Create settings from CLI arguments
    try:
        settings = VectorizeSettings(
            output=OutputConfig(units=unit_system, dpi=dpi, format=fmt),
            logging=LoggingConfig(log_file=log_file, log_level=log_level),
        )
    except ValidationError as e:
        print_error("Invalid option", details=_validation_message(e))
        raise typer.Exit(code=1)

    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    # Print header
    if not quiet:
        print_header(__version__)

    try:
        # Parameters: defaults, then stored settings, then command line
        parameters = settings.tracing
        store = JsonSettingsStore(settings_file) if settings_file is not None else None
        if store is not None and not restore_defaults:
            store.load()
            parameters.load_from(store)

        overrides = {
            "brightness_threshold": threshold,
            "turd_size": speckles,
            "corner_threshold": corners,
            "optimize_tolerance": optimize_tolerance,
            "optimize_curves": optimize,
            "turn_policy": policy,
            "include_border": border,
        }
        for name, value in overrides.items():
            if value is None:
                continue
            try:
                setattr(parameters, name, value)
            except ValidationError as e:
                raise InvalidParameterError(name, value, _validation_message(e)) from e

        # Load image
        if not quiet:
            print_step("Loading image")

        reader = ImageReader(input_image)
        reader.load()
        output_config = settings.output
        if output_config.dpi is not None:
            dpi_x = dpi_y = output_config.dpi
        else:
            dpi_x, dpi_y = reader.dpi
        scale_x, scale_y = compute_scale(dpi_x, dpi_y, output_config.units)

        if not quiet:
            print_image_info(
                image_path=str(input_image),
                mode=reader.mode,
                width=reader.width,
                height=reader.height,
                dpi=(dpi_x, dpi_y),
            )
            print_document_size(
                reader.width * scale_x, reader.height * scale_y, output_config.units
            )

        source = reader.bitmap_source()

        # Trace
        if not quiet:
            print_step("Tracing")
            if verbose:
                print_parameters(parameters)

        with Retracer(
            source,
            parameters,
            scale_x=scale_x,
            scale_y=scale_y,
            logger=RetraceLogger(),
        ) as retracer:
            result = retracer.retrace()

        if result.error is not None:
            raise result.error

        # Write results
        output_path = output if output is not None else get_output_path(
            input_image, output_config.format
        )
        get_writer(output_config.format).write(result.curve_set, output_path)

        if preview is not None:
            PreviewRenderer(scale_x=scale_x, scale_y=scale_y).save(
                reader.image, result.curve_set, preview
            )

        if save_settings and store is not None:
            parameters.save_to(store)
            store.save()

        if not quiet:
            print_success(
                output_path=str(output_path),
                file_size=_format_file_size(output_path),
                duration_ms=result.duration_ms,
                curves=len(result.curve_set.traced_curves),
                paths_skipped=result.paths_skipped,
                include_border=parameters.include_border,
            )

    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except BitmapError as e:
        print_error(f"Could not read image: {e}")
        raise typer.Exit(code=1)
    except SettingsStoreError as e:
        print_error(f"Could not use settings file: {e.reason}")
        raise typer.Exit(code=1)
    except VectorizeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "12 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
