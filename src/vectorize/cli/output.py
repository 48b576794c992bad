"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from vectorize.config import TracingParameters, UnitSystem

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Vectorize[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_image_info(
    image_path: str,
    mode: str,
    width: int,
    height: int,
    dpi: tuple[float | None, float | None],
) -> None:
    """Print image information.

    Args:
        image_path: Path to the image file
        mode: Pillow pixel mode (e.g., "RGB", "P")
        width: Width in pixels
        height: Height in pixels
        dpi: Horizontal and vertical resolution, None where unknown
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(image_path)
    line.append(f" ({mode})")
    console.print(line)

    dpi_x, dpi_y = dpi
    if dpi_x is None or dpi_y is None:
        resolution = "no resolution"
    elif dpi_x == dpi_y:
        resolution = f"{dpi_x:g} dpi"
    else:
        resolution = f"{dpi_x:g} x {dpi_y:g} dpi"
    console.print(f"  {width:,} x {height:,} pixels {SYM_DOT} {resolution}")


def print_document_size(width: float, height: float, units: UnitSystem) -> None:
    """Print the traced size in document units."""
    if units is UnitSystem.PIXELS:
        return
    console.print(f"  {width:.3f} x {height:.3f} {units.value}")


def print_parameters(parameters: TracingParameters) -> None:
    """Print the tracing parameters as a table."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_row("Threshold", f"{parameters.brightness_threshold:g}")
    table.add_row("Speckles", str(parameters.turd_size))
    table.add_row("Turn policy", parameters.turn_policy.name.lower())
    table.add_row("Corners", f"{parameters.corner_threshold:g}")
    table.add_row(
        "Optimize",
        f"{parameters.optimize_tolerance:g}" if parameters.optimize_curves else "off",
    )
    table.add_row("Border", "yes" if parameters.include_border else "no")
    console.print(table)


def _format_time(milliseconds: float) -> str:
    """Format a duration into human-readable time string."""
    seconds = milliseconds / 1000
    if seconds < 1:
        return f"{milliseconds:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    duration_ms: float,
    curves: int,
    paths_skipped: int,
    include_border: bool,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        duration_ms: Retrace time in milliseconds
        curves: Number of traced curves, border excluded
        paths_skipped: Number of traced paths that did not reconstruct
        include_border: Whether the border rectangle was written
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(duration_ms)}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    border = "with border" if include_border else "no border"
    skipped_style = "yellow" if paths_skipped > 0 else "green"
    console.print(
        f"  {curves} curves {SYM_DOT} {border} {SYM_DOT} "
        f"[{skipped_style}]{paths_skipped} skipped[/{skipped_style}]"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
