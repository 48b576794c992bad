"""Command-line interface for vectorize.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Tracing parameters from a settings file with command-line overrides
- Unit scaling from the image resolution
- SVG or JSON output and PNG previews
- Verbose/quiet output modes
"""

from vectorize.cli.app import cli, main

__all__ = ["cli", "main"]
