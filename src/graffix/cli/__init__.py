"""Command-line interface for graffix.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Render text to an assembled SVG document
- Style from a JSON file with per-option overrides
- List the letters and variants of an asset directory
"""

from graffix.cli.app import cli, main

__all__ = ["cli", "main"]
