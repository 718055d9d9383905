"""CLI application entry point for graffix.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from graffix import __version__
from graffix.cli.output import (
    SYM_DOT,
    console,
    print_asset_info,
    print_error,
    print_header,
    print_layout,
    print_step,
    print_success,
)
from graffix.config import STRAIGHT_MODE, GraffixSettings, LoggingConfig, StyleConfiguration
from graffix.core import LayoutGenerator, compose_layers
from graffix.exceptions import AssetError, GraffixError
from graffix.io import AssetLoader, DocumentWriter
from graffix.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="graffix",
    help="Lay out graffiti-style letter artwork with kerning and effect layers.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Graffix[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """Graffix command group."""


def load_style(
    style_file: Path | None,
    overrides: dict[str, object],
) -> StyleConfiguration:
    """Build the style configuration from a JSON file and CLI overrides.

    Args:
        style_file: JSON file with camelCase style keys, or None
        overrides: snake_case fields set on the command line; None values
            are ignored

    Returns:
        Validated style configuration

    Raises:
        typer.BadParameter: If the style file is unreadable or invalid
    """
    base: dict[str, object] = {}
    if style_file is not None:
        try:
            base = StyleConfiguration.model_validate_json(
                style_file.read_text(encoding="utf-8")
            ).model_dump()
        except (OSError, ValidationError) as e:
            raise typer.BadParameter(f"Invalid style file '{style_file}': {e}") from e

    base.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return StyleConfiguration.model_validate(base)
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e


@app.command()
def render(
    text: Annotated[
        str,
        typer.Argument(
            help="Text to render (letters a-z and spaces)",
            show_default=False,
        ),
    ],
    assets: Annotated[
        Path,
        typer.Option(
            "--assets",
            "-a",
            help="Directory of letter SVG assets (a1.svg, a2.svg, a1-first.svg, ...)",
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output SVG path (default: {text}.svg)",
        ),
    ] = None,
    mode: Annotated[
        str,
        typer.Option(
            "--mode",
            "-m",
            help="Style mode; first/last letter variants apply outside 'straight'",
        ),
    ] = STRAIGHT_MODE,
    style_file: Annotated[
        Path | None,
        typer.Option(
            "--style-file",
            "-s",
            help="JSON style configuration (camelCase keys)",
        ),
    ] = None,
    fill_color: Annotated[
        str | None,
        typer.Option("--fill-color", help="Fill color of the letters"),
    ] = None,
    outline: Annotated[
        bool | None,
        typer.Option("--outline/--no-outline", help="Draw the outline layer"),
    ] = None,
    outline_width: Annotated[
        float | None,
        typer.Option("--outline-width", help="Outline stroke width", min=0.0),
    ] = None,
    halo: Annotated[
        bool | None,
        typer.Option("--halo/--no-halo", help="Draw the halo layer"),
    ] = None,
    halo_width: Annotated[
        float | None,
        typer.Option("--halo-width", help="Halo width around the outline", min=0.0),
    ] = None,
    shadow: Annotated[
        bool | None,
        typer.Option("--shadow/--no-shadow", help="Draw the drop shadow layer"),
    ] = None,
    shine: Annotated[
        bool | None,
        typer.Option("--shine/--no-shine", help="Reveal shine highlights"),
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
) -> None:
    """Render text as kerned graffiti letters with effect layers.

    Example:
        graffix render "hello world" --assets ./letters --halo

    This will create hello-world.svg containing every derived layer in
    back-to-front order.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not assets.is_dir():
        print_error(
            f"Asset directory not found: {assets}",
            details="Please provide a directory containing letter SVG files.",
        )
        raise typer.Exit(code=1)

    style = load_style(
        style_file,
        {
            "fill_color": fill_color,
            "outline_enabled": outline,
            "outline_width": outline_width,
            "halo_enabled": halo,
            "halo_width": halo_width,
            "shadow_enabled": shadow,
            "shine_enabled": shine,
        },
    )

    settings = GraffixSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    start = time.time()
    output_path = output or DocumentWriter.get_output_path(text)

    try:
        loader = AssetLoader(assets)
        catalog = loader.discover_catalog()

        if not quiet:
            print_step("Loading assets")
            print_asset_info(
                str(assets),
                letter_count=len(catalog.standard),
                variant_count=len(catalog.alternate) + len(catalog.first) + len(catalog.last),
            )
            print_step("Computing layout")

        generator = LayoutGenerator(loader, settings=settings, catalog=catalog)
        layout = generator.generate(text, mode=mode)

        if not quiet:
            print_layout(layout, verbose)
            print_step("Compositing layers")

        layers = compose_layers(layout, style)
        DocumentWriter(layout, layers, style).save(output_path)

        if not quiet:
            print_success(str(output_path), time.time() - start, len(layers))

    except AssetError as e:
        print_error(f"Could not load glyph assets: {e}")
        raise typer.Exit(code=1)
    except GraffixError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not write output: {e}")
        raise typer.Exit(code=1)


@app.command("assets")
def list_assets(
    asset_dir: Annotated[
        Path,
        typer.Argument(help="Directory of letter SVG assets", show_default=False),
    ],
) -> None:
    """List the letters and variants found in an asset directory."""
    try:
        catalog = AssetLoader(asset_dir).discover_catalog()
    except AssetError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    console.print(f"\n[bold]{len(catalog.standard)} letters[/bold]\n")
    for char in catalog.characters():
        variants = [
            name
            for name, table in (
                ("alternate", catalog.alternate),
                ("first", catalog.first),
                ("last", catalog.last),
            )
            if char in table
        ]
        suffix = f" {SYM_DOT} {', '.join(variants)}" if variants else ""
        console.print(f"  {char}{suffix}")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
