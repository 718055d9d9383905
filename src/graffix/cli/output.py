"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""


from rich.console import Console
from rich.table import Table
from rich.text import Text

from graffix.domain.glyph import LayoutResult

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
    console.print(f"\n[bold]Graffix[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_asset_info(asset_dir: str, letter_count: int, variant_count: int) -> None:
    """Print asset directory information.

    Args:
        asset_dir: Path to the asset directory
        letter_count: Number of letters with a standard asset
        variant_count: Number of alternate/first/last variants
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(asset_dir)
    console.print(line)
    console.print(f"  {letter_count} letters {SYM_DOT} {variant_count} variants")


def print_layout(layout: LayoutResult, verbose: bool) -> None:
    """Print a summary of a computed layout.

    Args:
        layout: The layout to summarize
        verbose: Whether to show the per-glyph table
    """
    console.print(
        f"  [green]{len(layout)}[/green] glyphs {SYM_DOT} "
        f"{layout.content_width:.0f}×{layout.content_height:.0f} px {SYM_DOT} "
        f"scale {layout.scale:.2f}"
    )
    if not verbose:
        return

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("char")
    table.add_column("asset")
    table.add_column("x", justify="right")
    table.add_column("rot", justify="right")
    for index, glyph in enumerate(layout.glyphs):
        table.add_row(
            str(index),
            repr(glyph.character),
            glyph.asset_key,
            f"{layout.positions[index]:.1f}",
            f"{layout.rotations[index]:g}",
        )
    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(output_path: str, total_time_s: float, layers: int) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        total_time_s: Total processing time in seconds
        layers: Number of layers written
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({layers} layers)")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
