"""
storymap CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import typer
from rich.console import Console

from storymap import __version__
from storymap.cli import assign, numbers, outline
from storymap.cli.context import configure_logging
from storymap.core.config.env import load_layered_env

# Help panel names for command grouping
PANEL_OUTLINE = "Build the Outline"
PANEL_NUMBERS = "Preview Numbers"
PANEL_RESTRUCTURE = "Restructure"

app = typer.Typer(
    name="storymap",
    help="Number and restructure the epic → feature → story outline of a canvas",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    canvas: str | None = typer.Option(
        None,
        "--canvas",
        "-c",
        help="Canvas JSON file (default: canvas.path from config, canvas.json)",
    ),
) -> None:
    """
    storymap - outline numbering for planning canvases.

    Epics are numbered X.0, features X.Y and stories X.Y.Z. New elements get
    the next free number; split stories continue their feature's sequence;
    reassigned elements are renumbered under their new parent.

    Quick Start:
        storymap add epic "Checkout"
        storymap add feature "Payments" --parent 1.0
        storymap add story "Pay by card" --parent 1.1
        storymap show --ids
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()
    configure_logging(debug)

    ctx.obj = {"debug": debug, "canvas": canvas}


# =============================================================================
# Build the Outline
# =============================================================================

app.command(name="add", rich_help_panel=PANEL_OUTLINE)(outline.add)
app.command(name="split", rich_help_panel=PANEL_OUTLINE)(outline.split)
app.command(name="show", rich_help_panel=PANEL_OUTLINE)(outline.show)


# =============================================================================
# Preview Numbers
# =============================================================================

app.command(name="next", rich_help_panel=PANEL_NUMBERS)(numbers.next_cmd)
app.command(name="children", rich_help_panel=PANEL_NUMBERS)(numbers.children_cmd)


# =============================================================================
# Restructure
# =============================================================================

app.command(name="parents", rich_help_panel=PANEL_RESTRUCTURE)(assign.parents)
app.command(name="assign", rich_help_panel=PANEL_RESTRUCTURE)(assign.assign)


@app.command()
def version() -> None:
    """Show storymap version and exit."""
    console.print(f"storymap version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
