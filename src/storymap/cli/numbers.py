"""
storymap CLI - number allocation commands.

Preview the numbers new elements would get, without changing the canvas.
"""

from typing import Annotated

import typer
from rich.console import Console

from storymap.cli.context import build_service, cli_errors
from storymap.cli.errors import ExitCode, print_invalid_option_error
from storymap.core.numbering import TIERS

console = Console()


def next_cmd(
    ctx: typer.Context,
    tier: Annotated[str, typer.Argument(help="epic, feature or story")],
    parent: Annotated[
        str | None,
        typer.Option(
            "--parent",
            "-p",
            help="Parent number to allocate under (e.g. 2.0 or 2.1)",
        ),
    ] = None,
) -> None:
    """
    Show the next free number for a tier.

    Without --parent, features go under the highest epic and stories under
    the highest feature.

    Examples:

        storymap next epic

        storymap next story --parent 1.2
    """
    if tier not in TIERS:
        print_invalid_option_error(tier, list(TIERS))
        raise typer.Exit(ExitCode.USER_ERROR)

    with cli_errors():
        service = build_service(ctx)
        console.print(service.next_number(tier, parent=parent), highlight=False)


def children_cmd(
    ctx: typer.Context,
    parent: Annotated[
        str,
        typer.Argument(help="Number of the story or feature being split ('' for none)"),
    ],
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, help="How many numbers to allocate"),
    ] = 1,
) -> None:
    """
    Show the numbers a split would hand out.

    Examples:

        storymap children 3.2 --count 3
    """
    with cli_errors():
        service = build_service(ctx)
        for number in service.child_numbers(parent, count):
            console.print(number, highlight=False)
