"""
storymap CLI - reparenting commands.

List valid parents for a selection and move elements under a new parent.
"""

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from storymap.cli.context import build_service, cli_errors

console = Console()


def parents(
    ctx: typer.Context,
    element_ids: Annotated[list[str], typer.Argument(help="Ids of the selected elements")],
) -> None:
    """
    List the parents the selected elements can be assigned to.

    Examples:

        storymap parents 4f2a... 9c01...
    """
    with cli_errors():
        service = build_service(ctx)
        options = service.parent_options(element_ids)
        selected_types = {service.load().get_element(i).type for i in element_ids}  # type: ignore[union-attr]

    if not options:
        console.print("No valid parents available.")
        if "epic" in selected_types:
            console.print("[dim]Epics cannot be assigned to a parent.[/dim]")
        else:
            console.print("[dim]Add an Epic or Feature to the canvas first.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Number")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("Id", style="dim")
    for option in options:
        table.add_row(option.number, option.type, escape(option.title), option.id)
    console.print(table)


def assign(
    ctx: typer.Context,
    element_ids: Annotated[list[str], typer.Argument(help="Ids of the elements to move")],
    parent_id: Annotated[str, typer.Option("--to", help="Id of the new parent")],
    renumber: Annotated[
        bool | None,
        typer.Option(
            "--renumber/--no-renumber",
            help="Renumber all children of the parent from .1 (default from config)",
        ),
    ] = None,
) -> None:
    """
    Assign elements to a parent epic or feature.

    Examples:

        storymap assign 4f2a... --to 77be...

        storymap assign 4f2a... 9c01... --to 77be... --no-renumber
    """
    with cli_errors():
        service = build_service(ctx)
        result = service.assign(element_ids, parent_id, renumber_children=renumber)

    console.print(
        f"[green]✓[/green] Assigned {len(result.moved_ids)} element(s) to {escape(parent_id)}"
    )
    for element_id, (old, new) in result.renumbered.items():
        console.print(f"  {old or '-'} → {new} [dim]({element_id})[/dim]", highlight=False)
