"""
storymap CLI - outline commands.

Add numbered elements, split stories and display the outline tree.
"""

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from storymap.cli.context import build_service, cli_errors
from storymap.cli.errors import ExitCode, print_invalid_option_error
from storymap.core.canvas import CanvasElement, OutlineNode
from storymap.core.numbering import TIERS

console = Console()

_STYLE = {"epic": "magenta", "feature": "blue", "story": "green"}


def _label(element: CanvasElement, show_ids: bool) -> str:
    number = escape(element.story_number or "-")
    title = escape(element.title or f"Untitled {element.type.capitalize()}")
    style = _STYLE.get(element.type, "white")
    label = f"[{style}]{number}[/{style}] {title}"
    if show_ids:
        label += f" [dim]({escape(element.id)})[/dim]"
    return label


def _add_nodes(tree: Tree, nodes: list[OutlineNode], show_ids: bool) -> None:
    for node in nodes:
        branch = tree.add(_label(node.element, show_ids))
        _add_nodes(branch, node.children, show_ids)


def add(
    ctx: typer.Context,
    tier: Annotated[str, typer.Argument(help="epic, feature or story")],
    title: Annotated[str, typer.Argument(help="Element title")],
    parent: Annotated[
        str | None,
        typer.Option("--parent", "-p", help="Parent number (e.g. 1.0 for a feature)"),
    ] = None,
) -> None:
    """
    Add an epic, feature or story with the next free number.

    Examples:

        storymap add epic "Checkout"

        storymap add feature "Payments" --parent 1.0
    """
    if tier not in TIERS:
        print_invalid_option_error(tier, list(TIERS))
        raise typer.Exit(ExitCode.USER_ERROR)

    with cli_errors():
        service = build_service(ctx)
        element = service.add_element(tier, title, parent=parent)

    console.print(
        f"[green]✓[/green] Added {tier} {element.story_number} "
        f"{escape(title)} [dim]({element.id})[/dim]"
    )


def split(
    ctx: typer.Context,
    element_id: Annotated[str, typer.Argument(help="Id of the story to split")],
    titles: Annotated[
        list[str],
        typer.Option("--title", "-t", help="Title of a new story (repeatable)"),
    ],
) -> None:
    """
    Split a story into new sibling stories.

    Examples:

        storymap split 4f2a... -t "Card payments" -t "Invoices"
    """
    with cli_errors():
        service = build_service(ctx)
        created = service.split_story(element_id, titles)

    for element in created:
        console.print(
            f"[green]✓[/green] Created story {element.story_number} "
            f"{escape(element.title or '')} [dim]({element.id})[/dim]"
        )


def show(
    ctx: typer.Context,
    ids: Annotated[
        bool,
        typer.Option("--ids", help="Show element ids"),
    ] = False,
) -> None:
    """
    Show the epic → feature → story outline.
    """
    with cli_errors():
        service = build_service(ctx)
        outline = service.outline()

    if not outline.epics and not outline.orphans:
        console.print("[dim]No outline elements on the canvas.[/dim]")
        return

    tree = Tree(f"[bold]{escape(str(service.store.path.name))}[/bold]")
    _add_nodes(tree, outline.epics, ids)

    if outline.orphans:
        unassigned = tree.add("[yellow]Unassigned[/yellow]")
        for element in outline.orphans:
            unassigned.add(_label(element, ids))

    console.print(tree)
