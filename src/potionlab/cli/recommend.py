# Copyright (c) Syntropy Systems
"""potionlab recommend command."""
from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from potionlab.cli.context import console, fail, open_project
from potionlab.display import dimension_color
from potionlab.domain import DIMENSIONS
from potionlab.errors import DomainError
from potionlab.recommend import Selection


def recommend(
    a: Optional[str] = typer.Option(None, "--a", "-a", help="Pin a Dimension A value"),
    b: Optional[str] = typer.Option(None, "--b", "-b", help="Pin a Dimension B value"),
    c: Optional[str] = typer.Option(None, "--c", "-c", help="Pin a Dimension C value"),
    show_all: bool = typer.Option(
        False,
        "--all",
        help="Show every value with its state instead of just the suggestions",
    ),
) -> None:
    """Suggest values to try next for the dimensions you have not pinned.

    Pin one or two dimensions; with none pinned there is nothing to narrow.

    Examples:
        potionlab recommend --a Iron
        potionlab recommend --a Iron --c Sage --all
    """
    _, _, engine = open_project()
    domain = engine.domain
    selection = Selection(a=a, b=b, c=c)

    try:
        for dimension, value in selection.pinned().items():
            domain.require_value(dimension, value)
    except DomainError as e:
        raise fail(e) from e

    pins = selection.pinned()
    if not pins:
        console.print("[yellow]Pin at least one dimension to get suggestions.[/yellow]")
        return
    if len(pins) == len(DIMENSIONS):
        console.print("[dim]All three dimensions pinned; nothing to suggest.[/dim]")
        if not engine.is_candidate(**pins):
            console.print("[yellow]That combination is already ruled out.[/yellow]")
        return

    result = engine.recommend(selection)
    console.print(
        f"[bold]{result.candidate_count}[/bold] candidate(s) match "
        + ", ".join(f"{domain.name_of(d)}={v}" for d, v in pins.items())
    )

    for dimension in DIMENSIONS:
        if dimension in pins:
            continue
        name = domain.name_of(dimension)
        if not show_all:
            values = result.for_dimension(dimension)
            listed = ", ".join(values) if values else "[dim]none[/dim]"
            console.print(f"  [green]{name}:[/green] {listed}")
            continue

        table = Table(title=name.capitalize())
        table.add_column("Value")
        table.add_column("Suggested", justify="center")
        table.add_column("Ruled out", justify="center")
        table.add_column("Close", justify="center")
        table.add_column("Done", justify="center")
        for index, state in enumerate(engine.option_states(selection, dimension)):
            color = dimension_color(dimension, index)
            table.add_row(
                f"[black on {color}]{state.value}[/black on {color}]",
                "[green]✓[/green]" if state.recommended else "",
                "[red]✗[/red]" if state.forbidden else "",
                "[yellow]~[/yellow]" if state.near_miss else "",
                "•" if state.resolved else "",
            )
        console.print(table)
