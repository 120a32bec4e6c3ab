# Copyright (c) Syntropy Systems
"""potionlab matrix command."""
from __future__ import annotations

import typer
from rich.markup import escape
from rich.table import Table

from potionlab.cli.context import console, fail, open_project
from potionlab.display import dimension_color
from potionlab.errors import DomainError
from potionlab.matrix import CellStatus

CELL_MARKUP = {
    CellStatus.SUCCESS: "[green]✅ {label}[/green]",
    CellStatus.HINT: "[yellow]⚠ {label}[/yellow]",
    CellStatus.LOCAL_FAILURE: "[red]❌ nothing[/red]",
    CellStatus.GLOBAL_FAILURE: "[dim red]✖ dead pair[/dim red]",
    CellStatus.PENDING: "[cyan]\U0001f9ea in flask[/cyan]",
    CellStatus.EMPTY: "",
}


def matrix(
    b: str = typer.Argument(..., help="Dimension B value to slice on (organ)"),
) -> None:
    """Show every (A, C) pair for one B value with what is known about it.

    Cells show, strongest first: found recipe, close hint, failure with
    this B value, failure with another B value, pending.
    """
    _, config, engine = open_project()
    domain = engine.domain

    try:
        policy = config.matrix_policy()
    except ValueError as e:
        raise fail(f"Invalid matrix settings in config.yaml: {e}") from e

    try:
        section = engine.matrix(b, policy)
    except DomainError as e:
        raise fail(e) from e

    table = Table(
        title=f"Matrix for {domain.name_of('b')}: {b}",
        show_lines=True,
    )
    table.add_column(
        f"{domain.name_of('a').capitalize()} \\ {domain.name_of('c').capitalize()}"
    )
    for index, column in enumerate(section.columns):
        color = dimension_color("c", index)
        table.add_column(f"[black on {color}]{column}[/black on {color}]", justify="center")

    for index, (a_value, row) in enumerate(zip(section.rows, section.cells)):
        color = dimension_color("a", index)
        table.add_row(
            f"[black on {color}]{a_value}[/black on {color}]",
            *(CELL_MARKUP[cell.status].format(label=escape(cell.label or "")) for cell in row),
        )

    console.print(table)
    console.print(
        f"[dim]{section.count(CellStatus.SUCCESS)} found, "
        f"{section.count(CellStatus.HINT)} close, "
        f"{section.count(CellStatus.LOCAL_FAILURE)} failed here, "
        f"{section.count(CellStatus.GLOBAL_FAILURE)} dead elsewhere, "
        f"{section.count(CellStatus.PENDING)} pending[/dim]"
    )
