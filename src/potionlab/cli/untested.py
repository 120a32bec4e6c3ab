# Copyright (c) Syntropy Systems
"""potionlab untested command."""
from __future__ import annotations

from typing import Optional

import typer

from potionlab.cli.context import console, fail, open_project
from potionlab.errors import DomainError


def untested(
    focus: Optional[str] = typer.Option(
        None,
        "--focus",
        "-f",
        help="Only pairs whose values are both unused with this B value",
    ),
) -> None:
    """List (A, C) pairs no trial has used with any B value."""
    _, _, engine = open_project()
    domain = engine.domain

    try:
        pairs = engine.untested(focus)
    except DomainError as e:
        raise fail(e) from e

    a_name = domain.name_of("a")
    c_name = domain.name_of("c")
    title = f"Untested {a_name} + {c_name} pairs ({len(pairs)})"
    if focus:
        title += f" for {domain.name_of('b')} {focus}"
    console.print(f"[bold]{title}[/bold]")

    if not pairs:
        console.print(f"[green]All {a_name} + {c_name} pairs have been tried![/green]")
        return

    for a_value, c_value in pairs:
        console.print(f"  {a_value} + {c_value}")
