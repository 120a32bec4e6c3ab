# Copyright (c) Syntropy Systems
"""potionlab remaining command."""
from __future__ import annotations

from typing import Optional

import typer

from potionlab.cli.context import console, open_project


def remaining(
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        min=1,
        help="Max combinations to list (default from config)",
    ),
    show_all: bool = typer.Option(False, "--all", help="List every combination"),
) -> None:
    """Show the combinations that could still be undiscovered recipes."""
    _, config, engine = open_project()
    candidates = engine.candidates

    console.print(
        f"[bold]{len(candidates)}[/bold] combinations left "
        f"[dim](of {engine.domain.size()})[/dim]"
    )

    shown = len(candidates) if show_all else (limit or config.remaining_limit)
    for combo in candidates[:shown]:
        console.print(f"  {combo}")

    hidden = len(candidates) - shown
    if hidden > 0:
        console.print(f"  [dim]...and {hidden} more[/dim]")
