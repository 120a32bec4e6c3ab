# Copyright (c) Syntropy Systems
"""potionlab seasons command."""
from __future__ import annotations

from typing import Optional

import typer

from potionlab.cli.context import console, fail, open_project
from potionlab.seasons import SEASONS, herbs_by_season, seasons_for


def seasons(
    herb: Optional[str] = typer.Option(None, "--herb", help="Show when one herb can be picked"),
    season: Optional[str] = typer.Option(None, "--season", help="Show herbs for one season"),
) -> None:
    """Show which herbs can be picked in which season."""
    if herb and season:
        raise fail("Use either --herb or --season, not both")

    _, _, engine = open_project()
    domain = engine.domain
    herb_name = domain.name_of("c")

    if herb:
        if herb not in domain.c:
            raise fail(f"Unknown {herb_name}: {herb!r}")
        found = seasons_for(domain, herb)
        listed = ", ".join(found) if found else "unknown"
        console.print(f"[bold]{herb}[/bold] can be picked in: {listed}")
        return

    grouped = herbs_by_season(domain)
    if season:
        key = season.lower()
        if key not in SEASONS:
            raise fail(f"Unknown season '{season}' (expected one of {', '.join(SEASONS)})")
        selected = {key: grouped[key]}
    else:
        selected = grouped

    for name, values in selected.items():
        console.print(f"[bold]{name}:[/bold]")
        if not values:
            console.print("  [dim]none[/dim]")
        for value in values:
            console.print(f"  {value}")
