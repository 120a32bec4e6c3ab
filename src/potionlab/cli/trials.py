# Copyright (c) Syntropy Systems
"""potionlab trials and remove commands."""
from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from potionlab.cli.context import console, fail, find_trial, open_project, short_id
from potionlab.errors import PotionlabError
from potionlab.models.trial import TRIAL_KINDS, Hint, Success

KIND_STYLES = {
    "success": "green",
    "hint": "yellow",
    "failure": "red",
    "pending": "cyan",
}


def trials(
    kind: Optional[str] = typer.Option(
        None,
        "--kind",
        "-k",
        help="Only show one kind: success, hint, failure or pending",
    ),
) -> None:
    """List recorded trials."""
    if kind is not None and kind not in TRIAL_KINDS:
        raise fail(f"Unknown kind '{kind}' (expected one of {', '.join(TRIAL_KINDS)})")

    _, _, engine = open_project()
    domain = engine.domain
    selected = engine.trials_of(kind) if kind else engine.trials

    if not selected:
        console.print("[dim]No trials recorded[/dim]")
        return

    table = Table(title="Trials")
    table.add_column("ID", style="dim")
    table.add_column("Kind")
    table.add_column(domain.name_of("a").capitalize())
    table.add_column(domain.name_of("b").capitalize())
    table.add_column(domain.name_of("c").capitalize())
    table.add_column("Recipe")

    for trial in selected:
        style = KIND_STYLES[trial.kind]
        label = trial.label if isinstance(trial, (Success, Hint)) else ""
        table.add_row(
            short_id(trial.id),
            f"[{style}]{trial.kind}[/{style}]",
            trial.combo.a,
            trial.combo.b,
            trial.combo.c,
            label,
        )

    console.print(table)


def remove(
    trial_id: str = typer.Argument(..., help="Trial id (or unique prefix)"),
) -> None:
    """Delete a trial; the candidate set is rebuilt from what is left."""
    _, _, engine = open_project()
    trial = find_trial(engine, trial_id)
    before = len(engine.candidates)
    try:
        removed = engine.remove(trial.id)
    except PotionlabError as e:
        raise fail(e) from e

    console.print(f"[green]Removed {removed.kind}:[/green] {removed.combo}")
    after = len(engine.candidates)
    if after != before:
        console.print(f"  [dim]remaining:[/dim] {before} -> {after}")
