# Copyright (c) Syntropy Systems
"""Commands that record trial outcomes."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import typer

from potionlab.cli.context import console, fail, find_trial, open_project, short_id
from potionlab.errors import PotionlabError
from potionlab.models.trial import Combo, Failure, Hint, Pending, Success

if TYPE_CHECKING:
    from potionlab.engine import ResearchEngine
    from potionlab.models.trial import Trial


def _value_arg(dimension: str, example: str) -> typer.models.ArgumentInfo:
    return typer.Argument(..., help=f"Dimension {dimension} value ({example})")


def _report(engine: ResearchEngine, trial: Trial) -> None:
    if isinstance(trial, Success):
        console.print(
            f"[green]Found recipe:[/green] {trial.combo} -> [bold]{trial.label}[/bold]"
        )
    elif isinstance(trial, Hint):
        console.print(
            f"[yellow]Close to recipe:[/yellow] {trial.combo} "
            f"(near [bold]{trial.label}[/bold])"
        )
    elif isinstance(trial, Failure):
        console.print(f"[red]Nothing:[/red] {trial.combo}")
    elif isinstance(trial, Pending):
        console.print(f"[cyan]Added to flask:[/cyan] {trial.combo}")
    console.print(f"  [dim]id:[/dim] {short_id(trial.id)}")
    console.print(
        f"  [dim]remaining:[/dim] {len(engine.candidates)} of {engine.domain.size()}"
    )


def _commit(kind: str, a: str, b: str, c: str, label: Optional[str] = None) -> None:
    _, _, engine = open_project()
    try:
        trial = engine.commit(kind, Combo(a=a, b=b, c=c), label)
    except PotionlabError as e:
        raise fail(e) from e
    _report(engine, trial)


def success(
    a: str = _value_arg("A", "metal"),
    b: str = _value_arg("B", "organ"),
    c: str = _value_arg("C", "herb"),
    name: Optional[str] = typer.Argument(None, help="Recipe the combo produced"),
) -> None:
    """Record a combo that produced a recipe.

    Example:
        potionlab success Iron Heart Sage "Elixir of Vigor"
    """
    _commit("success", a, b, c, name)


def hint(
    a: str = _value_arg("A", "metal"),
    b: str = _value_arg("B", "organ"),
    c: str = _value_arg("C", "herb"),
    name: Optional[str] = typer.Argument(None, help="Recipe the combo came close to"),
) -> None:
    """Record a combo that came close to a recipe."""
    _commit("hint", a, b, c, name)


def failure(
    a: str = _value_arg("A", "metal"),
    b: str = _value_arg("B", "organ"),
    c: str = _value_arg("C", "herb"),
) -> None:
    """Record a combo that produced nothing.

    Also rules out every combo sharing two of its three values.
    """
    _commit("failure", a, b, c)


def pending(
    a: str = _value_arg("A", "metal"),
    b: str = _value_arg("B", "organ"),
    c: str = _value_arg("C", "herb"),
) -> None:
    """Queue a combo for testing (put it in the flask)."""
    _commit("pending", a, b, c)


def resolve(
    trial_id: str = typer.Argument(..., help="Pending trial id (or unique prefix)"),
    outcome: str = typer.Argument(..., help="success, hint or failure"),
    name: Optional[str] = typer.Argument(None, help="Recipe name for success/hint"),
) -> None:
    """Resolve a pending combo into an outcome."""
    _, _, engine = open_project()
    pending_trial = find_trial(engine, trial_id)
    try:
        trial = engine.resolve(pending_trial.id, outcome.lower(), name)
    except PotionlabError as e:
        raise fail(e) from e
    _report(engine, trial)
