# Copyright (c) Syntropy Systems
"""Shared helpers for CLI commands."""
from __future__ import annotations

from typing import TYPE_CHECKING

import typer
from rich.console import Console

from potionlab.config import load_config, require_project_dir
from potionlab.errors import PotionlabError
from potionlab.store import open_engine

if TYPE_CHECKING:
    from pathlib import Path

    from potionlab.config import PotionlabConfig
    from potionlab.engine import ResearchEngine
    from potionlab.models.trial import Trial

console = Console()

SHORT_ID_LENGTH = 8


def fail(message: object) -> typer.Exit:
    """Print an error and return the Exit to raise."""
    console.print(f"[red]Error:[/red] {message}")
    return typer.Exit(1)


def open_project() -> tuple[Path, PotionlabConfig, ResearchEngine]:
    """Locate the project and load config and engine, exiting on errors."""
    try:
        project_dir = require_project_dir()
    except PotionlabError as e:
        raise fail(e) from e

    try:
        config = load_config(project_dir)
        engine = open_engine(project_dir)
    except (PotionlabError, ValueError) as e:
        raise fail(e) from e

    return project_dir, config, engine


def short_id(trial_id: str) -> str:
    return trial_id[:SHORT_ID_LENGTH]


def find_trial(engine: ResearchEngine, prefix: str) -> Trial:
    """Look up a trial by full id or unique id prefix."""
    matches = [t for t in engine.trials if t.id.startswith(prefix)]
    if not matches:
        raise fail(f"Trial '{prefix}' not found")
    if len(matches) > 1:
        raise fail(f"Trial id '{prefix}' is ambiguous ({len(matches)} matches)")
    return matches[0]
