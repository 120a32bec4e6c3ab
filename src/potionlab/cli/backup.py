# Copyright (c) Syntropy Systems
"""Backup export and import commands."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from potionlab.cli.context import console, fail, open_project
from potionlab.errors import BackupImportError


def export(
    output: Optional[Path] = typer.Argument(
        None,
        help="File to write (default: print to stdout)",
    ),
) -> None:
    """Export the trial log as backup JSON.

    Examples:
        potionlab export backup.json
        potionlab export > backup.json
    """
    _, _, engine = open_project()
    text = engine.export_backup()

    if output is None:
        _ = sys.stdout.write(text + "\n")
        return

    _ = output.write_text(text)
    console.print(
        f"[green]Exported {len(engine.trials)} trial(s) to {output}[/green]"
    )


def import_backup(
    source: Path = typer.Argument(..., help="Backup file to read, or '-' for stdin"),
) -> None:
    """Replace the trial log with a backup.

    Nothing changes if the backup cannot be parsed.
    """
    _, _, engine = open_project()

    if str(source) == "-":
        text = sys.stdin.read()
    else:
        if not source.exists():
            raise fail(f"File not found: {source}")
        text = source.read_text()

    try:
        state = engine.import_backup(text)
    except BackupImportError as e:
        raise fail(e) from e

    console.print("[green]Backup imported![/green]")
    console.print(
        f"  [dim]trials:[/dim] {len(state.successes)} found, {len(state.hints)} close, "
        f"{len(state.failures)} nothing, {len(state.pending)} pending"
    )
    console.print(
        f"  [dim]remaining:[/dim] {len(engine.candidates)} of {engine.domain.size()}"
    )
