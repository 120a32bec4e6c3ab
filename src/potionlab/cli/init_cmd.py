# Copyright (c) Syntropy Systems
"""potionlab init command."""
from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

import typer
import yaml

from potionlab.cli.context import console, fail
from potionlab.config import PROJECT_DIR_NAME, get_domain_path, get_state_path
from potionlab.domain import load_domain
from potionlab.errors import DomainError
from potionlab.matrix import DEFAULT_PRECEDENCE
from potionlab.models.trial import TrialState
from potionlab.store import save_state

SAMPLE_DOMAIN = {
    "dimensions": {"a": "metal", "b": "organ", "c": "herb"},
    "metal": ["Iron", "Copper", "Silver", "Gold", "Lead", "Tin", "Mercury"],
    "organ": ["Heart", "Liver", "Lung", "Kidney", "Spleen"],
    "herb": [
        {"name": "Sage", "seasons": ["spring", "summer"]},
        {"name": "Nettle", "seasons": ["spring"]},
        {"name": "Yarrow", "seasons": ["summer", "autumn"]},
        {"name": "Mandrake", "seasons": ["autumn"]},
        {"name": "Wolfsbane", "seasons": ["winter"]},
        {"name": "Moss", "seasons": ["all"]},
    ],
}


def init(
    path: Path = typer.Argument(
        Path(),
        help="Directory to initialize (default: current directory)",
    ),
    domain: Optional[Path] = typer.Option(
        None,
        "--domain",
        "-d",
        help="domain.yaml to copy in (default: a sample domain)",
    ),
) -> None:
    """Initialize a new potionlab project.

    Creates a .potionlab directory with configuration, domain and an
    empty trial log.
    """
    target = path.resolve()
    project_dir = target / PROJECT_DIR_NAME

    if project_dir.exists():
        console.print(f"[yellow]Already initialized:[/yellow] {project_dir}")
        return

    if domain is not None:
        try:
            loaded = load_domain(domain)
        except DomainError as e:
            raise fail(e) from e
    else:
        loaded = None

    project_dir.mkdir(parents=True)

    config = {
        "remaining_limit": 50,
        "matrix": {
            "precedence": [status.value for status in DEFAULT_PRECEDENCE],
            "show_global_failures": True,
        },
    }
    config_path = project_dir / "config.yaml"
    with config_path.open("w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)

    domain_path = get_domain_path(project_dir)
    if domain is not None:
        _ = shutil.copyfile(domain, domain_path)
    else:
        with domain_path.open("w") as f:
            yaml.dump(SAMPLE_DOMAIN, f, default_flow_style=False, sort_keys=False)

    state_path = get_state_path(project_dir)
    save_state(state_path, TrialState())

    console.print(f"[green]Initialized potionlab project:[/green] {project_dir}")
    console.print(f"  [dim]config:[/dim] {config_path}")
    console.print(f"  [dim]domain:[/dim] {domain_path}")
    console.print(f"  [dim]state:[/dim] {state_path}")
    if loaded is not None:
        console.print(f"  [dim]combinations:[/dim] {loaded.size()}")
