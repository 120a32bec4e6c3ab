# Copyright (c) Syntropy Systems
"""Configuration management for potionlab."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

import yaml

from potionlab.errors import ProjectNotFoundError
from potionlab.matrix import DEFAULT_PRECEDENCE, MatrixPolicy

PROJECT_DIR_NAME = ".potionlab"
PROJECT_DIR_ENV = "POTIONLAB_DIR"


@dataclass
class PotionlabConfig:
    """Configuration for potionlab."""

    # Rows shown by `potionlab remaining` before "...and N more"
    remaining_limit: int = 50

    # Cell status names, strongest first
    matrix_precedence: list[str] = field(
        default_factory=lambda: [status.value for status in DEFAULT_PRECEDENCE]
    )

    # Mark pairs killed by a failure under another B value
    show_global_failures: bool = True

    def matrix_policy(self) -> MatrixPolicy:
        return MatrixPolicy.from_names(
            self.matrix_precedence,
            show_global_failures=self.show_global_failures,
        )


def find_project_dir(start_path: Path | None = None) -> Path | None:
    """Find the nearest .potionlab directory by walking up from start_path.

    POTIONLAB_DIR, when set, wins over the search. Returns None if no
    .potionlab directory is found.
    """
    override = os.environ.get(PROJECT_DIR_ENV)
    if override:
        override_path = Path(override)
        return override_path if override_path.is_dir() else None

    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while current != current.parent:
        project_dir = current / PROJECT_DIR_NAME
        if project_dir.is_dir():
            return project_dir
        current = current.parent

    # Check root
    project_dir = current / PROJECT_DIR_NAME
    if project_dir.is_dir():
        return project_dir

    return None


def get_global_config_dir() -> Path:
    """Get the global potionlab config directory (~/.potionlab)."""
    return Path.home() / PROJECT_DIR_NAME


def load_config(project_dir: Path | None = None) -> PotionlabConfig:
    """Load configuration from .potionlab/config.yaml or defaults.

    Looks for config in:
    1. Provided project_dir
    2. Nearest .potionlab directory walking up
    3. ~/.potionlab/config.yaml
    4. Defaults
    """
    config = PotionlabConfig()

    config_path = None

    if project_dir is not None:
        config_path = project_dir / "config.yaml"
    else:
        found_dir = find_project_dir()
        if found_dir is not None:
            config_path = found_dir / "config.yaml"
        else:
            global_config = get_global_config_dir() / "config.yaml"
            if global_config.exists():
                config_path = global_config

    if config_path is not None and config_path.exists():
        with config_path.open() as f:
            data = cast("dict[str, object]", yaml.safe_load(f) or {})

        remaining_limit = data.get("remaining_limit")
        if isinstance(remaining_limit, (int, float)) and remaining_limit > 0:
            config.remaining_limit = int(remaining_limit)

        matrix = data.get("matrix")
        if isinstance(matrix, dict):
            matrix_data = cast("dict[str, object]", matrix)
            precedence = matrix_data.get("precedence")
            if isinstance(precedence, list):
                config.matrix_precedence = [
                    str(name) for name in cast("list[object]", precedence)
                ]
            show_global = matrix_data.get("show_global_failures")
            if isinstance(show_global, bool):
                config.show_global_failures = show_global

    return config


def require_project_dir() -> Path:
    """Get the project directory or raise an error if not found."""
    project_dir = find_project_dir()
    if project_dir is None:
        msg = "No .potionlab directory found. Run 'potionlab init' first."
        raise ProjectNotFoundError(msg)
    return project_dir


def get_state_path(project_dir: Path) -> Path:
    """Path to the persisted trial log."""
    return project_dir / "state.json"


def get_domain_path(project_dir: Path) -> Path:
    """Path to the domain value lists."""
    return project_dir / "domain.yaml"
