# Copyright (c) Syntropy Systems
"""JSON file store for the trial log."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from potionlab.config import get_domain_path, get_state_path
from potionlab.domain import load_domain
from potionlab.engine import ResearchEngine
from potionlab.errors import ValidationError
from potionlab.models.trial import TrialState

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def load_state(path: Path) -> TrialState:
    """Read the trial log, an empty one if the file does not exist yet."""
    if not path.exists():
        return TrialState()
    try:
        return TrialState.model_validate_json(path.read_text())
    except PydanticValidationError as e:
        msg = f"Corrupt state file {path}: {e.error_count()} problem(s)"
        raise ValidationError(msg) from e


def save_state(path: Path, state: TrialState) -> None:
    """Write the trial log in a single write."""
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(state.model_dump_json(indent=2))
    logger.debug("Saved trial log to %s", path)


def open_engine(project_dir: Path, autosave: bool = True) -> ResearchEngine:
    """Load domain and trial log from a project directory.

    With autosave the engine writes state.json after every mutation.
    """
    domain = load_domain(get_domain_path(project_dir))
    state_path = get_state_path(project_dir)
    state = load_state(state_path)

    def persist(new_state: TrialState) -> None:
        save_state(state_path, new_state)

    return ResearchEngine.from_state(
        domain, state, on_change=persist if autosave else None
    )
