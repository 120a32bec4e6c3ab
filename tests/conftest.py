# Copyright (c) Syntropy Systems
"""Pytest fixtures for potionlab tests."""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
import yaml

from potionlab.domain import Domain
from potionlab.engine import ResearchEngine

# Store original cwd at module load time
_original_cwd = Path.cwd()

SMALL_DOMAIN = {
    "metal": ["x1", "x2"],
    "organ": ["y1", "y2"],
    "herb": ["z1", "z2"],
}


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def domain() -> Domain:
    """The 2 x 2 x 2 domain (8 combos)."""
    return Domain.create(["x1", "x2"], ["y1", "y2"], ["z1", "z2"])


@pytest.fixture
def wide_domain() -> Domain:
    """A 3 x 3 x 3 domain (27 combos)."""
    return Domain.create(["a1", "a2", "a3"], ["b1", "b2", "b3"], ["c1", "c2", "c3"])


@pytest.fixture
def engine(domain: Domain) -> ResearchEngine:
    """An engine over the small domain with an empty trial log."""
    return ResearchEngine(domain)


@pytest.fixture
def potionlab_project(
    temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Create a temporary potionlab project over the small domain."""
    from potionlab.models.trial import TrialState
    from potionlab.store import save_state

    monkeypatch.delenv("POTIONLAB_DIR", raising=False)

    project_dir = temp_dir / ".potionlab"
    project_dir.mkdir()
    with (project_dir / "domain.yaml").open("w") as f:
        yaml.dump(SMALL_DOMAIN, f)
    save_state(project_dir / "state.json", TrialState())

    # Change to temp directory
    os.chdir(temp_dir)

    yield temp_dir

    # Always return to original cwd
    os.chdir(_original_cwd)
