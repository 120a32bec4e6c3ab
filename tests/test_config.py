# Copyright (c) Syntropy Systems
"""Tests for configuration, the JSON store and small lookup helpers."""

import json
import re
from pathlib import Path

import pytest
import yaml

from potionlab.config import (
    PotionlabConfig,
    find_project_dir,
    load_config,
    require_project_dir,
)
from potionlab.display import dimension_color
from potionlab.domain import Domain, parse_domain
from potionlab.errors import ProjectNotFoundError, ValidationError
from potionlab.matrix import CellStatus
from potionlab.models.trial import Combo, Failure, TrialState
from potionlab.seasons import herbs_by_season, seasons_for
from potionlab.store import load_state, open_engine, save_state


class TestConfig:
    """Tests for config loading and project discovery."""

    def test_defaults(self, temp_dir: Path):
        """Test defaults when no config file exists."""
        config = load_config(temp_dir)
        assert config.remaining_limit == 50
        assert config.show_global_failures is True
        assert config.matrix_policy().precedence[0] == CellStatus.SUCCESS

    def test_load_values(self, temp_dir: Path):
        """Test values are read from config.yaml."""
        (temp_dir / "config.yaml").write_text(
            yaml.dump(
                {
                    "remaining_limit": 5,
                    "matrix": {
                        "precedence": ["pending", "success"],
                        "show_global_failures": False,
                    },
                }
            )
        )
        config = load_config(temp_dir)
        assert config.remaining_limit == 5
        policy = config.matrix_policy()
        assert policy.precedence == (CellStatus.PENDING, CellStatus.SUCCESS)
        assert policy.show_global_failures is False

    def test_bad_limit_ignored(self, temp_dir: Path):
        """Test a non-positive limit keeps the default."""
        (temp_dir / "config.yaml").write_text("remaining_limit: 0\n")
        assert load_config(temp_dir).remaining_limit == 50

    def test_invalid_precedence_fails_on_use(self):
        """Test unknown status names surface when building the policy."""
        config = PotionlabConfig(matrix_precedence=["success", "maybe"])
        with pytest.raises(ValueError, match="Unknown matrix status"):
            _ = config.matrix_policy()

    def test_find_project_dir_walks_up(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test the search walks up from a nested directory."""
        monkeypatch.delenv("POTIONLAB_DIR", raising=False)
        (temp_dir / ".potionlab").mkdir()
        nested = temp_dir / "a" / "b"
        nested.mkdir(parents=True)
        found = find_project_dir(nested)
        assert found is not None
        assert found.resolve() == (temp_dir / ".potionlab").resolve()

    def test_env_override(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        """Test POTIONLAB_DIR wins over the search."""
        custom = temp_dir / "elsewhere"
        custom.mkdir()
        monkeypatch.setenv("POTIONLAB_DIR", str(custom))
        assert find_project_dir(temp_dir) == custom

    def test_require_project_dir_missing(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test a missing project raises ProjectNotFoundError."""
        monkeypatch.delenv("POTIONLAB_DIR", raising=False)
        monkeypatch.chdir(temp_dir)
        if find_project_dir() is not None:
            pytest.skip("a .potionlab directory exists above the temp dir")
        with pytest.raises(ProjectNotFoundError, match="potionlab init"):
            _ = require_project_dir()


class TestStore:
    """Tests for the JSON trial log."""

    def test_missing_file_is_empty(self, temp_dir: Path):
        """Test a missing state file loads as an empty log."""
        state = load_state(temp_dir / "state.json")
        assert state.trials() == []

    def test_save_and_load(self, temp_dir: Path):
        """Test state written by save_state loads back."""
        path = temp_dir / "nested" / "state.json"
        state = TrialState.from_trials(
            [Failure(combo=Combo(a="x1", b="y1", c="z1"))]
        )
        save_state(path, state)

        data = json.loads(path.read_text())
        assert set(data) == {"successes", "hints", "failures", "pending"}
        assert load_state(path) == state

    def test_corrupt_file(self, temp_dir: Path):
        """Test a malformed state file raises ValidationError."""
        path = temp_dir / "state.json"
        path.write_text("{not json")
        with pytest.raises(ValidationError, match="Corrupt state file"):
            _ = load_state(path)

    def test_open_engine_autosaves(self, potionlab_project: Path):
        """Test mutations through open_engine are persisted."""
        project_dir = potionlab_project / ".potionlab"
        engine = open_engine(project_dir)
        _ = engine.commit("failure", Combo(a="x1", b="y1", c="z1"))

        reopened = open_engine(project_dir)
        assert len(reopened.trials) == 1
        assert len(reopened.candidates) == 4

    def test_open_engine_without_autosave(self, potionlab_project: Path):
        """Test autosave=False leaves the file alone."""
        project_dir = potionlab_project / ".potionlab"
        engine = open_engine(project_dir, autosave=False)
        _ = engine.commit("failure", Combo(a="x1", b="y1", c="z1"))

        assert open_engine(project_dir).trials == []


class TestSeasons:
    """Tests for herb season lookups."""

    @pytest.fixture
    def herbal(self) -> Domain:
        return parse_domain(
            {
                "metal": ["Iron"],
                "organ": ["Heart"],
                "herb": [
                    {"name": "Sage", "seasons": ["spring", "summer"]},
                    {"name": "Moss", "seasons": ["all"]},
                    "Nettle",
                ],
            }
        )

    def test_seasons_for(self, herbal: Domain):
        """Test lookup of one herb."""
        assert seasons_for(herbal, "Sage") == ["spring", "summer"]
        assert seasons_for(herbal, "Nettle") == []

    def test_grouping(self, herbal: Domain):
        """Test herbs are grouped per season."""
        grouped = herbs_by_season(herbal)
        assert grouped["spring"] == ["Sage"]
        assert grouped["summer"] == ["Sage"]
        assert grouped["all"] == ["Moss"]
        assert grouped["winter"] == []


class TestDimensionColor:
    """Tests for value colors."""

    def test_hex_format(self):
        """Test colors are #rrggbb strings."""
        for dimension in ("a", "b", "c"):
            for index in range(12):
                assert re.fullmatch(r"#[0-9a-f]{6}", dimension_color(dimension, index))

    def test_stable_and_distinct(self):
        """Test neighbouring values get different, stable colors."""
        assert dimension_color("a", 3) == dimension_color("a", 3)
        assert dimension_color("a", 0) != dimension_color("a", 1)
        assert dimension_color("a", 1) != dimension_color("c", 1)
