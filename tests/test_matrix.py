# Copyright (c) Syntropy Systems
"""Tests for the cross-section matrix and the untested-pairs report."""

import pytest

from potionlab.domain import Domain
from potionlab.engine import ResearchEngine
from potionlab.errors import DomainError
from potionlab.matrix import CellStatus, MatrixPolicy, build_matrix
from potionlab.models.trial import Combo, Failure, Hint, Pending, Success
from potionlab.untested import untested_pairs


def combo(a: str, b: str, c: str) -> Combo:
    return Combo(a=a, b=b, c=c)


class TestBuildMatrix:
    """Tests for cell annotation and precedence."""

    def test_shape(self, wide_domain: Domain):
        """Test rows are A values and columns C values."""
        section = build_matrix(wide_domain, [], "b1")
        assert section.rows == ["a1", "a2", "a3"]
        assert section.columns == ["c1", "c2", "c3"]
        assert all(cell.status == CellStatus.EMPTY for row in section.cells for cell in row)

    def test_each_status(self, wide_domain: Domain):
        """Test every kind of fact lands in its cell."""
        trials = [
            Success(combo=combo("a1", "b1", "c1"), label="Elixir"),
            Hint(combo=combo("a1", "b1", "c2"), label="Tonic"),
            Failure(combo=combo("a2", "b1", "c1")),
            Failure(combo=combo("a3", "b2", "c3")),
            Pending(combo=combo("a2", "b1", "c3")),
        ]
        section = build_matrix(wide_domain, trials, "b1")

        assert section.cell("a1", "c1").status == CellStatus.SUCCESS
        assert section.cell("a1", "c1").label == "Elixir"
        assert section.cell("a1", "c2").status == CellStatus.HINT
        assert section.cell("a1", "c2").label == "Tonic"
        assert section.cell("a2", "c1").status == CellStatus.LOCAL_FAILURE
        assert section.cell("a3", "c3").status == CellStatus.GLOBAL_FAILURE
        assert section.cell("a2", "c3").status == CellStatus.PENDING
        assert section.cell("a3", "c1").status == CellStatus.EMPTY

    def test_success_beats_global_failure(self, wide_domain: Domain):
        """Test a local success outranks a failure under another B value."""
        trials = [
            Failure(combo=combo("a1", "b2", "c1")),
            Success(combo=combo("a1", "b1", "c1"), label="Elixir"),
        ]
        section = build_matrix(wide_domain, trials, "b1")
        assert section.cell("a1", "c1").status == CellStatus.SUCCESS

    def test_local_failure_beats_global(self, wide_domain: Domain):
        """Test a failure with this B value outranks one with another."""
        trials = [
            Failure(combo=combo("a1", "b2", "c1")),
            Failure(combo=combo("a1", "b1", "c1")),
        ]
        section = build_matrix(wide_domain, trials, "b1")
        assert section.cell("a1", "c1").status == CellStatus.LOCAL_FAILURE

    def test_global_failure_beats_pending(self, wide_domain: Domain):
        """Test a dead pair outranks a queued combo."""
        trials = [
            Pending(combo=combo("a1", "b1", "c1")),
            Failure(combo=combo("a1", "b3", "c1")),
        ]
        section = build_matrix(wide_domain, trials, "b1")
        assert section.cell("a1", "c1").status == CellStatus.GLOBAL_FAILURE

    def test_other_b_successes_ignored(self, wide_domain: Domain):
        """Test successes under another B value do not show."""
        trials = [Success(combo=combo("a1", "b2", "c1"), label="Elixir")]
        section = build_matrix(wide_domain, trials, "b1")
        assert section.cell("a1", "c1").status == CellStatus.EMPTY

    def test_policy_hides_global_failures(self, wide_domain: Domain):
        """Test global failures can be switched off."""
        trials = [
            Pending(combo=combo("a1", "b1", "c1")),
            Failure(combo=combo("a1", "b3", "c1")),
        ]
        policy = MatrixPolicy(show_global_failures=False)
        section = build_matrix(wide_domain, trials, "b1", policy)
        assert section.cell("a1", "c1").status == CellStatus.PENDING

    def test_policy_custom_precedence(self, wide_domain: Domain):
        """Test a reordered precedence changes the winner."""
        trials = [
            Pending(combo=combo("a1", "b1", "c1")),
            Failure(combo=combo("a1", "b3", "c1")),
        ]
        policy = MatrixPolicy.from_names(["pending", "global_failure"])
        section = build_matrix(wide_domain, trials, "b1", policy)
        assert section.cell("a1", "c1").status == CellStatus.PENDING

    def test_policy_rejects_bad_names(self):
        """Test invalid precedence entries."""
        with pytest.raises(ValueError, match="Unknown matrix status"):
            _ = MatrixPolicy.from_names(["success", "bogus"])
        with pytest.raises(ValueError, match="twice"):
            _ = MatrixPolicy.from_names(["success", "success"])
        with pytest.raises(ValueError, match="empty"):
            _ = MatrixPolicy.from_names(["empty"])

    def test_unknown_b(self, wide_domain: Domain):
        """Test slicing on a value outside Dimension B."""
        with pytest.raises(DomainError, match="Unknown organ"):
            _ = build_matrix(wide_domain, [], "b9")

    def test_counts(self, engine: ResearchEngine):
        """Test per-status counts through the engine."""
        _ = engine.commit("failure", combo("x1", "y1", "z1"))
        section = engine.matrix("y2")
        assert section.count(CellStatus.GLOBAL_FAILURE) == 1
        assert section.cell("x1", "z1").text() == "global failure"


class TestUntestedPairs:
    """Tests for the untested (A, C) report."""

    def test_all_untested(self, domain: Domain):
        """Test an empty log leaves every pair untested."""
        assert untested_pairs(domain, []) == [
            ("x1", "z1"),
            ("x1", "z2"),
            ("x2", "z1"),
            ("x2", "z2"),
        ]

    def test_any_kind_counts(self, domain: Domain):
        """Test every trial kind marks its pair as tested."""
        trials = [
            Pending(combo=combo("x1", "y1", "z1")),
            Hint(combo=combo("x2", "y2", "z2"), label="Tonic"),
        ]
        assert untested_pairs(domain, trials) == [("x1", "z2"), ("x2", "z1")]

    def test_b_is_irrelevant(self, domain: Domain):
        """Test a pair tried under any B value counts."""
        trials = [Failure(combo=combo("x1", "y2", "z1"))]
        assert ("x1", "z1") not in untested_pairs(domain, trials)

    def test_focus_excludes_used_values(self, wide_domain: Domain):
        """Test focus drops pairs whose A or C was used with that B value."""
        trials = [
            Failure(combo=combo("a1", "b1", "c1")),
            Failure(combo=combo("a2", "b2", "c2")),
        ]
        focused = untested_pairs(wide_domain, trials, focus="b1")
        assert focused == [
            ("a2", "c3"),
            ("a3", "c2"),
            ("a3", "c3"),
        ]

    def test_focus_unknown(self, domain: Domain):
        """Test focusing on an unknown B value."""
        with pytest.raises(DomainError):
            _ = untested_pairs(domain, [], focus="nope")
