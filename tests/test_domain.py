# Copyright (c) Syntropy Systems
"""Tests for the domain generator and domain.yaml loading."""

from pathlib import Path

import pytest
import yaml

from potionlab.domain import Domain, generate_combos, load_domain, match_count, parse_domain
from potionlab.errors import DomainError
from potionlab.models.trial import Combo


class TestGenerateCombos:
    """Tests for the cross product."""

    def test_order_is_a_outer_b_middle_c_inner(self):
        """Test combos come out A outer, B middle, C inner."""
        combos = generate_combos(["x1", "x2"], ["y1", "y2"], ["z1", "z2"])
        assert [c.as_tuple() for c in combos] == [
            ("x1", "y1", "z1"),
            ("x1", "y1", "z2"),
            ("x1", "y2", "z1"),
            ("x1", "y2", "z2"),
            ("x2", "y1", "z1"),
            ("x2", "y1", "z2"),
            ("x2", "y2", "z1"),
            ("x2", "y2", "z2"),
        ]

    def test_input_order_is_kept(self):
        """Test the generator never sorts its inputs."""
        combos = generate_combos(["b", "a"], ["y"], ["z"])
        assert [c.a for c in combos] == ["b", "a"]

    def test_reproducible(self):
        """Test the same lists give the same sequence."""
        first = generate_combos(["a", "b"], ["c"], ["d", "e"])
        second = generate_combos(["a", "b"], ["c"], ["d", "e"])
        assert first == second


class TestMatchCount:
    """Tests for positional agreement."""

    def test_counts(self):
        """Test match counts from 0 to 3."""
        base = Combo(a="x1", b="y1", c="z1")
        assert match_count(base, Combo(a="x1", b="y1", c="z1")) == 3
        assert match_count(base, Combo(a="x1", b="y1", c="z2")) == 2
        assert match_count(base, Combo(a="x1", b="y2", c="z2")) == 1
        assert match_count(base, Combo(a="x2", b="y2", c="z2")) == 0

    def test_combo_equality_is_by_value(self):
        """Test combos are value types."""
        assert Combo(a="x", b="y", c="z") == Combo(a="x", b="y", c="z")
        assert len({Combo(a="x", b="y", c="z"), Combo(a="x", b="y", c="z")}) == 1

    def test_combo_accepts_legacy_field_names(self):
        """Test metal/organ/herb load as a/b/c."""
        combo = Combo.model_validate({"metal": "Iron", "organ": "Heart", "herb": "Sage"})
        assert combo.as_tuple() == ("Iron", "Heart", "Sage")


class TestDomain:
    """Tests for Domain validation and helpers."""

    def test_size_and_combos(self, domain: Domain):
        """Test the universe size."""
        assert domain.size() == 8
        assert len(domain.combos()) == 8

    def test_empty_dimension_rejected(self):
        """Test an empty list is rejected at the boundary."""
        with pytest.raises(DomainError, match="no values"):
            _ = Domain.create(["x"], [], ["z"])

    def test_duplicate_values_rejected(self):
        """Test duplicate values within a dimension are rejected."""
        with pytest.raises(DomainError, match="duplicate"):
            _ = Domain.create(["x", "x"], ["y"], ["z"])

    def test_blank_value_rejected(self):
        """Test blank values are rejected."""
        with pytest.raises(DomainError, match="empty value"):
            _ = Domain.create(["x", " "], ["y"], ["z"])

    def test_default_names(self, domain: Domain):
        """Test dimensions default to metal/organ/herb."""
        assert domain.name_of("a") == "metal"
        assert domain.name_of("b") == "organ"
        assert domain.name_of("c") == "herb"

    def test_contains(self, domain: Domain):
        """Test domain membership of combos."""
        assert domain.contains(Combo(a="x1", b="y2", c="z1"))
        assert not domain.contains(Combo(a="x9", b="y2", c="z1"))

    def test_require_value(self, domain: Domain):
        """Test unknown values raise DomainError."""
        domain.require_value("b", "y1")
        with pytest.raises(DomainError, match="Unknown organ"):
            domain.require_value("b", "nope")


class TestLoadDomain:
    """Tests for domain.yaml parsing."""

    def test_parse_with_seasons(self):
        """Test mapping entries with seasons."""
        domain = parse_domain(
            {
                "metal": ["Iron"],
                "organ": ["Heart"],
                "herb": ["Moss", {"name": "Sage", "seasons": ["Spring", "summer"]}],
            }
        )
        assert domain.c == ["Moss", "Sage"]
        assert domain.seasons == {"Sage": ["spring", "summer"]}

    def test_parse_custom_dimension_names(self):
        """Test renamed dimensions are looked up by their names."""
        domain = parse_domain(
            {
                "dimensions": {"a": "color", "b": "shape", "c": "size"},
                "color": ["red"],
                "shape": ["round", "square"],
                "size": ["big"],
            }
        )
        assert domain.name_of("a") == "color"
        assert domain.b == ["round", "square"]

    def test_parse_letter_keys(self):
        """Test the a/b/c keys work as a fallback."""
        domain = parse_domain({"a": ["1"], "b": ["2"], "c": ["3"]})
        assert domain.size() == 1

    def test_missing_dimension(self):
        """Test a missing list is reported."""
        with pytest.raises(DomainError, match="herb"):
            _ = parse_domain({"metal": ["Iron"], "organ": ["Heart"]})

    def test_load_file(self, temp_dir: Path):
        """Test loading from a file."""
        path = temp_dir / "domain.yaml"
        path.write_text(yaml.dump({"metal": ["a"], "organ": ["b"], "herb": ["c", "d"]}))
        domain = load_domain(path)
        assert domain.size() == 2

    def test_load_missing_file(self, temp_dir: Path):
        """Test a missing file raises DomainError."""
        with pytest.raises(DomainError, match="not found"):
            _ = load_domain(temp_dir / "nope.yaml")

    def test_load_not_a_mapping(self, temp_dir: Path):
        """Test a YAML list is rejected."""
        path = temp_dir / "domain.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(DomainError, match="mapping"):
            _ = load_domain(path)
