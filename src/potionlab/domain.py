# Copyright (c) Syntropy Systems
"""The fixed universe of combos and the domain.yaml loader."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

import yaml
from pydantic import Field, PrivateAttr, model_validator
from pydantic import ValidationError as PydanticValidationError
from typing_extensions import override

from potionlab.errors import DomainError
from potionlab.models.base import PotionlabBaseModel
from potionlab.models.trial import Combo

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

DIMENSIONS: tuple[str, str, str] = ("a", "b", "c")
DEFAULT_NAMES: dict[str, str] = {"a": "metal", "b": "organ", "c": "herb"}


def generate_combos(
    a_values: Sequence[str],
    b_values: Sequence[str],
    c_values: Sequence[str],
) -> list[Combo]:
    """Enumerate the full cross product, A outer, B middle, C inner."""
    return [
        Combo(a=a, b=b, c=c)
        for a in a_values
        for b in b_values
        for c in c_values
    ]


def match_count(x: Combo, y: Combo) -> int:
    """Number of positions (0-3) where the two combos agree."""
    return (x.a == y.a) + (x.b == y.b) + (x.c == y.c)


class Domain(PotionlabBaseModel):
    """Three ordered value lists, fixed for the session.

    Order is significant and is never re-sorted. Values must be distinct
    non-empty strings and no list may be empty.
    """

    a: list[str]
    b: list[str]
    c: list[str]
    names: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_NAMES))
    # Dimension C value -> seasons it can be picked in
    seasons: dict[str, list[str]] = Field(default_factory=dict)

    _combos: list[Combo] = PrivateAttr(default_factory=list)

    @model_validator(mode="after")
    def _check_values(self) -> Domain:
        for dimension in DIMENSIONS:
            values = self.values(dimension)
            label = self.name_of(dimension)
            if not values:
                msg = f"Dimension '{label}' has no values"
                raise ValueError(msg)
            for value in values:
                if not value or not value.strip():
                    msg = f"Dimension '{label}' contains an empty value"
                    raise ValueError(msg)
            seen: set[str] = set()
            dupes: list[str] = []
            for value in values:
                if value in seen and value not in dupes:
                    dupes.append(value)
                seen.add(value)
            if dupes:
                msg = f"Dimension '{label}' has duplicate values: {', '.join(dupes)}"
                raise ValueError(msg)
        return self

    @override
    def model_post_init(self, __context: object, /) -> None:
        merged = dict(DEFAULT_NAMES)
        merged.update(self.names)
        self.names = merged
        self._combos = generate_combos(self.a, self.b, self.c)

    @classmethod
    def create(
        cls,
        a: Sequence[str],
        b: Sequence[str],
        c: Sequence[str],
        **kwargs: object,
    ) -> Domain:
        """Build a domain, reporting bad input as DomainError."""
        try:
            return cls.model_validate({"a": list(a), "b": list(b), "c": list(c), **kwargs})
        except PydanticValidationError as e:
            raise DomainError(_first_error(e)) from e

    def values(self, dimension: str) -> list[str]:
        """Ordered values of dimension 'a', 'b' or 'c'."""
        if dimension not in DIMENSIONS:
            msg = f"Unknown dimension: {dimension!r}"
            raise KeyError(msg)
        return cast("list[str]", getattr(self, dimension))

    def name_of(self, dimension: str) -> str:
        """Display name of a dimension (metal, organ, herb by default)."""
        return self.names.get(dimension, DEFAULT_NAMES[dimension])

    def combos(self) -> list[Combo]:
        """The whole universe in generation order."""
        return list(self._combos)

    def size(self) -> int:
        return len(self._combos)

    def contains(self, combo: Combo) -> bool:
        return combo.a in self.a and combo.b in self.b and combo.c in self.c

    def require_value(self, dimension: str, value: str) -> None:
        """Raise DomainError if value is not part of the dimension."""
        if value not in self.values(dimension):
            msg = f"Unknown {self.name_of(dimension)}: {value!r}"
            raise DomainError(msg)


def _first_error(error: Exception) -> str:
    if isinstance(error, PydanticValidationError):
        errors = error.errors()
        if errors:
            message = str(errors[0].get("msg", error))
            return message.removeprefix("Value error, ")
    return str(error)


def _parse_values(raw: object, label: str, seasons: dict[str, list[str]]) -> list[str]:
    if not isinstance(raw, list):
        msg = f"Expected a list of values for '{label}'"
        raise DomainError(msg)
    values: list[str] = []
    for item in cast("list[object]", raw):
        if isinstance(item, dict):
            item_dict = cast("dict[str, object]", item)
            name = item_dict.get("name")
            if not isinstance(name, str):
                msg = f"Entry in '{label}' is missing a name"
                raise DomainError(msg)
            item_seasons = item_dict.get("seasons")
            if isinstance(item_seasons, list):
                seasons[name] = [
                    str(s).lower() for s in cast("list[object]", item_seasons) if s
                ]
            values.append(name)
        elif isinstance(item, (str, int, float)):
            values.append(str(item))
        else:
            msg = f"Unsupported entry in '{label}': {item!r}"
            raise DomainError(msg)
    return values


def parse_domain(data: dict[str, object]) -> Domain:
    """Build a Domain from the decoded contents of domain.yaml.

    Each dimension's list is looked up under its display name first
    (metal, organ, herb unless overridden under 'dimensions') and then
    under its letter. Entries are plain strings or mappings with a 'name'
    and optional 'seasons'.
    """
    names = dict(DEFAULT_NAMES)
    raw_names = data.get("dimensions")
    if isinstance(raw_names, dict):
        for key, value in cast("dict[str, object]", raw_names).items():
            if key in DIMENSIONS and isinstance(value, str) and value:
                names[key] = value

    seasons: dict[str, list[str]] = {}
    lists: dict[str, list[str]] = {}
    for dimension in DIMENSIONS:
        label = names[dimension]
        raw = data.get(label, data.get(dimension))
        if raw is None:
            msg = f"domain is missing values for '{label}'"
            raise DomainError(msg)
        # Only dimension C carries seasons
        target = seasons if dimension == "c" else {}
        lists[dimension] = _parse_values(raw, label, target)

    return Domain.create(
        lists["a"], lists["b"], lists["c"], names=names, seasons=seasons
    )


def load_domain(path: Path) -> Domain:
    """Load a Domain from a domain.yaml file."""
    if not path.exists():
        msg = f"Domain file not found: {path}"
        raise DomainError(msg)
    with path.open() as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {path}: {e}"
            raise DomainError(msg) from e
    if not isinstance(data, dict):
        msg = f"Expected a mapping in {path}"
        raise DomainError(msg)
    return parse_domain(cast("dict[str, object]", data))
