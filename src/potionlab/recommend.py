# Copyright (c) Syntropy Systems
"""Per-dimension recommendations for a partial selection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field

from potionlab.domain import DIMENSIONS
from potionlab.models.base import PotionlabBaseModel
from potionlab.models.trial import Failure, Hint, Pending, Success

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from potionlab.domain import Domain
    from potionlab.models.trial import Combo, Trial

# Pinned dimensions whose hints mark a value of the keyed dimension as close.
# B only looks at A, and C only looks at B.
NEAR_MISS_SOURCES: dict[str, tuple[str, ...]] = {
    "a": ("b", "c"),
    "b": ("a",),
    "c": ("b",),
}


class Selection(PotionlabBaseModel):
    """A partial combo: any of a, b, c may be left unset."""

    a: str | None = None
    b: str | None = None
    c: str | None = None

    def get(self, dimension: str) -> str | None:
        if dimension not in DIMENSIONS:
            msg = f"Unknown dimension: {dimension!r}"
            raise KeyError(msg)
        return getattr(self, dimension)

    def pinned(self) -> dict[str, str]:
        """Fixed dimensions and their values, empty strings counting as unset."""
        return {d: v for d in DIMENSIONS if (v := self.get(d))}

    def matches(self, combo: Combo) -> bool:
        return all(combo.get(d) == v for d, v in self.pinned().items())


def _empty_lists() -> dict[str, list[str]]:
    return {d: [] for d in DIMENSIONS}


class Recommendation(PotionlabBaseModel):
    """Values worth trying next for each unfixed dimension."""

    selection: Selection
    values: dict[str, list[str]] = Field(default_factory=_empty_lists)
    forbidden: dict[str, list[str]] = Field(default_factory=_empty_lists)
    candidate_count: int = 0

    def for_dimension(self, dimension: str) -> list[str]:
        return self.values.get(dimension, [])

    def is_empty(self) -> bool:
        return not any(self.values.values())


class OptionState(PotionlabBaseModel):
    """How one domain value looks in a picker, given the current selection."""

    value: str
    recommended: bool = False
    forbidden: bool = False
    near_miss: bool = False
    resolved: bool = False


def forbidden_values(
    trials: Iterable[Trial], selection: Selection, dimension: str
) -> set[str]:
    """Values of dimension seen in failures or hints that agree with the pins.

    A failure or hint counts when every pinned attribute other than
    dimension matches it. With nothing else pinned this is every failed or
    hinted value.
    """
    pins = {d: v for d, v in selection.pinned().items() if d != dimension}
    forbidden: set[str] = set()
    for trial in trials:
        if not isinstance(trial, (Failure, Hint)):
            continue
        if all(trial.combo.get(d) == v for d, v in pins.items()):
            forbidden.add(trial.combo.get(dimension))
    return forbidden


def recommend(
    domain: Domain,
    candidates: Sequence[Combo],
    trials: Sequence[Trial],
    selection: Selection,
) -> Recommendation:
    """Suggest values for each unfixed dimension of a partial selection.

    Nothing is recommended when no attribute is pinned, or when all three
    are (the user is looking at a specific combo then). Otherwise the
    candidates are narrowed to those agreeing with the pins, and each
    unfixed dimension gets the distinct values left among them, minus
    that dimension's forbidden set, in domain order.
    """
    pins = selection.pinned()
    if not pins or len(pins) == len(DIMENSIONS):
        return Recommendation(selection=selection)

    narrowed = [combo for combo in candidates if selection.matches(combo)]
    values = _empty_lists()
    forbidden = _empty_lists()

    for dimension in DIMENSIONS:
        if dimension in pins:
            continue
        blocked = forbidden_values(trials, selection, dimension)
        present = {combo.get(dimension) for combo in narrowed}
        ordered = domain.values(dimension)
        values[dimension] = [v for v in ordered if v in present and v not in blocked]
        forbidden[dimension] = [v for v in ordered if v in blocked]

    return Recommendation(
        selection=selection,
        values=values,
        forbidden=forbidden,
        candidate_count=len(narrowed),
    )


def option_states(
    domain: Domain,
    candidates: Sequence[Combo],
    trials: Sequence[Trial],
    selection: Selection,
    dimension: str,
) -> list[OptionState]:
    """Annotate every value of one dimension for display in a picker."""
    pins = {d: v for d, v in selection.pinned().items() if d != dimension}
    recommendation = recommend(
        domain, candidates, trials, selection.model_copy(update={dimension: None})
    )
    recommended = set(recommendation.for_dimension(dimension))
    blocked = forbidden_values(trials, selection, dimension) if pins else set()

    near_pins = {d: v for d, v in pins.items() if d in NEAR_MISS_SOURCES[dimension]}
    hinted: set[str] = set()
    settled: set[tuple[str, str, str]] = set()
    for trial in trials:
        if isinstance(trial, Hint) and any(
            trial.combo.get(d) == v for d, v in near_pins.items()
        ):
            hinted.add(trial.combo.get(dimension))
        if isinstance(trial, (Success, Pending)):
            settled.add(trial.combo.as_tuple())

    states: list[OptionState] = []
    for value in domain.values(dimension):
        resolved = False
        if len(pins) == len(DIMENSIONS) - 1:
            full = {**pins, dimension: value}
            resolved = (full["a"], full["b"], full["c"]) in settled
        states.append(
            OptionState(
                value=value,
                recommended=value in recommended,
                forbidden=value in blocked,
                near_miss=value in hinted,
                resolved=resolved,
            )
        )
    return states
