# Copyright (c) Syntropy Systems
"""Pydantic models for combos, trials and the persisted trial log."""

from __future__ import annotations

import uuid
from typing import Annotated, Literal, Union

from pydantic import AliasChoices, Field, StringConstraints, field_validator
from typing_extensions import TypeAlias, override

from .base import FrozenModel, PotionlabBaseModel

TrialKind: TypeAlias = Literal["success", "hint", "failure", "pending"]

TRIAL_KINDS: tuple[TrialKind, ...] = ("success", "hint", "failure", "pending")

# Kinds that settle a combo for good; at most one per combo.
DEFINITIVE_KINDS: frozenset[str] = frozenset({"success", "hint", "failure"})

# Recipe names are stored stripped and may not be blank.
Label: TypeAlias = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def new_trial_id() -> str:
    """Generate a fresh trial id."""
    return uuid.uuid4().hex


class Combo(FrozenModel):
    """One value from each of the three dimensions.

    Older payloads name the fields metal/organ/herb; both spellings load.
    """

    a: str = Field(validation_alias=AliasChoices("a", "metal"))
    b: str = Field(validation_alias=AliasChoices("b", "organ"))
    c: str = Field(validation_alias=AliasChoices("c", "herb"))

    def get(self, dimension: str) -> str:
        """Return the value for dimension 'a', 'b' or 'c'."""
        if dimension not in ("a", "b", "c"):
            msg = f"Unknown dimension: {dimension!r}"
            raise KeyError(msg)
        return getattr(self, dimension)

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.a, self.b, self.c)

    @override
    def __str__(self) -> str:
        return f"{self.a} + {self.b} + {self.c}"


class _TrialBase(FrozenModel):
    id: str = Field(default_factory=new_trial_id)
    combo: Combo


class Success(_TrialBase):
    """Combo confirmed to produce the named recipe."""

    kind: Literal["success"] = "success"
    label: Label = Field(validation_alias=AliasChoices("label", "name"))


class Hint(_TrialBase):
    """Combo confirmed close to the named recipe, but not a match."""

    kind: Literal["hint"] = "hint"
    label: Label = Field(validation_alias=AliasChoices("label", "name"))


class Failure(_TrialBase):
    """Combo confirmed to produce nothing."""

    kind: Literal["failure"] = "failure"


class Pending(_TrialBase):
    """Combo queued for testing, outcome unknown."""

    kind: Literal["pending"] = "pending"


Trial: TypeAlias = Annotated[
    Union[Success, Hint, Failure, Pending],
    Field(discriminator="kind"),
]


class TrialState(PotionlabBaseModel):
    """Persisted shape of the trial log, one list per kind.

    The legacy keys potions/closeHints/nothingTried/inFlask are accepted on load.
    """

    successes: list[Success] = Field(
        default_factory=list,
        validation_alias=AliasChoices("successes", "potions"),
    )
    hints: list[Hint] = Field(
        default_factory=list,
        validation_alias=AliasChoices("hints", "closeHints"),
    )
    failures: list[Failure] = Field(
        default_factory=list,
        validation_alias=AliasChoices("failures", "nothingTried"),
    )
    pending: list[Pending] = Field(
        default_factory=list,
        validation_alias=AliasChoices("pending", "inFlask"),
    )

    @field_validator("successes", "hints", "failures", "pending", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        if value is None:
            return []
        return value

    @classmethod
    def from_trials(cls, trials: list[Trial]) -> TrialState:
        """Group a flat trial list into the persisted shape, keeping order."""
        state = cls()
        for trial in trials:
            if isinstance(trial, Success):
                state.successes.append(trial)
            elif isinstance(trial, Hint):
                state.hints.append(trial)
            elif isinstance(trial, Failure):
                state.failures.append(trial)
            elif isinstance(trial, Pending):
                state.pending.append(trial)
            else:
                msg = f"Unknown trial type: {type(trial).__name__}"
                raise TypeError(msg)
        return state

    def trials(self) -> list[Trial]:
        """Flatten into one list: successes, hints, failures, then pending."""
        return [*self.successes, *self.hints, *self.failures, *self.pending]
