# Copyright (c) Syntropy Systems
"""The research engine: owner of the trial log and the candidate cache.

Every mutation goes through ResearchEngine and is followed, in the same
call, by a full recompute of the candidate set. The candidate set is never
persisted; it can always be rebuilt from the domain and the trial log.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from pydantic import ValidationError as PydanticValidationError

from potionlab.domain import DIMENSIONS
from potionlab.errors import BackupImportError, TrialNotFoundError, ValidationError
from potionlab.matrix import build_matrix
from potionlab.models.trial import (
    DEFINITIVE_KINDS,
    TRIAL_KINDS,
    Combo,
    Failure,
    Hint,
    Pending,
    Success,
    Trial,
    TrialState,
)
from potionlab.recommend import Selection, option_states, recommend
from potionlab.reducer import is_candidate, reduce_candidates
from potionlab.untested import untested_pairs

if TYPE_CHECKING:
    from collections.abc import Iterable

    from potionlab.domain import Domain
    from potionlab.matrix import CrossSection, MatrixPolicy
    from potionlab.recommend import OptionState, Recommendation

logger = logging.getLogger(__name__)

StateListener = Callable[[TrialState], None]


def validate_log(trials: Iterable[Trial]) -> None:
    """Check trial log invariants, raising ValidationError on the first breach.

    Ids must be unique across all kinds, and a combo may carry at most one
    definitive outcome (success, hint or failure).
    """
    ids: set[str] = set()
    settled: dict[Combo, str] = {}
    for trial in trials:
        if trial.id in ids:
            msg = f"Duplicate trial id: {trial.id}"
            raise ValidationError(msg)
        ids.add(trial.id)
        if trial.kind in DEFINITIVE_KINDS:
            previous = settled.get(trial.combo)
            if previous is not None:
                msg = f"{trial.combo} is recorded as both {previous} and {trial.kind}"
                raise ValidationError(msg)
            settled[trial.combo] = trial.kind


class ResearchEngine:
    """Trial log plus the candidate set derived from it."""

    def __init__(
        self,
        domain: Domain,
        trials: Iterable[Trial] | None = None,
        on_change: StateListener | None = None,
    ) -> None:
        initial = list(trials or [])
        validate_log(initial)
        self._domain = domain
        self._trials: list[Trial] = initial
        self._candidates: list[Combo] = []
        self._on_change = on_change
        self.recompute()

    @classmethod
    def from_state(
        cls,
        domain: Domain,
        state: TrialState,
        on_change: StateListener | None = None,
    ) -> ResearchEngine:
        """Rebuild an engine from a persisted trial log."""
        return cls(domain, state.trials(), on_change=on_change)

    # --- Read access ---

    @property
    def domain(self) -> Domain:
        return self._domain

    @property
    def trials(self) -> list[Trial]:
        return list(self._trials)

    @property
    def candidates(self) -> list[Combo]:
        return list(self._candidates)

    def get(self, trial_id: str) -> Trial:
        for trial in self._trials:
            if trial.id == trial_id:
                return trial
        raise TrialNotFoundError(trial_id)

    def trials_of(self, kind: str) -> list[Trial]:
        return [t for t in self._trials if t.kind == kind]

    def outcome_for(self, combo: Combo) -> Trial | None:
        """The success, hint or failure recorded for combo, if any."""
        for trial in self._trials:
            if trial.kind in DEFINITIVE_KINDS and trial.combo == combo:
                return trial
        return None

    def pending_for(self, combo: Combo) -> Pending | None:
        for trial in self._trials:
            if isinstance(trial, Pending) and trial.combo == combo:
                return trial
        return None

    # --- Derived state ---

    def recompute(self) -> list[Combo]:
        """Rebuild the candidate set from the domain and the whole trial log."""
        self._candidates = reduce_candidates(self._domain, self._trials)
        logger.debug(
            "Recomputed candidates: %d of %d remain",
            len(self._candidates),
            self._domain.size(),
        )
        return self.candidates

    def is_candidate(
        self, a: str | None = None, b: str | None = None, c: str | None = None
    ) -> bool:
        return is_candidate(self._candidates, a=a, b=b, c=c)

    def recommend(self, selection: Selection) -> Recommendation:
        return recommend(self._domain, self._candidates, self._trials, selection)

    def option_states(self, selection: Selection, dimension: str) -> list[OptionState]:
        return option_states(
            self._domain, self._candidates, self._trials, selection, dimension
        )

    def matrix(self, b0: str, policy: MatrixPolicy | None = None) -> CrossSection:
        return build_matrix(self._domain, self._trials, b0, policy)

    def untested(self, focus: str | None = None) -> list[tuple[str, str]]:
        return untested_pairs(self._domain, self._trials, focus)

    # --- Mutations ---

    def commit(self, kind: str, combo: Combo, label: str | None = None) -> Trial:
        """Record an outcome (or a pending test) for combo.

        A definitive outcome for a pending combo replaces the pending entry
        in the same step. Nothing changes when validation fails.
        """
        if kind not in TRIAL_KINDS:
            msg = f"Unknown trial kind: {kind!r} (expected one of {', '.join(TRIAL_KINDS)})"
            raise ValidationError(msg)
        self._check_combo(combo)

        clean_label = (label or "").strip()
        if kind in ("success", "hint") and not clean_label:
            msg = f"A {kind} needs a recipe name"
            raise ValidationError(msg)

        existing = self.outcome_for(combo)
        if existing is not None:
            msg = f"{combo} is already recorded as {existing.kind}"
            raise ValidationError(msg)

        pending = self.pending_for(combo)
        if kind == "pending" and pending is not None:
            msg = f"{combo} is already pending"
            raise ValidationError(msg)

        trial: Trial
        if kind == "success":
            trial = Success(combo=combo, label=clean_label)
        elif kind == "hint":
            trial = Hint(combo=combo, label=clean_label)
        elif kind == "failure":
            trial = Failure(combo=combo)
        else:
            trial = Pending(combo=combo)

        remaining = self._trials
        if pending is not None:
            remaining = [t for t in self._trials if t.id != pending.id]
            logger.info("Resolved pending %s as %s", combo, kind)
        self._apply([*remaining, trial])
        logger.info("Committed %s for %s (id=%s)", kind, combo, trial.id)
        return trial

    def resolve(self, pending_id: str, kind: str, label: str | None = None) -> Trial:
        """Turn a pending trial into a success, hint or failure."""
        trial = self.get(pending_id)
        if not isinstance(trial, Pending):
            msg = f"Trial '{pending_id}' is a {trial.kind}, not pending"
            raise ValidationError(msg)
        if kind not in DEFINITIVE_KINDS:
            msg = f"A pending trial resolves to success, hint or failure, not {kind!r}"
            raise ValidationError(msg)
        return self.commit(kind, trial.combo, label)

    def remove(self, trial_id: str) -> Trial:
        """Delete a trial by id and rebuild the candidate set."""
        trial = self.get(trial_id)
        self._apply([t for t in self._trials if t.id != trial_id])
        logger.info("Removed %s for %s (id=%s)", trial.kind, trial.combo, trial_id)
        return trial

    def replace(self, state: TrialState) -> None:
        """Swap in a whole new trial log, validated before anything changes."""
        trials = state.trials()
        validate_log(trials)
        self._apply(trials)

    # --- Serialization ---

    def serialize(self) -> TrialState:
        return TrialState.from_trials(self._trials)

    def export_backup(self) -> str:
        """Backup text for the whole trial log."""
        return self.serialize().model_dump_json(indent=2)

    def import_backup(self, text: str) -> TrialState:
        """Replace the trial log with a backup, or raise and change nothing."""
        try:
            state = TrialState.model_validate_json(text)
        except PydanticValidationError as e:
            msg = f"Invalid backup data: {e.error_count()} problem(s), first: {_first_problem(e)}"
            raise BackupImportError(msg) from e
        try:
            self.replace(state)
        except ValidationError as e:
            msg = f"Invalid backup data: {e}"
            raise BackupImportError(msg) from e

        outside = [t for t in self._trials if not self._domain.contains(t.combo)]
        if outside:
            logger.warning(
                "Imported %d trial(s) with values outside the domain", len(outside)
            )
        logger.info("Imported backup with %d trial(s)", len(self._trials))
        return state

    # --- Internals ---

    def _check_combo(self, combo: Combo) -> None:
        missing = [self._domain.name_of(d) for d in DIMENSIONS if not combo.get(d)]
        if missing:
            msg = f"Select all three ingredients first (missing: {', '.join(missing)})"
            raise ValidationError(msg)
        for dimension in DIMENSIONS:
            value = combo.get(dimension)
            if value not in self._domain.values(dimension):
                msg = f"Unknown {self._domain.name_of(dimension)}: {value!r}"
                raise ValidationError(msg)

    def _apply(self, trials: list[Trial]) -> None:
        # Listener runs before the swap: a failed save leaves the engine as it was.
        candidates = reduce_candidates(self._domain, trials)
        if self._on_change is not None:
            self._on_change(TrialState.from_trials(trials))
        self._trials, self._candidates = trials, candidates
        logger.debug(
            "Recomputed candidates: %d of %d remain",
            len(candidates),
            self._domain.size(),
        )


def _first_problem(error: PydanticValidationError) -> str:
    errors = error.errors()
    if not errors:
        return str(error)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = str(first.get("msg", ""))
    return f"{location}: {message}" if location else message
