# Copyright (c) Syntropy Systems
"""Candidate reduction: which combos are still possible given the trial log."""

from __future__ import annotations

from typing import TYPE_CHECKING

from potionlab.domain import match_count
from potionlab.models.trial import Failure, Hint, Pending, Success

if TYPE_CHECKING:
    from collections.abc import Iterable

    from potionlab.domain import Domain
    from potionlab.models.trial import Combo, Trial

# A combo sharing this many positions with a failed combo is eliminated too.
FAILURE_MATCH_THRESHOLD = 2


def reduce_candidates(domain: Domain, trials: Iterable[Trial]) -> list[Combo]:
    """Rebuild the candidate set from the full universe and every trial.

    Successes and hints remove their exact combo. Failures remove every
    combo with a match count of at least FAILURE_MATCH_THRESHOLD against
    the failed combo (the exact combo included). Pending trials do not
    affect candidates.

    The result keeps the domain's generation order and depends only on
    the set of trials given, never on their order.
    """
    exact: set[Combo] = set()
    failed: list[Combo] = []

    for trial in trials:
        if isinstance(trial, (Success, Hint)):
            exact.add(trial.combo)
        elif isinstance(trial, Failure):
            failed.append(trial.combo)
        elif isinstance(trial, Pending):
            continue
        else:
            msg = f"Unknown trial type: {type(trial).__name__}"
            raise TypeError(msg)

    return [
        combo
        for combo in domain.combos()
        if combo not in exact
        and all(match_count(combo, dead) < FAILURE_MATCH_THRESHOLD for dead in failed)
    ]


def is_candidate(
    candidates: Iterable[Combo],
    a: str | None = None,
    b: str | None = None,
    c: str | None = None,
) -> bool:
    """Whether any candidate agrees with every attribute given."""
    return any(
        (a is None or combo.a == a)
        and (b is None or combo.b == b)
        and (c is None or combo.c == c)
        for combo in candidates
    )
