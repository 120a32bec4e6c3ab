# Copyright (c) Syntropy Systems
"""Report (A, C) pairs that no trial has touched yet."""

from __future__ import annotations

from typing import TYPE_CHECKING

from potionlab.errors import DomainError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from potionlab.domain import Domain
    from potionlab.models.trial import Trial


def untested_pairs(
    domain: Domain,
    trials: Sequence[Trial],
    focus: str | None = None,
) -> list[tuple[str, str]]:
    """(a, c) pairs absent from every trial, whatever its b or kind.

    With focus set to a B value, pairs are also dropped when their a or
    their c shows up in any trial recorded with that B value. Pairs come
    back in domain order, A outer and C inner.
    """
    if focus is not None and focus not in domain.b:
        msg = f"Unknown {domain.name_of('b')}: {focus!r}"
        raise DomainError(msg)

    tried = {(t.combo.a, t.combo.c) for t in trials}
    used_a: set[str] = set()
    used_c: set[str] = set()
    if focus is not None:
        for trial in trials:
            if trial.combo.b == focus:
                used_a.add(trial.combo.a)
                used_c.add(trial.combo.c)

    return [
        (a, c)
        for a in domain.a
        for c in domain.c
        if (a, c) not in tried and a not in used_a and c not in used_c
    ]
