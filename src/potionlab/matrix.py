# Copyright (c) Syntropy Systems
"""Cross-section of the trial log for one fixed Dimension B value."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import Field

from potionlab.errors import DomainError
from potionlab.models.base import PotionlabBaseModel
from potionlab.models.trial import Failure, Hint, Pending, Success

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from potionlab.domain import Domain
    from potionlab.models.trial import Trial


class CellStatus(str, Enum):
    """Strongest known fact about a (a, b0, c) cell."""

    SUCCESS = "success"
    HINT = "hint"
    LOCAL_FAILURE = "local_failure"
    GLOBAL_FAILURE = "global_failure"
    PENDING = "pending"
    EMPTY = "empty"


DEFAULT_PRECEDENCE: tuple[CellStatus, ...] = (
    CellStatus.SUCCESS,
    CellStatus.HINT,
    CellStatus.LOCAL_FAILURE,
    CellStatus.GLOBAL_FAILURE,
    CellStatus.PENDING,
)


@dataclass(frozen=True)
class MatrixPolicy:
    """Which facts a cell shows and which one wins.

    Statuses missing from precedence are never shown.
    """

    precedence: tuple[CellStatus, ...] = DEFAULT_PRECEDENCE
    show_global_failures: bool = True

    def __post_init__(self) -> None:
        if CellStatus.EMPTY in self.precedence:
            msg = "'empty' cannot be ranked in the matrix precedence"
            raise ValueError(msg)
        if len(set(self.precedence)) != len(self.precedence):
            msg = "Matrix precedence lists a status twice"
            raise ValueError(msg)

    @classmethod
    def from_names(
        cls, names: Sequence[str] | None = None, show_global_failures: bool = True
    ) -> MatrixPolicy:
        """Build a policy from status names such as 'success' or 'local_failure'."""
        if names is None:
            return cls(show_global_failures=show_global_failures)
        try:
            precedence = tuple(CellStatus(name) for name in names)
        except ValueError as e:
            msg = f"Unknown matrix status in precedence: {e}"
            raise ValueError(msg) from e
        return cls(precedence=precedence, show_global_failures=show_global_failures)

    def rank(self, status: CellStatus) -> int | None:
        if status == CellStatus.GLOBAL_FAILURE and not self.show_global_failures:
            return None
        if status not in self.precedence:
            return None
        return self.precedence.index(status)


class MatrixCell(PotionlabBaseModel):
    """One (a, c) cell of a cross-section."""

    a: str
    c: str
    status: CellStatus = CellStatus.EMPTY
    label: str | None = None

    def text(self) -> str:
        """Short human-readable form of the cell."""
        if self.status in (CellStatus.SUCCESS, CellStatus.HINT):
            return self.label or ""
        if self.status == CellStatus.EMPTY:
            return ""
        return self.status.value.replace("_", " ")


class CrossSection(PotionlabBaseModel):
    """Grid of cells for one B value: rows are A values, columns C values."""

    b: str
    rows: list[str]
    columns: list[str]
    cells: list[list[MatrixCell]] = Field(default_factory=list)

    def cell(self, a: str, c: str) -> MatrixCell:
        return self.cells[self.rows.index(a)][self.columns.index(c)]

    def count(self, status: CellStatus) -> int:
        return sum(1 for row in self.cells for cell in row if cell.status == status)


def _facts_for(
    trials: Iterable[Trial], b0: str, show_global: bool
) -> dict[tuple[str, str], list[tuple[CellStatus, str | None]]]:
    facts: dict[tuple[str, str], list[tuple[CellStatus, str | None]]] = {}
    for trial in trials:
        combo = trial.combo
        key = (combo.a, combo.c)
        local = combo.b == b0
        if isinstance(trial, Success):
            if local:
                facts.setdefault(key, []).append((CellStatus.SUCCESS, trial.label))
        elif isinstance(trial, Hint):
            if local:
                facts.setdefault(key, []).append((CellStatus.HINT, trial.label))
        elif isinstance(trial, Failure):
            if local:
                facts.setdefault(key, []).append((CellStatus.LOCAL_FAILURE, None))
            elif show_global:
                facts.setdefault(key, []).append((CellStatus.GLOBAL_FAILURE, None))
        elif isinstance(trial, Pending):
            if local:
                facts.setdefault(key, []).append((CellStatus.PENDING, None))
        else:
            msg = f"Unknown trial type: {type(trial).__name__}"
            raise TypeError(msg)
    return facts


def build_matrix(
    domain: Domain,
    trials: Sequence[Trial],
    b0: str,
    policy: MatrixPolicy | None = None,
) -> CrossSection:
    """Annotate every (a, c) pair with the strongest fact about (a, b0, c).

    A global failure is a failure recorded with the same a and c but a
    different b: the pair is dead by the match-count rule without having
    been tried with b0 itself.
    """
    if b0 not in domain.b:
        msg = f"Unknown {domain.name_of('b')}: {b0!r}"
        raise DomainError(msg)
    policy = policy or MatrixPolicy()
    facts = _facts_for(trials, b0, policy.show_global_failures)

    cells: list[list[MatrixCell]] = []
    for a in domain.a:
        row: list[MatrixCell] = []
        for c in domain.c:
            best: tuple[int, CellStatus, str | None] | None = None
            for status, label in facts.get((a, c), []):
                rank = policy.rank(status)
                if rank is None:
                    continue
                if best is None or rank < best[0]:
                    best = (rank, status, label)
            if best is None:
                row.append(MatrixCell(a=a, c=c))
            else:
                row.append(MatrixCell(a=a, c=c, status=best[1], label=best[2]))
        cells.append(row)

    return CrossSection(b=b0, rows=list(domain.a), columns=list(domain.c), cells=cells)
