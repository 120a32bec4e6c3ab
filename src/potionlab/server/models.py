# Copyright (c) Syntropy Systems
"""Pydantic models for the potionlab HTTP API."""

from __future__ import annotations

from pydantic import Field

from potionlab.models.base import PotionlabBaseModel
from potionlab.models.trial import Combo, Trial, TrialKind


class HealthResponse(PotionlabBaseModel):
    """Health check response."""

    status: str = "ok"
    version: str


class DomainResponse(PotionlabBaseModel):
    """The three value lists and their display names."""

    a: list[str]
    b: list[str]
    c: list[str]
    names: dict[str, str]
    size: int


class TrialCreate(PotionlabBaseModel):
    """Request to record a trial."""

    kind: TrialKind
    a: str = ""
    b: str = ""
    c: str = ""
    label: str | None = Field(None, description="Recipe name for success/hint")


class TrialResolve(PotionlabBaseModel):
    """Request to resolve a pending trial."""

    kind: TrialKind
    label: str | None = None


class TrialResponse(PotionlabBaseModel):
    """A trial plus the candidate count after the change."""

    trial: Trial
    remaining: int


class CandidatesResponse(PotionlabBaseModel):
    """Remaining candidate combos."""

    count: int
    total: int
    combos: list[Combo]


class UntestedResponse(PotionlabBaseModel):
    """Untested (a, c) pairs."""

    focus: str | None = None
    pairs: list[tuple[str, str]]


class BackupPayload(PotionlabBaseModel):
    """Backup text to import."""

    text: str
