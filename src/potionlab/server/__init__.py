# Copyright (c) Syntropy Systems
"""potionlab HTTP API."""

from .app import create_app
from .models import (
    BackupPayload,
    CandidatesResponse,
    DomainResponse,
    TrialCreate,
    TrialResolve,
    TrialResponse,
    UntestedResponse,
)

__all__ = [
    "BackupPayload",
    "CandidatesResponse",
    "DomainResponse",
    "TrialCreate",
    "TrialResolve",
    "TrialResponse",
    "UntestedResponse",
    "create_app",
]
