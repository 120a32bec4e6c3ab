# Copyright (c) Syntropy Systems
"""Exception hierarchy for potionlab."""


class PotionlabError(Exception):
    """Base class for all potionlab errors."""


class ValidationError(PotionlabError):
    """A commit was rejected before touching the trial log."""


class TrialNotFoundError(PotionlabError, KeyError):
    """No trial with the given id exists."""

    def __init__(self, trial_id: str) -> None:
        super().__init__(trial_id)
        self.trial_id = trial_id

    def __str__(self) -> str:
        return f"Trial '{self.trial_id}' not found"


class BackupImportError(PotionlabError):
    """A backup payload could not be parsed; nothing was applied."""


class DomainError(PotionlabError):
    """Invalid domain input or a value outside the domain."""


class ProjectNotFoundError(PotionlabError, RuntimeError):
    """No .potionlab directory could be found."""
