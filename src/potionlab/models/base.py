# Copyright (c) Syntropy Systems
"""Shared Pydantic model helpers for potionlab."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class PotionlabBaseModel(BaseModel):
    """Base model with shared config for potionlab schemas."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )


class FrozenModel(BaseModel):
    """Base model for immutable, hashable value records."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )
