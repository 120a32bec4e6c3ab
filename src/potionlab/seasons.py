# Copyright (c) Syntropy Systems
"""Season lookup for Dimension C values (herbs)."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from potionlab.domain import Domain

SEASONS: tuple[str, ...] = ("spring", "summer", "autumn", "winter", "all")


def seasons_for(domain: Domain, value: str) -> list[str]:
    """Seasons a herb can be picked in; empty when unknown."""
    return list(domain.seasons.get(value, []))


def herbs_by_season(domain: Domain) -> dict[str, list[str]]:
    """Group herbs by season, in domain order, without duplicates.

    Seasons outside SEASONS are ignored.
    """
    grouped: dict[str, list[str]] = {season: [] for season in SEASONS}
    for herb in domain.c:
        for season in domain.seasons.get(herb, []):
            bucket = grouped.get(season.lower())
            if bucket is not None and herb not in bucket:
                bucket.append(herb)
    return grouped
