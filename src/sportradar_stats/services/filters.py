"""Allow-list filtering of competitions and seasons. Pure, no I/O."""

from __future__ import annotations

from typing import AbstractSet, Iterable, TypeVar

from ..core.types import NamedCompetition, NamedSeason

CompetitionT = TypeVar("CompetitionT", bound=NamedCompetition)
SeasonT = TypeVar("SeasonT", bound=NamedSeason)


def filter_competitions(
    competitions: Iterable[CompetitionT],
    name_allowlist: AbstractSet[str],
    country_allowlist: AbstractSet[str],
) -> set[CompetitionT]:
    """Keep competitions whose name AND country name are both allow-listed.

    Matching is exact and case-sensitive.
    """
    return {
        competition
        for competition in competitions
        if competition.name in name_allowlist
        and competition.country_name in country_allowlist
    }


def filter_and_sort_seasons(seasons: Iterable[SeasonT]) -> list[SeasonT]:
    """Drop disabled seasons and order the rest by name, newest first.

    Seasons sharing a name keep their input order.
    """
    enabled = [season for season in seasons if season.is_enabled]
    return sorted(enabled, key=lambda season: season.name, reverse=True)
