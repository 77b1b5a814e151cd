"""
Core types for sportradar-stats.

This module provides:
- StatisticKind enum for the rankings the user can ask for
- Capability protocols the filter, aggregator and ranker are written against

The protocols are structural: any object exposing the right attributes
satisfies them, so the services never depend on the concrete pydantic models.
"""

from enum import Enum
from typing import Protocol, Sequence, runtime_checkable


class StatisticKind(str, Enum):
    """Player rankings offered by the wizard."""

    GOAL_SCORERS = "goals"
    ASSISTANTS = "assists"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]

    @property
    def unit(self) -> str:
        """Noun used when printing a ranked value, e.g. "5 goals"."""
        return self.value

    def unit_for(self, count: int) -> str:
        """``unit`` in agreement with ``count``: "1 goal", "2 goals"."""
        return self.unit[:-1] if count == 1 else self.unit

    def value_of(self, statistics: "StatisticsValues") -> int:
        """Read this kind's metric from a statistics snapshot."""
        return getattr(statistics, self.value)

    def __str__(self) -> str:
        return self.label


_KIND_LABELS = {
    StatisticKind.GOAL_SCORERS: "Top Goal Scorers",
    StatisticKind.ASSISTANTS: "Top Assistants",
}


# =============================================================================
# Capability protocols
# =============================================================================


@runtime_checkable
class HasIdentity(Protocol):
    @property
    def id(self) -> str: ...


@runtime_checkable
class HasName(Protocol):
    @property
    def name(self) -> str: ...


@runtime_checkable
class HasCountry(Protocol):
    @property
    def country_name(self) -> str: ...


@runtime_checkable
class HasEnabledFlag(Protocol):
    @property
    def is_enabled(self) -> bool: ...


class StatisticsValues(Protocol):
    @property
    def goals(self) -> int: ...

    @property
    def assists(self) -> int: ...


@runtime_checkable
class HasCompetitorList(Protocol):
    @property
    def competitors(self) -> Sequence: ...


@runtime_checkable
class HasStatistics(Protocol):
    """A player-like record carrying a per-call snapshot and a season total."""

    @property
    def statistics(self) -> StatisticsValues: ...

    @property
    def season_statistics(self) -> StatisticsValues: ...


class NamedCompetition(HasIdentity, HasName, HasCountry, Protocol):
    """What the competition allow-list filter needs."""


class NamedSeason(HasIdentity, HasName, HasEnabledFlag, Protocol):
    """What the season filter needs."""


class RankablePlayer(HasIdentity, HasStatistics, Protocol):
    """What the ranker needs."""
