"""
Pydantic models for SportRadar entities.

These models are used for:
- Validating SportRadar payloads (unknown fields are dropped)
- Immutable, hashable domain values kept in sets and maps by the services
- Display text for the interactive prompts

Wire quirks handled here: a competition's country arrives as ``category``,
and a player's goals arrive as ``goals_scored``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class DomainModel(BaseModel):
    """Frozen base: instances are hashable and compare by all fields."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


# =============================================================================
# Catalog entities
# =============================================================================


class Sport(DomainModel):
    id: str
    name: str

    @property
    def canonical_name(self) -> str:
        """Lower-cased name, as used in API URLs."""
        return self.name.lower()

    def __str__(self) -> str:
        return self.name


class Country(DomainModel):
    id: str
    name: str

    def __str__(self) -> str:
        return self.name


class Competition(DomainModel):
    id: str
    name: str
    country: Country = Field(validation_alias=AliasChoices("category", "country"))

    @property
    def country_name(self) -> str:
        return self.country.name

    def __str__(self) -> str:
        return f"{self.name} ({self.country_name})"


class Season(DomainModel):
    id: str
    name: str
    disabled: bool = False

    @property
    def is_enabled(self) -> bool:
        return not self.disabled

    def __str__(self) -> str:
        return self.name


class Team(DomainModel):
    id: str
    name: str

    @classmethod
    def construct_from(cls, id: str, name: str) -> "Team":
        """Build a team from a bare id/name pair."""
        return cls(id=id, name=name)

    def __str__(self) -> str:
        return self.name


class SportEvent(DomainModel):
    id: str
    competitors: tuple[Team, ...] = ()


# =============================================================================
# Player statistics
# =============================================================================


class PlayerStatistics(DomainModel):
    """Goals/assists snapshot. Missing counters read as zero."""

    goals: int = Field(default=0, ge=0, validation_alias=AliasChoices("goals_scored", "goals"))
    assists: int = Field(default=0, ge=0)

    def __add__(self, other: PlayerStatistics) -> PlayerStatistics:
        if not isinstance(other, PlayerStatistics):
            return NotImplemented
        return PlayerStatistics(
            goals=self.goals + other.goals,
            assists=self.assists + other.assists,
        )


class Player(DomainModel):
    """
    A player as reported by one competitor-statistics call.

    ``statistics`` is that call's snapshot; ``season_statistics`` is the
    running total built by the aggregator. ``team`` is never read from the
    payload, the aggregator assigns it from the enclosing competitor.
    """

    id: str
    name: str
    statistics: PlayerStatistics = Field(default_factory=PlayerStatistics)
    season_statistics: PlayerStatistics = Field(default_factory=PlayerStatistics)
    team: Optional[Team] = None

    @property
    def goals(self) -> int:
        return self.statistics.goals

    @property
    def assists(self) -> int:
        return self.statistics.assists

    @property
    def season_goals(self) -> int:
        return self.season_statistics.goals

    @property
    def season_assists(self) -> int:
        return self.season_statistics.assists

    def with_team(self, team: Team) -> Player:
        return self.model_copy(update={"team": team})

    def start_season(self) -> Player:
        """First sighting: the season total is this call's snapshot."""
        return self.model_copy(update={"season_statistics": self.statistics})

    def accumulate(self, record: Player) -> Player:
        """Add ``record``'s snapshot to the season total; name and team follow ``record``."""
        return self.model_copy(
            update={
                "name": record.name,
                "team": record.team,
                "statistics": record.statistics,
                "season_statistics": self.season_statistics + record.statistics,
            }
        )

    def __str__(self) -> str:
        team_name = self.team.name if self.team else "Unknown team"
        return f"{self.name} ({team_name})"


# =============================================================================
# Response envelopes
# =============================================================================


class CompetitionsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    competitions: list[Competition]


class SeasonsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    seasons: list[Season]


class Schedule(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sport_event: SportEvent


class SchedulesResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    schedules: list[Schedule]

    @property
    def sport_events(self) -> list[SportEvent]:
        return [schedule.sport_event for schedule in self.schedules]


class CompetitorStatistics(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    players: list[Player] = Field(default_factory=list)

    @property
    def team(self) -> Team:
        return Team.construct_from(self.id, self.name)


class CompetitorStatisticsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    competitor: CompetitorStatistics
