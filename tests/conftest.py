"""
Pytest configuration for sportradar-stats tests.

Provides an isolated Settings instance, an in-memory stand-in for the
SportRadar client, and a scripted prompter so the wizard can run without
a terminal or network.
"""

from __future__ import annotations

import asyncio
from typing import Any, Iterable, Optional, Sequence

import pytest

from sportradar_stats.core.config import Settings
from sportradar_stats.core.http import ExternalAPIError
from sportradar_stats.core.models import (
    Competition,
    CompetitorStatisticsResponse,
    Season,
    Sport,
    SportEvent,
    Team,
)

SOCCER = Sport(id="sr:sport:1", name="Soccer")


def competition(id: str, name: str, country: str) -> Competition:
    return Competition.model_validate(
        {"id": id, "name": name, "category": {"id": f"sr:category:{country}", "name": country}}
    )


def season(id: str, name: str, disabled: bool = False) -> Season:
    return Season(id=id, name=name, disabled=disabled)


def team(id: str, name: str) -> Team:
    return Team(id=id, name=name)


def event(id: str, *competitors: Team) -> SportEvent:
    return SportEvent(id=id, competitors=competitors)


def stats_response(
    team_id: str,
    team_name: str,
    players: Iterable[tuple[str, str, int, int]],
) -> CompetitorStatisticsResponse:
    """Build a competitor statistics payload from (id, name, goals, assists) rows."""
    return CompetitorStatisticsResponse.model_validate(
        {
            "competitor": {
                "id": team_id,
                "name": team_name,
                "players": [
                    {
                        "id": player_id,
                        "name": name,
                        "statistics": {"goals_scored": goals, "assists": assists},
                    }
                    for player_id, name, goals, assists in players
                ],
            }
        }
    )


class FakeSportRadar:
    """In-memory client exposing the same fetch methods as SportRadarClient."""

    def __init__(
        self,
        competitions: Sequence[Competition] = (),
        seasons: Sequence[Season] = (),
        events: Sequence[SportEvent] = (),
        statistics: Optional[dict[str, CompetitorStatisticsResponse]] = None,
        failing: Iterable[str] = (),
    ):
        self.competitions = list(competitions)
        self.seasons = list(seasons)
        self.events = list(events)
        self.statistics = statistics or {}
        self.failing = set(failing)
        self.calls: list[tuple[str, ...]] = []

    async def __aenter__(self) -> "FakeSportRadar":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    async def fetch_competitions(self, sport: Sport) -> list[Competition]:
        self.calls.append(("competitions", sport.id))
        return list(self.competitions)

    async def fetch_seasons(self, sport: Sport, competition_id: str) -> list[Season]:
        self.calls.append(("seasons", competition_id))
        return list(self.seasons)

    async def fetch_sport_events(self, sport: Sport, season_id: str) -> list[SportEvent]:
        self.calls.append(("schedules", season_id))
        return list(self.events)

    async def fetch_competitor_statistics(
        self, sport: Sport, season_id: str, competitor_id: str
    ) -> CompetitorStatisticsResponse:
        self.calls.append(("statistics", season_id, competitor_id))
        await asyncio.sleep(0)
        if competitor_id in self.failing or competitor_id not in self.statistics:
            raise ExternalAPIError(f"HTTP 500 for competitor {competitor_id}")
        return self.statistics[competitor_id]


class ScriptedPrompter:
    """
    Prompter that replays fixed answers.

    ``choices`` entries are matched against each option's name or display
    text; ``numbers`` and ``confirmations`` are consumed in order.
    """

    def __init__(
        self,
        choices: Sequence[Any] = (),
        numbers: Sequence[int] = (),
        confirmations: Sequence[bool] = (),
    ):
        self.choices = list(choices)
        self.numbers = list(numbers)
        self.confirmations = list(confirmations)
        self.offered: list[tuple[str, list[Any]]] = []

    def select_one(self, message: str, options: Sequence[Any]) -> Any:
        self.offered.append((message, list(options)))
        wanted = self.choices.pop(0)
        for option in options:
            if wanted == option or wanted in (getattr(option, "name", None), str(option)):
                return option
        raise AssertionError(f"{wanted!r} not offered for {message!r}: {options}")

    def select_number(self, message: str) -> int:
        return self.numbers.pop(0)

    def confirm(self, message: str) -> bool:
        return self.confirmations.pop(0)


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any local .env file."""
    return Settings(
        _env_file=None,
        api_base_url="https://api.example.test",
        api_key="test-key",
        access_level="trial",
        api_version="v4",
        language_code="en",
        response_format="json",
        requests_per_minute=60000,
        max_retries=1,
        allowed_competitions=["Premier League", "Serie A"],
        allowed_countries=["England", "Italy"],
        display_limit=10,
    )


@pytest.fixture
def soccer() -> Sport:
    return SOCCER
