"""
Interactive selection wizard.

Drives a SessionState through its steps, one transition per ``advance()``:
fetch what the next choice needs, filter it, ask the user, record the
answer. After the ranking is displayed the user either starts over (the
session is reset and every list is fetched again) or quits.

Fetch failures for competitions, seasons and schedules propagate out of
``run()``; only per-competitor statistics failures are tolerated (see
services.aggregator).
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Sequence, TypeVar

from ..core.config import Settings
from ..core.models import Competition, Player, Season, Sport, SportEvent
from ..core.types import StatisticKind
from ..prompts import Prompter
from .aggregator import StatisticsAggregator, StatisticsSource, collect_competitors
from .filters import filter_and_sort_seasons, filter_competitions
from .ranking import format_ranking, top_by_metric
from .session import SessionState, WizardStateError, WizardStep

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Only soccer is enabled for this deployment; there is no sports endpoint to call.
SPORT_CATALOG = (Sport(id="sr:sport:1", name="Soccer"),)


class NoOptionsError(WizardStateError):
    """A selection step has nothing to offer."""


class WizardDataSource(StatisticsSource, Protocol):
    async def fetch_competitions(self, sport: Sport) -> list[Competition]: ...

    async def fetch_seasons(self, sport: Sport, competition_id: str) -> list[Season]: ...

    async def fetch_sport_events(self, sport: Sport, season_id: str) -> list[SportEvent]: ...


class Wizard:
    """Sport -> competition -> season -> statistic kind -> limit -> ranking."""

    def __init__(
        self,
        client: WizardDataSource,
        prompter: Prompter,
        settings: Settings,
        session: Optional[SessionState] = None,
        echo: Callable[[str], None] = print,
    ):
        self.client = client
        self.prompter = prompter
        self.settings = settings
        self.session = session or SessionState()
        self.echo = echo
        self.aggregator = StatisticsAggregator(client)

        self._handlers = {
            WizardStep.NO_SPORT: self._select_sport,
            WizardStep.SPORT_CHOSEN: self._select_competition,
            WizardStep.COMPETITION_CHOSEN: self._select_season,
            WizardStep.SEASON_CHOSEN: self._select_statistic_kind,
            WizardStep.STAT_KIND_CHOSEN: self._select_limit,
            WizardStep.LIMIT_CHOSEN: self._display,
            WizardStep.DISPLAYED: self._ask_to_continue,
        }

    async def run(self) -> None:
        """Loop through the wizard until the user declines to continue."""
        while await self.advance():
            pass

    async def advance(self) -> bool:
        """Perform the current step's transition. False means the user is done."""
        step = self.session.step
        logger.debug(f"Wizard step: {step.value}")
        return await self._handlers[step]()

    # =========================================================================
    # Steps
    # =========================================================================

    def load_sports(self) -> set[Sport]:
        """The sport catalog, built once per process and kept across resets."""
        if not self.session.sports:
            self.session.set_sports(SPORT_CATALOG)
        return self.session.sports

    async def _select_sport(self) -> bool:
        sports = sorted(self.load_sports(), key=str)
        sport = self._select("Select a sport:", sports, "No sports available")
        self.session.choose_sport(sport)
        return True

    async def _select_competition(self) -> bool:
        sport = self.session.require_sport()
        fetched = await self.client.fetch_competitions(sport)
        competitions = filter_competitions(
            fetched,
            self.settings.competition_allowlist,
            self.settings.country_allowlist,
        )
        logger.info(f"{len(competitions)} of {len(fetched)} competitions allow-listed")
        self.session.set_competitions(competitions)

        competition = self._select(
            "Select a competition:",
            sorted(competitions, key=str),
            f"No allow-listed competitions for {sport}",
        )
        self.session.choose_competition(competition)
        return True

    async def _select_season(self) -> bool:
        sport = self.session.require_sport()
        competition = self.session.require_competition()
        seasons = filter_and_sort_seasons(
            await self.client.fetch_seasons(sport, competition.id)
        )
        self.session.set_seasons(seasons)

        season = self._select(
            "Select a season:", seasons, f"No enabled seasons for {competition}"
        )
        self.session.choose_season(season)
        return True

    async def _select_statistic_kind(self) -> bool:
        await self.load_season_statistics()
        kind = self._select(
            "What statistics do you want to see?", list(StatisticKind), "No statistic kinds"
        )
        self.session.choose_statistic_kind(kind)
        return True

    async def _select_limit(self) -> bool:
        limit = self.prompter.select_number("How many players do you want to see?")
        self.session.choose_limit(limit)
        return True

    async def _display(self) -> bool:
        for line in self.ranking_lines():
            self.echo(line)
        self.session.mark_displayed()
        return True

    async def _ask_to_continue(self) -> bool:
        if self.prompter.confirm("Do you want to explore other sports, competitions, or seasons?"):
            self.session.reset()
            return True
        return False

    # =========================================================================
    # Helpers
    # =========================================================================

    async def load_season_statistics(self) -> None:
        """Fetch the season's events, derive competitors, aggregate player totals."""
        sport = self.session.require_sport()
        season = self.session.require_season()

        events = await self.client.fetch_sport_events(sport, season.id)
        competitors = collect_competitors(events)
        result = await self.aggregator.aggregate(sport, season, competitors)
        self.session.set_statistics(events, competitors, result.players)

    def ranked_players(self) -> list[Player]:
        if self.session.statistic_kind is None:
            raise WizardStateError("No statistic kind selected")
        return top_by_metric(
            self.session.players,
            self.session.statistic_kind,
            self.session.limit,
            default_limit=self.settings.display_limit,
        )

    def ranking_lines(self) -> list[str]:
        players = self.ranked_players()
        if not players:
            return ["No player statistics available for this season."]
        return format_ranking(players, self.session.statistic_kind)

    def _select(self, message: str, options: Sequence[T], empty_message: str) -> T:
        if not options:
            raise NoOptionsError(empty_message)
        return self.prompter.select_one(message, options)
