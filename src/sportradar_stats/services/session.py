"""
Wizard session state.

The session walks a fixed sequence of steps:

    NO_SPORT -> SPORT_CHOSEN -> COMPETITION_CHOSEN -> SEASON_CHOSEN
             -> STAT_KIND_CHOSEN -> LIMIT_CHOSEN -> DISPLAYED

and ``reset()`` returns it to NO_SPORT. Each ``choose_*`` call is only legal
from the step directly before its target; anything else raises
WizardStateError. The sport catalog is the only data that survives a reset.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from ..core.models import Competition, Player, Season, Sport, SportEvent, Team
from ..core.types import StatisticKind


class WizardStateError(RuntimeError):
    """A wizard step was attempted without its required prior selection."""


class WizardStep(str, Enum):
    NO_SPORT = "no_sport"
    SPORT_CHOSEN = "sport_chosen"
    COMPETITION_CHOSEN = "competition_chosen"
    SEASON_CHOSEN = "season_chosen"
    STAT_KIND_CHOSEN = "stat_kind_chosen"
    LIMIT_CHOSEN = "limit_chosen"
    DISPLAYED = "displayed"


@dataclass
class SessionState:
    sports: set[Sport] = field(default_factory=set)
    step: WizardStep = WizardStep.NO_SPORT

    sport: Optional[Sport] = None
    competitions: set[Competition] = field(default_factory=set)
    competition: Optional[Competition] = None
    seasons: list[Season] = field(default_factory=list)
    season: Optional[Season] = None
    sport_events: set[SportEvent] = field(default_factory=set)
    competitors: set[Team] = field(default_factory=set)
    players: dict[str, Player] = field(default_factory=dict)
    statistic_kind: Optional[StatisticKind] = None
    limit: Optional[int] = None

    # -- guards ---------------------------------------------------------------

    def _expect(self, step: WizardStep, action: str) -> None:
        if self.step is not step:
            raise WizardStateError(
                f"Cannot {action}: session is at step '{self.step.value}', "
                f"expected '{step.value}'"
            )

    def _transition(self, current: WizardStep, target: WizardStep, action: str) -> None:
        self._expect(current, action)
        self.step = target

    def require_sport(self) -> Sport:
        if self.sport is None:
            raise WizardStateError("No sport selected")
        return self.sport

    def require_competition(self) -> Competition:
        if self.competition is None:
            raise WizardStateError("No competition selected")
        return self.competition

    def require_season(self) -> Season:
        if self.season is None:
            raise WizardStateError("No season selected")
        return self.season

    # -- transitions ------------------------------------------------------------

    def set_sports(self, sports: Iterable[Sport]) -> None:
        self._expect(WizardStep.NO_SPORT, "load the sport catalog")
        self.sports = set(sports)

    def choose_sport(self, sport: Sport) -> None:
        if sport not in self.sports:
            raise WizardStateError(f"Sport {sport} is not in the sport catalog")
        self._transition(WizardStep.NO_SPORT, WizardStep.SPORT_CHOSEN, "choose a sport")
        self.sport = sport

    def set_competitions(self, competitions: Iterable[Competition]) -> None:
        self._expect(WizardStep.SPORT_CHOSEN, "store competitions")
        self.competitions = set(competitions)

    def choose_competition(self, competition: Competition) -> None:
        self._expect(WizardStep.SPORT_CHOSEN, "choose a competition")
        if competition not in self.competitions:
            raise WizardStateError(f"Competition {competition} was not offered")
        self.step = WizardStep.COMPETITION_CHOSEN
        self.competition = competition

    def set_seasons(self, seasons: Iterable[Season]) -> None:
        self._expect(WizardStep.COMPETITION_CHOSEN, "store seasons")
        self.seasons = list(seasons)

    def choose_season(self, season: Season) -> None:
        self._expect(WizardStep.COMPETITION_CHOSEN, "choose a season")
        if season not in self.seasons:
            raise WizardStateError(f"Season {season} was not offered")
        self.step = WizardStep.SEASON_CHOSEN
        self.season = season

    def set_statistics(
        self,
        sport_events: Iterable[SportEvent],
        competitors: Iterable[Team],
        players: dict[str, Player],
    ) -> None:
        self._expect(WizardStep.SEASON_CHOSEN, "store season statistics")
        self.sport_events = set(sport_events)
        self.competitors = set(competitors)
        self.players = players

    def choose_statistic_kind(self, kind: StatisticKind) -> None:
        self._transition(
            WizardStep.SEASON_CHOSEN, WizardStep.STAT_KIND_CHOSEN, "choose a statistic kind"
        )
        self.statistic_kind = kind

    def choose_limit(self, limit: int) -> None:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit!r}")
        self._transition(WizardStep.STAT_KIND_CHOSEN, WizardStep.LIMIT_CHOSEN, "choose a limit")
        self.limit = limit

    def mark_displayed(self) -> None:
        self._transition(WizardStep.LIMIT_CHOSEN, WizardStep.DISPLAYED, "display results")

    def reset(self) -> None:
        """Clear everything except the sport catalog and go back to NO_SPORT."""
        self.step = WizardStep.NO_SPORT
        self.sport = None
        self.competitions = set()
        self.competition = None
        self.seasons = []
        self.season = None
        self.sport_events = set()
        self.competitors = set()
        self.players = {}
        self.statistic_kind = None
        self.limit = None
