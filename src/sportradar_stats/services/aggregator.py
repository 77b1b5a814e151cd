"""
Season statistics aggregation.

Fetches every competitor's player statistics for a season concurrently,
waits for all of them to settle, then folds the successful responses into
one player map keyed by player id. A competitor whose fetch fails is logged
and left out; the aggregation itself never fails because of it.

Usage:
    aggregator = StatisticsAggregator(client)
    result = await aggregator.aggregate(sport, season, competitors)
    result.players   # dict[str, Player] with accumulated season_statistics
    result.failures  # competitors whose statistics could not be fetched
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol

from ..core.http import ExternalAPIError
from ..core.models import CompetitorStatisticsResponse, Player, Season, Sport, Team
from ..core.types import HasCompetitorList

logger = logging.getLogger(__name__)


class StatisticsSource(Protocol):
    """Anything able to fetch one competitor's season statistics."""

    async def fetch_competitor_statistics(
        self,
        sport: Sport,
        season_id: str,
        competitor_id: str,
    ) -> CompetitorStatisticsResponse: ...


@dataclass(frozen=True)
class StatisticsRequest:
    """One competitor-statistics fetch."""

    sport: Sport
    season_id: str
    competitor: Team

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.sport.id, self.season_id, self.competitor.id)


@dataclass
class FetchOutcome:
    """Settled result of a StatisticsRequest: a response or an error, never both."""

    request: StatisticsRequest
    response: Optional[CompetitorStatisticsResponse] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class AggregationResult:
    """Merged player map plus the competitors that contributed nothing."""

    players: dict[str, Player] = field(default_factory=dict)
    failures: list[FetchOutcome] = field(default_factory=list)
    requested: int = 0

    @property
    def succeeded(self) -> int:
        return self.requested - len(self.failures)


# =============================================================================
# Pure helpers
# =============================================================================


def collect_competitors(events: Iterable[HasCompetitorList]) -> set[Team]:
    """Union of the competitors of every event."""
    return {competitor for event in events for competitor in event.competitors}


def build_statistics_requests(
    sport: Sport,
    season: Season,
    competitors: Iterable[Team],
) -> list[StatisticsRequest]:
    """One request per competitor; ``competitors`` is expected to be unique already."""
    return [
        StatisticsRequest(sport=sport, season_id=season.id, competitor=competitor)
        for competitor in competitors
    ]


def merge_competitor_statistics(
    players: dict[str, Player],
    response: CompetitorStatisticsResponse,
) -> None:
    """Fold one competitor response into ``players`` in place.

    The response's own competitor id/name is the team for every player in
    it. A new id starts its season total at this call's snapshot; a known id
    gets the snapshot added, and takes the latest name and team.
    """
    team = response.competitor.team

    for record in response.competitor.players:
        record = record.with_team(team)
        existing = players.get(record.id)
        if existing is None:
            players[record.id] = record.start_season()
        else:
            players[record.id] = existing.accumulate(record)


# =============================================================================
# Aggregator
# =============================================================================


class StatisticsAggregator:
    """Concurrent fan-out over competitors with a sequential merge."""

    def __init__(self, source: StatisticsSource):
        self.source = source

    async def _settle(self, request: StatisticsRequest) -> FetchOutcome:
        try:
            response = await self.source.fetch_competitor_statistics(
                request.sport, request.season_id, request.competitor.id
            )
            return FetchOutcome(request=request, response=response)
        except ExternalAPIError as e:
            return FetchOutcome(request=request, error=e)

    async def fetch_all(self, requests: list[StatisticsRequest]) -> list[FetchOutcome]:
        """Issue every request at once and wait until all have settled."""
        return list(await asyncio.gather(*[self._settle(request) for request in requests]))

    async def aggregate(
        self,
        sport: Sport,
        season: Season,
        competitors: Iterable[Team],
    ) -> AggregationResult:
        requests = build_statistics_requests(sport, season, competitors)
        logger.info(
            f"Fetching statistics for {len(requests)} competitors in season {season.id}..."
        )

        outcomes = await self.fetch_all(requests)

        result = AggregationResult(requested=len(requests))
        for outcome in outcomes:
            if outcome.ok:
                merge_competitor_statistics(result.players, outcome.response)
                continue
            competitor = outcome.request.competitor
            logger.warning(
                f"Skipping competitor {competitor.id} ({competitor.name}): {outcome.error}"
            )
            result.failures.append(outcome)

        logger.info(
            f"Merged {len(result.players)} players from "
            f"{result.succeeded}/{result.requested} competitors"
        )
        return result
