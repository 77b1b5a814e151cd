"""
SportRadar Soccer API client.

Provides access to competitions, seasons, schedules and per-competitor
season statistics via the SportRadar API
(https://developer.sportradar.com/soccer/reference).

Uses BaseApiClient for rate limiting, retries, and lifecycle management.
URLs are built in full (including the api_key query parameter) so each
fetch is a plain GET on an absolute URL.
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..core.config import Settings
from ..core.http import BaseApiClient, DecodeError, redact_url
from ..core.models import (
    Competition,
    CompetitionsResponse,
    CompetitorStatisticsResponse,
    Season,
    SeasonsResponse,
    SchedulesResponse,
    Sport,
    SportEvent,
)

logger = logging.getLogger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class SportRadarClient(BaseApiClient):
    """SportRadar API client."""

    BASE_URL = "https://api.sportradar.com"

    def __init__(self, settings: Settings, **kwargs: Any):
        self._settings = settings
        super().__init__(
            base_url=settings.api_base_url,
            requests_per_minute=settings.requests_per_minute,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            **kwargs,
        )

    # =========================================================================
    # URL construction
    # =========================================================================

    def build_url(self, sport: Sport, endpoint: str) -> str:
        """
        Build the absolute URL for an endpoint of the given sport.

        ``{base}/{sport}/{access_level}/{version}/{lang}/{endpoint}.{format}?api_key={key}``;
        the version segment is left out when configured empty.
        """
        s = self._settings
        segments = [
            s.api_base_url.rstrip("/"),
            sport.canonical_name,
            s.access_level,
            s.api_version,
            s.language_code,
            endpoint.strip("/"),
        ]
        path = "/".join(segment for segment in segments if segment)
        return f"{path}.{s.response_format}?api_key={s.api_key or ''}"

    # =========================================================================
    # Fetch + decode
    # =========================================================================

    async def fetch_json(self, url: str, model: type[ResponseModel]) -> ResponseModel:
        """GET ``url`` and validate the body into ``model``.

        Raises:
            ExternalAPIError: transport failure, non-2xx status, or a body
                that does not match ``model`` (DecodeError).
        """
        payload = await self._get(url)
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Call to this API url failed: {redact_url(url)}")
            raise DecodeError(
                f"Unexpected {model.__name__} payload from {redact_url(url)}: "
                f"{e.error_count()} validation error(s)"
            ) from e

    # =========================================================================
    # Competitions & seasons
    # =========================================================================

    async def fetch_competitions(self, sport: Sport) -> list[Competition]:
        """Get every competition offered for a sport."""
        response = await self.fetch_json(
            self.build_url(sport, "competitions"), CompetitionsResponse
        )
        return response.competitions

    async def fetch_seasons(self, sport: Sport, competition_id: str) -> list[Season]:
        """Get all seasons of a competition, disabled ones included."""
        response = await self.fetch_json(
            self.build_url(sport, f"competitions/{competition_id}/seasons"),
            SeasonsResponse,
        )
        return response.seasons

    # =========================================================================
    # Schedules
    # =========================================================================

    async def fetch_sport_events(self, sport: Sport, season_id: str) -> list[SportEvent]:
        """Get the sport events scheduled in a season."""
        response = await self.fetch_json(
            self.build_url(sport, f"seasons/{season_id}/schedules"),
            SchedulesResponse,
        )
        return response.sport_events

    # =========================================================================
    # Competitor statistics
    # =========================================================================

    async def fetch_competitor_statistics(
        self,
        sport: Sport,
        season_id: str,
        competitor_id: str,
    ) -> CompetitorStatisticsResponse:
        """Get a competitor's player statistics for a season."""
        return await self.fetch_json(
            self.build_url(
                sport, f"seasons/{season_id}/competitors/{competitor_id}/statistics"
            ),
            CompetitorStatisticsResponse,
        )
