"""Filtering, aggregation, ranking and the selection wizard."""

from .aggregator import (
    AggregationResult,
    StatisticsAggregator,
    build_statistics_requests,
    collect_competitors,
    merge_competitor_statistics,
)
from .filters import filter_and_sort_seasons, filter_competitions
from .ranking import format_ranking, top_by_metric
from .session import SessionState, WizardStateError, WizardStep
from .wizard import NoOptionsError, Wizard

__all__ = [
    "AggregationResult",
    "StatisticsAggregator",
    "build_statistics_requests",
    "collect_competitors",
    "merge_competitor_statistics",
    "filter_competitions",
    "filter_and_sort_seasons",
    "top_by_metric",
    "format_ranking",
    "SessionState",
    "WizardStateError",
    "WizardStep",
    "NoOptionsError",
    "Wizard",
]
