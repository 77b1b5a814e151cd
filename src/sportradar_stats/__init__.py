"""
sportradar-stats

Interactive browser for SportRadar soccer season statistics: choose a
competition and season, and see its top goal scorers or assistants.

Key Features:
- Allow-listed competitions and countries (configurable)
- Concurrent per-competitor statistics fetching with partial-failure tolerance
- Season totals merged per player across every competitor response

Usage:
    from sportradar_stats import Settings, SportRadarClient, Wizard
    from sportradar_stats.prompts import ClickPrompter

    settings = Settings()
    async with SportRadarClient(settings) as client:
        await Wizard(client, ClickPrompter(), settings).run()
"""

from .core import Settings, StatisticKind, get_settings
from .providers import SportRadarClient
from .services import (
    StatisticsAggregator,
    Wizard,
    filter_and_sort_seasons,
    filter_competitions,
    top_by_metric,
)

__all__ = [
    "Settings",
    "get_settings",
    "StatisticKind",
    "SportRadarClient",
    "StatisticsAggregator",
    "Wizard",
    "filter_competitions",
    "filter_and_sort_seasons",
    "top_by_metric",
]

__version__ = "0.1.0"
