"""
Core module for sportradar-stats.

This module provides the foundational components:
- Configuration management (config.py)
- Domain and wire models (models.py)
- Statistic kinds and capability protocols (types.py)
- Shared HTTP client infrastructure (http.py)

Usage:
    from sportradar_stats.core import Settings, get_settings
    from sportradar_stats.core import Competition, Player, StatisticKind
    from sportradar_stats.core.http import BaseApiClient, ExternalAPIError
"""

# Configuration
from .config import Settings, get_settings

# Types
from .types import (
    HasCompetitorList,
    HasCountry,
    HasEnabledFlag,
    HasIdentity,
    HasName,
    HasStatistics,
    StatisticKind,
)

# Models
from .models import (
    Competition,
    Country,
    Player,
    PlayerStatistics,
    Season,
    Sport,
    SportEvent,
    Team,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "StatisticKind",
    "HasIdentity",
    "HasName",
    "HasCountry",
    "HasEnabledFlag",
    "HasCompetitorList",
    "HasStatistics",
    # Models
    "Sport",
    "Country",
    "Competition",
    "Season",
    "Team",
    "SportEvent",
    "PlayerStatistics",
    "Player",
]
