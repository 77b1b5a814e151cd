"""
Data provider layer.

Usage:
    from sportradar_stats.providers import get_provider

    async with get_provider(settings) as client:
        competitions = await client.fetch_competitions(sport)
"""

from ..core.config import Settings
from .sportradar import SportRadarClient

__all__ = [
    "SportRadarClient",
    "get_provider",
]


def get_provider(
    settings: Settings,
    provider_name: str = "sportradar",
) -> SportRadarClient:
    """
    Get a data provider instance.

    Raises:
        ValueError: If provider not found
    """
    if provider_name == "sportradar":
        return SportRadarClient(settings)
    raise ValueError(f"Unknown provider: {provider_name}")
