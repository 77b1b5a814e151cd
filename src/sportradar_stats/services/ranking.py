"""Top-N player rankings over accumulated season statistics."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence, TypeVar

from ..core.types import RankablePlayer, StatisticKind

DEFAULT_LIMIT = 10

PlayerT = TypeVar("PlayerT", bound=RankablePlayer)


def top_by_metric(
    players: Mapping[str, PlayerT],
    kind: StatisticKind,
    limit: Optional[int] = None,
    default_limit: int = DEFAULT_LIMIT,
) -> list[PlayerT]:
    """Players sorted by the chosen season metric, highest first.

    Ties keep player-id order, so equal totals always rank the same way.
    ``limit`` of None falls back to ``default_limit``.
    """
    if limit is None:
        limit = default_limit
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    by_id = sorted(players.values(), key=lambda player: player.id)
    ranked = sorted(
        by_id,
        key=lambda player: kind.value_of(player.season_statistics),
        reverse=True,
    )
    return ranked[:limit]


def format_ranking(players: Sequence[PlayerT], kind: StatisticKind) -> list[str]:
    """Render ``1. Name (Team) - 5 goals`` lines."""
    lines = []
    for position, player in enumerate(players, start=1):
        value = kind.value_of(player.season_statistics)
        lines.append(f"{position}. {player} - {value} {kind.unit_for(value)}")
    return lines
