"""Leaderboards and player profiles built on the replay."""

from .leaderboard import (
    filter_matches,
    iso_week_key,
    period_key,
    rating_leaderboard,
    wagering_leaderboard,
)
from .profile import CompanionStats, PlayerProfile, build_player_profile

__all__ = [
    "filter_matches",
    "iso_week_key",
    "period_key",
    "rating_leaderboard",
    "wagering_leaderboard",
    "CompanionStats",
    "PlayerProfile",
    "build_player_profile",
]
