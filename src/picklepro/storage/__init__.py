"""Player and match records and their JSON storage."""

from .models import DEFAULT_INITIAL_POINTS, DEFAULT_STAKE, Match, MatchType, Player, parse_match_date
from .storage import DataStorage, normalize_match_record, normalize_player_record

__all__ = [
    "DEFAULT_INITIAL_POINTS",
    "DEFAULT_STAKE",
    "Match",
    "MatchType",
    "Player",
    "parse_match_date",
    "DataStorage",
    "normalize_match_record",
    "normalize_player_record",
]
