"""Round-robin tournament scheduling."""

from .models import Fixture, Team, TournamentState
from .schedule import (
    fixtures_to_matches,
    generate_round_robin,
    record_result,
    round_robin_pairings,
    tournament_standings,
)

__all__ = [
    "Fixture",
    "Team",
    "TournamentState",
    "fixtures_to_matches",
    "generate_round_robin",
    "record_result",
    "round_robin_pairings",
    "tournament_standings",
]
