"""Monthly tournament placement bonuses and championships."""

import logging

from ..standings.standings import compute_standings
from ..storage.models import Match, MatchType, Player
from .epochs import select_rating_rule
from .models import (
    BASE_BONUS,
    BONUS_CAP,
    BONUS_FIELD_PIVOT,
    BONUS_SCALE_STEP,
    DEFAULT_RATING,
    MAX_RATING,
    MIN_RATING,
    PlacementBonus,
    clamp,
    round2,
)

logger = logging.getLogger(__name__)

# Fewest ranked pairs for a month to award placement bonuses
MIN_RANKED_TEAMS = 3

# Only doubles games count towards monthly placements
PAIR_SIZE = 2


def field_scale(team_count: int) -> float:
    """Bonus scale for a field of N teams: 1 + 0.10 * (N - 5)."""
    return 1 + BONUS_SCALE_STEP * (team_count - BONUS_FIELD_PIVOT)


def placement_bonus(place: int, team_count: int) -> float:
    """
    Bonus for finishing in a given place.

    Args:
        place: Final place (1-3)
        team_count: Number of ranked teams that month

    Returns:
        Bonus, rounded to 2 decimals and capped at 0.15
    """
    return min(BONUS_CAP, round2(BASE_BONUS[place] * field_scale(team_count)))


def is_rated_month(matches: list[Match]) -> bool:
    """A month counts for rating bonuses if any match falls in the rated era."""
    return any(select_rating_rule(m.played_at).points_eligible for m in matches)


def apply_monthly_bonuses(
    month_key: str,
    matches: list[Match],
    players: dict[str, Player],
) -> list[PlacementBonus]:
    """
    Award a month's tournament placements.

    The month's doubles tournament matches are ranked with the standings
    engine; singles games do not count towards placements. Every member of
    the winning pair gets a championship whatever the era and field size.
    With at least 3 ranked pairs, each member of the top 3 also gets a
    placement bonus on their tournament rating (only when the month is in
    the rated era, whichever rule governed its matches).

    Args:
        month_key: "YYYY-MM"
        matches: That month's matches (non-tournament, singles and void ones ignored)
        players: Player ID to Player; mutated in place

    Returns:
        One PlacementBonus per awarded player
    """
    month_matches = [
        m for m in matches
        if m.type == MatchType.TOURNAMENT and not m.is_void
        and len(m.team1) == PAIR_SIZE and len(m.team2) == PAIR_SIZE
    ]
    standings = compute_standings(month_matches)
    if not standings:
        return []

    for pid in standings[0].player_ids:
        if pid in players:
            players[pid].championships += 1
    logger.debug(f"{month_key}: {len(standings)} pairs, champions {standings[0].key}")

    if len(standings) < MIN_RANKED_TEAMS:
        return []

    team_count = len(standings)
    scale = field_scale(team_count)
    rated = is_rated_month(month_matches)
    awards = []

    for place, entry in enumerate(standings[:3], start=1):
        bonus = placement_bonus(place, team_count)
        for pid in entry.player_ids:
            player = players.get(pid)
            if player is None:
                continue

            before = player.tournament_rating
            if before is None:
                before = DEFAULT_RATING
            after = before
            if rated:
                after = round2(clamp(before + bonus, MIN_RATING, MAX_RATING))
                player.tournament_rating = after

            awards.append(PlacementBonus(
                month_key=month_key,
                team_key=entry.key,
                player_id=pid,
                place=place,
                team_count=team_count,
                scale_factor=scale,
                base_bonus=BASE_BONUS[place],
                placement_bonus=bonus,
                rating_before=before,
                rating_after=after,
                applied=rated,
            ))

    return awards
