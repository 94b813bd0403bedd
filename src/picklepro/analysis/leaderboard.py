"""Leaderboards over filtered periods."""

from datetime import date
from typing import Optional

from ..ratings.system import calculate_player_stats
from ..storage.models import Match, MatchType, Player

PERIODS = ("all", "day", "week", "month")
SORT_KEYS = ("points", "wins", "win_rate")


def iso_week_key(day: date) -> str:
    """ISO week of a date as 'YYYY-Www'."""
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"


def period_key(match: Match, period: str) -> Optional[str]:
    """Key of the period a match falls in ('all' has none)."""
    if period == "all":
        return None
    if period == "day":
        return match.day.isoformat()
    if period == "week":
        return iso_week_key(match.day)
    if period == "month":
        return match.month_key
    raise ValueError(f"Unknown period {period!r}; expected one of {PERIODS}")


def filter_matches(
    matches: list[Match],
    match_type: Optional[MatchType] = None,
    period: str = "all",
    value: Optional[str] = None,
) -> list[Match]:
    """
    Select matches of one play type within one period.

    Args:
        matches: All matches
        match_type: Keep only this type (None keeps both)
        period: "all", "day" (YYYY-MM-DD), "week" (YYYY-Www) or "month" (YYYY-MM)
        value: Period to keep; required unless period is "all"

    Returns:
        Matching matches, in input order
    """
    if period not in PERIODS:
        raise ValueError(f"Unknown period {period!r}; expected one of {PERIODS}")
    if period != "all" and not value:
        raise ValueError(f"A value is required for period {period!r}")

    selected = []
    for match in matches:
        if match_type is not None and match.type != match_type:
            continue
        if period != "all" and period_key(match, period) != value:
            continue
        selected.append(match)
    return selected


def _sort_key(player: Player, sort_by: str):
    if sort_by == "points":
        return (-player.total_ranking_points, -player.wins, -player.point_differential, player.id)
    if sort_by == "wins":
        return (-player.wins, -player.point_differential, player.id)
    return (-player.win_rate, -player.point_differential, player.id)


def wagering_leaderboard(
    players: list[Player],
    matches: list[Match],
    sort_by: str = "points",
    include_inactive: bool = False,
) -> list[Player]:
    """
    Rank players on wagering matches.

    The given matches are narrowed to wagering ones and replayed for the
    active players; players without a counted match are left out.

    Args:
        players: Player seed records
        matches: Matches to rank on (typically one period)
        sort_by: "points" (ledger), "wins" or "win_rate"
        include_inactive: Also rank inactive players

    Returns:
        Enriched players, best first
    """
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key {sort_by!r}; expected one of {SORT_KEYS}")

    pool = [p for p in players if include_inactive or p.is_active]
    wagering = [m for m in matches if m.type == MatchType.WAGERING]
    ranked = [p for p in calculate_player_stats(pool, wagering) if p.matches_played > 0]
    return sorted(ranked, key=lambda p: _sort_key(p, sort_by))


def rating_leaderboard(
    players: list[Player],
    matches: list[Match],
    include_inactive: bool = False,
) -> list[Player]:
    """
    Rank players by tournament rating over the full history.

    Inactive players still shape everyone's rating through the replay but
    are left off the board unless asked for.
    """
    enriched = calculate_player_stats(players, matches)
    ranked = [
        p for p in enriched
        if p.matches_played > 0 and (include_inactive or p.is_active)
    ]
    return sorted(ranked, key=lambda p: (-p.tournament_rating, -p.wins, p.id))
