"""Pair and individual standings with head-to-head tie-breaks."""

from ..storage.models import Match, MatchType
from .models import StandingEntry, entity_key


def _side_entities(team: tuple[str, ...], individual: bool) -> list[tuple[str, ...]]:
    """Entities a side contributes: the whole side, or one per player."""
    if individual:
        return [(pid,) for pid in team]
    return [tuple(sorted(team))]


def _break_ties(
    group: list[StandingEntry],
    meetings: list[tuple[str, str]],
) -> list[StandingEntry]:
    """
    Order entries that are level on wins.

    Head-to-head wins are counted only over meetings between members of
    the group. When that count separates the group, each level subgroup
    is resolved again on its own meetings; otherwise point differential,
    then points scored, then key decide.

    Args:
        group: Entries with equal win counts
        meetings: (winner_key, loser_key) for every decided meeting

    Returns:
        Ordered entries
    """
    if len(group) < 2:
        return list(group)

    members = {e.key for e in group}
    h2h_wins = {key: 0 for key in members}
    for winner_key, loser_key in meetings:
        if winner_key in members and loser_key in members:
            h2h_wins[winner_key] += 1

    levels = sorted(set(h2h_wins.values()), reverse=True)
    if len(levels) > 1:
        ordered = []
        for level in levels:
            subgroup = [e for e in group if h2h_wins[e.key] == level]
            ordered.extend(_break_ties(subgroup, meetings))
        return ordered

    return sorted(group, key=lambda e: (-e.point_differential, -e.points_scored, e.key))


def compute_standings(matches: list[Match], individual: bool = False) -> list[StandingEntry]:
    """
    Rank pairs (or individuals) over a set of matches of one play type.

    Void matches are ignored. Primary order is wins descending; entries
    level on wins are separated by head-to-head record among themselves,
    then point differential, then points scored.

    Args:
        matches: Matches to aggregate, in any order
        individual: Rank each player on their own instead of by side

    Returns:
        Standing entries, best first
    """
    entries: dict[str, StandingEntry] = {}
    meetings: list[tuple[str, str]] = []

    for match in matches:
        if match.is_void:
            continue
        team1_won = match.winning_side == 1
        sides = (
            (_side_entities(match.team1, individual), match.score1, match.score2, team1_won),
            (_side_entities(match.team2, individual), match.score2, match.score1, not team1_won),
        )
        for entities, scored, conceded, won in sides:
            for ids in entities:
                key = entity_key(ids)
                entry = entries.setdefault(key, StandingEntry(key=key, player_ids=ids))
                entry.points_scored += scored
                entry.points_conceded += conceded
                if won:
                    entry.wins += 1
                else:
                    entry.losses += 1

        winners, losers = sides[0][0], sides[1][0]
        if not team1_won:
            winners, losers = losers, winners
        for winner_ids in winners:
            for loser_ids in losers:
                meetings.append((entity_key(winner_ids), entity_key(loser_ids)))

    by_wins: dict[int, list[StandingEntry]] = {}
    for entry in entries.values():
        if entry.matches_played > 0:
            by_wins.setdefault(entry.wins, []).append(entry)

    ranked = []
    for wins in sorted(by_wins, reverse=True):
        group = sorted(by_wins[wins], key=lambda e: e.key)
        ranked.extend(_break_ties(group, meetings))
    return ranked


def monthly_standings(
    month_key: str,
    matches: list[Match],
    individual: bool = False,
) -> list[StandingEntry]:
    """Standings of the tournament matches played in a 'YYYY-MM' month."""
    month_matches = [
        m for m in matches
        if m.type == MatchType.TOURNAMENT and m.month_key == month_key and not m.is_void
    ]
    return compute_standings(month_matches, individual=individual)
