"""Full-history replay of matches into player statistics and ratings."""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from ..storage.models import Match, MatchType, Player
from .bonus import apply_monthly_bonuses
from .epochs import select_rating_rule
from .ladder import ladder_changes
from .logistic import compute_logistic_update, team_rating
from .models import (
    DEFAULT_RATING,
    MAX_RATING,
    MIN_RATING,
    DailyRatingSnapshot,
    MatchRatingDetail,
    PlacementBonus,
    RatingEra,
    round2,
)

logger = logging.getLogger(__name__)


def seed_rating(player: Player) -> float:
    """
    Rating a player starts the replay with.

    A seed already on the rating scale is used as is; wagering-scale seeds
    such as 1000 start at the default rating.
    """
    seed = player.initial_points
    if seed is not None and MIN_RATING <= seed <= MAX_RATING:
        return float(seed)
    return DEFAULT_RATING


def reset_player(player: Player) -> Player:
    """Copy of a player with every replay-derived field back at its start value."""
    return replace(
        player,
        matches_played=0,
        wins=0,
        losses=0,
        points_scored=0,
        points_conceded=0,
        total_ranking_points=0,
        tournament_rating=seed_rating(player),
        championships=0,
    )


def sort_matches(matches: list[Match]) -> list[Match]:
    """Chronological order; equal timestamps fall back to match ID."""
    return sorted(matches, key=lambda m: (m.played_at, m.id))


@dataclass
class ReplayResult:
    """Outcome of a full replay."""

    players: list[Player]
    bonuses: list[PlacementBonus] = field(default_factory=list)
    matches_applied: int = 0


class RatingReplay:
    """
    Stateful walk over matches in chronological order.

    Owns fresh copies of the players, so callers' records are never
    touched. Every public replay function drives one of these, which keeps
    the per-match logic identical across the full replay, the daily
    snapshots and the single-match explainer.
    """

    def __init__(self, players: list[Player]):
        self._order = [str(p.id) for p in players]
        self.players: dict[str, Player] = {}
        for player in players:
            self.players[str(player.id)] = reset_player(player)

        self.bonuses: list[PlacementBonus] = []
        self.matches_applied = 0
        self._month: Optional[str] = None
        self._month_matches: list[Match] = []

    def ratings(self) -> dict[str, float]:
        """Current rating of every known player."""
        return {pid: p.tournament_rating for pid, p in self.players.items()}

    def result(self) -> ReplayResult:
        return ReplayResult(
            players=[self.players[pid] for pid in self._order],
            bonuses=list(self.bonuses),
            matches_applied=self.matches_applied,
        )

    def close_month(self) -> None:
        """Award the open month's placements and start a fresh buffer."""
        if self._month is not None and self._month_matches:
            self.bonuses.extend(apply_monthly_bonuses(self._month, self._month_matches, self.players))
        self._month_matches = []

    def enter_month(self, match: Match) -> None:
        """Close the open month if this match starts a new one."""
        if match.month_key != self._month:
            self.close_month()
            self._month = match.month_key

    def explain(self, match: Match) -> MatchRatingDetail:
        """
        Describe what a match would do to ratings from the current state.

        Call after enter_month so that any bonus due before the match has
        been applied.
        """
        rule = select_rating_rule(match.played_at)
        detail = MatchRatingDetail(
            match_id=match.id,
            played_at=match.played_at,
            era=rule.era,
            is_void=match.is_void,
            score_a=match.score1,
            score_b=match.score2,
        )
        if match.is_void or rule.era == RatingEra.NONE:
            return detail

        ratings = self.ratings()
        if rule.era == RatingEra.LOGISTIC:
            breakdown = compute_logistic_update(
                match.team1, match.team2, match.score1, match.score2, ratings
            )
            detail.team_a_rating = breakdown.team_a_rating
            detail.team_b_rating = breakdown.team_b_rating
            detail.diff = breakdown.diff
            detail.expected_a = breakdown.expected_a
            detail.margin_factor = breakdown.margin_factor
            detail.team_change_a = breakdown.team_change_a
            detail.players = breakdown.players
        else:
            detail.team_a_rating = team_rating(match.team1, ratings)
            detail.team_b_rating = team_rating(match.team2, ratings)
            detail.diff = detail.team_a_rating - detail.team_b_rating
            detail.players = ladder_changes(
                match.team1, match.team2, match.winning_side == 1, ratings
            )

        for change in detail.players:
            change.name = self.players[change.player_id].name
        return detail

    def apply(self, match: Match) -> bool:
        """
        Apply one match.

        Returns:
            False for a void match (nothing changed), True otherwise
        """
        if match.is_void:
            return False

        self.enter_month(match)
        rule = select_rating_rule(match.played_at)
        team1_won = match.winning_side == 1
        stake = match.ranking_points if (
            match.type == MatchType.WAGERING and rule.points_eligible
        ) else 0

        sides = (
            (match.team1, team1_won, match.score1, match.score2),
            (match.team2, not team1_won, match.score2, match.score1),
        )
        for ids, won, scored, conceded in sides:
            for pid in ids:
                player = self.players.get(pid)
                if player is None:
                    logger.debug(f"Match {match.id}: skipping unknown player {pid}")
                    continue
                player.matches_played += 1
                player.points_scored += scored
                player.points_conceded += conceded
                if won:
                    player.wins += 1
                    player.total_ranking_points += stake
                else:
                    player.losses += 1
                    player.total_ranking_points -= stake

        if rule.era != RatingEra.NONE:
            for change in self.explain(match).players:
                self.players[change.player_id].tournament_rating = change.new_rating

        if match.type == MatchType.TOURNAMENT:
            self._month_matches.append(match)
        self.matches_applied += 1
        return True

    def finish(self) -> ReplayResult:
        """Close the last open month and return the final state."""
        self.close_month()
        return self.result()


def replay_history(players: list[Player], matches: list[Match]) -> ReplayResult:
    """
    Replay every match from scratch.

    Args:
        players: Player seed records (not modified)
        matches: All matches, in any order

    Returns:
        ReplayResult with enriched player copies and placement bonuses
    """
    replay = RatingReplay(players)
    for match in sort_matches(matches):
        replay.apply(match)
    result = replay.finish()
    logger.debug(
        f"Replayed {result.matches_applied} of {len(matches)} matches "
        f"for {len(players)} players, {len(result.bonuses)} bonus awards"
    )
    return result


def calculate_player_stats(players: list[Player], matches: list[Match]) -> list[Player]:
    """
    Authoritative player totals: statistics, wagering ledger, rating, championships.

    Args:
        players: Player seed records (not modified)
        matches: All matches, in any order

    Returns:
        New Player records in input order
    """
    return replay_history(players, matches).players


def get_daily_rating_history(players: list[Player], matches: list[Match]) -> list[DailyRatingSnapshot]:
    """
    Ratings of every player at the end of each day with a counted match.

    The bonus for the final open month is folded into the last snapshot, so
    the series ends on the same ratings calculate_player_stats reports.

    Args:
        players: Player seed records
        matches: All matches, in any order

    Returns:
        Snapshots in date order
    """
    replay = RatingReplay(players)
    history: list[DailyRatingSnapshot] = []

    for match in sort_matches(matches):
        if not replay.apply(match):
            continue
        snapshot = replay.ratings()
        if history and history[-1].day == match.day:
            history[-1].ratings = snapshot
        else:
            history.append(DailyRatingSnapshot(day=match.day, ratings=snapshot))

    replay.finish()
    if history:
        history[-1].ratings = replay.ratings()
    return history


def get_match_rating_details(
    match_id: str,
    matches: list[Match],
    players: list[Player],
) -> Optional[MatchRatingDetail]:
    """
    Explain how a single match moved ratings.

    Replays everything before the match in the same order as the full
    replay, then reports the pre-match team ratings, expected score,
    margin factor and each player's weight and change.

    Args:
        match_id: ID of the match to explain
        matches: All matches
        players: Player seed records

    Returns:
        MatchRatingDetail, or None if no match has that ID
    """
    replay = RatingReplay(players)
    for match in sort_matches(matches):
        if match.id == str(match_id):
            if not match.is_void:
                replay.enter_month(match)
            return replay.explain(match)
        replay.apply(match)
    return None


def get_player_rating_deltas(
    player_id: str,
    players: list[Player],
    matches: list[Match],
) -> list[tuple[date, float]]:
    """Net rating change of one player on each day with a counted match."""
    seeds = {str(p.id): p for p in players}
    if player_id not in seeds:
        return []

    previous = seed_rating(seeds[player_id])
    deltas = []
    for snapshot in get_daily_rating_history(players, matches):
        current = snapshot.ratings[player_id]
        if current != previous:
            deltas.append((snapshot.day, round2(current - previous)))
        previous = current
    return deltas
