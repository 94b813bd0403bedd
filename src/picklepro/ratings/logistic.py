"""Logistic team rating rule with partner-weighted distribution."""

import math

from .models import (
    ALPHA,
    BETA,
    DEFAULT_RATING,
    K_FACTOR,
    MARGIN_MAX,
    MARGIN_MIN,
    MAX_CHANGE,
    MAX_RATING,
    MIN_RATING,
    TAU,
    WIN_SCORE,
    LogisticBreakdown,
    PlayerRatingChange,
    clamp,
    round2,
)


def team_rating(participants: tuple[str, ...], ratings: dict[str, float]) -> float:
    """
    Average rating of a side.

    Unknown IDs count at the default rating; an empty side rates at the
    default too.

    Args:
        participants: Player IDs on the side
        ratings: Current ratings

    Returns:
        Team rating
    """
    if not participants:
        return DEFAULT_RATING
    return sum(ratings.get(pid, DEFAULT_RATING) for pid in participants) / len(participants)


def expected_score(team_a: float, team_b: float, tau: float = TAU) -> float:
    """
    Expected result for side A against side B.

    Uses a logistic curve on the rating difference:
    E_A = 1 / (1 + exp(-(R_A - R_B) / tau))

    Args:
        team_a: Rating of side A
        team_b: Rating of side B

    Returns:
        Expected score for A (between 0 and 1)
    """
    return 1.0 / (1.0 + math.exp(-(team_a - team_b) / tau))


def margin_factor(score_a: float, score_b: float) -> float:
    """Multiplier for how lopsided the score was, within [0.85, 1.20]."""
    raw = 1 + ALPHA * ((abs(score_a - score_b) / WIN_SCORE) - 0.25)
    return clamp(raw, MARGIN_MIN, MARGIN_MAX)


def team_change(expected_a: float, a_won: bool, margin: float, k_factor: float = K_FACTOR) -> float:
    """Rating change for side A; side B moves by the negation."""
    result_a = 1 if a_won else 0
    return k_factor * (result_a - expected_a) * margin


def partner_weights(
    participants: tuple[str, ...],
    ratings: dict[str, float],
    team_avg: float,
    beta: float = BETA,
) -> dict[str, float]:
    """
    Share of the team change each member takes.

    w_i = exp(-beta * (R_i - team_avg)), normalized over the side. The
    weaker partner takes the larger share whatever the sign, so they gain
    more on a win and also lose more on a loss. A lone player takes the
    whole change.

    Args:
        participants: Player IDs on the side
        ratings: Ratings before the match
        team_avg: Side's average rating

    Returns:
        Dict of player ID to weight
    """
    if len(participants) < 2:
        return {pid: 1.0 for pid in participants}
    raw = {
        pid: math.exp(-beta * (ratings.get(pid, DEFAULT_RATING) - team_avg))
        for pid in participants
    }
    total = sum(raw.values())
    return {pid: w / total for pid, w in raw.items()}


def individual_change(weight: float, change: float) -> float:
    """Member's change, capped at +/- MAX_CHANGE."""
    return clamp(weight * change, -MAX_CHANGE, MAX_CHANGE)


def compute_logistic_update(
    participants_a: tuple[str, ...],
    participants_b: tuple[str, ...],
    score_a: float,
    score_b: float,
    ratings: dict[str, float],
) -> LogisticBreakdown:
    """
    Work out a logistic-rule update without applying it.

    All team averages and weights are read from the ratings as they stood
    before the match. Unknown IDs take part in the team average at the
    default rating but get no update of their own.

    Args:
        participants_a: Player IDs on side A
        participants_b: Player IDs on side B
        score_a: Points scored by side A
        score_b: Points scored by side B
        ratings: Ratings before the match

    Returns:
        LogisticBreakdown with every intermediate value and per-player change
    """
    rating_a = team_rating(participants_a, ratings)
    rating_b = team_rating(participants_b, ratings)
    expected_a = expected_score(rating_a, rating_b)
    a_won = score_a > score_b
    margin = margin_factor(score_a, score_b)
    change_a = team_change(expected_a, a_won, margin)
    change_b = -change_a

    breakdown = LogisticBreakdown(
        team_a_rating=rating_a,
        team_b_rating=rating_b,
        diff=rating_a - rating_b,
        expected_a=expected_a,
        result_a=1 if a_won else 0,
        margin_factor=margin,
        team_change_a=change_a,
        team_change_b=change_b,
    )

    sides = (
        (1, participants_a, rating_a, change_a),
        (2, participants_b, rating_b, change_b),
    )
    for team, ids, avg, side_change in sides:
        weights = partner_weights(ids, ratings, avg)
        for pid in ids:
            if pid not in ratings:
                continue
            old = ratings[pid]
            change = individual_change(weights[pid], side_change)
            breakdown.players.append(PlayerRatingChange(
                player_id=pid,
                team=team,
                old_rating=old,
                new_rating=round2(clamp(old + change, MIN_RATING, MAX_RATING)),
                change=change,
                weight=weights[pid],
            ))

    return breakdown


def apply_logistic_update(
    participants_a: tuple[str, ...],
    participants_b: tuple[str, ...],
    score_a: float,
    score_b: float,
    ratings: dict[str, float],
) -> dict[str, float]:
    """
    Apply the logistic rule for one match.

    Returns:
        New ratings dict (input left untouched)
    """
    breakdown = compute_logistic_update(participants_a, participants_b, score_a, score_b, ratings)
    updated = dict(ratings)
    for change in breakdown.players:
        updated[change.player_id] = change.new_rating
    return updated


def win_probability(
    participants_a: tuple[str, ...],
    participants_b: tuple[str, ...],
    ratings: dict[str, float],
) -> float:
    """
    Probability that side A beats side B.

    This is the same as expected_score on the team averages, with a
    clearer name for matchmaking previews.
    """
    return expected_score(team_rating(participants_a, ratings), team_rating(participants_b, ratings))
