"""Fixed-step ladder rating rule."""

from .models import LADDER_STEP, MAX_RATING, MIN_RATING, PlayerRatingChange, round2


def ladder_step(
    rating: float,
    won: bool,
    step: float = LADDER_STEP,
    min_rating: float = MIN_RATING,
    max_rating: float = MAX_RATING,
) -> float:
    """
    Move one rating a fixed step.

    A win adds the step up to the ceiling. A loss takes the step off down
    to the floor, and does nothing once the rating already sits on the
    floor. The result is rounded to 2 decimals.

    Args:
        rating: Current rating
        won: Whether the player's side won
        step: Step size

    Returns:
        New rating
    """
    if won:
        rating = min(max_rating, rating + step)
    elif rating > min_rating:
        rating = max(min_rating, rating - step)
    return round2(rating)


def ladder_changes(
    participants_a: tuple[str, ...],
    participants_b: tuple[str, ...],
    a_won: bool,
    ratings: dict[str, float],
) -> list[PlayerRatingChange]:
    """Per-player ladder moves for one match; unknown IDs are skipped."""
    changes = []
    for team, ids, won in ((1, participants_a, a_won), (2, participants_b, not a_won)):
        for pid in ids:
            if pid not in ratings:
                continue
            old = ratings[pid]
            new = ladder_step(old, won)
            changes.append(PlayerRatingChange(
                player_id=pid,
                team=team,
                old_rating=old,
                new_rating=new,
                change=round2(new - old),
            ))
    return changes


def apply_ladder_update(
    participants_a: tuple[str, ...],
    participants_b: tuple[str, ...],
    a_won: bool,
    ratings: dict[str, float],
) -> dict[str, float]:
    """
    Apply the ladder rule for one match.

    Args:
        participants_a: Player IDs on side A
        participants_b: Player IDs on side B
        a_won: Whether side A won
        ratings: Ratings before the match

    Returns:
        New ratings dict (input left untouched)
    """
    updated = dict(ratings)
    for change in ladder_changes(participants_a, participants_b, a_won, ratings):
        updated[change.player_id] = change.new_rating
    return updated
