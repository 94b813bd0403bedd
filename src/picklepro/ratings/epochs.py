"""Selection of the rating rule in force on a match date."""

from datetime import datetime
from typing import Union

from ..storage.models import parse_match_date
from .models import RULE2_EPOCH, START_EPOCH, RatingEra, RuleSelection


def select_rating_rule(timestamp: Union[datetime, str]) -> RuleSelection:
    """
    Decide the rating rule and wagering eligibility for a match date.

    Every code path that changes ratings goes through this function so the
    era boundaries are read in one place only.

    Args:
        timestamp: Match datetime (or ISO string)

    Returns:
        RuleSelection with the era and whether wagering stakes count
    """
    when = parse_match_date(timestamp)
    eligible = when >= START_EPOCH

    if when >= RULE2_EPOCH:
        era = RatingEra.LOGISTIC
    elif eligible:
        era = RatingEra.LADDER
    else:
        era = RatingEra.NONE

    return RuleSelection(era=era, points_eligible=eligible)
