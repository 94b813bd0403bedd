"""Skill rating engine: ladder and logistic rules, monthly bonuses, replay."""

from .bonus import apply_monthly_bonuses, field_scale, is_rated_month, placement_bonus
from .epochs import select_rating_rule
from .ladder import apply_ladder_update, ladder_changes, ladder_step
from .logistic import (
    apply_logistic_update,
    compute_logistic_update,
    expected_score,
    margin_factor,
    partner_weights,
    team_change,
    team_rating,
    win_probability,
)
from .models import (
    DEFAULT_RATING,
    MAX_CHANGE,
    MAX_RATING,
    MIN_RATING,
    RULE2_EPOCH,
    START_EPOCH,
    DailyRatingSnapshot,
    LogisticBreakdown,
    MatchRatingDetail,
    PlacementBonus,
    PlayerRatingChange,
    RatingEra,
    RuleSelection,
    round2,
)
from .system import (
    RatingReplay,
    ReplayResult,
    calculate_player_stats,
    get_daily_rating_history,
    get_match_rating_details,
    get_player_rating_deltas,
    replay_history,
    seed_rating,
    sort_matches,
)

__all__ = [
    # Models
    "RatingEra",
    "RuleSelection",
    "PlayerRatingChange",
    "LogisticBreakdown",
    "MatchRatingDetail",
    "PlacementBonus",
    "DailyRatingSnapshot",
    "DEFAULT_RATING",
    "MIN_RATING",
    "MAX_RATING",
    "MAX_CHANGE",
    "START_EPOCH",
    "RULE2_EPOCH",
    "round2",
    # Rules
    "select_rating_rule",
    "ladder_step",
    "ladder_changes",
    "apply_ladder_update",
    "team_rating",
    "expected_score",
    "margin_factor",
    "team_change",
    "partner_weights",
    "compute_logistic_update",
    "apply_logistic_update",
    "win_probability",
    # Bonuses
    "field_scale",
    "placement_bonus",
    "is_rated_month",
    "apply_monthly_bonuses",
    # Replay
    "RatingReplay",
    "ReplayResult",
    "seed_rating",
    "sort_matches",
    "replay_history",
    "calculate_player_stats",
    "get_daily_rating_history",
    "get_match_rating_details",
    "get_player_rating_deltas",
]
