"""Data models and constants for the rating engine."""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class RatingEra(Enum):
    """Rating rule in force on a given date."""

    NONE = "none"  # Before ratings started: no rating change
    LADDER = "ladder"  # Fixed +/- step per match
    LOGISTIC = "logistic"  # Expected-score model with partner weighting


# Era boundaries (wall-clock, inclusive lower bounds)
START_EPOCH = datetime(2024, 12, 16)
RULE2_EPOCH = datetime(2026, 1, 1)

# Starting rating when a player's seed is not on the rating scale
DEFAULT_RATING = 3.0

# Rating floor and ceiling (both rules)
MIN_RATING = 2.0
MAX_RATING = 6.0

# Ladder rule
LADDER_STEP = 0.1

# Logistic rule
WIN_SCORE = 11.0  # Points needed to win a game
TAU = 0.45  # Logistic spread
K_FACTOR = 0.18  # Team-level change scale
ALPHA = 0.55  # Margin sensitivity
MARGIN_MIN = 0.85
MARGIN_MAX = 1.20
BETA = 1.4  # Partner weighting sharpness
MAX_CHANGE = 0.14  # Per-player cap per match

# Monthly placement bonus
BASE_BONUS = {1: 0.10, 2: 0.07, 3: 0.05}
BONUS_CAP = 0.15
BONUS_FIELD_PIVOT = 5  # Field size that gets the unscaled bonus
BONUS_SCALE_STEP = 0.10  # Scale change per team above/below the pivot


def round2(value: float) -> float:
    """Round to 2 decimals, halves upward."""
    return math.floor(value * 100 + 0.5) / 100


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class RuleSelection:
    """Which rating rule applies to a match date."""

    era: RatingEra
    points_eligible: bool  # Wagering stakes move the ledger


@dataclass
class PlayerRatingChange:
    """How one player's rating moved in a match."""

    player_id: str
    team: int  # 1 or 2
    old_rating: float
    new_rating: float
    change: float  # Applied change before the range clamp and rounding
    weight: float = 1.0  # Share of the team change (logistic rule)
    name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "team": self.team,
            "old_rating": self.old_rating,
            "new_rating": self.new_rating,
            "change": self.change,
            "weight": self.weight,
        }


@dataclass
class LogisticBreakdown:
    """Intermediate values of one logistic-rule update."""

    team_a_rating: float
    team_b_rating: float
    diff: float
    expected_a: float
    result_a: int
    margin_factor: float
    team_change_a: float
    team_change_b: float
    players: list[PlayerRatingChange] = field(default_factory=list)


@dataclass
class MatchRatingDetail:
    """Why a match moved ratings the way it did, from the pre-match state."""

    match_id: str
    played_at: datetime
    era: RatingEra
    is_void: bool
    score_a: float
    score_b: float
    team_a_rating: Optional[float] = None
    team_b_rating: Optional[float] = None
    diff: Optional[float] = None
    expected_a: Optional[float] = None
    margin_factor: Optional[float] = None
    team_change_a: Optional[float] = None
    players: list[PlayerRatingChange] = field(default_factory=list)

    @property
    def is_logistic(self) -> bool:
        return self.era == RatingEra.LOGISTIC

    def to_dict(self) -> dict:
        return {
            "match_id": self.match_id,
            "played_at": self.played_at.isoformat(),
            "era": self.era.value,
            "is_void": self.is_void,
            "score_a": self.score_a,
            "score_b": self.score_b,
            "team_a_rating": self.team_a_rating,
            "team_b_rating": self.team_b_rating,
            "diff": self.diff,
            "expected_a": self.expected_a,
            "margin_factor": self.margin_factor,
            "team_change_a": self.team_change_a,
            "players": [p.to_dict() for p in self.players],
        }


@dataclass
class PlacementBonus:
    """Record of a monthly placement bonus awarded to one player."""

    month_key: str  # "YYYY-MM"
    team_key: str  # Sorted IDs "p1-p2"
    player_id: str
    place: int  # 1, 2, 3
    team_count: int  # N
    scale_factor: float  # S
    base_bonus: float
    placement_bonus: float
    rating_before: float
    rating_after: float
    applied: bool  # False outside the rated era (rating untouched)

    def to_dict(self) -> dict:
        return {
            "month_key": self.month_key,
            "team_key": self.team_key,
            "player_id": self.player_id,
            "place": self.place,
            "team_count": self.team_count,
            "scale_factor": self.scale_factor,
            "base_bonus": self.base_bonus,
            "placement_bonus": self.placement_bonus,
            "rating_before": self.rating_before,
            "rating_after": self.rating_after,
            "applied": self.applied,
        }


@dataclass
class DailyRatingSnapshot:
    """Every player's rating at the end of a day with matches."""

    day: date
    ratings: dict[str, float]

    def to_dict(self) -> dict:
        return {"date": self.day.isoformat(), "ratings": dict(self.ratings)}
