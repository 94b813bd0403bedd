"""Data models for players and matches."""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

# Seed used by the wagering ledger when a record carries none
DEFAULT_INITIAL_POINTS = 1000.0

# Stake of a wagering match when the record carries none
DEFAULT_STAKE = 50


class MatchType(Enum):
    """Play type of a recorded match."""

    WAGERING = "betting"  # Stake-based match, moves the wagering ledger
    TOURNAMENT = "tournament"  # Monthly tournament match, counts for standings


def parse_match_date(value) -> datetime:
    """
    Parse an ISO date or datetime into a naive datetime.

    Offsets are dropped rather than converted, so the wall-clock time as
    written decides the day, the month and the rating era.

    Args:
        value: ISO string, datetime or date

    Returns:
        Naive datetime
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1]
        parsed = datetime.fromisoformat(text)
    return parsed.replace(tzinfo=None)


def _unique_ids(ids) -> tuple[str, ...]:
    """Stringify ids and drop repeats, keeping first-seen order."""
    seen: list[str] = []
    for pid in ids:
        pid = str(pid)
        if pid not in seen:
            seen.append(pid)
    return tuple(seen)


@dataclass
class Player:
    """A club member, with seed data and replay-derived statistics."""

    id: str
    name: str
    initial_points: float = DEFAULT_INITIAL_POINTS
    avatar: Optional[str] = None
    is_active: bool = True

    # Derived by the replay; caches, never hand-edited
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    points_scored: int = 0
    points_conceded: int = 0
    total_ranking_points: float = 0  # Wagering ledger, signed
    tournament_rating: Optional[float] = None  # Skill rating, 2.0 - 6.0
    championships: int = 0

    @property
    def point_differential(self) -> int:
        return self.points_scored - self.points_conceded

    @property
    def win_rate(self) -> float:
        """Share of matches won (0.0 when no matches)."""
        if not self.matches_played:
            return 0.0
        return self.wins / self.matches_played

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "initialPoints": self.initial_points,
            "matchesPlayed": self.matches_played,
            "wins": self.wins,
            "losses": self.losses,
            "pointsScored": self.points_scored,
            "pointsConceded": self.points_conceded,
            "totalRankingPoints": self.total_ranking_points,
            "tournamentRating": self.tournament_rating,
            "championships": self.championships,
            "isActive": self.is_active,
        }
        if self.avatar is not None:
            data["avatar"] = self.avatar
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Player":
        """Build a player, defaulting any field older records lack."""
        initial_points = data.get("initialPoints")
        if not isinstance(initial_points, (int, float)) or isinstance(initial_points, bool):
            initial_points = DEFAULT_INITIAL_POINTS

        rating = data.get("tournamentRating")
        if not isinstance(rating, (int, float)) or isinstance(rating, bool):
            rating = initial_points

        is_active = data.get("isActive")
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "Unknown Player",
            initial_points=initial_points,
            avatar=data.get("avatar"),
            is_active=True if is_active is None else bool(is_active),
            matches_played=int(data.get("matchesPlayed") or 0),
            wins=int(data.get("wins") or 0),
            losses=int(data.get("losses") or 0),
            points_scored=int(data.get("pointsScored") or 0),
            points_conceded=int(data.get("pointsConceded") or 0),
            total_ranking_points=data.get("totalRankingPoints") or 0,
            tournament_rating=rating,
            championships=int(data.get("championships") or 0),
        )


@dataclass
class Match:
    """A single recorded match between two sides."""

    id: str
    type: MatchType
    played_at: datetime
    team1: tuple[str, ...]
    team2: tuple[str, ...]
    score1: int = 0
    score2: int = 0
    winner: int = 1  # Legacy stored hint, consulted only on equal scores
    ranking_points: int = DEFAULT_STAKE
    extra: dict = field(default_factory=dict, repr=False)

    def __post_init__(self):
        self.id = str(self.id)
        if not isinstance(self.type, MatchType):
            self.type = MatchType(self.type)
        self.played_at = parse_match_date(self.played_at)
        self.team1 = _unique_ids(self.team1)
        self.team2 = _unique_ids(self.team2)
        if not self.team1 or not self.team2:
            raise ValueError(f"Match {self.id} needs at least one player per side")
        for label, score in (("score1", self.score1), ("score2", self.score2)):
            if not isinstance(score, (int, float)) or not math.isfinite(score):
                raise ValueError(f"Match {self.id} has a non-finite {label}: {score!r}")

    @property
    def is_void(self) -> bool:
        """Equal scores: the match counts for nothing."""
        return self.score1 == self.score2

    @property
    def winning_side(self) -> int:
        """Side that won (1 or 2), derived from the scores."""
        if self.score1 > self.score2:
            return 1
        if self.score2 > self.score1:
            return 2
        logger.warning(f"Match {self.id} has equal scores; falling back to stored winner hint")
        return 1 if self.winner == 1 else 2

    @property
    def month_key(self) -> str:
        return self.played_at.strftime("%Y-%m")

    @property
    def day(self) -> date:
        return self.played_at.date()

    def side_of(self, player_id: str) -> Optional[int]:
        """Side a player is on, or None when absent."""
        if player_id in self.team1:
            return 1
        if player_id in self.team2:
            return 2
        return None

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update({
            "id": self.id,
            "type": self.type.value,
            "date": self.played_at.isoformat(),
            "team1": list(self.team1),
            "team2": list(self.team2),
            "score1": self.score1,
            "score2": self.score2,
            "winner": self.winner,
            "rankingPoints": self.ranking_points,
        })
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Match":
        known = {"id", "type", "date", "team1", "team2", "score1", "score2", "winner", "rankingPoints"}
        return cls(
            id=data["id"],
            type=MatchType(data.get("type") or MatchType.WAGERING.value),
            played_at=data["date"],
            team1=data.get("team1") or (),
            team2=data.get("team2") or (),
            score1=data.get("score1", 0),
            score2=data.get("score2", 0),
            winner=data.get("winner", 1),
            ranking_points=data.get("rankingPoints", DEFAULT_STAKE),
            extra={k: v for k, v in data.items() if k not in known},
        )
