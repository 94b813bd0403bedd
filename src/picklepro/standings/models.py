"""Data models for standings."""

from dataclasses import dataclass


def entity_key(player_ids) -> str:
    """Key of a pair (or individual): sorted IDs joined by '-'."""
    return "-".join(sorted(str(pid) for pid in player_ids))


@dataclass
class StandingEntry:
    """Accumulated record of one pair or individual."""

    key: str
    player_ids: tuple[str, ...]
    wins: int = 0
    losses: int = 0
    points_scored: int = 0
    points_conceded: int = 0

    @property
    def matches_played(self) -> int:
        return self.wins + self.losses

    @property
    def point_differential(self) -> int:
        return self.points_scored - self.points_conceded

    @property
    def win_rate(self) -> float:
        if not self.matches_played:
            return 0.0
        return self.wins / self.matches_played

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "player_ids": list(self.player_ids),
            "wins": self.wins,
            "losses": self.losses,
            "points_scored": self.points_scored,
            "points_conceded": self.points_conceded,
        }
