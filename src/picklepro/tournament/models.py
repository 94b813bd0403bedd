"""Data models for a running round-robin tournament."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..storage.models import parse_match_date


@dataclass
class Team:
    """A tournament team (usually a pair)."""

    id: str
    name: str
    player_ids: tuple[str, ...]

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "player_ids": list(self.player_ids)}

    @classmethod
    def from_dict(cls, data: dict) -> "Team":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            player_ids=tuple(str(pid) for pid in data.get("player_ids", [])),
        )


@dataclass
class Fixture:
    """One scheduled game between two teams."""

    id: str
    team1_id: str
    team2_id: str
    round_number: int  # Official round-robin round
    display_turn: int  # Turn on court, several fixtures share one
    court: int
    score1: Optional[int] = None
    score2: Optional[int] = None
    is_completed: bool = False
    match_id: Optional[str] = None  # Recorded Match, once saved

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "team1_id": self.team1_id,
            "team2_id": self.team2_id,
            "round_number": self.round_number,
            "display_turn": self.display_turn,
            "court": self.court,
            "score1": self.score1,
            "score2": self.score2,
            "is_completed": self.is_completed,
            "match_id": self.match_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Fixture":
        return cls(
            id=data["id"],
            team1_id=data["team1_id"],
            team2_id=data["team2_id"],
            round_number=data["round_number"],
            display_turn=data["display_turn"],
            court=data["court"],
            score1=data.get("score1"),
            score2=data.get("score2"),
            is_completed=data.get("is_completed", False),
            match_id=data.get("match_id"),
        )


@dataclass
class TournamentState:
    """Teams and schedule of the tournament being played."""

    tournament_date: datetime
    teams: list[Team] = field(default_factory=list)
    schedule: list[Fixture] = field(default_factory=list)
    is_active: bool = True

    def team(self, team_id: str) -> Optional[Team]:
        for team in self.teams:
            if team.id == team_id:
                return team
        return None

    def fixture(self, fixture_id: str) -> Optional[Fixture]:
        for fixture in self.schedule:
            if fixture.id == fixture_id:
                return fixture
        return None

    def to_dict(self) -> dict:
        return {
            "tournament_date": self.tournament_date.isoformat(),
            "teams": [t.to_dict() for t in self.teams],
            "schedule": [f.to_dict() for f in self.schedule],
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TournamentState":
        return cls(
            tournament_date=parse_match_date(data["tournament_date"]),
            teams=[Team.from_dict(t) for t in data.get("teams", [])],
            schedule=[Fixture.from_dict(f) for f in data.get("schedule", [])],
            is_active=data.get("is_active", True),
        )
