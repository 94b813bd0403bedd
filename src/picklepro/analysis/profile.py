"""Per-player profile: partners, rivals, form and rating movement."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from ..ratings.system import get_player_rating_deltas
from ..storage.models import Match, MatchType, Player

# Fewest shared matches before a partner or rival is singled out
MIN_SHARED_MATCHES = 3


@dataclass
class CompanionStats:
    """Record alongside (partner) or against (rival) another player."""

    player_id: str
    name: str
    matches: int = 0
    wins: int = 0

    @property
    def win_rate(self) -> float:
        return self.wins / self.matches if self.matches else 0.0


@dataclass
class PlayerProfile:
    """Derived profile of one player."""

    player_id: str
    matches: list[Match] = field(default_factory=list)  # Newest first
    partners: list[CompanionStats] = field(default_factory=list)
    rivals: list[CompanionStats] = field(default_factory=list)
    best_partner: Optional[CompanionStats] = None
    worst_partner: Optional[CompanionStats] = None
    prey: Optional[CompanionStats] = None  # Rival beaten most often
    nemesis: Optional[CompanionStats] = None  # Rival lost to most often
    weekly_win_rate: list[tuple[date, int]] = field(default_factory=list)  # (Monday, %)
    wagering_by_day: list[tuple[date, float]] = field(default_factory=list)
    rating_deltas: list[tuple[date, float]] = field(default_factory=list)


def _display_name(player_id: str, lookup: dict[str, Player]) -> str:
    player = lookup.get(player_id)
    if player:
        return player.name
    return f"Former player ({player_id[-3:]})"


def _best_and_worst(
    stats: list[CompanionStats],
) -> tuple[Optional[CompanionStats], Optional[CompanionStats]]:
    """
    Highest and lowest win rate among companions with enough shared matches.

    Ties go to the larger sample. When one person is both, they are kept
    as "best" at a win rate of 50% or more and as "worst" below it.
    """
    eligible = [s for s in stats if s.matches >= MIN_SHARED_MATCHES]
    if not eligible:
        return None, None

    best = sorted(eligible, key=lambda s: (-s.win_rate, -s.matches, s.player_id))[0]
    worst = sorted(eligible, key=lambda s: (s.win_rate, -s.matches, s.player_id))[0]
    if best.player_id == worst.player_id:
        if best.win_rate >= 0.5:
            worst = None
        else:
            best = None
    return best, worst


def build_player_profile(
    player_id: str,
    players: list[Player],
    matches: list[Match],
) -> PlayerProfile:
    """
    Build the profile of a player from match history.

    Args:
        player_id: Player to profile
        players: All player records (for names and the rating replay)
        matches: All matches

    Returns:
        PlayerProfile
    """
    player_id = str(player_id)
    lookup = {p.id: p for p in players}
    own = sorted(
        (m for m in matches if m.side_of(player_id) is not None),
        key=lambda m: (m.played_at, m.id),
        reverse=True,
    )
    profile = PlayerProfile(player_id=player_id, matches=own)

    partners: dict[str, CompanionStats] = {}
    rivals: dict[str, CompanionStats] = {}
    weekly: dict[date, list[int]] = {}
    wagering: dict[date, float] = {}

    for match in reversed(own):
        if match.is_void:
            continue
        side = match.side_of(player_id)
        won = match.winning_side == side
        mine, theirs = (match.team1, match.team2) if side == 1 else (match.team2, match.team1)

        for pid in mine:
            if pid == player_id:
                continue
            stat = partners.setdefault(pid, CompanionStats(pid, _display_name(pid, lookup)))
            stat.matches += 1
            stat.wins += int(won)
        for pid in theirs:
            if pid == player_id:
                continue
            stat = rivals.setdefault(pid, CompanionStats(pid, _display_name(pid, lookup)))
            stat.matches += 1
            stat.wins += int(won)

        monday = match.day - timedelta(days=match.day.weekday())
        record = weekly.setdefault(monday, [0, 0])
        record[0] += int(won)
        record[1] += 1

        if match.type == MatchType.WAGERING:
            impact = match.ranking_points if won else -match.ranking_points
            wagering[match.day] = wagering.get(match.day, 0) + impact

    profile.partners = sorted(partners.values(), key=lambda s: (-s.win_rate, -s.matches, s.player_id))
    profile.rivals = sorted(rivals.values(), key=lambda s: (-s.matches, s.player_id))
    profile.best_partner, profile.worst_partner = _best_and_worst(list(partners.values()))
    profile.prey, profile.nemesis = _best_and_worst(list(rivals.values()))
    profile.weekly_win_rate = [
        (monday, int(wins * 100 / total + 0.5)) for monday, (wins, total) in sorted(weekly.items())
    ]
    profile.wagering_by_day = sorted(wagering.items())
    profile.rating_deltas = get_player_rating_deltas(player_id, players, matches)
    return profile
