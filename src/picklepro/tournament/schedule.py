"""Round-robin scheduling and result recording."""

import logging
from datetime import datetime

from ..standings.models import StandingEntry
from ..standings.standings import compute_standings
from ..storage.models import Match, MatchType
from .models import Fixture, Team, TournamentState

logger = logging.getLogger(__name__)

# Placeholder opponent for odd fields; never equal to a real team ID
BYE = object()

# Fixtures played side by side in one turn
DEFAULT_COURTS = 2


def round_robin_pairings(team_ids: list[str]) -> list[list[tuple[str, str]]]:
    """
    Pairings for every round, by the circle method.

    The first team stays fixed while the rest rotate one place per round.
    An odd field gets a bye, and pairings against it are left out.

    Args:
        team_ids: IDs of the teams, in seeding order

    Returns:
        One list of (home, away) pairs per round
    """
    ids = list(team_ids)
    if len(ids) % 2:
        ids.append(BYE)

    n = len(ids)
    rounds = []
    for _ in range(n - 1):
        pairs = []
        for m in range(n // 2):
            home, away = ids[m], ids[n - 1 - m]
            if home is not BYE and away is not BYE:
                pairs.append((home, away))
        rounds.append(pairs)
        ids = [ids[0]] + ids[2:] + [ids[1]]
    return rounds


def generate_round_robin(
    teams: list[Team],
    tournament_date: datetime,
    courts: int = DEFAULT_COURTS,
) -> TournamentState:
    """
    Schedule a full round robin.

    Every team meets every other team once. Fixtures are numbered into
    turns of `courts` games, with court numbers 1..courts within a turn.

    Args:
        teams: Teams taking part (at least two)
        tournament_date: When the tournament is played
        courts: Courts available per turn

    Returns:
        Active TournamentState
    """
    if len(teams) < 2:
        raise ValueError("A tournament needs at least 2 teams")
    if courts < 1:
        raise ValueError("At least one court is needed")

    prefix = f"rr{tournament_date.strftime('%Y%m%d%H%M')}"
    schedule = []
    for round_index, pairs in enumerate(round_robin_pairings([t.id for t in teams])):
        for home, away in pairs:
            index = len(schedule)
            schedule.append(Fixture(
                id=f"{prefix}_r{round_index + 1}_m{index + 1}",
                team1_id=home,
                team2_id=away,
                round_number=round_index + 1,
                display_turn=index // courts + 1,
                court=index % courts + 1,
            ))

    logger.info(f"Scheduled {len(schedule)} fixtures for {len(teams)} teams")
    return TournamentState(tournament_date=tournament_date, teams=list(teams), schedule=schedule)


def record_result(state: TournamentState, fixture_id: str, score1: int, score2: int) -> Fixture:
    """Enter a fixture's score and mark it completed (equal scores leave it open)."""
    fixture = state.fixture(fixture_id)
    if fixture is None:
        raise KeyError(f"No fixture {fixture_id!r}")
    fixture.score1 = score1
    fixture.score2 = score2
    fixture.is_completed = score1 != score2
    return fixture


def fixtures_to_matches(state: TournamentState) -> list[Match]:
    """
    Tournament matches for every completed fixture.

    Matches are dated at the tournament date so they land in its month's
    standings. Fixtures whose teams are missing are skipped.
    """
    matches = []
    for fixture in state.schedule:
        if not fixture.is_completed:
            continue
        team1 = state.team(fixture.team1_id)
        team2 = state.team(fixture.team2_id)
        if team1 is None or team2 is None:
            logger.warning(f"Fixture {fixture.id} refers to a missing team")
            continue
        matches.append(Match(
            id=fixture.match_id or f"t_{fixture.id}",
            type=MatchType.TOURNAMENT,
            played_at=state.tournament_date,
            team1=team1.player_ids,
            team2=team2.player_ids,
            score1=fixture.score1,
            score2=fixture.score2,
            winner=1 if fixture.score1 > fixture.score2 else 2,
        ))
    return matches


def tournament_standings(state: TournamentState) -> list[StandingEntry]:
    """Live standings of the completed fixtures."""
    return compute_standings(fixtures_to_matches(state))
