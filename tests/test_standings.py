"""Tests for standings and tie-breaks."""

from picklepro.standings import compute_standings, entity_key, monthly_standings
from picklepro.storage import Match, MatchType


def tournament_match(mid, when, team1, team2, score1, score2):
    return Match(
        id=mid,
        type=MatchType.TOURNAMENT,
        played_at=when,
        team1=tuple(team1),
        team2=tuple(team2),
        score1=score1,
        score2=score2,
    )


A, B, C, D = ["a1", "a2"], ["b1", "b2"], ["c1", "c2"], ["d1", "d2"]


class TestEntityKey:
    """Test pair keys."""

    def test_sorted(self):
        assert entity_key(("p9", "p1")) == "p1-p9"
        assert entity_key(["p1", "p9"]) == entity_key(["p9", "p1"])


class TestComputeStandings:
    """Test ranking of pairs."""

    def test_orders_by_wins(self):
        matches = [
            tournament_match("1", "2025-03-01T10:00", A, B, 11, 3),
            tournament_match("2", "2025-03-01T10:10", A, C, 11, 9),
            tournament_match("3", "2025-03-01T10:20", B, C, 11, 2),
        ]
        ranked = compute_standings(matches)

        assert [e.key for e in ranked] == ["a1-a2", "b1-b2", "c1-c2"]
        assert ranked[0].wins == 2
        assert ranked[0].point_differential == 10

    def test_head_to_head_beats_differential(self):
        """A and B both win twice; A beat B so A ranks first."""
        matches = [
            tournament_match("1", "2025-03-01T10:00", A, B, 11, 9),
            tournament_match("2", "2025-03-01T10:10", B, C, 11, 0),
            tournament_match("3", "2025-03-01T10:20", C, A, 11, 0),
            tournament_match("4", "2025-03-01T10:30", A, D, 11, 9),
            tournament_match("5", "2025-03-01T10:40", B, D, 11, 0),
        ]
        ranked = compute_standings(matches)

        assert [e.key for e in ranked] == ["a1-a2", "b1-b2", "c1-c2", "d1-d2"]
        assert ranked[1].point_differential > ranked[0].point_differential

    def test_head_to_head_chain_of_three(self):
        """A beat B, B beat C, C has the best differential: A, B, C."""
        matches = [
            tournament_match("1", "2025-03-01T10:00", A, B, 11, 9),
            tournament_match("2", "2025-03-01T10:10", B, C, 11, 9),
            tournament_match("3", "2025-03-01T10:20", C, D, 11, 0),
        ]
        ranked = compute_standings(matches)

        assert [e.key for e in ranked] == ["a1-a2", "b1-b2", "c1-c2", "d1-d2"]
        assert [e.wins for e in ranked[:3]] == [1, 1, 1]
        assert ranked[2].point_differential == max(e.point_differential for e in ranked)

    def test_cycle_falls_back_to_differential(self):
        """Each beat one other: head-to-head is level, differential decides."""
        matches = [
            tournament_match("1", "2025-03-01T10:00", A, B, 11, 9),
            tournament_match("2", "2025-03-01T10:10", B, C, 11, 0),
            tournament_match("3", "2025-03-01T10:20", C, A, 11, 5),
        ]
        ranked = compute_standings(matches)

        assert [e.key for e in ranked] == ["b1-b2", "a1-a2", "c1-c2"]

    def test_points_scored_then_key(self):
        matches = [
            tournament_match("1", "2025-03-01T10:00", A, C, 11, 5),
            tournament_match("2", "2025-03-01T10:10", D, B, 9, 3),
        ]
        ranked = compute_standings(matches)

        # A and D both +6; A scored more
        assert [e.key for e in ranked[:2]] == ["a1-a2", "d1-d2"]

    def test_void_matches_ignored(self):
        matches = [tournament_match("1", "2025-03-01T10:00", A, B, 7, 7)]
        assert compute_standings(matches) == []

    def test_individual_mode(self):
        matches = [
            tournament_match("1", "2025-03-01T10:00", ["p1", "p2"], ["p3", "p4"], 11, 6),
            tournament_match("2", "2025-03-01T10:10", ["p1", "p3"], ["p2", "p4"], 11, 8),
        ]
        ranked = compute_standings(matches, individual=True)

        assert ranked[0].key == "p1"
        assert ranked[0].wins == 2
        assert ranked[-1].key == "p4"
        assert len(ranked) == 4


class TestMonthlyStandings:
    """Test month selection."""

    def test_selects_month_and_type(self):
        matches = [
            tournament_match("1", "2025-03-01T10:00", A, B, 11, 3),
            tournament_match("2", "2025-04-01T10:00", B, A, 11, 3),
            Match(
                id="3",
                type=MatchType.WAGERING,
                played_at="2025-03-02T10:00",
                team1=tuple(B),
                team2=tuple(A),
                score1=11,
                score2=1,
            ),
        ]
        ranked = monthly_standings("2025-03", matches)

        assert [e.key for e in ranked] == ["a1-a2", "b1-b2"]
        assert ranked[0].wins == 1
