"""Tests for round-robin scheduling."""

from datetime import datetime
from itertools import combinations

import pytest

from picklepro.storage import MatchType
from picklepro.tournament import (
    Team,
    TournamentState,
    fixtures_to_matches,
    generate_round_robin,
    record_result,
    round_robin_pairings,
    tournament_standings,
)

WHEN = datetime(2025, 3, 1, 18, 0)


def make_teams(count):
    return [
        Team(id=f"t{i}", name=f"Team {i}", player_ids=(f"p{2 * i - 1}", f"p{2 * i}"))
        for i in range(1, count + 1)
    ]


class TestPairings:
    """Test the circle method."""

    def test_even_field(self):
        rounds = round_robin_pairings(["a", "b", "c", "d"])

        assert len(rounds) == 3
        assert all(len(pairs) == 2 for pairs in rounds)
        played = {frozenset(pair) for pairs in rounds for pair in pairs}
        assert played == {frozenset(pair) for pair in combinations("abcd", 2)}

    def test_odd_field_gets_bye(self):
        rounds = round_robin_pairings(["a", "b", "c", "d", "e"])

        assert len(rounds) == 5
        assert sum(len(pairs) for pairs in rounds) == 10
        for pairs in rounds:
            teams = [team for pair in pairs for team in pair]
            assert len(teams) == len(set(teams)) == 4

    def test_team_named_bye_keeps_fixtures(self):
        rounds = round_robin_pairings(["bye", "b", "c"])

        played = {frozenset(pair) for pairs in rounds for pair in pairs}
        assert played == {frozenset(pair) for pair in combinations(["bye", "b", "c"], 2)}

    def test_no_team_twice_in_a_round(self):
        for pairs in round_robin_pairings([f"t{i}" for i in range(6)]):
            teams = [team for pair in pairs for team in pair]
            assert len(teams) == len(set(teams))


class TestSchedule:
    """Test fixture generation and results."""

    @pytest.fixture
    def state(self):
        return generate_round_robin(make_teams(4), WHEN, courts=2)

    def test_fixture_count(self, state):
        assert len(state.schedule) == 6
        assert len(generate_round_robin(make_teams(5), WHEN).schedule) == 10

    def test_turns_and_courts(self, state):
        assert [f.display_turn for f in state.schedule] == [1, 1, 2, 2, 3, 3]
        assert [f.court for f in state.schedule] == [1, 2, 1, 2, 1, 2]
        assert state.schedule[0].id == "rr202503011800_r1_m1"

    def test_needs_two_teams(self):
        with pytest.raises(ValueError):
            generate_round_robin(make_teams(1), WHEN)

    def test_record_result(self, state):
        fixture_id = state.schedule[0].id
        fixture = record_result(state, fixture_id, 11, 7)
        assert fixture.is_completed

    def test_equal_scores_leave_fixture_open(self, state):
        fixture = record_result(state, state.schedule[0].id, 9, 9)
        assert not fixture.is_completed

    def test_unknown_fixture(self, state):
        with pytest.raises(KeyError):
            record_result(state, "missing", 11, 0)

    def test_fixtures_to_matches(self, state):
        record_result(state, state.schedule[0].id, 11, 7)
        record_result(state, state.schedule[1].id, 4, 11)

        matches = fixtures_to_matches(state)

        assert len(matches) == 2
        assert matches[0].id == f"t_{state.schedule[0].id}"
        assert all(m.type == MatchType.TOURNAMENT for m in matches)
        assert all(m.played_at == WHEN for m in matches)
        assert matches[1].winning_side == 2

    def test_live_standings(self, state):
        for fixture in state.schedule:
            home_first = fixture.team1_id < fixture.team2_id
            record_result(state, fixture.id, 11 if home_first else 6, 6 if home_first else 11)

        ranked = tournament_standings(state)

        assert [e.key for e in ranked] == ["p1-p2", "p3-p4", "p5-p6", "p7-p8"]
        assert ranked[0].wins == 3

    def test_state_survives_storage_format(self, state):
        record_result(state, state.schedule[2].id, 11, 3)
        restored = TournamentState.from_dict(state.to_dict())

        assert restored.tournament_date == WHEN
        assert restored.team("t2").player_ids == ("p3", "p4")
        assert restored.fixture(state.schedule[2].id).is_completed
