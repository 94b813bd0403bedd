"""Tests for text reports and charts."""

import json
import tempfile
from pathlib import Path

from picklepro.ratings import calculate_player_stats, get_daily_rating_history, get_match_rating_details
from picklepro.report import format_leaderboard, format_match_details, format_standings, rating_history_figure
from picklepro.standings import compute_standings
from picklepro.storage import DataStorage, Match, MatchType, Player


def make_players():
    return [Player(id=f"p{i}", name=f"Player {i}") for i in range(1, 3)]


def singles(mid, when, score1, score2):
    return Match(
        id=mid,
        type=MatchType.WAGERING,
        played_at=when,
        team1=("p1",),
        team2=("p2",),
        score1=score1,
        score2=score2,
    )


class TestReports:
    """Test report formatting."""

    def test_leaderboard_lists_players(self):
        text = format_leaderboard(make_players(), title="BOARD")
        assert text.startswith("BOARD")
        assert "Player 1" in text

    def test_empty_leaderboard(self):
        assert "No matches" in format_leaderboard([])

    def test_tables_from_stored_float_scores(self):
        """Scores stored as 11.0 still render in the integer columns."""
        record = {
            "id": "m1", "type": "tournament", "date": "2025-03-01T18:00:00",
            "team1": ["p1"], "team2": ["p2"], "score1": 11.0, "score2": 4.0,
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            storage = DataStorage(Path(tmpdir))
            storage.matches_file.write_text(json.dumps([record]))
            matches = storage.load_matches()

        players = calculate_player_stats(make_players(), matches)

        assert "+7" in format_leaderboard(players)
        assert "Player 1" in format_standings(compute_standings(matches), players)

    def test_void_match_details(self):
        matches = [singles("m1", "2026-02-01T18:00:00", 8, 8)]
        detail = get_match_rating_details("m1", matches, make_players())
        assert "does not count" in format_match_details(detail)

    def test_logistic_match_details(self):
        matches = [singles("m1", "2026-02-01T18:00:00", 11, 0)]
        text = format_match_details(get_match_rating_details("m1", matches, make_players()))
        assert "Margin factor: 1.200" in text
        assert "3.00 -> 3.11" in text


class TestHistoryChart:
    """Test the rating history figure."""

    def test_one_trace_per_active_player(self):
        players = make_players()
        players[1].is_active = False
        history = get_daily_rating_history(players, [singles("m1", "2025-03-01T18:00:00", 11, 4)])

        fig = rating_history_figure(history, players)

        assert len(fig.data) == 1
        assert fig.data[0].name == "Player 1"
        assert list(fig.data[0].y) == [3.1]
