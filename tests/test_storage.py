"""Tests for models and JSON storage."""

import json
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from picklepro.storage import DataStorage, Match, MatchType, Player, normalize_match_record, parse_match_date


class TestModels:
    """Test player and match models."""

    def test_parse_match_date_drops_offset(self):
        assert parse_match_date("2025-06-01T20:15:00Z") == datetime(2025, 6, 1, 20, 15)
        assert parse_match_date("2025-06-01T20:15:00+07:00") == datetime(2025, 6, 1, 20, 15)

    def test_match_dedups_and_stringifies_ids(self):
        match = Match(id=7, type="betting", played_at="2025-06-01", team1=(1, 1, 2), team2=("3",))
        assert match.id == "7"
        assert match.type == MatchType.WAGERING
        assert match.team1 == ("1", "2")

    def test_match_rejects_empty_side(self):
        with pytest.raises(ValueError):
            Match(id="m", type=MatchType.WAGERING, played_at="2025-06-01", team1=("a",), team2=())

    def test_match_rejects_non_finite_score(self):
        with pytest.raises(ValueError):
            Match(
                id="m",
                type=MatchType.WAGERING,
                played_at="2025-06-01",
                team1=("a",),
                team2=("b",),
                score1=float("nan"),
            )

    def test_winner_from_scores(self):
        match = Match(
            id="m", type=MatchType.WAGERING, played_at="2025-06-01",
            team1=("a",), team2=("b",), score1=4, score2=11, winner=1,
        )
        assert match.winning_side == 2
        assert not match.is_void
        assert match.month_key == "2025-06"

    def test_side_of(self):
        match = Match(id="m", type=MatchType.TOURNAMENT, played_at="2025-06-01", team1=("a", "b"), team2=("c",))
        assert match.side_of("b") == 1
        assert match.side_of("c") == 2
        assert match.side_of("z") is None

    def test_player_from_legacy_record(self):
        player = Player.from_dict({"id": 5, "name": "Lan", "initialPoints": 1000})
        assert player.id == "5"
        assert player.is_active is True
        assert player.tournament_rating == 1000
        assert player.championships == 0

    def test_match_keeps_unknown_fields(self):
        data = {
            "id": "m1",
            "type": "tournament",
            "date": "2025-06-01T19:00:00",
            "team1": ["a"],
            "team2": ["b"],
            "score1": 11,
            "score2": 6,
            "court": 2,
        }
        assert Match.from_dict(data).to_dict()["court"] == 2


class TestNormalization:
    """Test coercion of raw stored records."""

    def test_malformed_score_becomes_zero(self):
        match = normalize_match_record({
            "id": "m1",
            "date": "2025-06-01T19:00:00",
            "team1": ["a"],
            "team2": ["b"],
            "score1": "abc",
            "score2": "11",
            "rankingPoints": "lots",
        })
        assert match.score1 == 0
        assert match.score2 == 11
        assert match.ranking_points == 50
        assert match.type == MatchType.WAGERING

    def test_whole_float_score_becomes_int(self):
        match = normalize_match_record({
            "id": "m1", "date": "2025-06-01", "team1": ["a"], "team2": ["b"],
            "score1": 11.0, "score2": 4.5,
        })
        assert match.score1 == 11
        assert isinstance(match.score1, int)
        assert match.score2 == 4.5

    def test_winner_hint_forced(self):
        match = normalize_match_record({
            "id": "m1", "date": "2025-06-01", "team1": ["a"], "team2": ["b"],
            "score1": 5, "score2": 5, "winner": 9,
        })
        assert match.winner == 1
        assert match.is_void

    def test_records_without_date_or_side_dropped(self):
        assert normalize_match_record({"id": "m1", "team1": ["a"], "team2": ["b"]}) is None
        assert normalize_match_record({"id": "m2", "date": "2025-06-01", "team1": ["a"], "team2": []}) is None


class TestDataStorage:
    """Test data storage operations."""

    @pytest.fixture
    def temp_storage(self):
        """Create temporary storage directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield DataStorage(Path(tmpdir))

    def test_save_load_players(self, temp_storage):
        player = Player(id="p1", name="Minh", initial_points=3.5, championships=2, tournament_rating=3.7)
        temp_storage.save_players([player])

        loaded = temp_storage.load_player("p1")

        assert loaded is not None
        assert loaded.name == "Minh"
        assert loaded.tournament_rating == 3.7
        assert loaded.championships == 2
        assert temp_storage.load_player("nobody") is None

    def test_load_matches_skips_bad_records(self, temp_storage):
        records = [
            {"id": "ok", "date": "2025-06-01T19:00:00", "team1": ["a"], "team2": ["b"], "score1": 11, "score2": 3},
            {"id": "nodate", "team1": ["a"], "team2": ["b"]},
            "not a record",
        ]
        temp_storage.matches_file.write_text(json.dumps(records))

        matches = temp_storage.load_matches()

        assert [m.id for m in matches] == ["ok"]

    def test_add_matches_replaces_by_id(self, temp_storage):
        first = Match(id="m1", type=MatchType.WAGERING, played_at="2025-06-01", team1=("a",), team2=("b",),
                      score1=11, score2=2)
        temp_storage.save_matches([first])

        updated = Match(id="m1", type=MatchType.WAGERING, played_at="2025-06-01", team1=("a",), team2=("b",),
                        score1=2, score2=11)
        extra = Match(id="m2", type=MatchType.TOURNAMENT, played_at="2025-06-02", team1=("a",), team2=("b",),
                      score1=11, score2=9)
        temp_storage.add_matches([updated, extra])

        loaded = {m.id: m for m in temp_storage.load_matches()}
        assert loaded["m1"].score2 == 11
        assert loaded["m2"].type == MatchType.TOURNAMENT

    def test_tournament_cleared(self, temp_storage):
        temp_storage.save_tournament({"tournament_date": "2025-06-01T18:00:00"})
        assert temp_storage.get_stats()["tournament"] is True

        temp_storage.save_tournament(None)
        assert temp_storage.load_tournament() is None

    def test_empty_storage(self, temp_storage):
        assert temp_storage.load_players() == []
        assert temp_storage.load_matches() == []
        assert temp_storage.get_stats() == {"players": 0, "matches": 0, "tournament": False}
