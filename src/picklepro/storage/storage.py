"""Data storage utilities for JSON flat files."""

import json
import logging
import math
import uuid
from pathlib import Path
from typing import Optional

from .models import DEFAULT_STAKE, Match, MatchType, Player

logger = logging.getLogger(__name__)

# Default data directory (relative to project root)
DEFAULT_DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"


def _coerce_number(value, default, field_name: str, record_id) -> float:
    """Coerce a stored numeric field, falling back to default when malformed."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value):
            return int(value) if value.is_integer() else value
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            number = None
        if number is not None and math.isfinite(number):
            return int(number) if number.is_integer() else number
    if value not in (None, ""):
        logger.warning(f"Record {record_id}: malformed {field_name} {value!r}, using {default}")
    return default


def normalize_match_record(data: dict) -> Optional[Match]:
    """
    Turn a raw stored match into a well-typed Match.

    Scores that are missing or non-numeric become 0 (which can leave a void
    0-0 match), the winner hint is forced to 1 or 2 and the stake defaults
    to 50. Records without a date or without players on both sides are
    dropped.

    Args:
        data: Raw match dict as stored

    Returns:
        Match, or None if the record cannot be used
    """
    record_id = str(data.get("id") if data.get("id") is not None else uuid.uuid4().hex)
    if not data.get("date"):
        logger.warning(f"Dropping match {record_id}: no date")
        return None
    if not data.get("team1") or not data.get("team2"):
        logger.warning(f"Dropping match {record_id}: empty side")
        return None

    winner = _coerce_number(data.get("winner"), 1, "winner", record_id)
    stake = data.get("rankingPoints")
    cleaned = dict(data)
    cleaned.update({
        "id": record_id,
        "type": data.get("type") or MatchType.WAGERING.value,
        "score1": _coerce_number(data.get("score1"), 0, "score1", record_id),
        "score2": _coerce_number(data.get("score2"), 0, "score2", record_id),
        "winner": winner if winner in (1, 2) else 1,
        "rankingPoints": (
            DEFAULT_STAKE if stake is None
            else _coerce_number(stake, DEFAULT_STAKE, "rankingPoints", record_id)
        ),
    })
    try:
        return Match.from_dict(cleaned)
    except ValueError as e:
        logger.warning(f"Dropping match {record_id}: {e}")
        return None


def normalize_player_record(data: dict) -> Player:
    """Turn a raw stored player into a Player, defaulting missing fields."""
    if data.get("id") in (None, ""):
        data = dict(data, id=uuid.uuid4().hex)
    return Player.from_dict(data)


class DataStorage:
    """Handles reading/writing club data to JSON files."""

    def __init__(self, data_dir: Optional[Path] = None):
        """Initialize storage with data directory."""
        self.data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR
        self.players_file = self.data_dir / "players.json"
        self.matches_file = self.data_dir / "matches.json"
        self.tournament_file = self.data_dir / "tournament.json"

        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _read(self, filepath: Path):
        if not filepath.exists():
            return None
        with open(filepath) as f:
            return json.load(f)

    def _write(self, filepath: Path, data) -> Path:
        with open(filepath, "w") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        return filepath

    # -------------------------------------------------------------------------
    # Players
    # -------------------------------------------------------------------------

    def save_players(self, players: list[Player]) -> Path:
        """Save all players to JSON file."""
        return self._write(self.players_file, [p.to_dict() for p in players])

    def load_players(self) -> list[Player]:
        """Load all players, defaulting fields older records lack."""
        data = self._read(self.players_file)
        if not isinstance(data, list):
            return []
        return [normalize_player_record(p) for p in data if isinstance(p, dict)]

    def load_player(self, player_id: str) -> Optional[Player]:
        """Load a single player by ID."""
        for player in self.load_players():
            if player.id == str(player_id):
                return player
        return None

    # -------------------------------------------------------------------------
    # Matches
    # -------------------------------------------------------------------------

    def save_matches(self, matches: list[Match]) -> Path:
        """Save all matches to JSON file."""
        return self._write(self.matches_file, [m.to_dict() for m in matches])

    def load_matches(self) -> list[Match]:
        """Load all matches, coercing malformed numeric fields."""
        data = self._read(self.matches_file)
        if not isinstance(data, list):
            return []
        matches = []
        for record in data:
            if not isinstance(record, dict):
                continue
            match = normalize_match_record(record)
            if match is not None:
                matches.append(match)
        return matches

    def add_matches(self, new_matches: list[Match]) -> Path:
        """Append matches, replacing any stored match with the same ID."""
        by_id = {m.id: m for m in self.load_matches()}
        for match in new_matches:
            by_id[match.id] = match
        return self.save_matches(list(by_id.values()))

    # -------------------------------------------------------------------------
    # Tournament
    # -------------------------------------------------------------------------

    def save_tournament(self, state: Optional[dict]) -> Path:
        """Save the running tournament (None clears it)."""
        return self._write(self.tournament_file, state)

    def load_tournament(self) -> Optional[dict]:
        """Load the running tournament as a raw dict, if any."""
        return self._read(self.tournament_file)

    # -------------------------------------------------------------------------
    # Utilities
    # -------------------------------------------------------------------------

    def get_stats(self) -> dict:
        """Get counts of stored data."""
        return {
            "players": len(self.load_players()),
            "matches": len(self.load_matches()),
            "tournament": self.load_tournament() is not None,
        }
