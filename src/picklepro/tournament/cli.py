"""Command-line interface for round-robin tournaments."""

import argparse
import logging
from datetime import datetime
from pathlib import Path

from ..report import format_standings
from ..storage.storage import DataStorage
from .models import Team, TournamentState
from .schedule import fixtures_to_matches, generate_round_robin, record_result, tournament_standings


def main():
    """Run the tournament CLI."""
    parser = argparse.ArgumentParser(description="Pickleball round-robin tournaments")
    parser.add_argument(
        "command",
        choices=["schedule", "show", "score", "finish"],
        help="Command to run",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding the club's JSON files",
    )
    parser.add_argument(
        "--team",
        action="append",
        default=[],
        help="Comma-separated player IDs of one team (repeat per team)",
    )
    parser.add_argument(
        "--date",
        help="Tournament date, ISO format (default: now)",
    )
    parser.add_argument(
        "--courts",
        type=int,
        default=2,
        help="Courts in play per turn (default: 2)",
    )
    parser.add_argument(
        "--fixture",
        help="Fixture ID for 'score'",
    )
    parser.add_argument(
        "--score",
        nargs=2,
        type=int,
        metavar=("SCORE1", "SCORE2"),
        help="Final score for 'score'",
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    storage = DataStorage(args.data_dir)
    players = storage.load_players()
    names = {p.id: p.name for p in players}
    raw_state = storage.load_tournament()
    state = TournamentState.from_dict(raw_state) if raw_state else None

    if args.command == "schedule":
        if len(args.team) < 2:
            print("Error: at least two --team options required for 'schedule' command")
            return

        teams = []
        for index, members in enumerate(args.team, start=1):
            ids = tuple(pid.strip() for pid in members.split(",") if pid.strip())
            label = " & ".join(names.get(pid, pid) for pid in ids)
            teams.append(Team(id=f"team{index}", name=label, player_ids=ids))

        when = datetime.fromisoformat(args.date) if args.date else datetime.now().replace(second=0, microsecond=0)
        state = generate_round_robin(teams, when, courts=args.courts)
        storage.save_tournament(state.to_dict())
        print(f"Scheduled {len(state.schedule)} fixtures for {len(teams)} teams on {when:%Y-%m-%d %H:%M}")

    elif state is None:
        print("No tournament in progress. Run 'schedule' first.")
        return

    if args.command in ("schedule", "show"):
        for fixture in state.schedule:
            team1, team2 = state.team(fixture.team1_id), state.team(fixture.team2_id)
            score = f"{fixture.score1}-{fixture.score2}" if fixture.is_completed else "pending"
            print(
                f"  Turn {fixture.display_turn:>2} Court {fixture.court} (R{fixture.round_number}) "
                f"{team1.name} vs {team2.name}: {score}  [{fixture.id}]"
            )
        print()
        print(format_standings(tournament_standings(state), players, title="LIVE STANDINGS"))

    elif args.command == "score":
        if not args.fixture or not args.score:
            print("Error: --fixture and --score required for 'score' command")
            return
        fixture = record_result(state, args.fixture, *args.score)
        storage.save_tournament(state.to_dict())
        status = "completed" if fixture.is_completed else "left open (equal scores)"
        print(f"Fixture {fixture.id} {status}")

    elif args.command == "finish":
        matches = fixtures_to_matches(state)
        storage.add_matches(matches)
        storage.save_tournament(None)
        print(f"Saved {len(matches)} tournament matches; tournament closed")


if __name__ == "__main__":
    main()
