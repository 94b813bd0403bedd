"""Command-line interface for the rating engine."""

import argparse
import logging
from pathlib import Path

from ..analysis.leaderboard import PERIODS, SORT_KEYS, filter_matches, rating_leaderboard, wagering_leaderboard
from ..report import (
    format_bonuses,
    format_leaderboard,
    format_match_details,
    format_standings,
    rating_history_figure,
)
from ..standings.standings import monthly_standings
from ..storage.models import MatchType
from ..storage.storage import DataStorage
from .system import get_daily_rating_history, get_match_rating_details, replay_history


def main():
    """Run the ratings CLI."""
    parser = argparse.ArgumentParser(description="Pickleball club ratings and leaderboards")
    parser.add_argument(
        "command",
        choices=["replay", "leaderboard", "standings", "explain", "history"],
        help="Command to run",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding players.json and matches.json",
    )
    parser.add_argument(
        "--board",
        choices=["wagering", "rating"],
        default="wagering",
        help="Leaderboard to show (default: wagering)",
    )
    parser.add_argument(
        "--sort",
        choices=SORT_KEYS,
        default="points",
        help="Wagering leaderboard order (default: points)",
    )
    parser.add_argument(
        "--period",
        choices=PERIODS,
        default="all",
        help="Period for 'leaderboard' (default: all)",
    )
    parser.add_argument(
        "--value",
        help="Period value: YYYY-MM-DD, YYYY-Www or YYYY-MM",
    )
    parser.add_argument(
        "--month",
        help="Month (YYYY-MM) for 'standings'",
    )
    parser.add_argument(
        "--individual",
        action="store_true",
        help="Rank individuals instead of pairs in 'standings'",
    )
    parser.add_argument(
        "--match",
        help="Match ID for 'explain'",
    )
    parser.add_argument(
        "--chart",
        type=Path,
        help="Write the 'history' chart to this HTML file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logging",
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    storage = DataStorage(args.data_dir)
    players = storage.load_players()
    matches = storage.load_matches()

    if args.command == "replay":
        print(f"Replaying {len(matches)} matches for {len(players)} players...")
        result = replay_history(players, matches)
        storage.save_players(result.players)
        print(f"Applied {result.matches_applied} matches")
        print(f"Awarded {len(result.bonuses)} placement bonuses")
        if result.bonuses:
            print(format_bonuses(result.bonuses, players))

    elif args.command == "leaderboard":
        if args.period != "all" and not args.value:
            print(f"Error: --value required for period '{args.period}'")
            return

        if args.board == "rating":
            ranked = rating_leaderboard(players, matches)
            print(format_leaderboard(ranked, title="RATING LEADERBOARD"))
        else:
            selected = filter_matches(matches, MatchType.WAGERING, args.period, args.value)
            ranked = wagering_leaderboard(players, selected, sort_by=args.sort)
            label = "all time" if args.period == "all" else f"{args.period} {args.value}"
            print(format_leaderboard(ranked, title=f"WAGERING LEADERBOARD ({label})"))

    elif args.command == "standings":
        if not args.month:
            print("Error: --month required for 'standings' command")
            return

        entries = monthly_standings(args.month, matches, individual=args.individual)
        print(format_standings(entries, players, title=f"TOURNAMENT {args.month}"))

    elif args.command == "explain":
        if not args.match:
            print("Error: --match required for 'explain' command")
            return

        detail = get_match_rating_details(args.match, matches, players)
        if detail is None:
            print(f"No match with ID {args.match}")
            return
        print(format_match_details(detail))

    elif args.command == "history":
        history = get_daily_rating_history(players, matches)
        print(f"{len(history)} days with matches")
        for snapshot in history[-10:]:
            top = sorted(snapshot.ratings.items(), key=lambda item: -item[1])[:3]
            names = {p.id: p.name for p in players}
            leaders = ", ".join(f"{names.get(pid, pid)} {rating:.2f}" for pid, rating in top)
            print(f"  {snapshot.day}: {leaders}")

        if args.chart:
            fig = rating_history_figure(history, players)
            fig.write_html(str(args.chart))
            print(f"Chart written to {args.chart}")


if __name__ == "__main__":
    main()
