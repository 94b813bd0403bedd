"""Text reports and charts for leaderboards, standings and rating history."""

from typing import Optional

import plotly.graph_objects as go

from .ratings.models import DailyRatingSnapshot, MatchRatingDetail, PlacementBonus, RatingEra
from .standings.models import StandingEntry
from .storage.models import Player


def _name_lookup(players: list[Player]) -> dict[str, str]:
    return {p.id: p.name for p in players}


def _team_label(player_ids, names: dict[str, str]) -> str:
    return " & ".join(names.get(pid, pid) for pid in player_ids)


def format_leaderboard(players: list[Player], title: str = "LEADERBOARD") -> str:
    """
    Generate a text table of ranked players.

    Args:
        players: Players, already in ranking order

    Returns:
        Formatted string report
    """
    lines = [title, "-" * 72]
    lines.append(f"{'#':>3}  {'Player':<22} {'Rating':>6} {'Ledger':>8} {'W-L':>7} {'Diff':>6} {'Cups':>4}")
    for rank, p in enumerate(players, start=1):
        rating = f"{p.tournament_rating:.2f}" if p.tournament_rating is not None else "-"
        lines.append(
            f"{rank:>3}  {p.name[:22]:<22} {rating:>6} {p.total_ranking_points:>+8.0f} "
            f"{f'{p.wins}-{p.losses}':>7} {p.point_differential:>+6d} {p.championships:>4d}"
        )
    if not players:
        lines.append("  No matches in this period.")
    return "\n".join(lines)


def format_standings(entries: list[StandingEntry], players: list[Player], title: str = "STANDINGS") -> str:
    """Generate a text table of pair or individual standings."""
    names = _name_lookup(players)
    lines = [title, "-" * 60]
    for rank, entry in enumerate(entries, start=1):
        lines.append(
            f"{rank:>3}  {_team_label(entry.player_ids, names)[:32]:<32} "
            f"{entry.wins:>2}-{entry.losses:<2} {entry.point_differential:>+5d} {entry.points_scored:>5d}"
        )
    if not entries:
        lines.append("  No completed matches.")
    return "\n".join(lines)


def format_match_details(detail: MatchRatingDetail) -> str:
    """Explain a match's rating changes in plain text."""
    lines = [f"Match {detail.match_id} ({detail.played_at:%Y-%m-%d %H:%M})", "=" * 60]
    lines.append(f"Score: {detail.score_a} - {detail.score_b}")
    lines.append(f"Rule: {detail.era.value}")

    if detail.is_void:
        lines.append("Equal scores: the match does not count.")
        return "\n".join(lines)
    if detail.era == RatingEra.NONE:
        lines.append("Played before ratings started: no rating change.")
        return "\n".join(lines)

    lines.append(f"Team ratings: {detail.team_a_rating:.3f} vs {detail.team_b_rating:.3f}")
    if detail.era == RatingEra.LOGISTIC:
        lines.append(f"Expected (team 1): {detail.expected_a:.3f}")
        lines.append(f"Margin factor: {detail.margin_factor:.3f}")
        lines.append(f"Team change: {detail.team_change_a:+.4f} / {-detail.team_change_a:+.4f}")

    lines.append("")
    for change in detail.players:
        label = change.name or change.player_id
        lines.append(
            f"  T{change.team} {label[:20]:<20} {change.old_rating:.2f} -> {change.new_rating:.2f} "
            f"(w={change.weight:.3f}, {change.change:+.4f})"
        )
    return "\n".join(lines)


def format_bonuses(bonuses: list[PlacementBonus], players: list[Player]) -> str:
    """List monthly placement awards."""
    names = _name_lookup(players)
    lines = []
    for award in bonuses:
        note = f"+{award.placement_bonus:.2f}" if award.applied else "no rating bonus"
        lines.append(
            f"{award.month_key}  #{award.place}  {names.get(award.player_id, award.player_id):<20} "
            f"{note} (N={award.team_count})"
        )
    return "\n".join(lines)


def rating_history_figure(
    history: list[DailyRatingSnapshot],
    players: list[Player],
    player_ids: Optional[list[str]] = None,
) -> go.Figure:
    """
    Line chart of daily ratings.

    Args:
        history: Daily snapshots from get_daily_rating_history
        players: Player records (for names)
        player_ids: Players to plot (default: active players)

    Returns:
        Plotly figure
    """
    names = _name_lookup(players)
    if player_ids is None:
        player_ids = [p.id for p in players if p.is_active]

    days = [snapshot.day for snapshot in history]
    fig = go.Figure()
    for pid in player_ids:
        fig.add_trace(
            go.Scatter(
                x=days,
                y=[snapshot.ratings.get(pid) for snapshot in history],
                mode="lines+markers",
                name=names.get(pid, pid),
            )
        )

    fig.update_layout(
        yaxis=dict(title="Rating", range=[2.0, 6.0]),
        xaxis=dict(title="Date"),
        showlegend=True,
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=-0.3,
            xanchor="center",
            x=0.5,
        ),
        margin=dict(l=60, r=40, t=40, b=80),
        height=500,
    )
    return fig
