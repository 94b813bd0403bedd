"""Pair and individual standings."""

from .models import StandingEntry, entity_key
from .standings import compute_standings, monthly_standings

__all__ = [
    "StandingEntry",
    "entity_key",
    "compute_standings",
    "monthly_standings",
]
