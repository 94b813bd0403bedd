"""Pickleball club tracker: wagering ledger, skill ratings, standings and tournaments."""

__version__ = "0.1.0"
