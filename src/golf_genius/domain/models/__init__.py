"""
Domain models for the Golf Genius client.
"""

from .base import Record, parse_timestamp
from .organization import Season, Category, Directory
from .player import Player, RosterMember, Handicap, Tee
from .tee_sheet import TeeSheetGroup, TeeSheetPlayer
from .event import Event, Round, Course, Division, Tournament, TournamentResults

__all__ = [
    # Base
    "Record",
    "parse_timestamp",

    # Organization
    "Season",
    "Category",
    "Directory",

    # Players
    "Player",
    "RosterMember",
    "Handicap",
    "Tee",

    # Events
    "Event",
    "Round",
    "Course",
    "Division",
    "Tournament",
    "TournamentResults",
    "TeeSheetGroup",
    "TeeSheetPlayer",
]
