"""Pure statistics over fetched issue sets."""

from .availability import filter_available_issues, filter_unassigned_issues
from .buddies import build_buddy_report
from .identifiers import extract_identifiers, format_identifier, next_identifier
from .leaderboard import build_leaderboard
from .models import (
    BuddyEntry,
    BuddyReport,
    Leaderboard,
    LeaderboardEntry,
    NextIdentifier,
)

__all__ = [
    "filter_available_issues",
    "filter_unassigned_issues",
    "build_leaderboard",
    "build_buddy_report",
    "extract_identifiers",
    "next_identifier",
    "format_identifier",
    "Leaderboard",
    "LeaderboardEntry",
    "BuddyReport",
    "BuddyEntry",
    "NextIdentifier",
]
