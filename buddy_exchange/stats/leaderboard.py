"""Leaderboard of completed buddy exchanges."""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from ..github_client.models import GitHubIssue
from .models import Leaderboard, LeaderboardEntry

logger = logging.getLogger(__name__)


def build_leaderboard(
    closed_issues: Iterable[GitHubIssue],
    *,
    now: datetime | None = None,
    search_url_for: Callable[[str], str] | None = None,
) -> Leaderboard:
    """Tally completed issues per assignee.

    An issue counts as completed when it is closed and has at least one
    assignee. Every distinct assigned user is credited once per issue, and an
    issue number seen twice in the input is only counted the first time.

    Args:
        closed_issues: Closed issues, already scoped to the exchange label
        now: Timestamp for ``generated_at`` (defaults to current UTC time)
        search_url_for: Builds a per-user search URL from a login

    Returns:
        Leaderboard ordered by completed count, ties in first-seen order
    """
    entries: dict[str, LeaderboardEntry] = {}
    seen_numbers: set[int] = set()
    total_completed = 0

    for issue in closed_issues:
        if issue.state != "closed" or issue.number in seen_numbers:
            continue
        assigned = issue.assigned_users()
        if not assigned:
            continue
        seen_numbers.add(issue.number)
        total_completed += 1

        for user in assigned:
            entry = entries.get(user.login)
            if entry is None:
                entry = LeaderboardEntry(user=user)
                entries[user.login] = entry
            entry.completed_issue_numbers.append(issue.number)
            entry.completed_count += 1
            if issue.closed_at and (
                entry.last_completed_at is None
                or issue.closed_at > entry.last_completed_at
            ):
                entry.last_completed_at = issue.closed_at

    ranked = sorted(entries.values(), key=lambda e: e.completed_count, reverse=True)
    if search_url_for is not None:
        for entry in ranked:
            entry.search_url = search_url_for(entry.user.login)

    logger.debug(
        "Leaderboard: %d contributors, %d completed exchanges",
        len(ranked),
        total_completed,
    )
    return Leaderboard(
        entries=ranked,
        total_completed=total_completed,
        active_contributors=len(ranked),
        generated_at=now or datetime.now(timezone.utc),
    )
