"""Find-a-buddy report: who received checks without conducting any."""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from ..github_client.models import GitHubIssue, GitHubUser
from .models import BuddyEntry, BuddyReport

logger = logging.getLogger(__name__)


def _entry_for(entries: dict[str, BuddyEntry], user: GitHubUser) -> BuddyEntry:
    entry = entries.get(user.login)
    if entry is None:
        entry = BuddyEntry(user=user)
        entries[user.login] = entry
    return entry


def build_buddy_report(
    issues: Iterable[GitHubIssue],
    *,
    now: datetime | None = None,
    search_url_for: Callable[[str], str] | None = None,
) -> BuddyReport:
    """Compare checks received with checks conducted per user.

    The author of every issue received a check. Each distinct assignee of a
    closed issue conducted one. Users who never received a check are left
    out of the entries but still counted in ``total_users``.

    Args:
        issues: Open and closed issues scoped to the exchange label
        now: Timestamp for ``generated_at`` (defaults to current UTC time)
        search_url_for: Builds a per-user search URL from a login

    Returns:
        Report ordered by received/conducted ratio, ties in first-seen order
    """
    unique: dict[int, GitHubIssue] = {}
    for issue in issues:
        unique.setdefault(issue.number, issue)

    entries: dict[str, BuddyEntry] = {}

    for issue in unique.values():
        entry = _entry_for(entries, issue.user)
        entry.received_checks += 1
        entry.received_issue_numbers.append(issue.number)
        logger.debug("%s received check from issue #%d", issue.user.login, issue.number)

    for issue in unique.values():
        if issue.state != "closed":
            continue
        for user in issue.assigned_users():
            entry = _entry_for(entries, user)
            entry.conducted_checks += 1
            entry.conducted_issue_numbers.append(issue.number)
            logger.debug("%s conducted check for issue #%d", user.login, issue.number)

    recipients = [entry for entry in entries.values() if entry.received_checks > 0]
    recipients.sort(key=lambda e: e.ratio, reverse=True)
    if search_url_for is not None:
        for entry in recipients:
            entry.search_url = search_url_for(entry.user.login)

    return BuddyReport(
        entries=recipients,
        total_users=len(entries),
        total_issues=len(unique),
        generated_at=now or datetime.now(timezone.utc),
    )
