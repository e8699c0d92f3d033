"""Selection of open issues that are still looking for a codechecker."""

from collections.abc import Iterable

from ..github_client.models import GitHubIssue


def is_available(
    issue: GitHubIssue,
    needs_codechecker_label: str,
    required_label: str | None = None,
) -> bool:
    """Decide whether an open issue belongs in the available list.

    Args:
        issue: Open issue
        needs_codechecker_label: Label that makes an issue available even
            when someone is assigned
        required_label: Label every listed issue must carry; None disables
            the check

    Returns:
        True if the issue should be listed
    """
    if required_label is not None and not issue.has_label(required_label):
        return False
    if issue.has_label(needs_codechecker_label):
        return True
    return not issue.is_assigned


def filter_available_issues(
    issues: Iterable[GitHubIssue],
    needs_codechecker_label: str,
    required_label: str | None = None,
) -> list[GitHubIssue]:
    """Keep available issues, preserving input order."""
    return [
        issue
        for issue in issues
        if is_available(issue, needs_codechecker_label, required_label)
    ]


def filter_unassigned_issues(issues: Iterable[GitHubIssue]) -> list[GitHubIssue]:
    """Keep issues with nobody assigned, ignoring labels."""
    return [issue for issue in issues if not issue.is_assigned]


def excerpt(text: str | None, max_length: int) -> str:
    """Shorten an issue body for display."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."
