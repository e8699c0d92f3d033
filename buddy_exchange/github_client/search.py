"""GitHub search query and URL building for buddy exchange views."""

from urllib.parse import quote, urlencode

GITHUB_WEB_URL = "https://github.com"
# Same unreserved set as JavaScript's encodeURIComponent
_QUERY_SAFE = "!~*'()"


def build_search_query(
    repository: str,
    label: str | None = None,
    state: str = "all",
    assignee: str | None = None,
    exclude_label: str | None = None,
) -> str:
    """Build a GitHub search query string.

    Args:
        repository: Full repository name (owner/name)
        label: Label the issues must carry
        state: Issue state (open, closed, all)
        assignee: Restrict to issues assigned to this login
        exclude_label: Label the issues must not carry

    Returns:
        GitHub search query string

    Example:
        >>> build_search_query("org/repo", "buddy exchange", "closed", "alice")
        'repo:org/repo label:"buddy exchange" assignee:alice is:closed'
    """
    query_parts = [f"repo:{repository}"]

    if label:
        query_parts.append(f'label:"{label}"')
    if exclude_label:
        query_parts.append(f'-label:"{exclude_label}"')
    if assignee:
        query_parts.append(f"assignee:{assignee}")
    if state != "all":
        query_parts.append(f"is:{state}")

    return " ".join(query_parts)


def search_url(query: str) -> str:
    """Turn a search query into a github.com issue search URL."""
    return f"{GITHUB_WEB_URL}/search?q={quote(query, safe=_QUERY_SAFE)}&type=issues"


def user_completed_issues_url(repository: str, label: str, login: str) -> str:
    """Search URL for a user's closed issues carrying the label."""
    return search_url(build_search_query(repository, label, "closed", assignee=login))


def all_closed_issues_url(repository: str, label: str) -> str:
    return search_url(build_search_query(repository, label, "closed"))


def in_progress_issues_url(
    repository: str, label: str, needs_codechecker_label: str
) -> str:
    """Search URL for open labelled issues that already have a codechecker."""
    return search_url(
        build_search_query(
            repository, label, "open", exclude_label=needs_codechecker_label
        )
    )


def all_labelled_issues_url(repository: str, label: str) -> str:
    return search_url(build_search_query(repository, label))


def new_issue_url(
    repository: str,
    title: str,
    labels: list[str],
    template: str = "buddy-exchange-request.md",
) -> str:
    """Pre-filled "new issue" URL for requesting a buddy exchange.

    Args:
        repository: Full repository name (owner/name)
        title: Suggested issue title
        labels: Labels to pre-select
        template: Issue template file name

    Returns:
        URL of the repository's new-issue form
    """
    params = {
        "assignees": "",
        "labels": ",".join(labels),
        "projects": "",
        "template": template,
        "title": title,
    }
    return f"{GITHUB_WEB_URL}/{repository}/issues/new?{urlencode(params)}"
