"""GitHub API client using PyGitHub."""

import logging
import re
from datetime import datetime, timezone
from typing import Any

import requests
from github import Github
from github.GithubException import (
    BadAttributeException,
    GithubException,
    RateLimitExceededException,
    UnknownObjectException,
)
from github.Issue import Issue
from github.Label import Label
from github.NamedUser import NamedUser
from pydantic import ValidationError

from ..errors import MalformedResponseError, TransientFetchError
from .models import (
    GitHubIssue,
    GitHubLabel,
    GitHubUser,
    IssueQuery,
    RateLimitStatus,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
MAX_PAGE_SIZE = 100
GITHUB_LOGIN = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?$")


def _header(headers: dict[str, Any] | None, name: str) -> str | None:
    if not headers:
        return None
    for key, value in headers.items():
        if key.lower() == name:
            return str(value)
    return None


def _to_fetch_error(error: GithubException) -> TransientFetchError:
    """Translate a PyGitHub exception, keeping status and rate-limit context."""
    reset = _header(error.headers, "x-ratelimit-reset")
    remaining = _header(error.headers, "x-ratelimit-remaining")
    reset_at = (
        datetime.fromtimestamp(int(reset), tz=timezone.utc)
        if reset and reset.isdigit()
        else None
    )
    rate_limited = isinstance(error, RateLimitExceededException)
    message = f"GitHub API error: {error.status}"
    if rate_limited:
        message = f"GitHub API rate limit exceeded: {error.status}"
    return TransientFetchError(
        message,
        status=error.status,
        reset_at=reset_at,
        remaining=int(remaining) if remaining and remaining.isdigit() else None,
        rate_limited=rate_limited,
    )


class GitHubClient:
    """Read-only, anonymous GitHub client for a single repository."""

    def __init__(
        self,
        repository: str,
        per_page: int = MAX_PAGE_SIZE,
        base_url: str = DEFAULT_BASE_URL,
    ):
        """Initialize GitHub client.

        Args:
            repository: Full repository name, e.g. "codecheckers/register"
            per_page: Default page size for issue listings (1-100)
            base_url: GitHub REST API base URL
        """
        if not 1 <= per_page <= MAX_PAGE_SIZE:
            raise ValueError(f"per_page must be between 1 and {MAX_PAGE_SIZE}")
        self.repository = repository
        self.per_page = per_page
        self.base_url = base_url

    def _new_github(self, per_page: int | None = None) -> Github:
        """Create an unauthenticated PyGitHub instance.

        Every fetch gets its own instance so concurrent fetches share no
        connection state.
        """
        return Github(base_url=self.base_url, per_page=per_page or self.per_page)

    def _convert_user(self, github_user: NamedUser) -> GitHubUser:
        """Convert PyGitHub user to our model."""
        return GitHubUser(
            login=github_user.login,
            avatar_url=github_user.avatar_url,
            html_url=github_user.html_url,
        )

    def _convert_label(self, github_label: Label) -> GitHubLabel:
        """Convert PyGitHub label to our model."""
        return GitHubLabel(
            name=github_label.name,
            color=github_label.color or "",
            description=github_label.description,
        )

    def _convert_issue(self, github_issue: Issue) -> GitHubIssue:
        """Convert PyGitHub issue to our model."""
        assignee = github_issue.assignee
        return GitHubIssue(
            id=github_issue.id,
            number=github_issue.number,
            title=github_issue.title,
            body=github_issue.body,
            html_url=github_issue.html_url,
            state=github_issue.state,
            user=self._convert_user(github_issue.user),
            assignee=self._convert_user(assignee) if assignee else None,
            assignees=[self._convert_user(user) for user in github_issue.assignees],
            labels=[self._convert_label(label) for label in github_issue.labels],
            comments=github_issue.comments,
            created_at=github_issue.created_at,
            updated_at=github_issue.updated_at,
            closed_at=github_issue.closed_at,
        )

    def _convert_page(self, page: list[Issue]) -> list[GitHubIssue]:
        issues = []
        for github_issue in page:
            try:
                issues.append(self._convert_issue(github_issue))
            except (AttributeError, BadAttributeException, ValidationError) as e:
                logger.warning(
                    "Skipping malformed issue #%s: %s",
                    getattr(github_issue, "number", "?"),
                    e,
                )
        return issues

    def fetch_issues(
        self,
        query: IssueQuery,
        page_size: int | None = None,
        max_pages: int = 10,
    ) -> list[GitHubIssue]:
        """Fetch every issue matching a query, page by page.

        Pages are requested strictly in order. Fetching stops at an empty
        page, at a page shorter than ``page_size``, or after ``max_pages``.

        Args:
            query: State, label filter and sort order
            page_size: Issues per page (1-100), defaults to the client's per_page
            max_pages: Maximum number of pages to request

        Returns:
            Issues in the API's sort order

        Raises:
            TransientFetchError: On any non-success response or network error
            MalformedResponseError: If a page is not an array of issues
        """
        if page_size is None:
            page_size = self.per_page
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")
        if max_pages < 1:
            raise ValueError("max_pages must be at least 1")

        github = self._new_github(page_size)
        params: dict[str, Any] = {
            "state": query.state,
            "sort": query.sort,
            "direction": query.direction,
        }
        if query.labels:
            params["labels"] = [query.labels]

        issues: list[GitHubIssue] = []
        try:
            repository = github.get_repo(self.repository, lazy=True)
            paginated = repository.get_issues(**params)
            for page_index in range(max_pages):
                page = paginated.get_page(page_index)
                if not isinstance(page, list):
                    raise MalformedResponseError(
                        f"Page {page_index + 1} is not an array of issues"
                    )
                logger.info(
                    "Fetched page %d of %s issues (%d items)",
                    page_index + 1,
                    query.state,
                    len(page),
                )
                if not page:
                    break
                issues.extend(self._convert_page(page))
                if len(page) < page_size:
                    break
        except GithubException as e:
            raise _to_fetch_error(e) from e
        except requests.exceptions.RequestException as e:
            raise TransientFetchError(f"Network error: {e}") from e
        except (BadAttributeException, TypeError, KeyError) as e:
            raise MalformedResponseError(f"Unexpected issue payload: {e}") from e

        return issues

    def get_rate_limit(self) -> RateLimitStatus:
        """Get the current core rate limit counters.

        Raises:
            TransientFetchError: If the rate limit endpoint fails
        """
        try:
            rate_limit = self._new_github().get_rate_limit()
        except GithubException as e:
            raise _to_fetch_error(e) from e
        except requests.exceptions.RequestException as e:
            raise TransientFetchError(f"Network error: {e}") from e

        return RateLimitStatus(
            limit=rate_limit.rate.limit,
            remaining=rate_limit.rate.remaining,
            reset_at=rate_limit.rate.reset,
        )

    def get_user_display_name(self, login: str) -> str | None:
        """Look up a user's display name.

        Returns:
            The profile name, or None if unset, if the user does not exist,
            or if ``login`` is not a valid GitHub username
        """
        if not GITHUB_LOGIN.match(login):
            logger.debug("Skipping lookup of invalid GitHub login %r", login)
            return None
        try:
            user = self._new_github().get_user(login)
            return (user.name or "").strip() or None
        except UnknownObjectException:
            return None
        except GithubException as e:
            raise _to_fetch_error(e) from e
        except requests.exceptions.RequestException as e:
            raise TransientFetchError(f"Network error: {e}") from e
