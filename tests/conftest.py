"""Test configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from buddy_exchange.github_client.models import GitHubIssue, GitHubLabel, GitHubUser

IssueFactory = Callable[..., GitHubIssue]

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_user(login: str) -> GitHubUser:
    return GitHubUser(
        login=login,
        avatar_url=f"https://avatars.example.com/{login}",
        html_url=f"https://github.com/{login}",
    )


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def issue_factory() -> IssueFactory:
    """Build GitHubIssue objects with sensible defaults."""

    def _make(
        number: int,
        *,
        title: str | None = None,
        state: str = "open",
        author: str = "author",
        assignee: str | None = None,
        assignees: list[str] | None = None,
        labels: list[str] | None = None,
        closed_at: datetime | None = None,
        body: str | None = None,
    ) -> GitHubIssue:
        data: dict[str, Any] = {
            "id": 1000 + number,
            "number": number,
            "title": title or f"Issue {number}",
            "body": body,
            "html_url": f"https://github.com/org/repo/issues/{number}",
            "state": state,
            "user": make_user(author),
            "assignee": make_user(assignee) if assignee else None,
            "assignees": [make_user(login) for login in assignees or []],
            "labels": [GitHubLabel(name=name, color="ededed") for name in labels or []],
            "comments": 0,
            "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
            "updated_at": datetime(2025, 1, 2, tzinfo=timezone.utc),
            "closed_at": closed_at,
        }
        if state == "closed" and closed_at is None:
            data["closed_at"] = datetime(2025, 2, 1, tzinfo=timezone.utc)
        return GitHubIssue(**data)

    return _make
