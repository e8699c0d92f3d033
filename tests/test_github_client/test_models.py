"""Tests for GitHub client models."""

from datetime import datetime, timezone
from typing import Any

import pytest
from pydantic import ValidationError

from buddy_exchange.github_client.models import (
    GitHubIssue,
    GitHubLabel,
    GitHubUser,
    IssueQuery,
    RateLimitStatus,
)


def _raw_issue(number: int, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": 500 + number,
        "number": number,
        "title": f"Jane Doe | 2025-{number:03d}",
        "body": "Please check my workflow",
        "html_url": f"https://github.com/org/repo/issues/{number}",
        "state": "open",
        "user": {
            "login": "jane",
            "avatar_url": "https://avatars.example.com/jane",
            "html_url": "https://github.com/jane",
        },
        "assignee": None,
        "assignees": [],
        "labels": [{"name": "buddy exchange", "color": "0e8a16", "description": None}],
        "comments": 2,
        "created_at": "2025-01-01T10:00:00Z",
        "updated_at": "2025-01-02T10:00:00Z",
        "closed_at": None,
    }
    data.update(overrides)
    return data


class TestGitHubUser:
    """Test GitHubUser model."""

    def test_valid_user(self) -> None:
        """Test creating a user with only a login."""
        user = GitHubUser(login="testuser")
        assert user.login == "testuser"
        assert user.avatar_url is None

    def test_missing_login(self) -> None:
        """Test validation with missing login."""
        with pytest.raises(ValidationError):
            GitHubUser()  # type: ignore[call-arg]


class TestGitHubIssue:
    """Test GitHubIssue model."""

    def test_from_api_payload(self) -> None:
        """Test validating a REST API issue object."""
        issue = GitHubIssue.model_validate(_raw_issue(7))

        assert issue.number == 7
        assert issue.user.login == "jane"
        assert issue.labels[0].name == "buddy exchange"
        assert issue.created_at == datetime(2025, 1, 1, 10, tzinfo=timezone.utc)
        assert issue.closed_at is None

    def test_invalid_state(self) -> None:
        """Test that unknown states are rejected."""
        with pytest.raises(ValidationError):
            GitHubIssue.model_validate(_raw_issue(1, state="merged"))

    def test_assigned_users_merges_without_duplicates(self) -> None:
        """Test merging the legacy assignee with assignees."""
        alice = {"login": "alice"}
        bob = {"login": "bob"}
        issue = GitHubIssue.model_validate(
            _raw_issue(1, assignee=alice, assignees=[alice, bob])
        )

        assert [user.login for user in issue.assigned_users()] == ["alice", "bob"]
        assert issue.is_assigned

    def test_assigned_users_legacy_only(self) -> None:
        """Test an issue with only the singular assignee set."""
        issue = GitHubIssue.model_validate(_raw_issue(1, assignee={"login": "alice"}))

        assert [user.login for user in issue.assigned_users()] == ["alice"]

    def test_unassigned(self) -> None:
        issue = GitHubIssue.model_validate(_raw_issue(1))

        assert issue.assigned_users() == []
        assert not issue.is_assigned

    def test_has_label_is_case_insensitive(self) -> None:
        issue = GitHubIssue.model_validate(_raw_issue(1))

        assert issue.has_label("Buddy Exchange")
        assert not issue.has_label("needs codechecker")


class TestSmallModels:
    """Test query and rate limit models."""

    def test_issue_query_defaults(self) -> None:
        query = IssueQuery()
        assert query.state == "open"
        assert query.labels is None
        assert query.sort == "created"
        assert query.direction == "desc"

    def test_issue_query_rejects_unknown_state(self) -> None:
        with pytest.raises(ValidationError):
            IssueQuery(state="merged")  # type: ignore[arg-type]

    def test_rate_limit_reset_epoch(self) -> None:
        status = RateLimitStatus(
            limit=60,
            remaining=12,
            reset_at=datetime.fromtimestamp(1700000000, tz=timezone.utc),
        )
        assert status.reset_epoch == 1700000000

    def test_label_color_optional(self) -> None:
        assert GitHubLabel(name="bug").color == ""
