"""Pydantic models for GitHub data structures.

These models map to GitHub's REST API v3 response structures.
API Reference: https://docs.github.com/en/rest/issues
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

IssueState = Literal["open", "closed"]
QueryState = Literal["open", "closed", "all"]


class GitHubUser(BaseModel):
    """GitHub user model representing a user account.

    Maps to GitHub REST API User object.
    API Reference: https://docs.github.com/en/rest/users/users
    """

    login: str = Field(..., description="GitHub username/login (string)")
    avatar_url: str | None = Field(None, description="Avatar image URL (string)")
    html_url: str | None = Field(None, description="Profile page URL (string)")


class GitHubLabel(BaseModel):
    """GitHub label model representing repository labels.

    Maps to GitHub REST API Label object.
    API Reference: https://docs.github.com/en/rest/issues/labels
    """

    name: str = Field(..., description="Name of the label (string)")
    color: str = Field(
        "", description="Hexadecimal color code without leading # (string)"
    )
    description: str | None = Field(
        None, description="Short description of the label (string, max 100 characters)"
    )


class GitHubIssue(BaseModel):
    """GitHub issue model representing repository issues.

    Maps to GitHub REST API Issue object.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    id: int = Field(..., description="Unique issue identifier (integer)")
    number: int = Field(..., description="Issue number within the repository (integer)")
    title: str = Field(..., description="Short description/title of the issue (string)")
    body: str | None = Field(
        None, description="Detailed description of the issue in markdown (string)"
    )
    html_url: str = Field(..., description="Issue page URL (string)")
    state: IssueState = Field(..., description="Current state: 'open', 'closed'")
    user: GitHubUser = Field(..., description="Creator/author of the issue")
    assignee: GitHubUser | None = Field(
        None, description="Legacy single assignee (first of assignees)"
    )
    assignees: list[GitHubUser] = Field(
        default_factory=list, description="Users assigned to the issue"
    )
    labels: list[GitHubLabel] = Field(
        default_factory=list, description="Array of labels attached to the issue"
    )
    comments: int = Field(0, description="Number of comments (integer)")
    created_at: datetime = Field(
        ..., description="Timestamp of issue creation (ISO 8601)"
    )
    updated_at: datetime = Field(
        ..., description="Timestamp of last issue update (ISO 8601)"
    )
    closed_at: datetime | None = Field(
        None, description="Timestamp the issue was closed (ISO 8601)"
    )

    def assigned_users(self) -> list[GitHubUser]:
        """Merge ``assignee`` and ``assignees`` without repeating a login."""
        users: list[GitHubUser] = []
        seen: set[str] = set()
        candidates = [self.assignee] if self.assignee else []
        for user in [*candidates, *self.assignees]:
            if user.login not in seen:
                seen.add(user.login)
                users.append(user)
        return users

    @property
    def is_assigned(self) -> bool:
        return self.assignee is not None or bool(self.assignees)

    def has_label(self, name: str) -> bool:
        """Check for a label, ignoring case."""
        wanted = name.lower()
        return any(label.name.lower() == wanted for label in self.labels)


class IssueQuery(BaseModel):
    """Parameters for listing repository issues."""

    labels: str | None = Field(None, description="Comma-separated label filter")
    state: QueryState = Field("open", description="Issue state filter")
    sort: Literal["created", "updated", "comments"] = "created"
    direction: Literal["asc", "desc"] = "desc"


class RateLimitStatus(BaseModel):
    """Current core rate-limit counters."""

    limit: int
    remaining: int
    reset_at: datetime

    @property
    def reset_epoch(self) -> int:
        return int(self.reset_at.timestamp())


class CodecheckerProfile(BaseModel):
    """Entry of the public codecheckers registry."""

    handle: str = Field(..., description="GitHub handle without '@'")
    name: str = Field(..., description="Display name (falls back to handle)")
    fields: str = Field("", description="Research fields")
    languages: str = Field("", description="Programming languages")
