"""Report records produced by the statistics aggregators."""

from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from ..github_client.models import GitHubUser


class LeaderboardEntry(BaseModel):
    """Completed exchanges for one codechecker."""

    user: GitHubUser
    completed_count: int = Field(0, description="Distinct completed issues")
    last_completed_at: datetime | None = Field(
        None, description="Latest closed_at among completed issues"
    )
    completed_issue_numbers: list[int] = Field(
        default_factory=list, description="Completed issue numbers, first seen first"
    )
    search_url: str | None = Field(None, description="GitHub search for these issues")


class Leaderboard(BaseModel):
    """Codecheckers ranked by completed exchanges."""

    entries: list[LeaderboardEntry] = Field(default_factory=list)
    total_completed: int = Field(
        0, description="Closed issues with at least one assignee"
    )
    active_contributors: int = 0
    generated_at: datetime


class BuddyEntry(BaseModel):
    """Checks received versus checks conducted for one user."""

    user: GitHubUser
    received_checks: int = 0
    conducted_checks: int = 0
    received_issue_numbers: list[int] = Field(default_factory=list)
    conducted_issue_numbers: list[int] = Field(default_factory=list)
    search_url: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ratio(self) -> float:
        return self.received_checks / max(self.conducted_checks, 1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def deficit(self) -> int:
        return self.received_checks - self.conducted_checks


class BuddyReport(BaseModel):
    """Users who received checks, highest received/conducted ratio first."""

    entries: list[BuddyEntry] = Field(default_factory=list)
    total_users: int = 0
    total_issues: int = 0
    generated_at: datetime


class NextIdentifier(BaseModel):
    """Lowest free certificate identifier."""

    number: int
    formatted: str = Field(..., description="Identifier such as 2025-003")
    used: tuple[int, ...] = Field(
        default_factory=tuple, description="Identifiers already in use, ascending"
    )
