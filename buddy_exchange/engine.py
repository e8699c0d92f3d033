"""Buddy exchange engine: fetch queries wired to the statistics functions.

Each query method fetches a fresh issue set and runs a pure computation on
it. Nothing is cached between calls, so one engine can serve concurrent
requests. ``collect_snapshot`` runs the four independent fetches at once.
"""

import asyncio
import logging
from datetime import datetime

from pydantic import BaseModel, Field

from .config import BuddyExchangeConfig
from .github_client.client import GitHubClient
from .github_client.codecheckers import fetch_codecheckers
from .github_client.models import (
    CodecheckerProfile,
    GitHubIssue,
    IssueQuery,
    RateLimitStatus,
)
from .github_client.search import user_completed_issues_url
from .stats.availability import filter_available_issues
from .stats.buddies import build_buddy_report
from .stats.identifiers import extract_identifiers, format_identifier, next_identifier
from .stats.leaderboard import build_leaderboard
from .stats.models import BuddyReport, Leaderboard, NextIdentifier

logger = logging.getLogger(__name__)


class IssueSnapshot(BaseModel):
    """Complete issue sets fetched for one refresh."""

    open_issues: list[GitHubIssue] = Field(
        default_factory=list, description="Open issues with the exchange label"
    )
    closed_issues: list[GitHubIssue] = Field(
        default_factory=list, description="Closed issues with the exchange label"
    )
    labelled_issues: list[GitHubIssue] = Field(
        default_factory=list, description="All issues with the exchange label"
    )
    all_issues: list[GitHubIssue] = Field(
        default_factory=list, description="Every issue in the repository"
    )


class BuddyExchangeReport(BaseModel):
    """All views computed from one snapshot."""

    available: list[GitHubIssue]
    leaderboard: Leaderboard
    buddies: BuddyReport
    next_identifier: NextIdentifier


class BuddyExchangeEngine:
    """Read-only statistics over a repository's buddy exchange issues."""

    def __init__(
        self,
        config: BuddyExchangeConfig | None = None,
        client: GitHubClient | None = None,
    ):
        self.config = config or BuddyExchangeConfig()
        self.client = client or GitHubClient(
            repository=self.config.repository.full_name,
            per_page=self.config.github.issues_per_page,
            base_url=self.config.github.base_url,
        )

    # ---- queries --------------------------------------------------------

    def _open_query(self) -> IssueQuery:
        return IssueQuery(
            labels=self.config.labels.buddy_exchange, state="open", sort="created"
        )

    def _closed_query(self) -> IssueQuery:
        return IssueQuery(
            labels=self.config.labels.buddy_exchange, state="closed", sort="updated"
        )

    def _labelled_query(self) -> IssueQuery:
        return IssueQuery(
            labels=self.config.labels.buddy_exchange, state="all", sort="updated"
        )

    def _all_query(self) -> IssueQuery:
        return IssueQuery(state="all", sort="created")

    async def _fetch(self, query: IssueQuery, max_pages: int) -> list[GitHubIssue]:
        return await asyncio.to_thread(
            self.client.fetch_issues,
            query,
            self.config.github.issues_per_page,
            max_pages,
        )

    async def fetch_open_issues(self) -> list[GitHubIssue]:
        return await self._fetch(
            self._open_query(), self.config.github.max_available_pages
        )

    async def fetch_closed_issues(self) -> list[GitHubIssue]:
        return await self._fetch(
            self._closed_query(), self.config.github.max_leaderboard_pages
        )

    async def fetch_labelled_issues(self) -> list[GitHubIssue]:
        return await self._fetch(
            self._labelled_query(), self.config.github.max_all_issues_pages
        )

    async def fetch_all_issues(self) -> list[GitHubIssue]:
        return await self._fetch(
            self._all_query(), self.config.github.max_all_issues_pages
        )

    # ---- computations ---------------------------------------------------

    def _search_url_for(self, login: str) -> str:
        return user_completed_issues_url(
            self.config.repository.full_name, self.config.labels.buddy_exchange, login
        )

    def available_from(self, open_issues: list[GitHubIssue]) -> list[GitHubIssue]:
        # The exchange label is enforced by the fetch query, not re-checked here.
        return filter_available_issues(
            open_issues, self.config.labels.needs_codechecker
        )

    def leaderboard_from(
        self, closed_issues: list[GitHubIssue], now: datetime | None = None
    ) -> Leaderboard:
        return build_leaderboard(
            closed_issues, now=now, search_url_for=self._search_url_for
        )

    def buddies_from(
        self, issues: list[GitHubIssue], now: datetime | None = None
    ) -> BuddyReport:
        return build_buddy_report(issues, now=now, search_url_for=self._search_url_for)

    def identifier_from(self, issues: list[GitHubIssue]) -> NextIdentifier:
        used = extract_identifiers(issue.title for issue in issues)
        number = next_identifier(used)
        formatted = format_identifier(
            number,
            self.config.certificate.current_year,
            self.config.certificate.identifier_padding,
        )
        return NextIdentifier(number=number, formatted=formatted, used=used)

    # ---- engine interface -----------------------------------------------

    async def list_available_issues(self) -> list[GitHubIssue]:
        """Open exchange issues that still need a codechecker, newest first."""
        issues = await self.fetch_open_issues()
        available = self.available_from(issues)
        logger.info("Found %d available issues", len(available))
        return available

    async def build_leaderboard(self, now: datetime | None = None) -> Leaderboard:
        """Leaderboard of codecheckers by completed exchanges."""
        leaderboard = self.leaderboard_from(await self.fetch_closed_issues(), now)
        logger.info(
            "Loaded leaderboard with %d contributors and %d completed exchanges",
            leaderboard.active_contributors,
            leaderboard.total_completed,
        )
        return leaderboard

    async def build_buddy_report(self, now: datetime | None = None) -> BuddyReport:
        """Users ranked by checks received per check conducted."""
        return self.buddies_from(await self.fetch_labelled_issues(), now)

    async def allocate_next_identifier(self) -> NextIdentifier:
        """Lowest certificate identifier not used by any issue title."""
        return self.identifier_from(await self.fetch_all_issues())

    async def collect_snapshot(self) -> IssueSnapshot:
        """Fetch every issue set concurrently.

        If any fetch fails the error propagates and no partial snapshot is
        returned.
        """
        open_issues, closed_issues, labelled_issues, all_issues = await asyncio.gather(
            self.fetch_open_issues(),
            self.fetch_closed_issues(),
            self.fetch_labelled_issues(),
            self.fetch_all_issues(),
        )
        return IssueSnapshot(
            open_issues=open_issues,
            closed_issues=closed_issues,
            labelled_issues=labelled_issues,
            all_issues=all_issues,
        )

    def compute_report(
        self, snapshot: IssueSnapshot, now: datetime | None = None
    ) -> BuddyExchangeReport:
        return BuddyExchangeReport(
            available=self.available_from(snapshot.open_issues),
            leaderboard=self.leaderboard_from(snapshot.closed_issues, now),
            buddies=self.buddies_from(snapshot.labelled_issues, now),
            next_identifier=self.identifier_from(snapshot.all_issues),
        )

    async def build_report(self, now: datetime | None = None) -> BuddyExchangeReport:
        return self.compute_report(await self.collect_snapshot(), now)

    # ---- auxiliary lookups ----------------------------------------------

    async def check_rate_limit(self) -> RateLimitStatus:
        """Read rate limit counters, warning when they run low."""
        status = await asyncio.to_thread(self.client.get_rate_limit)
        if status.remaining < self.config.rate_limit.warning_threshold:
            logger.warning(
                "GitHub API rate limit low: %d requests remaining. Resets at %s",
                status.remaining,
                status.reset_at.isoformat(),
            )
        return status

    async def lookup_display_name(self, login: str) -> str | None:
        return await asyncio.to_thread(self.client.get_user_display_name, login)

    async def fetch_codechecker_profiles(self) -> dict[str, CodecheckerProfile]:
        return await fetch_codecheckers(self.config.codecheckers_csv_url)
