"""Configuration for the buddy exchange statistics engine."""

import os
from datetime import datetime

from pydantic import BaseModel, Field

from .errors import ConfigurationError

DEFAULT_OWNER = "codecheckers"
DEFAULT_REPO = "testing-dev-register"
CODECHECKERS_CSV_URL = (
    "https://raw.githubusercontent.com/codecheckers/codecheckers/"
    "refs/heads/master/codecheckers.csv"
)


class RepositoryConfig(BaseModel):
    """Repository holding the buddy exchange issues."""

    owner: str = Field(DEFAULT_OWNER, description="Repository owner (user or org)")
    name: str = Field(DEFAULT_REPO, description="Repository name")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class GitHubConfig(BaseModel):
    """GitHub API paging limits."""

    base_url: str = Field("https://api.github.com", description="REST API base URL")
    issues_per_page: int = Field(100, description="Issues per page (max 100)")
    max_available_pages: int = Field(
        10, description="Maximum pages to fetch for open issues"
    )
    max_leaderboard_pages: int = Field(
        10, description="Maximum pages to fetch for closed issues"
    )
    max_all_issues_pages: int = Field(
        50, description="Maximum pages to fetch for all issues"
    )


class LabelsConfig(BaseModel):
    """Label names used to scope and classify issues."""

    buddy_exchange: str = "buddy exchange"
    needs_codechecker: str = "needs codechecker"
    identifier_assigned: str = "id assigned"


class RateLimitConfig(BaseModel):
    """Rate limit reporting."""

    warning_threshold: int = Field(
        10, description="Warn when remaining API calls fall below this value"
    )


class CertificateConfig(BaseModel):
    """Certificate identifier formatting."""

    identifier_padding: int = Field(3, description="Digits to pad identifiers to")
    year: int | None = Field(
        None, description="Year prefix for identifiers (defaults to current year)"
    )

    @property
    def current_year(self) -> int:
        return self.year if self.year is not None else datetime.now().year


class BuddyExchangeConfig(BaseModel):
    """Top-level configuration."""

    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    labels: LabelsConfig = Field(default_factory=LabelsConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    certificate: CertificateConfig = Field(default_factory=CertificateConfig)
    max_issues_displayed: int = 50
    excerpt_length: int = 400
    leaderboard_length: int = 20
    codecheckers_csv_url: str = CODECHECKERS_CSV_URL

    def check(self) -> "BuddyExchangeConfig":
        """Validate value ranges.

        Returns:
            The configuration itself, for chaining

        Raises:
            ConfigurationError: Listing every out-of-range value
        """
        errors = []

        if not 1 <= self.max_issues_displayed <= 100:
            errors.append("max_issues_displayed must be between 1 and 100")
        if not 50 <= self.excerpt_length <= 1000:
            errors.append("excerpt_length must be between 50 and 1000")
        if not 5 <= self.leaderboard_length <= 100:
            errors.append("leaderboard_length must be between 5 and 100")
        if not self.repository.owner or not self.repository.name:
            errors.append("repository owner and name must be specified")
        if not 1 <= self.github.issues_per_page <= 100:
            errors.append("github.issues_per_page must be between 1 and 100")
        for field in (
            "max_available_pages",
            "max_leaderboard_pages",
            "max_all_issues_pages",
        ):
            if getattr(self.github, field) < 1:
                errors.append(f"github.{field} must be at least 1")
        if self.certificate.identifier_padding < 1:
            errors.append("certificate.identifier_padding must be at least 1")

        if errors:
            raise ConfigurationError(errors)
        return self


def load_config(
    owner: str | None = None,
    repo: str | None = None,
) -> BuddyExchangeConfig:
    """Build configuration from explicit values and environment variables.

    Explicit arguments win over BUDDY_EXCHANGE_OWNER / BUDDY_EXCHANGE_REPO /
    BUDDY_EXCHANGE_PER_PAGE, which win over defaults.

    Args:
        owner: Repository owner override
        repo: Repository name override

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If any value is out of range
    """
    repository = RepositoryConfig(
        owner=owner or os.getenv("BUDDY_EXCHANGE_OWNER", DEFAULT_OWNER),
        name=repo or os.getenv("BUDDY_EXCHANGE_REPO", DEFAULT_REPO),
    )
    github = GitHubConfig()
    per_page = os.getenv("BUDDY_EXCHANGE_PER_PAGE")
    if per_page:
        try:
            github.issues_per_page = int(per_page)
        except ValueError as e:
            raise ConfigurationError(
                [f"BUDDY_EXCHANGE_PER_PAGE must be an integer, got {per_page!r}"]
            ) from e

    return BuddyExchangeConfig(repository=repository, github=github).check()
