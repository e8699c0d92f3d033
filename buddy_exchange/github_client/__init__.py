"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import (
    CodecheckerProfile,
    GitHubIssue,
    GitHubLabel,
    GitHubUser,
    IssueQuery,
    RateLimitStatus,
)

__all__ = [
    "GitHubClient",
    "GitHubUser",
    "GitHubLabel",
    "GitHubIssue",
    "IssueQuery",
    "RateLimitStatus",
    "CodecheckerProfile",
]
