"""Errors raised while fetching issues from GitHub."""

from datetime import datetime

RATE_LIMIT_STATUSES = (403, 429)


class FetchError(RuntimeError):
    """Raised when issues could not be fetched from GitHub."""

    def __init__(self, message: str, *, status: int | None = None):
        super().__init__(message)
        self.status = status


class TransientFetchError(FetchError):
    """Raised on a non-success response or a transport failure.

    The engine never retries; callers inspect ``status``, ``reset_at`` and
    ``is_rate_limited`` to pick a backoff strategy.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        reset_at: datetime | None = None,
        remaining: int | None = None,
        rate_limited: bool = False,
    ):
        super().__init__(message, status=status)
        self.reset_at = reset_at
        self.remaining = remaining
        self._rate_limited = rate_limited

    @property
    def is_rate_limited(self) -> bool:
        """True when the failure was caused by rate-limit exhaustion."""
        if self._rate_limited:
            return True
        return self.status in RATE_LIMIT_STATUSES and self.remaining == 0


class MalformedResponseError(FetchError):
    """Raised when a page payload is not an array of issue objects."""


class ConfigurationError(ValueError):
    """Raised when configuration values are out of range."""

    def __init__(self, errors: list[str]):
        super().__init__(f"Configuration validation failed: {', '.join(errors)}")
        self.errors = errors
