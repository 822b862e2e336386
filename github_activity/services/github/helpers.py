"""
GitHub API helper utilities.

Rate limit header parsing and the mapping from raw HTTP failures to the
errors callers actually act on.
"""

import logging

import httpx

from github_activity.services.github.exceptions import (
    GitHubAPIError,
    HttpError,
    RateLimitExceeded,
    TooManyRequests,
    UserNotFound,
)

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def handle_error_response(response: httpx.Response) -> None:
    """
    Raise HttpError for any 4xx/5xx response.

    The body is attached verbatim; interpreting it is left to the caller.

    Raises:
        HttpError: If the status code is 400 or above
    """
    if response.status_code < 400:
        return

    rate_info = RateLimitInfo(response)
    if rate_info.is_exhausted:
        logger.debug(f"Rate limit exhausted, resets at {rate_info.reset_timestamp}")
    raise HttpError(
        response.status_code,
        response.text,
        rate_limit_reset=rate_info.reset_timestamp,
    )


def translate_fetch_error(error: GitHubAPIError, username: str) -> GitHubAPIError:
    """
    Map an error raised while fetching a user's activity to a user-facing one.

    404 -> UserNotFound, 403 -> RateLimitExceeded, 429 -> TooManyRequests.
    Anything else is returned unchanged.
    """
    if not isinstance(error, HttpError):
        return error
    if error.status_code == 404:
        return UserNotFound(username)
    if error.status_code == 403:
        return RateLimitExceeded(rate_limit_reset=error.rate_limit_reset)
    if error.status_code == 429:
        return TooManyRequests(rate_limit_reset=error.rate_limit_reset)
    return error
