"""Exceptions for GitHub service."""


class GitHubAPIError(Exception):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class HttpError(GitHubAPIError):
    """GitHub answered with a 4xx/5xx status. The body is kept as-is."""

    def __init__(self, status_code: int, body: str, rate_limit_reset: int | None = None):
        self.body = body
        super().__init__(
            f"GitHub API returned {status_code}",
            status_code,
            rate_limit_reset=rate_limit_reset,
        )


class UserNotFound(GitHubAPIError):
    """The requested user does not exist (404 on profile or events)."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f'User "{username}" not found on GitHub', 404)


class RateLimitExceeded(GitHubAPIError):
    """GitHub refused the request with 403, usually an exhausted quota."""

    def __init__(self, rate_limit_reset: int | None = None):
        super().__init__(
            "GitHub API rate limit exceeded. Add a GitHub token for higher limits.",
            403,
            rate_limit_reset=rate_limit_reset,
        )


class TooManyRequests(GitHubAPIError):
    """Secondary rate limit (429)."""

    def __init__(self, rate_limit_reset: int | None = None):
        super().__init__(
            "Too many requests. Please wait before trying again.",
            429,
            rate_limit_reset=rate_limit_reset,
        )


class RequestTimeout(GitHubAPIError):
    """The request did not complete within the wall-clock limit."""

    def __init__(self, endpoint: str, timeout: float):
        self.endpoint = endpoint
        self.timeout = timeout
        super().__init__(f"Request timeout after {timeout:g} seconds")


class NetworkError(GitHubAPIError):
    """Transport failure (DNS, refused connection, reset, ...)."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(f"Network error: {message}")


class ParseError(GitHubAPIError):
    """A successful response whose body is not the JSON we expected."""

    def __init__(self, message: str = "Failed to parse API response"):
        super().__init__(message)
