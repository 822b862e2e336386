"""
GitHub service package.

Usage: `from github_activity.services.github import GitHubClient, CacheStore`

Module structure:
- client.py: GET-only API client with timeout and error mapping
- http_client.py: httpx.AsyncClient construction
- cache.py: File-backed TTL cache
- helpers.py: Rate limit parsing and error translation
- types.py: Profile, Event and ActivityResult models
- exceptions.py: Custom exceptions
- constants.py: API constants
"""

from github_activity.services.github.cache import (
    CacheEntry,
    CacheReadResult,
    CacheStore,
    CacheWriteResult,
)
from github_activity.services.github.client import GitHubClient
from github_activity.services.github.exceptions import (
    GitHubAPIError,
    HttpError,
    NetworkError,
    ParseError,
    RateLimitExceeded,
    RequestTimeout,
    TooManyRequests,
    UserNotFound,
)
from github_activity.services.github.helpers import RateLimitInfo, translate_fetch_error
from github_activity.services.github.http_client import build_http_client
from github_activity.services.github.types import (
    ActivityResult,
    Event,
    EventKind,
    Profile,
    RateLimitStatus,
)

__all__ = [
    # Client
    "GitHubClient",
    "build_http_client",
    # Cache
    "CacheEntry",
    "CacheReadResult",
    "CacheStore",
    "CacheWriteResult",
    # Utilities
    "RateLimitInfo",
    "translate_fetch_error",
    # Exceptions
    "GitHubAPIError",
    "HttpError",
    "NetworkError",
    "ParseError",
    "RateLimitExceeded",
    "RequestTimeout",
    "TooManyRequests",
    "UserNotFound",
    # Types
    "ActivityResult",
    "Event",
    "EventKind",
    "Profile",
    "RateLimitStatus",
]
