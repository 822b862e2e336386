"""
Activity fetching: cache lookup, concurrent API calls, filtering and limiting.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, time

from github_activity.services.github.cache import CacheStore
from github_activity.services.github.client import GitHubClient
from github_activity.services.github.constants import MAX_EVENTS_PER_PAGE
from github_activity.services.github.exceptions import GitHubAPIError, ParseError
from github_activity.services.github.helpers import translate_fetch_error
from github_activity.services.github.types import ActivityResult, Event, Profile

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 15
CACHE_TTL_MINUTES = 5


@dataclass
class FetchOptions:
    limit: int = DEFAULT_LIMIT
    since: str | None = None  # ISO date or datetime, inclusive lower bound
    cache_enabled: bool = True


def build_cache_key(username: str, limit: int, since: str | None) -> str:
    return f"events_{username}_{limit}_{since or 'all'}"


def events_page_size(limit: int) -> int:
    """Raw events to request: twice the limit, so ``since`` filtering has slack."""
    return max(1, min(limit * 2, MAX_EVENTS_PER_PAGE))


def parse_since(value: str) -> datetime:
    """
    Parse a ``--since`` value into an aware datetime.

    A bare date (``2024-01-01``) is midnight UTC. A datetime without an
    offset is taken as local time.

    Raises:
        ValueError: If the value is not an ISO 8601 date or datetime
    """
    text = value.strip()
    try:
        return datetime.combine(date.fromisoformat(text), time.min, tzinfo=UTC)
    except ValueError:
        pass
    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def filter_since(events: list[Event], since: datetime) -> list[Event]:
    return [event for event in events if event.created_at >= since]


class ActivityFetcher:
    """
    Fetches a user's profile and recent events, with a short-lived file cache.

    The cache store is injected so one instance (one file) serves the whole
    run. Pass ``cache=None`` to run without any cache.
    """

    def __init__(
        self,
        client: GitHubClient,
        cache: CacheStore | None = None,
        cache_ttl_minutes: float = CACHE_TTL_MINUTES,
    ):
        self.client = client
        self.cache = cache
        self.cache_ttl_minutes = cache_ttl_minutes

    async def fetch(self, username: str, options: FetchOptions | None = None) -> ActivityResult:
        """
        Return the profile and up to ``options.limit`` events for ``username``.

        Raises:
            UserNotFound: GitHub returned 404
            RateLimitExceeded: GitHub returned 403
            TooManyRequests: GitHub returned 429
            GitHubAPIError: Any other request failure, unchanged
        """
        options = options or FetchOptions()
        cache_key = build_cache_key(username, options.limit, options.since)
        use_cache = options.cache_enabled and self.cache is not None

        if use_cache:
            cached = self._read_cached(cache_key)
            if cached is not None:
                return cached

        # Parse before going to the network so a bad value costs no requests
        since = parse_since(options.since) if options.since else None

        logger.info(f"Fetching activity for {username}")
        user_data, events_data = await self._fetch_raw(username, options.limit)

        try:
            profile = Profile.from_api(user_data)
            if not isinstance(events_data, list):
                raise ValueError("Events response is not a list")
            events = [Event.from_api(item) for item in events_data]
        except (ValueError, TypeError, AttributeError) as e:
            raise ParseError(f"Failed to parse API response: {e}") from e

        if since is not None:
            events = filter_since(events, since)
        events = events[: options.limit]

        result = ActivityResult(profile=profile, events=events)

        if use_cache:
            write = self.cache.write(cache_key, result.to_dict())
            if not write.ok:
                logger.debug(f"Activity not cached: {write.error}")

        return result

    def _read_cached(self, cache_key: str) -> ActivityResult | None:
        cached = self.cache.get(cache_key, self.cache_ttl_minutes)
        if cached is None:
            return None
        try:
            result = ActivityResult.from_dict(cached, from_cache=True)
        except (ValueError, TypeError, AttributeError) as e:
            logger.debug(f"Discarding unusable cache entry {cache_key}: {e}")
            return None
        logger.info(f"Using cached activity ({cache_key})")
        return result

    async def _fetch_raw(self, username: str, limit: int) -> tuple[object, object]:
        """
        Request profile and events together; both must succeed.

        The first request to fail cancels the other. When several fail, the
        earliest GitHub error is the one reported.
        """
        try:
            async with asyncio.TaskGroup() as tg:
                user_task = tg.create_task(self.client.request(f"/users/{username}"))
                events_task = tg.create_task(
                    self.client.request(f"/users/{username}/events?per_page={events_page_size(limit)}")
                )
        except ExceptionGroup as group:
            api_errors, _ = group.split(GitHubAPIError)
            if api_errors is None:
                raise
            # TaskGroup lists failures in the order they happened
            error = api_errors.exceptions[0]
            translated = translate_fetch_error(error, username)
            if translated is error:
                raise error
            raise translated from error
        return user_task.result(), events_task.result()
