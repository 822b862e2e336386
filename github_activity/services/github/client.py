"""
Thin async client for the GitHub REST API.

Every request is a GET with a wall-clock timeout. Failures are raised as the
typed errors in ``exceptions.py``; nothing here retries.
"""

import asyncio
import logging
from typing import Any

import httpx

from github_activity.config import settings
from github_activity.services.github.constants import ACCEPT_HEADER
from github_activity.services.github.exceptions import (
    GitHubAPIError,
    NetworkError,
    ParseError,
    RequestTimeout,
)
from github_activity.services.github.helpers import handle_error_response
from github_activity.services.github.http_client import build_http_client
from github_activity.services.github.types import RateLimitStatus

logger = logging.getLogger(__name__)


class GitHubClient:
    """
    GET-only GitHub API client.

    Use as an async context manager so the underlying httpx client is closed
    when the run ends. A client passed in as ``http_client`` is borrowed and
    left open; otherwise one is built on first use and owned.
    The token (if any) goes into the per-request headers.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.token = token
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._http = http_client
        self._owns_http = http_client is None
        self._headers = {
            "User-Agent": user_agent or settings.user_agent,
            "Accept": ACCEPT_HEADER,
        }
        if token:
            self._headers["Authorization"] = f"token {token}"

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def authenticated(self) -> bool:
        return bool(self.token)

    def _http_client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = build_http_client(self.timeout)
        return self._http

    async def aclose(self) -> None:
        """Close the httpx client if this instance created it."""
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None
            logger.debug("Closed GitHub HTTP client")

    async def request(self, endpoint: str) -> Any:
        """
        GET ``endpoint`` and return the decoded JSON body.

        Args:
            endpoint: Path (and optional query string), e.g. ``/users/octocat``

        Raises:
            RequestTimeout: No complete response within ``self.timeout`` seconds
            NetworkError: DNS, connection or other transport failure
            HttpError: Status code 400 or above
            ParseError: Successful status with a body that isn't JSON
        """
        client = self._http_client()
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"GET {url}")

        try:
            response = await asyncio.wait_for(
                client.get(url, headers=self._headers),
                timeout=self.timeout,
            )
        except (TimeoutError, httpx.TimeoutException) as e:
            raise RequestTimeout(endpoint, self.timeout) from e
        except httpx.RequestError as e:
            raise NetworkError(str(e) or type(e).__name__, cause=e) from e

        handle_error_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise ParseError() from e

    async def get_rate_limit(self) -> RateLimitStatus | None:
        """
        Fetch the core rate limit bucket.

        Best-effort: any failure is logged and returns None.
        """
        try:
            data = await self.request("/rate_limit")
            rate = data["rate"]
            return RateLimitStatus(
                limit=int(rate.get("limit", 0)),
                remaining=int(rate["remaining"]),
                reset=int(rate.get("reset", 0)),
            )
        except (GitHubAPIError, KeyError, TypeError, ValueError) as e:
            logger.debug(f"Rate limit check failed: {e}")
            return None
