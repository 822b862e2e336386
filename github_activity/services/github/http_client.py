"""
httpx client construction for GitHub API calls.

One AsyncClient is opened per CLI run by ``GitHubClient`` and closed when the
run ends; the profile and events requests share its connection pool.
"""

import logging

import httpx

logger = logging.getLogger(__name__)

# Two concurrent requests per run, plus the rate limit check
MAX_CONNECTIONS = 4


def build_http_client(timeout: float) -> httpx.AsyncClient:
    """
    Create the httpx client for one run.

    ``timeout`` is a single ceiling for connect, read, write and pool waits,
    matching the wall-clock limit ``GitHubClient`` puts on each request.
    Auth headers are passed per-request, not stored on the client.
    """
    logger.debug(f"Opening GitHub HTTP client (timeout={timeout:g}s)")
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        limits=httpx.Limits(max_connections=MAX_CONNECTIONS),
        http2=True,
    )
