"""Unit tests for the GitHub API client and helpers.

Tests request construction (URL, headers), status/timeout/transport error
mapping, rate limit parsing, error translation, and the httpx client lifecycle.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from github_activity.services.github.client import GitHubClient
from github_activity.services.github.exceptions import (
    HttpError,
    NetworkError,
    ParseError,
    RateLimitExceeded,
    RequestTimeout,
    TooManyRequests,
    UserNotFound,
)
from github_activity.services.github.helpers import (
    RateLimitInfo,
    handle_error_response,
    translate_fetch_error,
)
from github_activity.services.github.http_client import build_http_client
from tests.helpers.factories import make_response

CLIENT_PATH = "github_activity.services.github.client.build_http_client"
BASE = "https://api.github.com"


# ═══════════════════════════════════════════════════════════════════════════
# RateLimitInfo
# ═══════════════════════════════════════════════════════════════════════════


class TestRateLimitInfo:
    def test_extracts_remaining_and_reset(self):
        info = RateLimitInfo(
            make_response(headers={"X-RateLimit-Remaining": "42", "X-RateLimit-Reset": "1700000000"})
        )

        assert info.remaining == "42"
        assert info.reset_timestamp == 1700000000
        assert info.is_exhausted is False

    def test_detects_exhausted(self):
        info = RateLimitInfo(make_response(headers={"X-RateLimit-Remaining": "0"}))

        assert info.is_exhausted is True

    def test_missing_headers(self):
        info = RateLimitInfo(make_response())

        assert info.remaining is None
        assert info.reset_timestamp is None
        assert info.is_exhausted is False


# ═══════════════════════════════════════════════════════════════════════════
# handle_error_response / translate_fetch_error
# ═══════════════════════════════════════════════════════════════════════════


class TestHandleErrorResponse:
    def test_200_does_nothing(self):
        handle_error_response(make_response(status_code=200))

    def test_399_does_nothing(self):
        handle_error_response(make_response(status_code=304))

    def test_error_keeps_raw_body(self):
        resp = make_response(status_code=500, text="<html>oops</html>")

        with pytest.raises(HttpError) as exc_info:
            handle_error_response(resp)

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "<html>oops</html>"

    def test_error_carries_rate_limit_reset(self):
        resp = make_response(
            status_code=403,
            json_data={"message": "API rate limit exceeded"},
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
        )

        with pytest.raises(HttpError) as exc_info:
            handle_error_response(resp)

        assert exc_info.value.rate_limit_reset == 1700000000


class TestTranslateFetchError:
    def test_404_becomes_user_not_found(self):
        err = translate_fetch_error(HttpError(404, ""), "ghost")

        assert isinstance(err, UserNotFound)
        assert err.username == "ghost"
        assert str(err) == 'User "ghost" not found on GitHub'

    def test_403_becomes_rate_limit_exceeded(self):
        err = translate_fetch_error(HttpError(403, "", rate_limit_reset=99), "octocat")

        assert isinstance(err, RateLimitExceeded)
        assert err.rate_limit_reset == 99

    def test_429_becomes_too_many_requests(self):
        assert isinstance(translate_fetch_error(HttpError(429, ""), "octocat"), TooManyRequests)

    def test_other_status_unchanged(self):
        original = HttpError(502, "bad gateway")

        assert translate_fetch_error(original, "octocat") is original

    def test_non_http_error_unchanged(self):
        original = RequestTimeout("/users/octocat", 15)

        assert translate_fetch_error(original, "octocat") is original


# ═══════════════════════════════════════════════════════════════════════════
# GitHubClient.request
# ═══════════════════════════════════════════════════════════════════════════


class TestRequest:
    @patch(CLIENT_PATH)
    @pytest.mark.anyio
    async def test_builds_url_and_headers_with_token(self, mock_build):
        client = AsyncMock()
        mock_build.return_value = client
        client.get.return_value = make_response(json_data={"login": "octocat"})

        data = await GitHubClient("ghp_abc", base_url=BASE).request("/users/octocat")

        assert data == {"login": "octocat"}
        url = client.get.call_args.args[0]
        headers = client.get.call_args.kwargs["headers"]
        assert url == f"{BASE}/users/octocat"
        assert headers["User-Agent"] == "GitHub-Activity-CLI/1.0"
        assert headers["Accept"] == "application/vnd.github.v3+json"
        assert headers["Authorization"] == "token ghp_abc"

    @patch(CLIENT_PATH)
    @pytest.mark.anyio
    async def test_no_token_means_no_authorization_header(self, mock_build):
        client = AsyncMock()
        mock_build.return_value = client
        client.get.return_value = make_response(json_data=[])

        gh = GitHubClient(None, base_url=BASE)
        await gh.request("/users/octocat/events?per_page=30")

        assert "Authorization" not in client.get.call_args.kwargs["headers"]
        assert client.get.call_args.args[0] == f"{BASE}/users/octocat/events?per_page=30"
        assert gh.authenticated is False

    @patch(CLIENT_PATH)
    @pytest.mark.anyio
    async def test_http_error_status(self, mock_build):
        client = AsyncMock()
        mock_build.return_value = client
        client.get.return_value = make_response(status_code=404, json_data={"message": "Not Found"})

        with pytest.raises(HttpError) as exc_info:
            await GitHubClient(base_url=BASE).request("/users/ghost")

        assert exc_info.value.status_code == 404
        assert "Not Found" in exc_info.value.body

    @patch(CLIENT_PATH)
    @pytest.mark.anyio
    async def test_invalid_json_raises_parse_error(self, mock_build):
        client = AsyncMock()
        mock_build.return_value = client
        client.get.return_value = make_response(text="definitely not json")

        with pytest.raises(ParseError, match="Failed to parse"):
            await GitHubClient(base_url=BASE).request("/users/octocat")

    @patch(CLIENT_PATH)
    @pytest.mark.anyio
    async def test_transport_error_raises_network_error(self, mock_build):
        client = AsyncMock()
        mock_build.return_value = client
        cause = httpx.ConnectError("Name or service not known")
        client.get.side_effect = cause

        with pytest.raises(NetworkError) as exc_info:
            await GitHubClient(base_url=BASE).request("/users/octocat")

        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause

    @patch(CLIENT_PATH)
    @pytest.mark.anyio
    async def test_httpx_timeout_raises_request_timeout(self, mock_build):
        client = AsyncMock()
        mock_build.return_value = client
        client.get.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(RequestTimeout, match="15 seconds"):
            await GitHubClient(base_url=BASE, timeout=15).request("/users/octocat")

    @patch(CLIENT_PATH)
    @pytest.mark.anyio
    async def test_wall_clock_timeout_aborts_slow_request(self, mock_build):
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def slow_get(*args, **kwargs):
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        client = AsyncMock()
        client.get.side_effect = slow_get
        mock_build.return_value = client

        with pytest.raises(RequestTimeout) as exc_info:
            await GitHubClient(base_url=BASE, timeout=0.05).request("/users/octocat")

        assert started.is_set()
        assert cancelled.is_set()
        assert exc_info.value.endpoint == "/users/octocat"


# ═══════════════════════════════════════════════════════════════════════════
# GitHubClient.get_rate_limit
# ═══════════════════════════════════════════════════════════════════════════


class TestGetRateLimit:
    @patch(CLIENT_PATH)
    @pytest.mark.anyio
    async def test_parses_core_bucket(self, mock_build):
        client = AsyncMock()
        mock_build.return_value = client
        client.get.return_value = make_response(
            json_data={"rate": {"limit": 60, "remaining": 3, "reset": 1700000000}}
        )

        status = await GitHubClient(base_url=BASE).get_rate_limit()

        assert status.remaining == 3
        assert status.limit == 60
        assert status.reset_at.timestamp() == 1700000000
        assert client.get.call_args.args[0] == f"{BASE}/rate_limit"

    @patch(CLIENT_PATH)
    @pytest.mark.anyio
    async def test_failure_is_swallowed(self, mock_build):
        client = AsyncMock()
        mock_build.return_value = client
        client.get.return_value = make_response(status_code=500, text="boom")

        assert await GitHubClient(base_url=BASE).get_rate_limit() is None

    @patch(CLIENT_PATH)
    @pytest.mark.anyio
    async def test_unexpected_shape_is_swallowed(self, mock_build):
        client = AsyncMock()
        mock_build.return_value = client
        client.get.return_value = make_response(json_data={"resources": {}})

        assert await GitHubClient(base_url=BASE).get_rate_limit() is None




# ═══════════════════════════════════════════════════════════════════════════
# HTTP client lifecycle
# ═══════════════════════════════════════════════════════════════════════════


class TestHttpClientLifecycle:
    @pytest.mark.anyio
    async def test_single_timeout_ceiling(self):
        http = build_http_client(15)
        try:
            assert isinstance(http, httpx.AsyncClient)
            assert http.timeout.connect == 15
            assert http.timeout.read == 15
            assert http.timeout.pool == 15
        finally:
            await http.aclose()

    @patch(CLIENT_PATH)
    @pytest.mark.anyio
    async def test_built_once_and_closed_on_exit(self, mock_build):
        http = AsyncMock()
        mock_build.return_value = http
        http.get.return_value = make_response(json_data={})

        async with GitHubClient(base_url=BASE, timeout=7) as gh:
            await gh.request("/users/octocat")
            await gh.request("/users/octocat/events")

        mock_build.assert_called_once_with(7)
        http.aclose.assert_awaited_once()

    @patch(CLIENT_PATH)
    @pytest.mark.anyio
    async def test_unused_client_is_never_built(self, mock_build):
        async with GitHubClient(base_url=BASE):
            pass

        mock_build.assert_not_called()

    @pytest.mark.anyio
    async def test_borrowed_client_is_left_open(self):
        http = AsyncMock()
        http.get.return_value = make_response(json_data={})

        async with GitHubClient(base_url=BASE, http_client=http) as gh:
            await gh.request("/users/octocat")

        http.aclose.assert_not_awaited()
