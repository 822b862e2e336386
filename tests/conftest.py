"""Root conftest — shared fixtures for all tests.

Provides:
- anyio backend selection (asyncio only)
- Isolated cache/config paths under tmp_path
"""

from __future__ import annotations

import pytest

from github_activity.config import Settings


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch) -> Settings:
    """Settings pointing at throwaway files, with no token from the environment."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    return Settings(
        config_file=tmp_path / "config.json",
        cache_file=tmp_path / "cache.json",
        github_token="",
        _env_file=None,
    )
