"""
Config file loading and GitHub token resolution.

The config file is optional. A missing file is normal; an unreadable one is
reported back as a warning and otherwise ignored.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from github_activity.config.settings import Settings

logger = logging.getLogger(__name__)

CONFIG_TOKEN_FIELD = "githubToken"


@dataclass
class ConfigLoadResult:
    """Outcome of reading the config file. ``error`` is set on read failure."""

    data: dict[str, Any] = field(default_factory=dict)
    error: str | None = None


@dataclass
class TokenResolution:
    """Which token to use and where it came from."""

    token: str | None
    source: str | None  # "config", "env" or None
    warning: str | None = None


def load_config_file(path: Path) -> ConfigLoadResult:
    """Read the JSON config file, never raising."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return ConfigLoadResult()
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        return ConfigLoadResult(error=f"Could not read config file {path}: {e}")
    if not isinstance(data, dict):
        return ConfigLoadResult(error=f"Config file {path} must contain a JSON object")
    return ConfigLoadResult(data=data)


def resolve_token(settings: Settings) -> TokenResolution:
    """
    Pick the GitHub token.

    The config file's ``githubToken`` wins over the ``GITHUB_TOKEN``
    environment variable. No token at all is fine: requests go out
    unauthenticated with the lower rate limit.
    """
    loaded = load_config_file(settings.config_file)
    if loaded.error:
        logger.warning(loaded.error)

    config_token = loaded.data.get(CONFIG_TOKEN_FIELD)
    if isinstance(config_token, str) and config_token.strip():
        return TokenResolution(config_token.strip(), "config", loaded.error)
    if settings.github_token.strip():
        return TokenResolution(settings.github_token.strip(), "env", loaded.error)
    return TokenResolution(None, None, loaded.error)
