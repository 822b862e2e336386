"""Configuration package."""

from github_activity.config.settings import Settings, settings
from github_activity.config.token import (
    ConfigLoadResult,
    TokenResolution,
    load_config_file,
    resolve_token,
)

__all__ = [
    "ConfigLoadResult",
    "Settings",
    "TokenResolution",
    "load_config_file",
    "resolve_token",
    "settings",
]
