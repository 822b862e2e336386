from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GITHUB_ACTIVITY_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # GitHub API
    api_base_url: str = "https://api.github.com"
    user_agent: str = "GitHub-Activity-CLI/1.0"
    # Wall-clock ceiling per request, in seconds
    request_timeout: float = 15.0

    # Token from the environment. A token in the config file takes precedence.
    github_token: str = Field(default="", validation_alias="GITHUB_TOKEN")

    # Optional JSON file with {"githubToken": "..."}
    config_file: Path = Path.home() / ".config" / "github-activity" / "config.json"

    # Flat JSON cache of fetched activity, keyed by request parameters
    cache_file: Path = Path.home() / ".github-activity-cache.json"
    cache_ttl_minutes: int = 5

    log_level: str = "WARNING"


settings = Settings()
