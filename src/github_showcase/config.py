"""Configuration management for GitHub Showcase."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_STATE_PATH = Path.home() / ".config" / "github-showcase" / "state.json"


@dataclass
class Config:
    """Application configuration."""

    github_api_url: str = "https://api.github.com"

    # Pagination
    per_page: int = 100  # GitHub maximum
    max_pages: int = 1  # One page of 100; 0 fetches every page

    # Activity chart window
    activity_days: int = 30

    # Transport
    request_timeout: float = 30.0
    request_attempts: int = 1  # 1 means no retry

    # Local persisted state (identity + bookmarks)
    state_path: Path = DEFAULT_STATE_PATH

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        # override=False ensures environment variables take precedence over .env
        load_dotenv(override=False)

        state_path = os.getenv("GITHUB_SHOWCASE_STATE")

        return cls(
            github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
            request_timeout=float(os.getenv("GITHUB_SHOWCASE_TIMEOUT", "30")),
            state_path=Path(state_path).expanduser() if state_path else DEFAULT_STATE_PATH,
        )


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def set_config(config: Config | None) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config
