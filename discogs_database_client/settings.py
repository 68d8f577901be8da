"""Client settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import (
    DEFAULT_BASE_PATH,
    DEFAULT_HOST,
    DEFAULT_PER_PAGE,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)


class Settings(BaseSettings):
    """Settings for the Discogs database client.

    Every field can be set with a ``DISCOGS_`` prefixed environment variable,
    e.g. ``DISCOGS_ACCESS_KEY``.
    """

    model_config = SettingsConfigDict(
        env_prefix="DISCOGS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = DEFAULT_HOST
    base_path: str = DEFAULT_BASE_PATH
    default_per_page: int = DEFAULT_PER_PAGE
    user_agent: str = DEFAULT_USER_AGENT
    access_key: str = ""
    access_secret: str = ""
    timeout: float = DEFAULT_TIMEOUT


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
