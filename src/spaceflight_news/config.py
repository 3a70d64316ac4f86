"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

from spaceflight_news.constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_DATABASE_URL,
    DEFAULT_TIMEOUT,
    SPACEDEVS_DATA_API_BASE,
    SPACEFLIGHT_NEWS_API_BASE,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Executor
    config_path: Path = DEFAULT_CONFIG_PATH

    # Remote APIs
    spaceflight_news_base_url: str = SPACEFLIGHT_NEWS_API_BASE
    spacedevs_data_base_url: str = SPACEDEVS_DATA_API_BASE
    timeout_seconds: float = DEFAULT_TIMEOUT

    # Database
    database_url: str = DEFAULT_DATABASE_URL

    # App Settings
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        frozen = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
