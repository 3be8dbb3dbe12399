"""
Configuration management for docs-crawler using Pydantic Settings.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class DocsCrawlerSettings(BaseSettings):
    """
    Application settings loaded from environment variables and .env files.
    """

    debug: bool = Field(default=False, alias="DEBUG")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, alias="LOG_FILE")
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")

    # Output
    docs_path: str = Field(
        default="docs",
        alias="DOCS_PATH",
        description="Directory that receives one sub-directory per crawled doc",
    )

    # Crawling Configuration
    crawl_user_agent: str = Field(
        default="docs-crawler/0.1.0 (+https://github.com/docs-crawler/docs-crawler)",
        alias="CRAWL_USER_AGENT",
    )
    max_concurrent_requests: int = Field(
        default=10, alias="MAX_CONCURRENT_REQUESTS", ge=1, le=100
    )
    crawl_max_pages: int | None = Field(
        default=None,
        alias="CRAWL_MAX_PAGES",
        description="Upper bound on admitted URLs per crawl (None = unbounded)",
    )

    # Rate limiting
    rate_limit_per_minute: int = Field(
        default=60, alias="RATE_LIMIT_PER_MINUTE", ge=1
    )
    min_request_interval: float = Field(
        default=0.1,
        alias="MIN_REQUEST_INTERVAL",
        ge=0.0,
        le=60.0,
        description="Minimum spacing in seconds between two requests",
    )

    # HTTP
    request_timeout: float = Field(default=30.0, alias="REQUEST_TIMEOUT", gt=0)
    connect_timeout: float = Field(default=10.0, alias="CONNECT_TIMEOUT", gt=0)
    fetch_max_retries: int = Field(
        default=3,
        alias="FETCH_MAX_RETRIES",
        ge=1,
        le=10,
        description="Attempts per URL before a transport error drops it",
    )

    # Retry configuration with exponential backoff
    retry_initial_delay: float = Field(
        default=1.0,
        alias="RETRY_INITIAL_DELAY",
        ge=0.0,
        le=10.0,
        description="Initial delay in seconds for exponential backoff",
    )
    retry_max_delay: float = Field(
        default=30.0,
        alias="RETRY_MAX_DELAY",
        ge=0.0,
        le=300.0,
        description="Maximum delay in seconds for exponential backoff",
    )
    retry_exponential_base: float = Field(
        default=2.0,
        alias="RETRY_EXPONENTIAL_BASE",
        ge=1.1,
        le=5.0,
        description="Base for exponential backoff calculation",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(VALID_LOG_LEVELS)}")
        return level

    @field_validator("crawl_max_pages")
    @classmethod
    def validate_crawl_max_pages(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("crawl_max_pages must be positive or unset")
        return v

    @field_validator("crawl_user_agent")
    @classmethod
    def validate_user_agent(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("CRAWL_USER_AGENT must be a non-empty string")
        return v.strip()

    @field_validator("log_file", mode="before")
    @classmethod
    def create_log_directory(cls, v: str | None) -> str | None:
        if v:
            log_path = Path(str(v)).expanduser()
            try:
                log_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logging.getLogger(__name__).warning(
                    f"Could not create log directory {log_path.parent}: {e}"
                )
        return v

    @property
    def docs_dir(self) -> Path:
        """Output directory as an expanded path."""
        return Path(self.docs_path).expanduser()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


# Lazy settings accessor (avoids import-time side effects)
_settings: DocsCrawlerSettings | None = None


def get_settings() -> DocsCrawlerSettings:
    global _settings
    if _settings is None:
        _settings = DocsCrawlerSettings()
    return _settings


settings = get_settings()
