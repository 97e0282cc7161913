"""Application configuration via Pydantic Settings."""

from typing import Optional
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # App
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # In-memory page cache
    CACHE_DEFAULT_TTL_SECONDS: int = 24 * 60 * 60  # 24 hours
    CACHE_SWEEP_INTERVAL_SECONDS: int = 60 * 60  # 1 hour

    # Fetch client
    SCRAPER_MIN_DELAY_MS: int = 2000
    SCRAPER_MAX_DELAY_MS: int = 4000
    SCRAPER_TIMEOUT_SECONDS: float = 15.0

    # Orchestrator
    # 0 means no ceiling on simultaneous per-URL pipelines
    SCRAPER_MAX_CONCURRENCY: int = 0
    SCRAPER_SINGLE_FLIGHT: bool = False

    # HTTP surface
    SCRAPE_MAX_URLS: int = 10

    @model_validator(mode="after")
    def check_delay_bounds(self) -> "Settings":
        """Reject a jitter window whose lower bound exceeds the upper bound."""
        if self.SCRAPER_MIN_DELAY_MS < 0 or self.SCRAPER_MAX_DELAY_MS < self.SCRAPER_MIN_DELAY_MS:
            raise ValueError(
                "SCRAPER_MIN_DELAY_MS must be >= 0 and <= SCRAPER_MAX_DELAY_MS"
            )
        return self

    def get_max_concurrency(self) -> Optional[int]:
        """Return the batch concurrency ceiling, or None when unbounded."""
        if self.SCRAPER_MAX_CONCURRENCY <= 0:
            return None
        return self.SCRAPER_MAX_CONCURRENCY


settings = Settings()
