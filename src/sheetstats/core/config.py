"""Configuration management.

Uses pydantic-settings for type-safe configuration from environment variables.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    All settings can be overridden via environment variables.
    Prefix: SHEETSTATS_
    """

    model_config = SettingsConfigDict(
        env_prefix="SHEETSTATS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Type inference
    dominant_type_threshold: float = Field(
        default=0.8,
        description="Share of non-empty values a type must exceed to become the column type",
    )
    date_min_year: int = Field(
        default=1970,
        description="Date cells must fall in a year later than this to count as dates",
    )

    # Cross-column analysis
    max_category_stats: int = Field(
        default=10,
        description="Number of categories kept per categorical grouping",
    )
    max_sample_pairs: int = Field(
        default=50,
        description="Number of (x, y) pairs kept on a correlation result",
    )
    significance_level: float = Field(
        default=0.05,
        description="p-value below which a correlation is flagged significant",
    )

    # Parallelism
    parallel_min_pairs: int = Field(
        default=16,
        description="Column pair count from which cross-column analysis runs in a thread pool",
    )
    max_workers: int = Field(default=4, description="Thread pool size for pair analysis")

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")  # 'json' or 'console'


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
