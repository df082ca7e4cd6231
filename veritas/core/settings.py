"""Application settings and configuration."""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO")
    # Level for pipeline and scoring step logs; defaults to log_level
    engine_log_level: Optional[str] = Field(default=None)

    # Service configuration
    service_host: str = Field(default="0.0.0.0")
    service_port: Optional[int] = Field(default=None)
    debug: bool = Field(default=False)

    app_name: str = "Veritas"
    environment: str = Field(default="development")

    # Clustering
    cluster_threshold: float = Field(default=0.15, ge=0.0, le=1.0)
    topic_keywords: int = Field(default=3, ge=1)
    scoring_workers: int = Field(default=1, ge=1)

    # Recap
    recap_window_hours: int = Field(default=24, ge=1)
    recap_max_items: int = Field(default=6, ge=1)

    # Fact checking
    fact_check_api_url: str = Field(
        default="https://factchecktools.googleapis.com/v1alpha1/claims:search"
    )
    fact_check_api_key: Optional[str] = Field(default=None)
    fact_check_timeout: float = Field(default=8.0, gt=0)

    # User trust overrides (YAML file, optional)
    overrides_path: Optional[str] = Field(default=None)


@lru_cache()
def get_settings() -> Settings:
    """Get settings singleton."""
    return Settings()
