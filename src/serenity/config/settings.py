"""
Serenity Application Settings

Configuration management using Pydantic Settings.
All values are loaded from environment variables with the SERENITY_ prefix.

CLINICAL_REVIEW_REQUIRED: acceptance_threshold suppresses hedged and
hypothetical phrasing. Changing it shifts the false positive /
false negative balance of the engine.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DetectionSettings(BaseSettings):
    """Crisis detection engine configuration."""

    model_config = SettingsConfigDict(env_prefix="SERENITY_DETECTION_")

    max_input_length: int = Field(
        default=10_000, ge=1, description="Maximum characters accepted per analysis"
    )
    oversize_policy: Literal["reject", "truncate"] = Field(
        default="reject",
        description="Reject oversize input or truncate it deterministically",
    )
    acceptance_threshold: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Adjusted confidence a keyword must exceed to count",
    )
    registry_path: Optional[Path] = Field(
        default=None,
        description="Keyword registry JSON file (defaults to the packaged registry)",
    )


class AuditSettings(BaseSettings):
    """Audit emission configuration."""

    model_config = SettingsConfigDict(env_prefix="SERENITY_AUDIT_")

    enabled: bool = Field(default=True)
    timeout_seconds: float = Field(default=2.0, gt=0.0, le=30.0)
    max_workers: int = Field(default=2, ge=1, le=16)


class Settings(BaseSettings):
    """
    Main application settings.

    Usage:
        settings = get_settings()
        limit = settings.detection.max_input_length
    """

    model_config = SettingsConfigDict(
        env_prefix="SERENITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    audit: AuditSettings = Field(default_factory=AuditSettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once per process. Tests should construct
    Settings directly and pass them in.
    """
    return Settings()
