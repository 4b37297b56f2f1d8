"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and
validation. Services take an optional Settings instance and fall back to
get_settings(), so tests can inject their own.

Usage:
    from analytics.settings import get_settings, Settings

    settings = get_settings()
    print(settings.deviation_threshold)

    # Test settings, ignoring any local .env file
    settings = Settings(environment="test", _env_file=None)
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )
    weight_unit: Literal["kg", "lb"] = Field(
        default="kg",
        description="Unit used when formatting weights in notes and context",
    )

    # -------------------------------------------------------------------------
    # 1RM estimation
    # -------------------------------------------------------------------------
    one_rm_max_reps: int = Field(
        default=15,
        ge=1,
        description="Highest rep count a 1RM estimate is derived from",
    )
    one_rm_min_rpe: float = Field(
        default=6.0,
        ge=0,
        le=10,
        description="RPE at or below which no estimate is made",
    )
    one_rm_min_confidence: float = Field(
        default=0.5,
        ge=0,
        le=1,
        description="Minimum confidence for replacing a stored estimate",
    )
    one_rm_min_load_percentage: float = Field(
        default=0.6,
        ge=0,
        le=1,
        description="Set weight must be at least this fraction of the current 1RM",
    )

    # -------------------------------------------------------------------------
    # Progression
    # -------------------------------------------------------------------------
    default_increment: float = Field(
        default=2.5,
        gt=0,
        description="Increment used when the programme table has no entry",
    )
    weight_rounding_increment: float = Field(
        default=2.5,
        gt=0,
        description="Plate increment that prescribed weights are truncated to",
    )
    empty_bar_weight: float = Field(
        default=20.0,
        ge=0,
        description="Starting weight when no 1RM is known",
    )
    first_workout_percentage: float = Field(
        default=0.5,
        gt=0,
        le=1,
        description="Fraction of the 1RM used for a first programme workout",
    )
    recent_performance_limit: int = Field(
        default=5,
        ge=1,
        description="Performance records read per progression decision",
    )

    # -------------------------------------------------------------------------
    # Deviation analysis
    # -------------------------------------------------------------------------
    deviation_threshold: float = Field(
        default=0.10,
        ge=0,
        description="Deviations with |magnitude| at or below this are dropped",
    )
    max_key_deviations: int = Field(
        default=7,
        ge=0,
        description="Sentences kept in a programme deviation summary",
    )

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
