# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Configuration management using Pydantic Settings.

Engine defaults can be supplied through ``RATER_*`` environment variables,
e.g. ``RATER_DECIMAL_PLACES=4``.
"""

from beartype import beartype
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Rater settings with immutable configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RATER_",
        env_file=None,
        env_file_encoding="utf-8",
        frozen=True,  # Immutable settings
        validate_default=True,
        extra="forbid",
    )

    # Engine defaults
    base_rate: float = Field(
        default=0.0,
        description="Rate used when no group applies",
    )
    group_aggregation_method: str = Field(
        default="sum",
        pattern="^(sum|product|average|minimum|maximum)$",
        description="How applied group rates are combined",
    )
    minimum_rate: float | None = Field(
        default=None,
        description="Lower bound for the final rate",
    )
    maximum_rate: float | None = Field(
        default=None,
        description="Upper bound for the final rate",
    )
    decimal_places: int = Field(
        default=2,
        ge=0,
        le=15,
        description="Decimal places the final rate is rounded to",
    )
    continue_on_error: bool = Field(
        default=True,
        description="Keep rating remaining groups after a group fails",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level for the rater loggers",
    )

    @field_validator("maximum_rate")
    @classmethod
    def validate_rate_bounds(
        cls: type["Settings"], v: float | None, info: ValidationInfo
    ) -> float | None:
        """Ensure maximum rate is not below minimum rate."""
        minimum = info.data.get("minimum_rate")
        if v is not None and minimum is not None and v < minimum:
            raise ValueError(
                f"maximum_rate ({v}) must be >= minimum_rate ({minimum})"
            )
        return v


_settings: Settings | None = None


@beartype
def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


@beartype
def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    global _settings
    _settings = None
