"""
Configuration management for OPPR.

Uses Pydantic Settings to load runtime settings from environment variables
(prefix OPPR_) or a .env file. Calculation constants themselves live in
oppr.scoring.constants; Settings only carries overrides for them so a
deployment can retune the engine without code changes.

Usage:
    from oppr.config import get_settings, load_config

    settings = get_settings()
    config = load_config(settings)
    calculate_base_value(players, config=config)

Environment example:
    OPPR_LOG_LEVEL=debug
    OPPR_CONSTANT_OVERRIDES='{"base_value": {"points_per_player": 1.0}}'
"""

import logging
import sys
from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from oppr.scoring.constants import OpprConfig, configure


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Environment variables can be set directly or via a .env file
    in the project root directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPPR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Rating System Configuration
    # ==========================================================================

    default_rating_system: str = Field(
        default="glicko",
        description="Rating system id used for TVA and rating updates",
    )
    opponents_range: Optional[int] = Field(
        default=None,
        description="Override for how many positions above/below count as simulated opponents",
    )

    # ==========================================================================
    # Calculation Constants
    # ==========================================================================

    constant_overrides: dict[str, Any] = Field(
        default_factory=dict,
        description="Nested overrides merged onto the default calculation constants",
    )

    # ==========================================================================
    # Logging Configuration
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: str = Field(
        default="console",
        description="Log format: 'json' for production, 'console' for dev",
    )

    # ==========================================================================
    # Validators
    # ==========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        lower_v = v.lower()
        if lower_v not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return lower_v

    @field_validator("opponents_range")
    @classmethod
    def validate_opponents_range(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("opponents_range must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only read the environment once per process.
    Tests that change the environment should call get_settings.cache_clear().
    """
    return Settings()


def load_config(settings: Optional[Settings] = None) -> OpprConfig:
    """Build the calculation constants with any overrides from settings applied."""
    settings = settings or get_settings()
    return configure(settings.constant_overrides)


_JSON_FORMAT = (
    '{"time": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s"}'
)
_CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply the configured level and format to the root logger."""
    settings = settings or get_settings()
    fmt = _JSON_FORMAT if settings.log_format == "json" else _CONSOLE_FORMAT
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=fmt,
        stream=sys.stderr,
        force=True,
    )
