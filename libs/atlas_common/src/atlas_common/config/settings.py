"""Country Atlas Configuration Settings."""

import os
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


def get_environment() -> Environment:
    """Detect environment from APP_ENV variable.

    Returns:
        Environment: Detected environment based on APP_ENV, development when unset.

    Raises:
        ValueError: If APP_ENV contains an invalid value.
    """
    env_str = os.getenv("APP_ENV")
    if not env_str:
        return Environment.DEVELOPMENT

    env_str = env_str.lower()

    match env_str:
        case "production":
            return Environment.PRODUCTION
        case "staging":
            return Environment.STAGING
        case "development":
            return Environment.DEVELOPMENT
        case _:
            raise ValueError(
                f"Invalid APP_ENV value '{env_str}'. "
                "Must be one of: development, staging, production"
            )


class Settings(BaseSettings):
    """Application settings with validation and type safety."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # ============================================================================
    # ENVIRONMENT & APPLICATION
    # ============================================================================

    environment: Environment = Field(
        default_factory=get_environment,
        description="Application environment (development/staging/production)",
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # ============================================================================
    # LOGGING
    # ============================================================================

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )

    def model_post_init(self, __context) -> None:
        """Apply environment-specific defaults once fields are populated."""
        self.apply_environment_settings()

    def apply_environment_settings(self) -> None:
        """
        Apply environment-specific overrides.

        Development and staging only fill values the user did not set explicitly.
        Production ALWAYS enforces debug=False and log_level=WARNING.
        """
        if self.environment == Environment.DEVELOPMENT:
            if os.getenv("DEBUG") is None:
                self.debug = True
            if os.getenv("LOG_LEVEL") is None:
                self.log_level = "DEBUG"

        elif self.environment == Environment.STAGING:
            if os.getenv("LOG_LEVEL") is None:
                self.log_level = "INFO"

        elif self.environment == Environment.PRODUCTION:
            self.debug = False
            self.log_level = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
