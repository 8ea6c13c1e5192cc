"""
Configuration for the country enrichment pipeline.
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class EnrichmentConfig(BaseSettings):
    """
    Enrichment pipeline configuration with validation.

    Every field can be overridden with an `ENRICHMENT_`-prefixed environment
    variable, e.g. `ENRICHMENT_GDP_YEAR=2021`.
    """

    model_config = SettingsConfigDict(env_prefix="ENRICHMENT_", case_sensitive=False)

    # API Configuration
    base_url: str = Field(
        default="https://api.worldbank.org/v2",
        description="World Bank v2 API root",
    )
    per_page: int = Field(
        default=300,
        description="Listing page size; large enough to return every country in one call",
    )
    aggregate_region: str = Field(
        default="Aggregates",
        description="Region value marking region/income-group summaries rather than countries",
    )

    # Indicators
    population_indicator: str = Field(
        default="SP.POP.TOTL", description="Total population indicator"
    )
    population_year: int = Field(
        default=2023, description="Year requested for the population indicator"
    )
    gdp_indicator: str = Field(
        default="NY.GDP.MKTP.CD", description="GDP (current US$) indicator"
    )
    gdp_year: int = Field(default=2022, description="Year requested for the GDP indicator")

    # Timeouts & Concurrency
    request_timeout: float = Field(
        default=30.0, description="Total timeout for a single HTTP request in seconds"
    )
    enrichment_timeout: float = Field(
        default=60.0,
        description="Upper bound in seconds for one indicator request once it holds a slot",
    )
    max_concurrent_requests: int = Field(
        default=0,
        description="Maximum in-flight indicator requests (0 = unlimited, full fan-out)",
    )

    verbose_logging: bool = Field(default=False, description="Enable verbose logging")

    @field_validator("request_timeout", "enrichment_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """
        Validate that a timeout is between 1 and 300 seconds.

        Raises:
            ValueError: If `v` is less than 1 or greater than 300.
        """
        if v < 1 or v > 300:
            raise ValueError("Timeouts must be between 1 and 300 seconds")
        return v

    @field_validator("per_page")
    @classmethod
    def validate_per_page(cls, v: int) -> int:
        if v < 1 or v > 20000:
            raise ValueError("per_page must be between 1 and 20000")
        return v

    @field_validator("max_concurrent_requests")
    @classmethod
    def validate_max_concurrent_requests(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_concurrent_requests must be non-negative")
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def log_configuration(self) -> None:
        """Log current configuration for debugging."""
        logger.info("Enrichment Pipeline Configuration:")
        logger.info(f"  Base URL: {self.base_url}")
        logger.info(
            f"  Population: {self.population_indicator} ({self.population_year})"
        )
        logger.info(f"  GDP: {self.gdp_indicator} ({self.gdp_year})")
        logger.info(f"  Request Timeout: {self.request_timeout}s")
        logger.info(f"  Enrichment Timeout: {self.enrichment_timeout}s")
        logger.info(
            f"  Max Concurrent Requests: {self.max_concurrent_requests or 'unlimited'}"
        )
