"""Observable load state for the country atlas.

`CountriesViewModel` is the single writer of the displayed collection. It runs
the load sequence (base list, then enrichment, then merge) and publishes
immutable `LoadState` snapshots for readers.

Every call to `load()` starts a new generation. After each await the sequence
checks that its generation is still current; if a newer load has started, the
older one stops without touching state, so late results from an abandoned
load never overwrite a newer one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from atlas_common.models import Country
from country_enrichment.api_helpers.country_helper import CountryHelper
from country_enrichment.api_helpers.indicator_helper import IndicatorHelper
from country_enrichment.api_helpers.request_limiter import RequestLimiter
from country_enrichment.api_helpers.worldbank_client import WorldBankClient
from country_enrichment.exceptions import (
    WorldBankAPIError,
    WorldBankDecodeError,
    WorldBankNetworkError,
)
from country_enrichment.programmatic.api_fetcher import ParallelDetailFetcher
from country_enrichment.programmatic.config import EnrichmentConfig
from country_enrichment.programmatic.merger import merge_details

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    """Lifecycle of the displayed collection."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class LoadState:
    """Immutable snapshot of the view state.

    `countries` holds the most recently loaded collection (empty before the
    first successful load, kept as-is by a failed one). `error` is set only
    when FAILED.
    """

    status: LoadStatus = LoadStatus.IDLE
    countries: tuple[Country, ...] = field(default_factory=tuple)
    error: str | None = None
    generation: int = 0

    @property
    def categories(self) -> list[str]:
        """Distinct region names, sorted."""
        return sorted({country.category for country in self.countries})

    def countries_in(self, category: str) -> list[Country]:
        """Countries of one region, in collection order."""
        return [country for country in self.countries if country.category == category]


def describe_error(error: WorldBankAPIError) -> str:
    """Human-readable reason shown when a load fails."""
    if isinstance(error, WorldBankNetworkError):
        return f"Network error: {error}"
    if isinstance(error, WorldBankDecodeError):
        return f"Decode error: {error}"
    return f"Failed to load countries: {error}"


class CountriesViewModel:
    """Loads countries, enriches them, and exposes the result as snapshots."""

    def __init__(self, config: EnrichmentConfig | None = None) -> None:
        self.config = config or EnrichmentConfig()
        self._generation = 0
        self._countries: list[Country] = []
        self._state = LoadState()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_loading(self) -> bool:
        return self._state.status is LoadStatus.LOADING

    @property
    def error_message(self) -> str | None:
        return self._state.error

    @property
    def categories(self) -> list[str]:
        return self._state.categories

    def countries_in(self, category: str) -> list[Country]:
        return self._state.countries_in(category)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    async def load(self) -> LoadState:
        """
        Run the full load sequence and return the resulting snapshot.

        LOADING, then the base list. A base list failure ends in FAILED and keeps the
        previous countries. On success READY is published straight away with population
        and GDP unset, then enrichment runs and READY is republished with the merged
        values. Callable from any state; a call supersedes any load still in flight.

        Returns:
            LoadState: The snapshot current when this call returns. If a newer load took
            over meanwhile, that load's snapshot.
        """
        self._generation += 1
        generation = self._generation
        self._publish(LoadStatus.LOADING, generation)
        logger.info(f"Starting country load (generation {generation})")

        async with WorldBankClient(
            limiter=RequestLimiter(max_in_flight=self.config.max_concurrent_requests),
            timeout_seconds=self.config.request_timeout,
        ) as client:
            try:
                countries = await CountryHelper(client, self.config).fetch_countries()
            except WorldBankAPIError as e:
                if self._is_stale(generation):
                    return self._state
                logger.error(f"Failed to load countries: {e}")
                self._publish(LoadStatus.FAILED, generation, error=describe_error(e))
                return self._state

            if self._is_stale(generation):
                return self._state
            self._countries = countries
            self._publish(LoadStatus.READY, generation)

            async with ParallelDetailFetcher(
                self.config, indicator_helper=IndicatorHelper(client, self.config)
            ) as fetcher:
                details = await fetcher.enrich(countries)

        if self._is_stale(generation):
            return self._state
        merge_details(self._countries, details)
        self._publish(LoadStatus.READY, generation)
        logger.info(
            f"Country load complete (generation {generation}): "
            f"{len(self._countries)} countries, {len(details)} enriched"
        )
        return self._state

    async def reload(self) -> LoadState:
        """Restart the whole sequence, e.g. to retry after a failure."""
        return await self.load()

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.info(
                f"Discarding results of generation {generation}; "
                f"generation {self._generation} is current"
            )
            return True
        return False

    def _publish(
        self, status: LoadStatus, generation: int, error: str | None = None
    ) -> None:
        self._state = LoadState(
            status=status,
            countries=tuple(country.model_copy() for country in self._countries),
            error=error,
            generation=generation,
        )
