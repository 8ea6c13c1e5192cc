"""World Bank indicator helper.

Looks up population and GDP for one country. The two lookups run together
and fail independently: whatever goes wrong with one of them only blanks
that value.
"""

import asyncio
import logging
import math
import re

from atlas_common.models import DetailRecord, IndicatorResponse
from pydantic import ValidationError

from country_enrichment.api_helpers.worldbank_client import WorldBankClient
from country_enrichment.exceptions import (
    InvalidCountryCodeError,
    WorldBankAPIError,
    WorldBankDecodeError,
)
from country_enrichment.programmatic.config import EnrichmentConfig

logger = logging.getLogger(__name__)

_CODE_PATTERN = re.compile(r"[A-Za-z0-9]{2}")


class IndicatorHelper:
    """Fetches per-country indicator values from the World Bank API."""

    def __init__(
        self, client: WorldBankClient, config: EnrichmentConfig | None = None
    ) -> None:
        self.client = client
        self.config = config or EnrichmentConfig()

    def indicator_url(self, code: str, indicator: str) -> str:
        """
        Build the indicator endpoint URL for a country code.

        Raises:
            InvalidCountryCodeError: If `code` is not two alphanumeric characters.
        """
        if not _CODE_PATTERN.fullmatch(code):
            raise InvalidCountryCodeError(code)
        return f"{self.config.base_url}/country/{code}/indicator/{indicator}"

    async def fetch_indicator_value(
        self, code: str, indicator: str, year: int
    ) -> float | None:
        """
        Fetch the value of one indicator for one country and year.

        Returns:
            float | None: The observation's value, or None when the provider has no
            observation for that year.

        Raises:
            InvalidCountryCodeError: If the code cannot be used in a URL.
            WorldBankNetworkError: If the request fails, or runs past
                `enrichment_timeout` once it holds a request slot.
            WorldBankDecodeError: If the response does not match the indicator schema.
        """
        url = self.indicator_url(code, indicator)
        params = {"format": "json", "per_page": 1, "date": year}
        payload = await self.client.get_json(
            url, params=params, timeout=self.config.enrichment_timeout
        )

        try:
            response = IndicatorResponse.from_payload(payload)
        except (ValidationError, ValueError) as e:
            raise WorldBankDecodeError(
                f"Unexpected {indicator} payload for {code}: {e}"
            ) from e

        return response.first_value

    async def fetch_population(self, code: str) -> int | None:
        """Population for `code`, or None if it could not be obtained."""
        value = await self._lookup(
            code, self.config.population_indicator, self.config.population_year
        )
        return int(value) if value is not None else None

    async def fetch_gdp(self, code: str) -> float | None:
        """GDP in current US$ for `code`, or None if it could not be obtained."""
        return await self._lookup(code, self.config.gdp_indicator, self.config.gdp_year)

    async def fetch_detail(self, code: str) -> DetailRecord:
        """
        Fetch population and GDP for one country concurrently.

        Lookup failures never propagate: a failed lookup leaves its value as None
        and does not affect the other lookup.

        Parameters:
            code (str): Provider country code, e.g. "US".

        Returns:
            DetailRecord: The code paired with whatever values were obtained.
        """
        population, gdp = await asyncio.gather(
            self.fetch_population(code), self.fetch_gdp(code)
        )
        return DetailRecord(iso2_code=code, population=population, gdp=gdp)

    async def _lookup(self, code: str, indicator: str, year: int) -> float | None:
        try:
            value = await self.fetch_indicator_value(code, indicator, year)
        except WorldBankAPIError as e:
            logger.warning(f"Failed to fetch {indicator} for {code}: {e}")
            return None

        if value is None:
            logger.debug(f"No {indicator} value for {code} in {year}")
            return None
        if not math.isfinite(value) or value < 0:
            logger.warning(f"Discarding {indicator} value {value} for {code}")
            return None
        return value
