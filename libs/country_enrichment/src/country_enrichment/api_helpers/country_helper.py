"""World Bank country listing helper.

Loads the base country collection in one request, drops region and income
group aggregates, and maps provider records onto `Country` models.
"""

import logging
from collections.abc import Iterable

from atlas_common.models import Country, WorldBankCountry, WorldBankCountryListResponse
from atlas_common.utils import flag_emoji
from pydantic import ValidationError

from country_enrichment.api_helpers.worldbank_client import WorldBankClient
from country_enrichment.exceptions import WorldBankDecodeError
from country_enrichment.programmatic.config import EnrichmentConfig

logger = logging.getLogger(__name__)


def filter_aggregates(
    records: Iterable[WorldBankCountry], aggregate_region: str
) -> list[WorldBankCountry]:
    """Drop every record whose region equals the aggregate sentinel, keeping order."""
    return [record for record in records if record.region.value != aggregate_region]


def build_country(record: WorldBankCountry) -> Country:
    """Map a provider record onto a fresh, not yet enriched Country."""
    return Country(
        name=record.name,
        category=record.region.value,
        flag=flag_emoji(record.iso2Code),
        iso2_code=record.iso2Code,
    )


class CountryHelper:
    """Fetches the base country collection from the World Bank listing endpoint."""

    def __init__(
        self, client: WorldBankClient, config: EnrichmentConfig | None = None
    ) -> None:
        self.client = client
        self.config = config or EnrichmentConfig()

    async def fetch_countries(self) -> list[Country]:
        """
        Fetch and filter the full country list.

        Returns:
            list[Country]: Countries in provider order, aggregates removed, population
            and GDP not yet set.

        Raises:
            WorldBankNetworkError: If the request fails.
            WorldBankDecodeError: If the response does not match the listing schema.
        """
        url = f"{self.config.base_url}/country"
        params = {"format": "json", "per_page": self.config.per_page}
        payload = await self.client.get_json(url, params=params)

        try:
            response = WorldBankCountryListResponse.from_payload(payload)
        except (ValidationError, ValueError) as e:
            raise WorldBankDecodeError(f"Unexpected country list payload: {e}") from e

        if response.metadata.pages > 1:
            logger.warning(
                f"Country list spans {response.metadata.pages} pages; only page "
                f"{response.metadata.page} of per_page={self.config.per_page} was loaded"
            )

        records = filter_aggregates(response.countries, self.config.aggregate_region)
        countries = [build_country(record) for record in records]

        logger.info(
            f"Loaded {len(countries)} countries "
            f"({len(response.countries) - len(countries)} aggregates skipped)"
        )
        return countries
