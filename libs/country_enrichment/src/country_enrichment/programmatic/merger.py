"""Merge fetched detail records back into the country collection."""

import logging
from collections.abc import Iterable

from atlas_common.models import Country, DetailRecord

logger = logging.getLogger(__name__)


def merge_details(
    countries: list[Country], details: Iterable[DetailRecord]
) -> list[Country]:
    """Apply detail records onto the countries with the matching code.

    Both population and GDP are overwritten with the record's values, so an
    absent value in the record clears the field. Records for unknown codes are
    ignored. Mutates `countries` in place and returns it. Must only run once all
    fetches have finished; it takes no locks.

    Args:
        countries: The collection to update.
        details: Detail records from the parallel fetch.

    Returns:
        The same list, updated.
    """
    by_code = {country.iso2_code: country for country in countries}

    merged = 0
    for detail in details:
        country = by_code.get(detail.iso2_code)
        if country is None:
            logger.debug(f"No country for detail record {detail.iso2_code}, skipping")
            continue
        country.population = detail.population
        country.gdp = detail.gdp
        merged += 1

    logger.debug(f"Merged {merged} detail records into {len(countries)} countries")
    return countries
