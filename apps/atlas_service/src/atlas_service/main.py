"""Command-line entry point for the country atlas.

Runs one full load (country list, then population and GDP enrichment) and
prints the countries grouped by region.

Usage:
    python -m atlas_service.main
    python -m atlas_service.main --region "South Asia"
    python -m atlas_service.main --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from atlas_common.config import get_settings
from country_enrichment.programmatic.config import EnrichmentConfig

from .view_state import CountriesViewModel, LoadState, LoadStatus

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List World Bank countries by region with population and GDP."
    )
    parser.add_argument(
        "--region",
        type=str,
        default=None,
        help="Only show countries from this region (exact region name)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a grouped listing",
    )
    return parser


def state_to_dict(state: LoadState, region: str | None = None) -> dict[str, Any]:
    """Serialize a snapshot grouped by region.

    Args:
        state: Snapshot to serialize.
        region: Optional region name; other regions are left out.

    Returns:
        JSON-serializable mapping with status, error and per-region countries.
    """
    categories = [c for c in state.categories if region is None or c == region]
    return {
        "status": state.status.value,
        "error": state.error,
        "regions": {
            category: [
                country.model_dump(exclude={"id", "category"})
                for country in state.countries_in(category)
            ]
            for category in categories
        },
    }


def render_listing(state: LoadState, region: str | None = None) -> str:
    """Render a snapshot as plain text, one section per region."""
    lines: list[str] = []
    for category in state.categories:
        if region is not None and category != region:
            continue
        lines.append(category)
        for country in state.countries_in(category):
            population = "-" if country.population is None else str(country.population)
            gdp = "-" if country.gdp is None else f"{country.gdp:.0f}"
            lines.append(
                f"  {country.flag} {country.name} ({country.iso2_code}) "
                f"population={population} gdp_usd={gdp}"
            )
    return "\n".join(lines)


async def run(args: argparse.Namespace) -> int:
    """Load once and print the result.

    Returns:
        int: 0 if the load ended READY, 1 if it FAILED.
    """
    settings = get_settings()
    config = EnrichmentConfig()
    if config.verbose_logging or settings.debug:
        config.log_configuration()

    view_model = CountriesViewModel(config)
    state = await view_model.load()

    if args.json:
        print(json.dumps(state_to_dict(state, args.region), ensure_ascii=False, indent=2))
    elif state.status is LoadStatus.READY:
        print(render_listing(state, args.region))
    else:
        print(f"Error: {state.error}", file=sys.stderr)

    return 0 if state.status is LoadStatus.READY else 1


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=settings.log_format,
    )
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
