"""Enrichment library for World Bank country data.

This library contains all enrichment-specific code including:
- A single-attempt World Bank HTTP client
- API helpers for the country listing and indicator endpoints
- The parallel detail fetcher and the collection merger
"""

__all__ = ["api_helpers", "programmatic"]
