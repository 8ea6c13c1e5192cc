"""Pydantic models for countries, detail records and World Bank payloads."""

from .country import Country, DetailRecord
from .worldbank_models import (
    IndicatorMetadata,
    IndicatorPoint,
    IndicatorResponse,
    WorldBankCountry,
    WorldBankCountryListResponse,
    WorldBankMetadata,
    WorldBankRef,
)

__all__ = [
    "Country",
    "DetailRecord",
    "IndicatorMetadata",
    "IndicatorPoint",
    "IndicatorResponse",
    "WorldBankCountry",
    "WorldBankCountryListResponse",
    "WorldBankMetadata",
    "WorldBankRef",
]
