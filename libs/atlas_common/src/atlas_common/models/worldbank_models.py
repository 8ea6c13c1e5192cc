"""
Type models for World Bank v2 API payloads.

Both endpoints answer with a two-element JSON array: a paging envelope and a
list of records. These models are permissive: they cover only the fields we
read and ignore any extra keys.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

# =============================================================================
# Country listing (GET /country)
# =============================================================================


class WorldBankMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore")

    page: int
    pages: int
    per_page: str
    total: int

    @field_validator("per_page", mode="before")
    @classmethod
    def coerce_per_page(cls, v: Any) -> Any:
        # The listing endpoint sends per_page as a string, e.g. "300"
        return str(v) if isinstance(v, int) else v


class WorldBankRef(BaseModel):
    """Nested `{id, iso2code, value}` group used for region, income level, etc."""

    model_config = ConfigDict(extra="ignore")

    id: str
    iso2code: str
    value: str


class WorldBankCountry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    iso2Code: str
    name: str
    region: WorldBankRef
    adminregion: WorldBankRef
    incomeLevel: WorldBankRef
    lendingType: WorldBankRef
    capitalCity: str
    longitude: str
    latitude: str


class WorldBankCountryListResponse(BaseModel):
    metadata: WorldBankMetadata
    countries: list[WorldBankCountry]

    @classmethod
    def from_payload(cls, payload: Any) -> WorldBankCountryListResponse:
        """Build the response from the raw `[metadata, countries]` array.

        Raises:
            ValueError: If the payload is not a two-element array.
            pydantic.ValidationError: If either element does not match the schema.
        """
        if not isinstance(payload, list) or len(payload) != 2:
            raise ValueError("Expected a [metadata, countries] array")
        return cls(metadata=payload[0], countries=payload[1])


# =============================================================================
# Indicator lookup (GET /country/{code}/indicator/{indicator})
# =============================================================================


class IndicatorMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore")

    page: int
    pages: int
    per_page: int
    total: int


class IndicatorPoint(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: float | None = None
    date: str


class IndicatorResponse(BaseModel):
    metadata: IndicatorMetadata
    data: list[IndicatorPoint]

    @classmethod
    def from_payload(cls, payload: Any) -> IndicatorResponse:
        """Build the response from the raw `[metadata, data]` array.

        The provider sends `null` instead of an empty list when there is no
        observation for the requested year; that is read as no data.

        Raises:
            ValueError: If the payload is not a two-element array.
            pydantic.ValidationError: If either element does not match the schema.
        """
        if not isinstance(payload, list) or len(payload) != 2:
            raise ValueError("Expected a [metadata, data] array")
        return cls(metadata=payload[0], data=payload[1] or [])

    @property
    def first_value(self) -> float | None:
        """Value of the single requested observation, if any."""
        return self.data[0].value if self.data else None
