"""Pydantic models for the country collection and its enrichment records."""

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt

from atlas_common.utils.id_generation import generate_ulid


class Country(BaseModel):
    """A country shown in the atlas.

    Identity and provider fields are fixed at creation. Only `population` and
    `gdp` change afterwards, and only when detail records are merged in.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(
        default_factory=lambda: generate_ulid("country"),
        frozen=True,
        description="Session-unique identifier",
    )
    name: str = Field(frozen=True, description="Display name")
    category: str = Field(frozen=True, description="Region the country belongs to")
    flag: str = Field(frozen=True, description="Flag emoji derived from iso2_code")
    iso2_code: str = Field(
        frozen=True, description="Two-letter provider code used for lookups"
    )
    population: NonNegativeInt | None = Field(None, description="Total population")
    gdp: NonNegativeFloat | None = Field(None, description="GDP in current US$")


class DetailRecord(BaseModel):
    """Enrichment values fetched for one provider code.

    Population and GDP are independent: either may be missing while the
    other is present.
    """

    model_config = ConfigDict(frozen=True)

    iso2_code: str
    population: NonNegativeInt | None = None
    gdp: NonNegativeFloat | None = None
