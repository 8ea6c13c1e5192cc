"""Identity generation utilities using ULID.

Every entity created during a session gets a fresh, time-sortable identifier.
Identifiers are never derived from provider data, so a reload always yields
new ids even for the same country.
"""

from typing import Literal

from ulid import ULID

EntityType = Literal["country"]

ENTITY_PREFIXES: dict[EntityType, str] = {
    "country": "country_",
}


def generate_ulid(entity_type: EntityType) -> str:
    """Generate a new random, time-sortable ULID with entity prefix.

    Args:
        entity_type: The type of entity (e.g. 'country')

    Returns:
        Prefixed ULID string (e.g., 'country_01ARZ3NDEKTSV4RRFFQ69G5FAV')
    """
    prefix = ENTITY_PREFIXES.get(entity_type, f"{entity_type}_")
    return f"{prefix}{ULID()}"
