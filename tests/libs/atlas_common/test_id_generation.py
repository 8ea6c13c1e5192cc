"""Tests for ID generation utility."""

import time

from atlas_common.utils.id_generation import generate_ulid


def test_generate_ulid_format():
    """Test that generated ULIDs have correct prefix and length."""
    country_id = generate_ulid("country")
    assert country_id.startswith("country_")
    assert len(country_id) == len("country_") + 26  # ULID is 26 chars


def test_generate_ulid_sorting():
    """Test that ULIDs are time-sortable."""
    id1 = generate_ulid("country")
    time.sleep(0.002)
    id2 = generate_ulid("country")

    assert id1 < id2
