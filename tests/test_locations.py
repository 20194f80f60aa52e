import pytest

from locations import (
    DEFAULT_MULTIPLIER,
    LOCATION_COORDINATES,
    InvalidLocationError,
    canonical_location,
    location_multiplier,
    resolve_location,
)


def test_resolver_returns_fixed_coordinates():
    assert len(LOCATION_COORDINATES) == 8
    assert resolve_location("Dhaka") == (23.8103, 90.4125)
    assert resolve_location("Chattogram (Chittagong)") == (22.3475, 91.8123)
    assert resolve_location("Barisal") == (22.7022, 90.3696)
    assert resolve_location("Khulna") == (22.8456, 89.5403)
    assert resolve_location("Mymensingh") == (24.7471, 90.4203)
    assert resolve_location("Rajshahi") == (24.3745, 88.6042)
    assert resolve_location("Rangpur") == (25.7439, 89.2752)
    assert resolve_location("Sylhet") == (24.8949, 91.8687)


@pytest.mark.parametrize("name", [None, "", "Chittagong", "dhaka", "Kolkata"])
def test_resolver_rejects_unsupported_names(name):
    with pytest.raises(InvalidLocationError):
        resolve_location(name)


def test_canonical_location_accepts_short_alias():
    assert canonical_location("Chittagong") == "Chattogram (Chittagong)"
    assert canonical_location("Sylhet") == "Sylhet"
    with pytest.raises(InvalidLocationError):
        canonical_location("Atlantis")


def test_multiplier_falls_back_for_unknown_locations():
    assert location_multiplier("Dhaka") == 0.85
    assert location_multiplier("Sylhet") == 0.94
    assert location_multiplier("Atlantis") == DEFAULT_MULTIPLIER == 0.9
