"""Supported divisions of Bangladesh and their fixed coordinates."""

LOCATION_COORDINATES = {
    "Dhaka": {"lat": 23.8103, "lon": 90.4125},
    "Chattogram (Chittagong)": {"lat": 22.3475, "lon": 91.8123},
    "Barisal": {"lat": 22.7022, "lon": 90.3696},
    "Khulna": {"lat": 22.8456, "lon": 89.5403},
    "Mymensingh": {"lat": 24.7471, "lon": 90.4203},
    "Rajshahi": {"lat": 24.3745, "lon": 88.6042},
    "Rangpur": {"lat": 25.7439, "lon": 89.2752},
    "Sylhet": {"lat": 24.8949, "lon": 91.8687},
}

# The map client sends the short form of Chattogram.
LOCATION_ALIASES = {
    "Chittagong": "Chattogram (Chittagong)",
}

# Analytics weighting per division; lower means more environmental pressure.
LOCATION_MULTIPLIERS = {
    "Dhaka": 0.85,  # urban pollution
    "Chattogram (Chittagong)": 0.88,  # industrial port city
    "Barisal": 0.92,
    "Khulna": 0.87,  # industrial and coastal
    "Mymensingh": 0.91,
    "Rajshahi": 0.89,
    "Rangpur": 0.93,
    "Sylhet": 0.94,  # tea gardens, cleaner air
}
DEFAULT_MULTIPLIER = 0.9


class InvalidLocationError(ValueError):
    """Raised when a location name is missing or not a supported division."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Invalid location: {name!r}")


def resolve_location(name):
    """Return the (lat, lon) pair of a supported division."""
    if not name or name not in LOCATION_COORDINATES:
        raise InvalidLocationError(name)
    coords = LOCATION_COORDINATES[name]
    return coords["lat"], coords["lon"]


def canonical_location(name):
    """Map a division name or one of its aliases to the canonical name."""
    if name in LOCATION_COORDINATES:
        return name
    if name in LOCATION_ALIASES:
        return LOCATION_ALIASES[name]
    raise InvalidLocationError(name)


def location_multiplier(name):
    # Analytics accepts any string, unknown names get the default weight.
    return LOCATION_MULTIPLIERS.get(name, DEFAULT_MULTIPLIER)
