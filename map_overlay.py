"""
Point layer for the environmental map: jittered synthetic readings around
each division centre, optionally merged with live USGS earthquakes.
"""
import logging
import random

import usgs_feed
from locations import LOCATION_ALIASES, LOCATION_COORDINATES, canonical_location
from severity import (
    SEVERITY_LEVELS,
    flood_severity,
    heat_severity,
    iso_timestamp,
    soil_severity,
)

logger = logging.getLogger(__name__)

POINTS_PER_TYPE = 3
MAX_JITTER = 0.25
DATA_TYPES = ("heatwave", "flood", "soil", "earthquake")

SOURCES = [
    "NASA MODIS - Temperature data",
    "NASA GPM - Precipitation and flood data",
    "NASA Landsat - Soil and land cover data",
    "USGS - Real-time earthquake data",
]

# type, id prefix, (lat, lng) offset from the jittered base, value range, classifier, source
SYNTHETIC_LAYERS = [
    ("heatwave", "heat", (0.0, 0.0), (28, 48), heat_severity, "NASA MODIS"),
    ("flood", "flood", (0.01, 0.01), (2, 10), flood_severity, "NASA GPM"),
    ("soil", "soil", (0.02, -0.01), (4.5, 8.5), soil_severity, "NASA Landsat"),
]

# Point ids use the short division name, e.g. heat_Chittagong_0
ID_LABELS = {canonical: alias for alias, canonical in LOCATION_ALIASES.items()}


def resolve_divisions(location):
    if not location or location == "all":
        return list(LOCATION_COORDINATES)
    return [canonical_location(location)]


def generate_points(divisions, rng=None):
    rng = rng or random
    timestamp = iso_timestamp()
    points = []

    for division in divisions:
        center = LOCATION_COORDINATES[division]
        label = ID_LABELS.get(division, division)
        for i in range(POINTS_PER_TYPE):
            lat = center["lat"] + rng.uniform(-MAX_JITTER, MAX_JITTER)
            lng = center["lon"] + rng.uniform(-MAX_JITTER, MAX_JITTER)

            for data_type, prefix, (dlat, dlng), (low, high), classify, source in SYNTHETIC_LAYERS:
                value = round(rng.uniform(low, high), 1)
                severity, description = classify(value)
                points.append({
                    "id": f"{prefix}_{label}_{i}",
                    "coordinates": {"lat": lat + dlat, "lng": lng + dlng},
                    "type": data_type,
                    "severity": severity,
                    "value": value,
                    "description": description,
                    "timestamp": timestamp,
                    "source": source,
                })

    return points


def summarize(points):
    stats = {"total": len(points)}
    for level in SEVERITY_LEVELS:
        stats[level] = sum(1 for point in points if point["severity"] == level)
    stats["byType"] = {
        data_type: sum(1 for point in points if point["type"] == data_type)
        for data_type in DATA_TYPES
    }
    return stats


def build_map_payload(location="all", realtime=False, rng=None, fetch_feed=None):
    """
    Assemble the map response. Raises InvalidLocationError for an unknown
    division; a failing earthquake feed only marks `realtime.available` False.
    """
    location = location or "all"
    logger.info("Fetching environmental map data for location: %s", location)

    points = generate_points(resolve_divisions(location), rng=rng)

    realtime_status = {"requested": realtime, "available": None, "error": None}
    if realtime:
        fetch_feed = fetch_feed or usgs_feed.fetch_recent_earthquakes
        feed = fetch_feed()
        points.extend(feed.points)
        realtime_status["available"] = feed.available
        realtime_status["error"] = feed.error

    return {
        "success": True,
        "data": points,
        "stats": summarize(points),
        "location": location,
        "realtime": realtime_status,
        "timestamp": iso_timestamp(),
        "sources": SOURCES,
    }
