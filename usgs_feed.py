import logging
from collections import namedtuple
from datetime import datetime, timedelta, timezone

import requests

import config
from severity import earthquake_severity, iso_timestamp

logger = logging.getLogger(__name__)

# Bounding box of Bangladesh
BANGLADESH_BOUNDS = {
    "north": 26.6382,
    "south": 20.7209,
    "east": 92.6723,
    "west": 88.0844,
}

# `available` is False when the feed could not be read, so an empty point
# list can be told apart from an outage.
EarthquakeFeed = namedtuple("EarthquakeFeed", ["points", "available", "error"])


def feature_to_point(feature):
    """Convert one USGS GeoJSON feature into a map data point."""
    properties = feature.get("properties") or {}
    magnitude = properties.get("mag")
    if magnitude is None:
        return None

    lng, lat = feature["geometry"]["coordinates"][:2]
    severity, description = earthquake_severity(magnitude)
    event_time = datetime.fromtimestamp(properties["time"] / 1000, tz=timezone.utc)

    return {
        "id": f"earthquake_{feature['id']}",
        "coordinates": {"lat": lat, "lng": lng},
        "type": "earthquake",
        "severity": severity,
        "value": magnitude,
        "description": description,
        "timestamp": iso_timestamp(event_time),
        "source": "USGS",
    }


def fetch_recent_earthquakes(days=7, min_magnitude=2.0, bounds=BANGLADESH_BOUNDS, session=None):
    """
    Fetch earthquakes inside `bounds` for the last `days` days from the USGS
    event service. Failures never propagate: they come back as an
    unavailable feed with the reason in `error`.
    """
    http = session or requests
    end = datetime.now(timezone.utc)
    start = end - timedelta(days=days)
    params = {
        "format": "geojson",
        "starttime": start.isoformat(),
        "endtime": end.isoformat(),
        "minlatitude": bounds["south"],
        "maxlatitude": bounds["north"],
        "minlongitude": bounds["west"],
        "maxlongitude": bounds["east"],
        "minmagnitude": min_magnitude,
    }

    try:
        response = http.get(
            config.USGS_API_BASE,
            params=params,
            headers={"User-Agent": config.USGS_USER_AGENT},
            timeout=config.USGS_TIMEOUT,
        )
        response.raise_for_status()  # This will raise an exception for 4XX/5XX errors
        features = response.json()["features"]
        if not isinstance(features, list):
            raise TypeError(f"features is {type(features).__name__}, expected a list")
    except requests.exceptions.Timeout:
        logger.warning("USGS earthquake feed timed out after %ss", config.USGS_TIMEOUT)
        return EarthquakeFeed([], False, "USGS request timed out")
    except requests.exceptions.RequestException as e:
        logger.warning("USGS earthquake feed unavailable: %s", e)
        return EarthquakeFeed([], False, f"USGS request failed: {e}")
    except (ValueError, KeyError, TypeError) as e:
        logger.warning("USGS earthquake feed returned an unreadable body: %s", e)
        return EarthquakeFeed([], False, "USGS response could not be parsed")

    points = []
    for feature in features:
        if not isinstance(feature, dict):
            logger.warning("Skipping malformed USGS feature %r", feature)
            continue
        try:
            point = feature_to_point(feature)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed USGS feature %s: %s", feature.get("id"), e)
            continue
        if point is not None:
            points.append(point)

    logger.info("Fetched %d earthquakes from USGS", len(points))
    return EarthquakeFeed(points, True, None)
