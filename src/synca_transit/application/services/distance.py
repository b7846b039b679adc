"""Great-circle distance between coordinates."""

import math

from synca_transit.domain.models import Coordinates

EARTH_RADIUS_METERS = 6_371_000.0


def distance_meters(a: Coordinates, b: Coordinates) -> float:
    """Return the haversine distance between two points in meters."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lng = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_METERS * c


def format_distance(meters: float) -> str:
    """Format a distance for display, e.g. "450m" or "1.2km"."""
    if meters < 1000:
        return f"{round(meters)}m"
    return f"{meters / 1000:.1f}km"
