"""Great-circle distance helpers used by the nearby-listing queries."""

from math import atan2, cos, radians, sin, sqrt
from typing import Optional

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance between two points in kilometres."""
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)
    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def within_radius(
    origin_lat: float,
    origin_lon: float,
    radius_km: float,
    lat: Optional[float],
    lon: Optional[float],
) -> bool:
    """Check whether ``(lat, lon)`` lies within ``radius_km`` of the origin.

    Points without coordinates are never within any radius.
    """
    if lat is None or lon is None:
        return False
    return haversine_km(origin_lat, origin_lon, lat, lon) <= radius_km
