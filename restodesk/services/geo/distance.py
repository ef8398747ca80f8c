"""
Great-circle distance and map links.

Pure functions, no I/O: used by the geo services and by the order
enrichment pipeline.
"""

import math
from typing import Optional
from urllib.parse import urlencode

EARTH_RADIUS_KM = 6371.0
KM_PER_MILE = 1.609344


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Distance between two coordinates on a spherical earth.

    Args:
        lat1: Origin latitude in degrees
        lon1: Origin longitude in degrees
        lat2: Destination latitude in degrees
        lon2: Destination longitude in degrees

    Returns:
        Distance in kilometres, rounded to two decimals

    Example:
        >>> haversine_km(0, 0, 0, 1)
        111.19
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 2)


def directions_url(
    origin_lat: float,
    origin_lon: float,
    dest_lat: float,
    dest_lon: float,
    origin_name: Optional[str] = None,
    dest_name: Optional[str] = None,
) -> str:
    """Google Maps driving directions from the restaurant to the customer."""
    query = urlencode({
        "api": "1",
        "origin": f"{origin_lat},{origin_lon}",
        "destination": f"{dest_lat},{dest_lon}",
        "travelmode": "driving",
        "origin_place_id": origin_name or "",
        "destination_place_id": dest_name or "",
    })
    return f"https://www.google.com/maps/dir/?{query}"
