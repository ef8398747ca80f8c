"""
Reverse geocoding with retry and coordinate fallback.

Third-party geocoders are flaky and rate limited; a missing address must
never break an order listing, so every path here ends in a string.
"""

import asyncio
import logging
from typing import Optional

from restodesk.services.geo.base import BaseGeoService

logger = logging.getLogger(__name__)


def _coordinate(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:.4f}"


def fallback_address(latitude: Optional[float], longitude: Optional[float]) -> str:
    """
    Coordinate-based stand-in used when no address can be resolved.

    A missing coordinate is rendered as ``-`` (``"Lat: -, Lng: 77.5946"``).
    """
    return f"Lat: {_coordinate(latitude)}, Lng: {_coordinate(longitude)}"


async def safe_reverse_geocode(
    service: BaseGeoService,
    latitude: Optional[float],
    longitude: Optional[float],
    retries: int = 2,
    backoff_seconds: float = 1.0,
) -> str:
    """
    Resolve a coordinate pair to an address, never raising.

    Makes up to ``retries + 1`` attempts. Before attempt ``n`` (n >= 1) it
    sleeps ``n * backoff_seconds``. A provider answer with no match ends
    the loop immediately; failures and exceptions are retried.

    Args:
        service: Geo service to query
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        retries: Extra attempts after the first
        backoff_seconds: Linear backoff unit

    Returns:
        The resolved address, or ``"Lat: x.xxxx, Lng: y.yyyy"``. A missing
        or zero coordinate returns the fallback without querying ``service``.
    """
    fallback = fallback_address(latitude, longitude)

    # Missing and zero coordinates are treated as "no location"
    if not latitude or not longitude:
        return fallback

    for attempt in range(retries + 1):
        if attempt > 0:
            await asyncio.sleep(backoff_seconds * attempt)

        try:
            result = await service.reverse_geocode(latitude, longitude)
        except Exception as e:
            logger.warning(f"Reverse geocode attempt {attempt + 1} failed: {e}")
            continue

        if result.success:
            return result.address or fallback

        logger.warning(
            f"Reverse geocode attempt {attempt + 1} failed: "
            f"{result.error_code} - {result.error_message}"
        )

    return fallback
