"""
Geo Service Factory

Provides a single entry point for obtaining a geo service instance.
Selects Mock, Nominatim or Google Maps based on ENV_MODE and
GEOCODER_PROVIDER.

Usage:
    from restodesk.services.geo import get_geo_service, safe_reverse_geocode

    geo_service = get_geo_service()
    address = await safe_reverse_geocode(geo_service, 12.9716, 77.5946)

Version: 1.0.0
"""

import logging
from functools import lru_cache

from restodesk.core.config import get_settings, GeocoderProvider
from restodesk.services.geo.base import (
    BaseGeoService,
    ReverseGeocodeResult,
    DistanceResult,
)
from restodesk.services.geo.distance import haversine_km, directions_url
from restodesk.services.geo.mock import MockGeoService
from restodesk.services.geo.nominatim import NominatimGeoService
from restodesk.services.geo.google import GoogleGeoService
from restodesk.services.geo.reverse import safe_reverse_geocode, fallback_address

logger = logging.getLogger(__name__)


@lru_cache()
def get_geo_service() -> BaseGeoService:
    """
    Get the configured geo service instance.

    Returns:
        BaseGeoService: Configured geo service instance

    Raises:
        ValueError: If Google is selected but its API key is not configured
    """
    settings = get_settings()

    if settings.is_development:
        logger.info("Geo Service: Using MockGeoService (development mode)")
        return MockGeoService(
            failure_rate=0.05,  # 5% simulated failures
            min_latency=0.1,
            max_latency=0.5,
        )

    if settings.geocoder_provider == GeocoderProvider.GOOGLE:
        logger.info(f"Geo Service: Using GoogleGeoService ({settings.env_mode.value} mode)")
        return GoogleGeoService()

    logger.info(f"Geo Service: Using NominatimGeoService ({settings.env_mode.value} mode)")
    return NominatimGeoService()


def reset_geo_service() -> None:
    """
    Clear the cached geo service instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_geo_service.cache_clear()
    logger.debug("Geo service cache cleared")


__all__ = [
    "get_geo_service",
    "reset_geo_service",
    "BaseGeoService",
    "ReverseGeocodeResult",
    "DistanceResult",
    "MockGeoService",
    "NominatimGeoService",
    "GoogleGeoService",
    "haversine_km",
    "directions_url",
    "safe_reverse_geocode",
    "fallback_address",
]
