"""
Google Maps Geo Service Implementation

Production implementation using the Google Maps Geocoding API.
Used when ENV_MODE is production/staging and GEOCODER_PROVIDER=google.

Requirements:
    - GOOGLE_MAPS_API_KEY must be set in environment
    - Geocoding API must be enabled in Google Cloud Console

API Documentation:
    https://developers.google.com/maps/documentation/geocoding

Version: 1.0.0
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional

import googlemaps
from googlemaps.exceptions import ApiError, Timeout, TransportError

from restodesk.core.config import get_settings
from restodesk.services.geo.base import (
    BaseGeoService,
    ReverseGeocodeResult,
)

logger = logging.getLogger(__name__)


class GoogleGeoService(BaseGeoService):
    """
    Production Google Maps geo service implementation.

    Configuration:
        Requires GOOGLE_MAPS_API_KEY environment variable.

    Example:
        >>> service = GoogleGeoService()
        >>> result = await service.reverse_geocode(40.7484, -73.9857)
        >>> print(result.address)
        '20 W 34th St., New York, NY 10001, USA'
    """

    def __init__(self, client: Optional[googlemaps.Client] = None):
        """
        Initialize Google Maps client with API key.

        Args:
            client: Pre-built googlemaps client (skips API key lookup)

        Raises:
            ValueError: If GOOGLE_MAPS_API_KEY is not configured
        """
        if client is None:
            settings = get_settings()

            if not settings.google_maps_api_key:
                raise ValueError(
                    "GOOGLE_MAPS_API_KEY is required when GEOCODER_PROVIDER=google. "
                    "Set it in your .env file or environment variables."
                )

            client = googlemaps.Client(
                key=settings.google_maps_api_key,
                timeout=settings.http_timeout_seconds,
            )

        self._client = client

        logger.info("GoogleGeoService initialized")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "google"

    async def reverse_geocode(
        self,
        latitude: float,
        longitude: float,
    ) -> ReverseGeocodeResult:
        """Reverse geocode a coordinate pair with the Geocoding API."""
        start_time = datetime.now()

        try:
            # googlemaps is synchronous; keep it off the event loop
            results = await asyncio.to_thread(
                self._client.reverse_geocode, (latitude, longitude)
            )

        except Timeout:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error("Google: API timeout")
            return ReverseGeocodeResult(
                success=False,
                error_message="Reverse geocoding timed out",
                error_code="timeout",
                response_time_ms=elapsed_ms,
            )

        except ApiError as e:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error(f"Google: API error - {e}")
            return ReverseGeocodeResult(
                success=False,
                error_message="Reverse geocoding service error",
                error_code="api_error",
                response_time_ms=elapsed_ms,
            )

        except TransportError as e:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error(f"Google: Transport error - {e}")
            return ReverseGeocodeResult(
                success=False,
                error_message="Unable to reach reverse geocoding service",
                error_code="transport_error",
                response_time_ms=elapsed_ms,
            )

        elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000

        if not results:
            logger.info(f"Google: No address for {latitude}, {longitude}")
            return ReverseGeocodeResult(
                success=True,
                error_code="address_not_found",
                response_time_ms=elapsed_ms,
            )

        return ReverseGeocodeResult(
            success=True,
            address=results[0].get("formatted_address"),
            response_time_ms=elapsed_ms,
        )

    async def health_check(self) -> bool:
        """Make a simple geocode request to verify credentials and connectivity."""
        try:
            return bool(await asyncio.to_thread(self._client.geocode, "New York, NY"))

        except (ApiError, Timeout, TransportError) as e:
            logger.error(f"Google: Health check failed - {e}")
            return False
