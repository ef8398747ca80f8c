"""
Nominatim Geo Service Implementation

Reverse geocoding through OpenStreetMap's Nominatim API.
Used when ENV_MODE is production/staging and GEOCODER_PROVIDER=nominatim.

Nominatim's public instance allows roughly one request per second and
requires an identifying User-Agent; callers that geocode many points
should pace themselves (the order enricher pauses between lookups).

API Documentation:
    https://nominatim.org/release-docs/latest/api/Reverse/

Version: 1.0.0
"""

import logging
from datetime import datetime
from typing import Optional

import httpx

from restodesk.core.config import get_settings
from restodesk.services.geo.base import (
    BaseGeoService,
    ReverseGeocodeResult,
)

logger = logging.getLogger(__name__)


class NominatimGeoService(BaseGeoService):
    """
    OpenStreetMap Nominatim reverse geocoder.

    A short-lived ``httpx.AsyncClient`` is opened per lookup, so one
    service instance can be shared across event loops.

    Example:
        >>> service = NominatimGeoService()
        >>> result = await service.reverse_geocode(48.8584, 2.2945)
        >>> print(result.address)
        'Tour Eiffel, 5, Avenue Anatole France, ... Paris, France'
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()

        self.base_url = (base_url or settings.nominatim_url).rstrip("/")
        self.user_agent = user_agent or settings.nominatim_user_agent
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self._transport = transport

        logger.info(f"NominatimGeoService initialized ({self.base_url})")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "nominatim"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            timeout=self.timeout,
            transport=self._transport,
        )

    async def reverse_geocode(
        self,
        latitude: float,
        longitude: float,
    ) -> ReverseGeocodeResult:
        """
        Look up the address nearest to a coordinate pair.

        A 2xx answer without ``display_name`` is a successful lookup with
        no match; HTTP errors and transport failures are unsuccessful.
        """
        start_time = datetime.now()
        params = {
            "format": "json",
            "lat": latitude,
            "lon": longitude,
            "zoom": 18,
            "addressdetails": 1,
        }

        try:
            async with self._client() as client:
                response = await client.get("/reverse", params=params)
                response.raise_for_status()
                data = response.json()

        except httpx.TimeoutException:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error("Nominatim: API timeout")
            return ReverseGeocodeResult(
                success=False,
                error_message="Reverse geocoding timed out",
                error_code="timeout",
                response_time_ms=elapsed_ms,
            )

        except httpx.HTTPStatusError as e:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error(f"Nominatim: HTTP error - {e.response.status_code}")
            return ReverseGeocodeResult(
                success=False,
                error_message=f"HTTP error! status: {e.response.status_code}",
                error_code="http_error",
                response_time_ms=elapsed_ms,
            )

        except (httpx.HTTPError, ValueError) as e:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error(f"Nominatim: Transport error - {e}")
            return ReverseGeocodeResult(
                success=False,
                error_message="Unable to reach reverse geocoding service",
                error_code="transport_error",
                response_time_ms=elapsed_ms,
            )

        elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
        address = data.get("display_name") if isinstance(data, dict) else None

        if not address:
            logger.info(f"Nominatim: No address for {latitude}, {longitude}")
            return ReverseGeocodeResult(
                success=True,
                error_code="address_not_found",
                response_time_ms=elapsed_ms,
            )

        return ReverseGeocodeResult(
            success=True,
            address=address,
            response_time_ms=elapsed_ms,
        )

    async def health_check(self) -> bool:
        """Verify the Nominatim instance answers its status endpoint."""
        try:
            async with self._client() as client:
                response = await client.get("/status", params={"format": "json"})
            return response.status_code == 200

        except httpx.HTTPError as e:
            logger.error(f"Nominatim: Health check failed - {e}")
            return False
