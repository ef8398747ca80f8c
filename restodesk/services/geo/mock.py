"""
Offline Reverse Geocoder

Simulates a reverse-geocoding provider without making real API calls.
Selected automatically when ENV_MODE=development.

Behavior:
    - Produces a stable, readable address for any coordinate pair
    - Simulates network latency (100-500ms by default)
    - Configurable random failure rate for exercising retry/fallback paths

Version: 1.0.0
"""

import asyncio
import random
import logging

from restodesk.services.geo.base import (
    BaseGeoService,
    ReverseGeocodeResult,
)

logger = logging.getLogger(__name__)


class MockGeoService(BaseGeoService):
    """
    Offline geocoder that derives a fake street address from the coordinates.

    Attributes:
        failure_rate: Probability of simulated API failure (0.0-1.0)
        min_latency: Minimum response time in seconds
        max_latency: Maximum response time in seconds

    Example:
        >>> service = MockGeoService(failure_rate=0.0)
        >>> result = await service.reverse_geocode(12.9716, 77.5946)
        >>> print(result.address)
        '167 Mock Street, Grid 12.97/77.59'
    """

    def __init__(
        self,
        failure_rate: float = 0.05,
        min_latency: float = 0.1,
        max_latency: float = 0.5,
    ):
        self.failure_rate = failure_rate
        self.min_latency = min_latency
        self.max_latency = max_latency

        logger.info(f"MockGeoService initialized (failure_rate={failure_rate:.0%})")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "mock"

    async def _simulate_latency(self) -> float:
        """
        Simulate network latency.

        Returns:
            float: Latency in milliseconds
        """
        latency = random.uniform(self.min_latency, self.max_latency)
        if latency > 0:
            await asyncio.sleep(latency)
        return latency * 1000

    def _should_fail(self) -> bool:
        """Roll for a simulated provider outage."""
        return random.random() < self.failure_rate

    async def reverse_geocode(
        self,
        latitude: float,
        longitude: float,
    ) -> ReverseGeocodeResult:
        """Return a synthetic address derived from the coordinates."""
        logger.debug(f"Mock: Reverse geocoding {latitude}, {longitude}")

        latency_ms = await self._simulate_latency()

        if self._should_fail():
            logger.debug("Mock: Simulated API failure")
            return ReverseGeocodeResult(
                success=False,
                error_message="Geocoding service temporarily unavailable",
                error_code="service_unavailable",
                response_time_ms=latency_ms,
            )

        house_number = int(abs(latitude * 1000 + longitude * 1000)) % 200 + 1
        address = f"{house_number} Mock Street, Grid {latitude:.2f}/{longitude:.2f}"

        return ReverseGeocodeResult(
            success=True,
            address=address,
            response_time_ms=latency_ms,
        )

    async def health_check(self) -> bool:
        """Always healthy; there is nothing to reach."""
        return True
