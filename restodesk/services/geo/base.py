"""
Geo Service Abstract Base Class

Defines the interface contract for all geolocation service implementations.
MockGeoService, NominatimGeoService and GoogleGeoService implement it.

Use Cases:
    - Reverse geocoding a customer's delivery coordinates to an address
    - Distance calculation between a restaurant and a customer

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from restodesk.services.geo.distance import haversine_km, KM_PER_MILE


@dataclass
class ReverseGeocodeResult:
    """
    Standardized result from a reverse-geocoding lookup.

    Attributes:
        success: Whether the provider answered (even with no match)
        address: Human-readable address, None when nothing matched
        error_message: Error description if the lookup failed
        error_code: Machine-readable error code
        response_time_ms: Provider response time
    """
    success: bool
    address: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    response_time_ms: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "address": self.address,
            "error_message": self.error_message,
            "error_code": self.error_code,
            "response_time_ms": self.response_time_ms,
        }


@dataclass
class DistanceResult:
    """
    Result from distance calculation between two points.

    Attributes:
        success: Whether calculation succeeded
        distance_km: Distance in kilometers
        distance_miles: Distance in miles
        error_message: Error if calculation failed
    """
    success: bool
    distance_km: Optional[float] = None
    distance_miles: Optional[float] = None
    error_message: Optional[str] = None


class BaseGeoService(ABC):
    """
    Abstract base class for geolocation services.

    Example:
        >>> service = get_geo_service()
        >>> result = await service.reverse_geocode(12.9716, 77.5946)
        >>> if result.success and result.address:
        ...     print(result.address)
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the geo provider.

        Returns:
            str: Provider name (e.g., "mock", "nominatim", "google")
        """
        pass

    @abstractmethod
    async def reverse_geocode(
        self,
        latitude: float,
        longitude: float,
    ) -> ReverseGeocodeResult:
        """
        Convert a coordinate pair into a human-readable address.

        Implementations report provider failures through the result
        (``success=False``) instead of raising.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            ReverseGeocodeResult: Lookup outcome
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Verify connectivity to the geo service.

        Returns:
            bool: True if service is operational
        """
        pass

    async def calculate_distance(
        self,
        origin_lat: float,
        origin_lng: float,
        dest_lat: float,
        dest_lng: float,
    ) -> DistanceResult:
        """Straight-line (great-circle) distance between two points."""
        try:
            distance_km = haversine_km(origin_lat, origin_lng, dest_lat, dest_lng)
        except (TypeError, ValueError) as e:
            return DistanceResult(success=False, error_message=str(e))

        return DistanceResult(
            success=True,
            distance_km=distance_km,
            distance_miles=round(distance_km / KM_PER_MILE, 2),
        )
