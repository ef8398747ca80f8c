"""
Order Enrichment Pipeline

Post-processes an owner's order listing for display. Each order gets:
    - its restaurant (one API call per order)
    - its customer (from a single up-front user listing)
    - the restaurant-to-customer distance (haversine, km)
    - a human-readable delivery address (reverse geocoded)
    - a driving-directions link

Orders are processed strictly one after another and the enricher pauses
after every geocoded order, keeping the third-party geocoder under its
rate limit. A failure while enriching one order never drops it from the
result; it is emitted without the extra data.

Usage:
    async with RestoDeskClient(session=session) as api:
        listing = await api.list_orders()
        enriched = await OrderEnricher(api).enrich(listing["orders"])

Version: 1.0.0
"""

import asyncio
import logging
from dataclasses import dataclass, asdict
from typing import Any, Optional

from restodesk.client import ApiClientError, RestoDeskClient
from restodesk.core.config import get_settings
from restodesk.services.geo import (
    BaseGeoService,
    directions_url,
    get_geo_service,
    haversine_km,
    safe_reverse_geocode,
)

logger = logging.getLogger(__name__)


@dataclass
class UserLocation:
    """Customer delivery point with derived address and distance."""
    latitude: float
    longitude: float
    address: Optional[str] = None
    distance_km: Optional[float] = None


@dataclass
class EnrichedOrder:
    """An order as listed by the API plus the data attached for display."""
    id: int
    date: str
    items: list[dict[str, Any]]
    amount: float
    status: str
    user_id: Optional[int] = None
    restaurant_id: Optional[int] = None
    customer_name: str = "Unknown"
    user: Optional[dict[str, Any]] = None
    restaurant: Optional[dict[str, Any]] = None
    location: Optional[UserLocation] = None
    directions_url: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class OrderEnricher:
    """
    Serial enricher for order listings.

    Args:
        api: Authenticated API client
        geo_service: Reverse geocoder (defaults to the configured service)
        retries: Reverse-geocode retries per order (default GEOCODE_RETRIES)
        backoff_seconds: Linear backoff unit (default GEOCODE_BACKOFF_SECONDS)
        pause_seconds: Pause after each geocoded order (default GEOCODE_PAUSE_SECONDS)
    """

    def __init__(
        self,
        api: RestoDeskClient,
        geo_service: Optional[BaseGeoService] = None,
        retries: Optional[int] = None,
        backoff_seconds: Optional[float] = None,
        pause_seconds: Optional[float] = None,
    ):
        settings = get_settings()
        self.api = api
        self.geo_service = geo_service or get_geo_service()
        self.retries = settings.geocode_retries if retries is None else retries
        self.backoff_seconds = (
            settings.geocode_backoff_seconds if backoff_seconds is None else backoff_seconds
        )
        self.pause_seconds = (
            settings.geocode_pause_seconds if pause_seconds is None else pause_seconds
        )

    async def enrich(self, orders: list[dict[str, Any]]) -> list[EnrichedOrder]:
        """Enrich every order in listing order."""
        users_map = await self._fetch_users_map()
        processed: list[EnrichedOrder] = []

        for order in orders:
            try:
                processed.append(await self._enrich_one(order, users_map))
            except Exception as e:
                logger.exception(f"Failed to process order {order.get('id')}: {e}")
                processed.append(self._bare(order))

            if order.get("latitude") and order.get("longitude"):
                await asyncio.sleep(self.pause_seconds)

        logger.info(f"Enriched {len(processed)} orders")
        return processed

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    async def _fetch_users_map(self) -> dict[int, dict[str, Any]]:
        try:
            users = await self.api.list_users()
        except ApiClientError as e:
            if e.status_code != 404:
                logger.error(f"Failed to fetch users: {e}")
            return {}

        return {user["id"]: user for user in users if "id" in user}

    async def _fetch_restaurant(self, restaurant_id: int) -> Optional[dict[str, Any]]:
        try:
            return await self.api.get_restaurant(restaurant_id)
        except ApiClientError as e:
            logger.error(f"Failed to fetch restaurant {restaurant_id}: {e}")
            return None

    # =========================================================================
    # PER-ORDER PROCESSING
    # =========================================================================

    def _bare(self, order: dict[str, Any]) -> EnrichedOrder:
        return EnrichedOrder(
            id=order["id"],
            date=order.get("date", ""),
            items=order.get("items", []),
            amount=order.get("amount", 0.0),
            status=order.get("orderStatus", ""),
            user_id=order.get("userId"),
            restaurant_id=order.get("restaurantId"),
            customer_name=order.get("customerName") or "Unknown",
        )

    async def _enrich_one(
        self,
        order: dict[str, Any],
        users_map: dict[int, dict[str, Any]],
    ) -> EnrichedOrder:
        enriched = self._bare(order)

        if enriched.restaurant_id is not None:
            enriched.restaurant = await self._fetch_restaurant(enriched.restaurant_id)

        if enriched.user_id is not None:
            enriched.user = users_map.get(enriched.user_id)

        latitude = order.get("latitude")
        longitude = order.get("longitude")
        restaurant = enriched.restaurant

        if latitude and longitude and restaurant:
            location = UserLocation(latitude=latitude, longitude=longitude)
            location.distance_km = haversine_km(
                restaurant["latitude"],
                restaurant["longitude"],
                latitude,
                longitude,
            )
            location.address = await safe_reverse_geocode(
                self.geo_service,
                latitude,
                longitude,
                retries=self.retries,
                backoff_seconds=self.backoff_seconds,
            )
            enriched.location = location
            enriched.directions_url = directions_url(
                restaurant["latitude"],
                restaurant["longitude"],
                latitude,
                longitude,
                origin_name=restaurant.get("name"),
                dest_name=(enriched.user or {}).get("name") or "Customer Location",
            )

        return enriched
