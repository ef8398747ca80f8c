"""
                        Services Module

Business logic that sits outside the HTTP handlers.

Services:
    - geo: reverse geocoding (Mock / Nominatim / Google Maps) and distances
    - enrichment: per-order restaurant, customer, distance and address lookup
"""

from restodesk.services.enrichment import OrderEnricher, EnrichedOrder, UserLocation

__all__ = ["OrderEnricher", "EnrichedOrder", "UserLocation"]
