"""
Enriched Order Report

Logs in as a restaurant owner, fetches their orders and prints each one
with customer, distance and delivery address attached.
Run from project root: python scripts/orders_report.py --phone ... --password ...

Version: 1.0.0
"""

import asyncio
import sys
import os
import argparse
import json
from datetime import datetime

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from restodesk.client import ApiClientError, RestoDeskClient
from restodesk.core.config import get_settings, setup_logging
from restodesk.services.enrichment import EnrichedOrder, OrderEnricher


def print_order(order: EnrichedOrder) -> None:
    """Print one enriched order as a card."""
    customer = (order.user or {}).get("name") or order.customer_name
    print("-" * 70)
    print(f"📦 Order #{order.id}  [{order.status}]  {order.date}")
    print(f"   Customer: {customer}")
    if order.user:
        print(f"   Email: {order.user.get('email')}  Phone: {order.user.get('phone')}")
    if order.restaurant:
        print(f"   Restaurant: {order.restaurant.get('name')} - {order.restaurant.get('address')}")
    for idx, item in enumerate(order.items, start=1):
        print(f"   {idx}. {item['name']} - {item['price']:.2f} × {item['quantity']}")
    print(f"   💰 Total: {order.amount:.2f}")
    if order.location:
        print(f"   📍 Deliver to: {order.location.address}")
        print(f"   📏 Distance: {order.location.distance_km} km")
        print(f"   🧭 Directions: {order.directions_url}")


async def run_report(
    phone: str,
    password: str,
    base_url: str,
    restaurant_id: int | None,
    status: str | None,
    as_json: bool,
) -> int:
    """Fetch, enrich and print the owner's orders. Returns an exit code."""
    async with RestoDeskClient(base_url=base_url) as api:
        try:
            await api.login(phone, password)
            listing = await api.list_orders(restaurant_id=restaurant_id, status=status)
        except ApiClientError as e:
            print(f"❌ {e.message} (status {e.status_code})")
            return 1

        orders = listing.get("orders", [])
        enriched = await OrderEnricher(api).enrich(orders)

    if as_json:
        print(json.dumps([o.to_dict() for o in enriched], indent=2, default=str))
        return 0

    coords = listing.get("restaurantCoords", {})
    print("=" * 70)
    print("🍽️  ORDER REPORT")
    print("=" * 70)
    print(f"⏰ Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"🎯 API: {base_url}")
    print(f"📍 Restaurant: {coords.get('latitude')}, {coords.get('longitude')}")
    print(f"📋 Orders: {len(enriched)}")

    for order in enriched:
        print_order(order)

    print("=" * 70)
    return 0


if __name__ == "__main__":
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Enriched order report")
    parser.add_argument("--phone", required=True, help="Owner's login phone")
    parser.add_argument("--password", required=True, help="Owner's password")
    parser.add_argument("--base-url", default=settings.api_base_url, help="API base URL")
    parser.add_argument("--restaurant-id", type=int, default=None, help="Limit to one restaurant")
    parser.add_argument("--status", default=None, help="ordered | in process | delivered")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of cards")
    args = parser.parse_args()

    setup_logging()

    sys.exit(asyncio.run(run_report(
        phone=args.phone,
        password=args.password,
        base_url=args.base_url,
        restaurant_id=args.restaurant_id,
        status=args.status,
        as_json=args.json,
    )))
