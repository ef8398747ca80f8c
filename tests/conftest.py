import asyncio
import os
import tempfile
from pathlib import Path

import pytest

# Configure before the application (and its engine) is imported
_DB_DIR = Path(tempfile.mkdtemp(prefix="restodesk-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR / 'test.db'}"
os.environ["ENV_MODE"] = "development"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DEBUG"] = "false"

from fastapi.testclient import TestClient  # noqa: E402

from restodesk.database import drop_db, init_db  # noqa: E402
from restodesk.main import app  # noqa: E402


async def _reset_database():
    await drop_db()
    await init_db()


@pytest.fixture()
def client():
    asyncio.run(_reset_database())
    with TestClient(app) as test_client:
        yield test_client


def _signup(client, name, email, phone, password="secret123"):
    response = client.post(
        "/api/client",
        json={"name": name, "email": email, "phone": phone, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]


def _login_headers(client, phone, password="secret123"):
    response = client.post("/api/login", json={"phone": phone, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def owner(client):
    user = _signup(client, "Owner One", "owner@example.com", "9000000001")
    return {"user": user, "headers": _login_headers(client, "9000000001")}


@pytest.fixture()
def customer(client):
    user = _signup(client, "Customer One", "customer@example.com", "9000000002")
    return {"user": user, "headers": _login_headers(client, "9000000002")}


@pytest.fixture()
def restaurant(client, owner):
    response = client.post(
        "/api/restaurants/nearby",
        json={
            "name": "Dosa Corner",
            "cuisine": "South Indian",
            "rating": "4.5",
            "priceRange": "$$",
            "address": "12 MG Road",
            "latitude": "12.9716",
            "longitude": "77.5946",
            "userId": owner["user"]["id"],
            "menu": [
                {"name": "Masala Dosa", "price": 120},
                {"name": "Filter Coffee", "price": 40},
            ],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["restaurant"]


def _place_order(client, customer, restaurant, date, **extra):
    payload = {
        "restaurantId": restaurant["id"],
        "date": date,
        "items": [
            {"id": "1", "name": "Masala Dosa", "price": 120, "quantity": 2},
            {"id": "2", "name": "Filter Coffee", "price": 40, "quantity": 1},
        ],
    }
    payload.update(extra)
    response = client.post("/api/orders", json=payload, headers=customer["headers"])
    assert response.status_code == 201, response.text
    return response.json()["order"]


@pytest.fixture()
def place_order(client, customer, restaurant):
    """Place an order at ``restaurant`` as ``customer``; returns the order JSON."""
    def _place(date, **extra):
        return _place_order(client, customer, restaurant, date, **extra)
    return _place


@pytest.fixture()
def register(client):
    """Sign up and log in a user; returns ``{"user", "headers"}``."""
    def _register(name, email, phone, password="secret123"):
        user = _signup(client, name, email, phone, password)
        return {"user": user, "headers": _login_headers(client, phone, password)}
    return _register
