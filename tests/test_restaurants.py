import pytest


def _restaurant_payload(owner_id, **overrides):
    payload = {
        "name": "Idli House",
        "cuisine": "South Indian",
        "rating": 4.1,
        "priceRange": "$",
        "address": "3 Church Street",
        "latitude": 12.975,
        "longitude": 77.605,
        "userId": owner_id,
    }
    payload.update(overrides)
    return payload


def _owner_restaurants(client, owner):
    response = client.get("/api/restaurants/nearby", params={"userId": owner["user"]["id"]})
    assert response.status_code == 200
    return response.json()


def test_create_coerces_numeric_strings(restaurant):
    assert restaurant["rating"] == 4.5
    assert restaurant["latitude"] == pytest.approx(12.9716)
    assert restaurant["longitude"] == pytest.approx(77.5946)
    assert restaurant["priceRange"] == "$$"
    assert [item["name"] for item in restaurant["menu"]] == ["Masala Dosa", "Filter Coffee"]


@pytest.mark.parametrize("field,value", [
    ("rating", "excellent"),
    ("latitude", "north"),
    ("longitude", "east"),
    ("rating", 7),
    ("latitude", 123.0),
])
def test_create_rejects_bad_numbers_without_writing(client, owner, field, value):
    response = client.post(
        "/api/restaurants/nearby",
        json=_restaurant_payload(owner["user"]["id"], **{field: value}),
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert _owner_restaurants(client, owner)["count"] == 0


def test_create_for_unknown_owner_is_400(client):
    response = client.post("/api/restaurants/nearby", json=_restaurant_payload(999))

    assert response.status_code == 400
    assert response.json()["message"] == "Owner (userId) does not exist"


def test_list_requires_user_id(client):
    response = client.get("/api/restaurants/nearby")

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "User ID is required"}


def test_list_only_owners_restaurants(client, owner, customer, restaurant):
    client.post("/api/restaurants/nearby", json=_restaurant_payload(customer["user"]["id"]))

    body = _owner_restaurants(client, owner)

    assert body["count"] == 1
    assert body["restaurants"][0]["id"] == restaurant["id"]


def test_partial_update_keeps_other_fields(client, owner, restaurant):
    response = client.patch(
        f"/api/restaurants/nearby/{restaurant['id']}",
        json={"rating": "3.9"},
        headers=owner["headers"],
    )

    assert response.status_code == 200
    updated = response.json()["restaurant"]
    assert updated["rating"] == 3.9
    assert updated["name"] == "Dosa Corner"
    assert updated["address"] == "12 MG Road"
    assert len(updated["menu"]) == 2


def test_partial_update_rejects_unknown_key(client, owner, restaurant):
    response = client.patch(
        f"/api/restaurants/nearby/{restaurant['id']}",
        json={"userId": 12345},
        headers=owner["headers"],
    )

    assert response.status_code == 400


def test_update_by_non_owner_is_404(client, customer, restaurant):
    response = client.patch(
        f"/api/restaurants/nearby/{restaurant['id']}",
        json={"name": "Taken Over"},
        headers=customer["headers"],
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Restaurant not found or not owned by user"
    assert client.get(f"/api/restaurants/{restaurant['id']}").json()["restaurant"]["name"] == "Dosa Corner"


def test_get_restaurant(client, restaurant):
    response = client.get(f"/api/restaurants/{restaurant['id']}")

    assert response.status_code == 200
    assert response.json()["restaurant"]["name"] == "Dosa Corner"


def test_get_unknown_restaurant_is_404(client):
    response = client.get("/api/restaurants/999")

    assert response.status_code == 404
    assert response.json()["message"] == "Restaurant not found"


def test_replace_menu(client, owner, restaurant):
    response = client.put(
        f"/api/restaurants/{restaurant['id']}",
        json={"menu": [{"name": "Rava Idli", "price": 60}]},
        headers=owner["headers"],
    )

    assert response.status_code == 200
    menu = response.json()["restaurant"]["menu"]
    assert [(m["name"], m["price"]) for m in menu] == [("Rava Idli", 60.0)]

    fetched = client.get(f"/api/restaurants/{restaurant['id']}").json()["restaurant"]
    assert len(fetched["menu"]) == 1


def test_replace_menu_with_empty_list_clears_it(client, owner, restaurant):
    response = client.put(
        f"/api/restaurants/{restaurant['id']}",
        json={"menu": []},
        headers=owner["headers"],
    )

    assert response.status_code == 200
    assert response.json()["restaurant"]["menu"] == []


@pytest.mark.parametrize("body", [{}, {"menu": None}, {"menu": "not a list"}])
def test_replace_menu_invalid_data_is_400(client, owner, restaurant, body):
    response = client.put(
        f"/api/restaurants/{restaurant['id']}",
        json=body,
        headers=owner["headers"],
    )

    assert response.status_code == 400
    fetched = client.get(f"/api/restaurants/{restaurant['id']}").json()["restaurant"]
    assert len(fetched["menu"]) == 2


def test_delete_restaurant(client, owner, restaurant):
    response = client.delete(f"/api/restaurants/{restaurant['id']}", headers=owner["headers"])

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Restaurant deleted successfully"}
    assert client.get(f"/api/restaurants/{restaurant['id']}").status_code == 404
    assert _owner_restaurants(client, owner)["count"] == 0


def test_delete_requires_owner(client, customer, restaurant):
    response = client.delete(f"/api/restaurants/{restaurant['id']}", headers=customer["headers"])

    assert response.status_code == 404
    assert client.get(f"/api/restaurants/{restaurant['id']}").status_code == 200


def test_delete_keeps_orders_unlinked(client, owner, customer, restaurant, place_order):
    order = place_order("2026-01-01T10:00:00")

    client.delete(f"/api/restaurants/{restaurant['id']}", headers=owner["headers"])

    response = client.get(f"/api/orders/{order['id']}", headers=customer["headers"])
    assert response.status_code == 200
    assert response.json()["order"]["restaurantId"] is None


def test_partial_update_null_clears_optional_image(client, owner):
    created = client.post(
        "/api/restaurants/nearby",
        json=_restaurant_payload(owner["user"]["id"], imageUrl="https://img.test/idli.png"),
    ).json()["restaurant"]
    assert created["imageUrl"] == "https://img.test/idli.png"

    response = client.patch(
        f"/api/restaurants/nearby/{created['id']}",
        json={"imageUrl": None},
        headers=owner["headers"],
    )

    assert response.status_code == 200
    updated = response.json()["restaurant"]
    assert updated["imageUrl"] is None
    assert updated["name"] == "Idli House"


@pytest.mark.parametrize("field", ["name", "rating", "latitude", "longitude", "address", "menu"])
def test_partial_update_null_required_field_is_400(client, owner, restaurant, field):
    response = client.patch(
        f"/api/restaurants/nearby/{restaurant['id']}",
        json={field: None, "imageUrl": None},
        headers=owner["headers"],
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request data"

    fetched = client.get(f"/api/restaurants/{restaurant['id']}").json()["restaurant"]
    assert fetched["name"] == "Dosa Corner"
    assert len(fetched["menu"]) == 2
