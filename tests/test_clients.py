def test_contact_info_is_callers_own(client, owner, customer):
    response = client.get("/api/client", headers=customer["headers"])

    assert response.status_code == 200
    assert response.json() == {
        "name": "Customer One",
        "email": "customer@example.com",
        "phone": "9000000002",
    }


def test_get_profile(client, owner):
    response = client.get(f"/api/client/{owner['user']['id']}")

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["name"] == "Owner One"
    assert "password" not in user


def test_get_unknown_profile_is_404(client):
    response = client.get("/api/client/999")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "User not found"}


def test_update_own_profile_only_touches_sent_fields(client, owner):
    user_id = owner["user"]["id"]
    response = client.patch(
        f"/api/client/{user_id}",
        json={"city": "Bengaluru", "pincode": "560001", "dob": "1990-05-17"},
        headers=owner["headers"],
    )

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["city"] == "Bengaluru"
    assert user["dob"] == "1990-05-17"
    assert user["name"] == "Owner One"
    assert user["email"] == "owner@example.com"

    assert client.get(f"/api/client/{user_id}").json()["user"]["pincode"] == "560001"


def test_update_another_users_profile_is_403(client, owner, customer):
    response = client.patch(
        f"/api/client/{owner['user']['id']}",
        json={"name": "Hijacked"},
        headers=customer["headers"],
    )

    assert response.status_code == 403
    assert client.get(f"/api/client/{owner['user']['id']}").json()["user"]["name"] == "Owner One"


def test_update_rejects_password_and_unknown_keys(client, owner):
    user_id = owner["user"]["id"]

    for body in ({"password": "new-password"}, {"isAdmin": True}):
        response = client.patch(f"/api/client/{user_id}", json=body, headers=owner["headers"])
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"

    # Old password still works
    login = client.post("/api/login", json={"phone": "9000000001", "password": "secret123"})
    assert login.status_code == 200


def test_update_to_taken_email_is_400(client, owner, customer):
    response = client.patch(
        f"/api/client/{owner['user']['id']}",
        json={"email": "customer@example.com"},
        headers=owner["headers"],
    )

    assert response.status_code == 400
    assert response.json()["message"] == "A user with this email already exists"


def test_list_users(client, owner, customer):
    response = client.get("/api/users", headers=owner["headers"])

    assert response.status_code == 200
    users = response.json()["users"]
    assert [u["phone"] for u in users] == ["9000000001", "9000000002"]
    assert all("password" not in u for u in users)


def test_update_null_clears_optional_fields(client, owner):
    user_id = owner["user"]["id"]
    client.patch(
        f"/api/client/{user_id}",
        json={"city": "Bengaluru", "dob": "1990-05-17"},
        headers=owner["headers"],
    )

    response = client.patch(
        f"/api/client/{user_id}",
        json={"city": None, "dob": None},
        headers=owner["headers"],
    )

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["city"] is None
    assert user["dob"] is None
    assert user["name"] == "Owner One"


def test_update_null_required_field_is_400(client, owner):
    user_id = owner["user"]["id"]

    for field in ("name", "email", "phone"):
        response = client.patch(
            f"/api/client/{user_id}",
            json={field: None},
            headers=owner["headers"],
        )
        assert response.status_code == 400

    user = client.get(f"/api/client/{user_id}").json()["user"]
    assert (user["name"], user["email"], user["phone"]) == (
        "Owner One", "owner@example.com", "9000000001",
    )
