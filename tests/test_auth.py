from datetime import timedelta

import jwt
import pytest

from restodesk.core.security import (
    AuthError,
    create_access_token,
    hash_password,
    verify_password,
    verify_token,
)


def test_signup_returns_profile_without_password(client):
    response = client.post(
        "/api/client",
        json={"name": "Asha", "email": "asha@example.com", "phone": "9876543210", "password": "pw"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["user"]["email"] == "asha@example.com"
    assert "password" not in body["user"]


def test_signup_duplicate_email_rejected(client, owner):
    response = client.post(
        "/api/client",
        json={"name": "Other", "email": "owner@example.com", "phone": "9111111111", "password": "pw"},
    )

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": "A user with this email already exists",
    }

    users = client.get("/api/users", headers=owner["headers"]).json()["users"]
    assert len(users) == 1


def test_signup_duplicate_phone_rejected(client, owner):
    response = client.post(
        "/api/client",
        json={"name": "Other", "email": "other@example.com", "phone": "9000000001", "password": "pw"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "A user with this phone number already exists"


def test_signup_missing_fields_is_400(client):
    response = client.post("/api/client", json={"name": "No Email"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_login_returns_token_for_user(client, owner):
    response = client.post("/api/login", json={"phone": "9000000001", "password": "secret123"})

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["id"] == owner["user"]["id"]
    assert verify_token(f"Bearer {body['token']}") == owner["user"]["id"]

    claims = jwt.decode(body["token"], "test-secret", algorithms=["HS256"])
    assert claims["phone"] == "9000000001"
    assert claims["exp"] - claims["iat"] == 7 * 24 * 3600


@pytest.mark.parametrize("phone,password", [
    ("9000000001", "wrong-password"),
    ("9999999999", "secret123"),
])
def test_login_failure_is_401_without_token(client, owner, phone, password):
    response = client.post("/api/login", json={"phone": phone, "password": password})

    assert response.status_code == 401
    body = response.json()
    assert body["message"] == "Invalid phone number or password"
    assert "token" not in body


def test_protected_route_requires_token(client, owner):
    response = client.get("/api/users")

    assert response.status_code == 401
    body = response.json()
    assert body["message"] == "Unauthorized: Missing or invalid token"
    assert body["error"] == "No token provided"


def test_protected_route_rejects_garbage_token(client, owner):
    response = client.get("/api/users", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid or expired token"


class TestVerifyToken:

    def test_missing_header(self):
        with pytest.raises(AuthError, match="No token provided"):
            verify_token(None)

    def test_header_without_token(self):
        with pytest.raises(AuthError, match="Invalid token format"):
            verify_token("Bearer")

    def test_wrong_secret(self):
        token = create_access_token(1, "A", "1", secret="some-other-secret")
        with pytest.raises(AuthError, match="Invalid or expired token"):
            verify_token(f"Bearer {token}")

    def test_expired(self):
        token = create_access_token(1, "A", "1", expires_delta=timedelta(seconds=-5))
        with pytest.raises(AuthError, match="Invalid or expired token"):
            verify_token(f"Bearer {token}")

    def test_valid(self):
        token = create_access_token(42, "A", "1")
        assert verify_token(f"Bearer {token}") == 42


def test_password_hashing():
    hashed = hash_password("hunter2")

    assert hashed != "hunter2"
    assert verify_password("hunter2", hashed)
    assert not verify_password("hunter3", hashed)
    assert not verify_password("hunter2", "plaintext-not-a-hash")
