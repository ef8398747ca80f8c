"""
Authentication Helpers

Bearer-token issuing/verification (PyJWT) and password hashing (passlib).

Tokens are issued on login with a fixed lifetime and carry the user's
id, name and phone. Verification collapses every failure mode (missing
header, malformed header, bad signature, expiry) into ``AuthError``;
route dependencies turn that into a 401.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from passlib.context import CryptContext

from restodesk.core.config import get_settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthError(Exception):
    """Raised when a request cannot be authenticated."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except ValueError:
        # Stored value is not a recognizable hash
        return False


def create_access_token(
    user_id: int,
    name: str,
    phone: str,
    expires_delta: Optional[timedelta] = None,
    secret: Optional[str] = None,
) -> str:
    """
    Issue a signed bearer token for a user.

    Args:
        user_id: Primary key of the authenticated user
        name: Display name embedded in the payload
        phone: Phone number embedded in the payload
        expires_delta: Token lifetime (defaults to JWT_EXPIRE_DAYS)
        secret: Signing secret (defaults to JWT_SECRET)

    Returns:
        Encoded JWT string
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(days=settings.jwt_expire_days)

    payload: dict[str, Any] = {
        "id": user_id,
        "name": name,
        "phone": phone,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(
        payload,
        secret or settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def verify_token(auth_header: Optional[str], secret: Optional[str] = None) -> int:
    """
    Verify an ``Authorization: Bearer <token>`` header.

    Args:
        auth_header: Raw Authorization header value
        secret: Verification secret (defaults to JWT_SECRET)

    Returns:
        The user id embedded in the token

    Raises:
        AuthError: Header missing, malformed, or token invalid/expired
    """
    if not auth_header:
        raise AuthError("No token provided")

    parts = auth_header.split()
    if len(parts) < 2 or not parts[1]:
        raise AuthError("Invalid token format")
    token = parts[1]

    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            secret or settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.PyJWTError as e:
        logger.debug(f"Token rejected: {e}")
        raise AuthError("Invalid or expired token") from e

    user_id = payload.get("id")
    if not isinstance(user_id, int):
        raise AuthError("Invalid or expired token")

    return user_id
