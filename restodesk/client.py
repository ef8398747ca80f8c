"""
RestoDesk API Client

Async HTTP client for the RestoDesk API, used by the order-enrichment
pipeline and the reporting script.

Authentication state lives in an explicit ``Session`` object handed to
the client (``login()`` returns one) rather than in any ambient store.

Usage:
    async with RestoDeskClient() as api:
        session = await api.login("9876543210", "secret")
        listing = await api.list_orders()

Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from restodesk.core.config import get_settings

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Non-2xx response (or transport failure) from the API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class Session:
    """An authenticated user's bearer token and profile."""
    token: str
    user: dict[str, Any] = field(default_factory=dict)

    @property
    def user_id(self) -> Optional[int]:
        return self.user.get("id")

    @property
    def auth_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class RestoDeskClient:
    """
    Thin async wrapper over the RestoDesk HTTP API.

    Args:
        base_url: API root (defaults to API_BASE_URL)
        session: Existing session to authenticate requests with
        timeout: Per-request timeout in seconds
        transport: Custom httpx transport (tests use ``httpx.MockTransport``)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[Session] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.session = session
        self._http = httpx.AsyncClient(
            base_url=(base_url or settings.api_base_url).rstrip("/"),
            timeout=timeout if timeout is not None else settings.http_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "RestoDeskClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # =========================================================================
    # TRANSPORT
    # =========================================================================

    async def _request(
        self,
        method: str,
        path: str,
        auth: bool = True,
        **kwargs: Any,
    ) -> dict[str, Any]:
        headers = kwargs.pop("headers", {})
        if auth:
            if self.session is None:
                raise ApiClientError("Not logged in", status_code=401)
            headers.update(self.session.auth_header)

        try:
            response = await self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise ApiClientError(f"{method} {path} failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            message = response.reason_phrase
            if isinstance(data, dict):
                message = data.get("message") or data.get("error") or message
            raise ApiClientError(message, status_code=response.status_code)

        return data

    # =========================================================================
    # AUTH
    # =========================================================================

    async def login(self, phone: str, password: str) -> Session:
        """Log in by phone and password; the new session is kept on the client."""
        data = await self._request(
            "POST",
            "/api/login",
            auth=False,
            json={"phone": phone, "password": password},
        )
        self.session = Session(token=data["token"], user=data.get("user", {}))
        logger.info(f"Logged in as user #{self.session.user_id}")
        return self.session

    # =========================================================================
    # RESOURCES
    # =========================================================================

    async def list_orders(
        self,
        restaurant_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> dict[str, Any]:
        """Orders for the logged-in owner: ``{restaurantCoords, orders}``."""
        params: dict[str, Any] = {}
        if restaurant_id is not None:
            params["restaurantId"] = restaurant_id
        if status:
            params["status"] = status
        return await self._request("GET", "/api/orders", params=params)

    async def get_order(self, order_id: int) -> dict[str, Any]:
        data = await self._request("GET", f"/api/orders/{order_id}")
        return data["order"]

    async def create_order(self, payload: dict[str, Any]) -> dict[str, Any]:
        data = await self._request("POST", "/api/orders", json=payload)
        return data["order"]

    async def update_order_status(self, order_id: int, status: str) -> dict[str, Any]:
        data = await self._request(
            "PATCH",
            f"/api/orders/{order_id}",
            json={"orderStatus": status},
        )
        return data["order"]

    async def get_restaurant(self, restaurant_id: int) -> dict[str, Any]:
        data = await self._request("GET", f"/api/restaurants/{restaurant_id}")
        return data["restaurant"]

    async def list_users(self) -> list[dict[str, Any]]:
        data = await self._request("GET", "/api/users")
        return data.get("users", [])
