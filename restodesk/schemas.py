"""
Pydantic Schemas for Request/Response Validation

The JSON API speaks camelCase (``priceRange``, ``userId``, ``orderStatus``);
models are declared in snake_case and aliased. Every request schema
enumerates its allowed fields and rejects unknown keys.

Version: 1.0.0
"""

from datetime import date as date_type, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from restodesk.models import OrderStatus


class CamelModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(CamelModel):
    """Base for request bodies; unknown keys are a validation error."""
    model_config = ConfigDict(extra="forbid")


def reject_null(value: Any) -> Any:
    """Partial updates may omit a required column but never null it."""
    if value is None:
        raise ValueError("must not be null")
    return value


# =============================================================================
# USER SCHEMAS
# =============================================================================

class SignupRequest(RequestModel):
    """Request schema for registering a new user."""
    name: str = Field(..., min_length=1, max_length=100, examples=["Asha Rao"])
    email: EmailStr = Field(..., examples=["asha@example.com"])
    phone: str = Field(..., min_length=1, max_length=20, examples=["9876543210"])
    password: str = Field(..., min_length=1, max_length=72)


class LoginRequest(RequestModel):
    phone: str = Field(..., min_length=1, max_length=20)
    password: str = Field(..., min_length=1)


class UserUpdate(RequestModel):
    """
    Partial profile update. Password changes are not accepted here.

    Address fields and ``dob`` may be sent as null to clear them.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=20)
    address: Optional[str] = Field(None, max_length=255)
    state: Optional[str] = Field(None, max_length=50)
    city: Optional[str] = Field(None, max_length=50)
    pincode: Optional[str] = Field(None, max_length=10)
    dob: Optional[date_type] = None

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def required_not_null(cls, v: Any) -> Any:
        return reject_null(v)


class UserPublic(CamelModel):
    """User profile as exposed by the API (never includes the password)."""
    id: int
    name: str
    email: str
    phone: str
    address: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    dob: Optional[date_type] = None


class LoginUser(CamelModel):
    id: int
    name: str
    email: str
    phone: str


class ContactInfo(CamelModel):
    name: str
    email: str
    phone: str


# =============================================================================
# RESTAURANT SCHEMAS
# =============================================================================

class MenuItemIn(RequestModel):
    """Single dish on a menu."""
    name: str = Field(..., min_length=1, max_length=100, examples=["Masala Dosa"])
    price: float = Field(..., ge=0, allow_inf_nan=False, examples=[120.0])


class RestaurantCreate(RequestModel):
    """
    Request schema for creating a restaurant.

    ``rating``, ``latitude`` and ``longitude`` may arrive as numbers or
    numeric strings; anything that does not parse to a finite number is
    rejected.
    """
    name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=255)
    user_id: int = Field(..., examples=[1])
    rating: float = Field(..., ge=0, le=5, allow_inf_nan=False)
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    cuisine: str = Field(default="", max_length=100)
    price_range: str = Field(default="", max_length=50)
    image_url: Optional[str] = Field(None, max_length=500)
    img: Optional[str] = Field(None, max_length=500)
    menu: List[MenuItemIn] = Field(default_factory=list)


class RestaurantUpdate(RequestModel):
    """
    Partial update; only the keys present in the body are written.

    ``imageUrl`` and ``img`` may be sent as null to clear them.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    cuisine: Optional[str] = Field(None, max_length=100)
    rating: Optional[float] = Field(None, ge=0, le=5, allow_inf_nan=False)
    price_range: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, min_length=1, max_length=255)
    image_url: Optional[str] = Field(None, max_length=500)
    img: Optional[str] = Field(None, max_length=500)
    latitude: Optional[float] = Field(None, ge=-90, le=90, allow_inf_nan=False)
    longitude: Optional[float] = Field(None, ge=-180, le=180, allow_inf_nan=False)
    menu: Optional[List[MenuItemIn]] = None

    @field_validator(
        "name", "cuisine", "rating", "price_range", "address",
        "latitude", "longitude", "menu",
        mode="before",
    )
    @classmethod
    def required_not_null(cls, v: Any) -> Any:
        return reject_null(v)


class MenuReplace(RequestModel):
    menu: Optional[List[MenuItemIn]] = None


class MenuItemResponse(CamelModel):
    id: int
    name: str
    price: float


class RestaurantResponse(CamelModel):
    """Response schema for a single restaurant."""
    id: int
    name: str
    cuisine: str
    rating: float
    price_range: str
    address: str
    image_url: Optional[str] = None
    img: Optional[str] = None
    latitude: float
    longitude: float
    user_id: int
    menu: List[MenuItemResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# ORDER SCHEMAS
# =============================================================================

class OrderItem(RequestModel):
    """Single line of an order."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    quantity: int = Field(..., ge=1, le=99)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def total_price(self) -> float:
        return round(self.quantity * self.price, 2)


class OrderCreate(RequestModel):
    """Request schema for placing an order."""
    restaurant_id: int
    items: List[OrderItem] = Field(..., min_length=1)
    date: Optional[str] = Field(None, max_length=40, examples=["2026-10-18T12:30:00+00:00"])
    customer_name: Optional[str] = Field(None, max_length=100)
    latitude: Optional[float] = Field(None, ge=-90, le=90, allow_inf_nan=False)
    longitude: Optional[float] = Field(None, ge=-180, le=180, allow_inf_nan=False)


class OrderStatusUpdate(RequestModel):
    order_status: Optional[OrderStatus] = None


class OrderResponse(CamelModel):
    """Response schema for a single order."""
    id: int
    date: str
    items: List[OrderItem]
    amount: float
    order_status: OrderStatus
    user_id: int
    restaurant_id: Optional[int] = None
    customer_name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RestaurantCoords(CamelModel):
    latitude: float
    longitude: float


# =============================================================================
# RESPONSE ENVELOPES
# =============================================================================

class MessageResponse(CamelModel):
    success: bool = True
    message: str


class SignupResponse(CamelModel):
    success: bool = True
    message: str
    user: UserPublic


class LoginResponse(CamelModel):
    success: bool = True
    message: str
    token: str
    user: LoginUser


class UserEnvelope(CamelModel):
    success: bool = True
    message: Optional[str] = None
    user: UserPublic


class UserListResponse(CamelModel):
    success: bool = True
    users: List[UserPublic]


class RestaurantEnvelope(CamelModel):
    success: bool = True
    message: Optional[str] = None
    restaurant: RestaurantResponse


class RestaurantListResponse(CamelModel):
    success: bool = True
    count: int
    restaurants: List[RestaurantResponse]


class OrderEnvelope(CamelModel):
    success: bool = True
    message: Optional[str] = None
    order: OrderResponse


class OrderListResponse(CamelModel):
    """Orders for an owner's restaurant plus that restaurant's location."""
    success: bool = True
    restaurant_coords: RestaurantCoords
    orders: List[OrderResponse]


class ErrorResponse(CamelModel):
    """Standard error response."""
    success: bool = False
    message: str
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    geo_service: str
    timestamp: datetime
