"""
SQLAlchemy Database Models

Three owner-facing tables plus the menu rows hanging off a restaurant:
- users: restaurant owners and customers
- restaurants: owned by a user, with an ordered menu
- orders: placed by a user against a restaurant

References between tables are real foreign keys, so an order or a
restaurant can never point at a row that does not exist.

Version: 1.0.0
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, DateTime, Date, Enum, ForeignKey, JSON
from sqlalchemy.orm import relationship
from restodesk.database import Base
import enum


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(str, enum.Enum):
    """Order status values accepted by the API."""
    ORDERED = "ordered"
    IN_PROCESS = "in process"
    DELIVERED = "delivered"


class User(Base):
    """
    Account table - restaurant owners and the customers who order from them.

    Email and phone are each unique; login is by phone.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # =========================================================================
    # IDENTITY
    # =========================================================================
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(20), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash

    # =========================================================================
    # PROFILE
    # =========================================================================
    address = Column(String(255), nullable=True)
    state = Column(String(50), nullable=True)
    city = Column(String(50), nullable=True)
    pincode = Column(String(10), nullable=True)
    dob = Column(Date, nullable=True)

    # =========================================================================
    # TIMESTAMPS
    # =========================================================================
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<User #{self.id} - {self.name} - {self.phone}>"


class Restaurant(Base):
    """
    Restaurant table - one row per restaurant, owned by a user.

    The menu is stored as ``menu_items`` rows and always loaded with the
    restaurant, ordered by position.
    """
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    name = Column(String(100), nullable=False)
    cuisine = Column(String(100), nullable=False, default="")
    rating = Column(Float, nullable=False)
    price_range = Column(String(50), nullable=False, default="")
    address = Column(String(255), nullable=False)
    image_url = Column(String(500), nullable=True)
    img = Column(String(500), nullable=True)

    # =========================================================================
    # LOCATION
    # =========================================================================
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    # =========================================================================
    # OWNERSHIP
    # =========================================================================
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    menu = relationship(
        "MenuItem",
        order_by="MenuItem.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Restaurant #{self.id} - {self.name} - owner {self.user_id}>"


class MenuItem(Base):
    """A single dish on a restaurant's menu."""
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(
        Integer,
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(100), nullable=False)
    price = Column(Float, nullable=False)

    def __repr__(self):
        return f"<MenuItem {self.name} - {self.price}>"


class Order(Base):
    """
    Order table - a customer's order against one restaurant.

    ``date`` is kept as the client-supplied string; listings sort on it
    lexically, which matches chronological order for ISO-8601 values.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    date = Column(String(40), nullable=False, index=True)
    items = Column(JSON, nullable=False)  # [{id, name, price, quantity}]
    amount = Column(Float, nullable=False)

    order_status = Column(
        Enum(
            OrderStatus,
            name="order_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=OrderStatus.ORDERED,
        nullable=False,
        index=True,
    )

    # =========================================================================
    # REFERENCES
    # =========================================================================
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id = Column(
        Integer,
        ForeignKey("restaurants.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # =========================================================================
    # DELIVERY
    # =========================================================================
    customer_name = Column(String(100), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Order #{self.id} - restaurant {self.restaurant_id} - {self.order_status.value}>"
