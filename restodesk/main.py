"""
FastAPI Application Entry Point

RestoDesk - restaurant management backend for restaurant owners.

Endpoints:
    - POST /api/client: Sign up
    - POST /api/login: Log in, returns a bearer token
    - GET/PATCH /api/client/{id}: Profile
    - GET /api/users: All user profiles
    - GET/POST /api/restaurants/nearby: List by owner / create
    - PATCH /api/restaurants/nearby/{id}: Partial update
    - GET/PUT/DELETE /api/restaurants/{id}: Read / replace menu / delete
    - GET/POST /api/orders: Owner's orders / place an order
    - GET/PATCH /api/orders/{orderId}: Read / update status
    - GET /health: System health check

Every handler catches at its own boundary and answers with the
``{"success": ..., ...}`` envelope; 400 validation, 401 auth, 403
forbidden, 404 missing, 500 anything else (with the error message).

Version: 1.0.0
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Depends, Query, Request, Header
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

# Internal imports
from restodesk.core.config import get_settings, setup_logging
from restodesk.core.security import (
    AuthError,
    create_access_token,
    hash_password,
    verify_password,
    verify_token,
)
from restodesk.database import get_db, init_db, engine
from restodesk.models import MenuItem, Order, OrderStatus, Restaurant, User
from restodesk.schemas import (
    ContactInfo,
    ErrorResponse,
    HealthResponse,
    LoginRequest,
    LoginResponse,
    LoginUser,
    MenuReplace,
    MessageResponse,
    OrderCreate,
    OrderEnvelope,
    OrderListResponse,
    OrderResponse,
    OrderStatusUpdate,
    RestaurantCoords,
    RestaurantCreate,
    RestaurantEnvelope,
    RestaurantListResponse,
    RestaurantResponse,
    RestaurantUpdate,
    SignupRequest,
    SignupResponse,
    UserEnvelope,
    UserListResponse,
    UserPublic,
    UserUpdate,
)
from restodesk.services.geo import get_geo_service

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    await init_db()
    logger.info("✅ Database initialized")

    geo_service = get_geo_service()
    logger.info(f"✅ Geo Service: {geo_service.provider_name}")

    if settings.use_real_services:
        missing = settings.validate_production_config()
        if missing:
            logger.warning(f"⚠️ Missing production config: {missing}")

    logger.info("✅ Application ready!")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    await engine.dispose()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Restaurant management API: owner accounts, restaurants and menus, "
        "and order tracking."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def server_error(message: str, exc: Exception) -> HTTPException:
    """500 carrying the underlying exception's message."""
    return HTTPException(status_code=500, detail={"message": message, "error": str(exc)})


async def get_current_user_id(
    authorization: Optional[str] = Header(None),
) -> int:
    """Resolve the caller's user id from ``Authorization: Bearer <token>``."""
    try:
        return verify_token(authorization)
    except AuthError as e:
        raise HTTPException(
            status_code=401,
            detail={"message": "Unauthorized: Missing or invalid token", "error": str(e)},
        )


async def get_owned_restaurant(
    db: AsyncSession,
    restaurant_id: int,
    user_id: int,
) -> Restaurant:
    restaurant = await db.scalar(
        select(Restaurant).where(
            Restaurant.id == restaurant_id,
            Restaurant.user_id == user_id,
        )
    )
    if not restaurant:
        raise HTTPException(
            status_code=404,
            detail="Restaurant not found or not owned by user",
        )
    return restaurant


def build_menu(items: list[dict[str, Any]]) -> list[MenuItem]:
    return [
        MenuItem(position=position, name=item["name"], price=item["price"])
        for position, item in enumerate(items)
    ]


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"🍽️ Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    db: AsyncSession = Depends(get_db)
) -> HealthResponse:
    """Verify the database and geo service are operational."""

    db_status = "healthy"
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"
        logger.error(f"Database health check failed: {e}")

    geo_service = get_geo_service()
    geo_status = "healthy" if await geo_service.health_check() else "unhealthy"

    overall = "operational" if all(
        s == "healthy" for s in [db_status, geo_status]
    ) else "degraded"

    return HealthResponse(
        status=overall,
        database=db_status,
        geo_service=geo_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# AUTH & USER ENDPOINTS
# =============================================================================

@app.post(
    "/api/client",
    response_model=SignupResponse,
    status_code=201,
    responses=ERROR_RESPONSES,
    tags=["Users"],
    summary="Sign Up",
)
async def signup(
    payload: SignupRequest,
    db: AsyncSession = Depends(get_db),
) -> SignupResponse:
    """Register a new user. Email and phone must both be unused."""
    try:
        if await db.scalar(select(User).where(User.email == payload.email)):
            raise HTTPException(status_code=400, detail="A user with this email already exists")

        if await db.scalar(select(User).where(User.phone == payload.phone)):
            raise HTTPException(status_code=400, detail="A user with this phone number already exists")

        user = User(
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            password=hash_password(payload.password),
        )
        db.add(user)
        await db.commit()

        logger.info(f"User #{user.id} registered")

        return SignupResponse(
            message="User created successfully",
            user=UserPublic.model_validate(user),
        )

    except HTTPException:
        raise
    except IntegrityError:
        # Lost a race with a concurrent signup
        await db.rollback()
        raise HTTPException(status_code=400, detail="A user with this email or phone already exists")
    except Exception as e:
        logger.exception(f"Registration error: {e}")
        raise server_error("Internal Server Error", e)


@app.post(
    "/api/login",
    response_model=LoginResponse,
    responses=ERROR_RESPONSES,
    tags=["Users"],
    summary="Log In",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """Exchange a phone/password pair for a bearer token."""
    try:
        user = await db.scalar(select(User).where(User.phone == payload.phone))

        if not user or not verify_password(payload.password, user.password):
            raise HTTPException(status_code=401, detail="Invalid phone number or password")

        token = create_access_token(user.id, user.name, user.phone)

        logger.info(f"User #{user.id} logged in")

        return LoginResponse(
            message="Login successful",
            token=token,
            user=LoginUser.model_validate(user),
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Login error: {e}")
        raise server_error("Internal Server Error", e)


@app.get(
    "/api/client",
    response_model=ContactInfo,
    responses=ERROR_RESPONSES,
    tags=["Users"],
)
async def get_my_contact(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> ContactInfo:
    """Name, email and phone of the logged-in user."""
    try:
        user = await db.get(User, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="No user found")
        return ContactInfo.model_validate(user)

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Fetch user error: {e}")
        raise server_error("Internal Server Error", e)


@app.get(
    "/api/client/{user_id}",
    response_model=UserEnvelope,
    responses=ERROR_RESPONSES,
    tags=["Users"],
)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> UserEnvelope:
    """Get a user's profile by id."""
    try:
        user = await db.get(User, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return UserEnvelope(user=UserPublic.model_validate(user))

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Fetch user error: {e}")
        raise server_error("Failed to fetch user", e)


@app.patch(
    "/api/client/{user_id}",
    response_model=UserEnvelope,
    responses=ERROR_RESPONSES,
    tags=["Users"],
)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> UserEnvelope:
    """Update the logged-in user's own profile (only the fields sent)."""
    if current_user_id != user_id:
        raise HTTPException(status_code=403, detail="Cannot modify another user's profile")

    try:
        user = await db.get(User, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")

        updates = payload.model_dump(exclude_unset=True)

        if "email" in updates and await db.scalar(
            select(User).where(User.email == updates["email"], User.id != user_id)
        ):
            raise HTTPException(status_code=400, detail="A user with this email already exists")

        if "phone" in updates and await db.scalar(
            select(User).where(User.phone == updates["phone"], User.id != user_id)
        ):
            raise HTTPException(status_code=400, detail="A user with this phone number already exists")

        for key, value in updates.items():
            setattr(user, key, value)

        await db.commit()

        logger.info(f"User #{user_id} updated: {sorted(updates)}")

        return UserEnvelope(
            message="User updated successfully",
            user=UserPublic.model_validate(user),
        )

    except HTTPException:
        raise
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail="A user with this email or phone already exists")
    except Exception as e:
        logger.exception(f"Update user error: {e}")
        raise server_error("Failed to update user", e)


@app.get(
    "/api/users",
    response_model=UserListResponse,
    responses=ERROR_RESPONSES,
    tags=["Users"],
)
async def list_users(
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> UserListResponse:
    """Public profiles of all users."""
    try:
        users = (await db.scalars(select(User).order_by(User.id))).all()
        return UserListResponse(users=[UserPublic.model_validate(u) for u in users])

    except Exception as e:
        logger.exception(f"Fetch users error: {e}")
        raise server_error("Failed to fetch users", e)


# =============================================================================
# RESTAURANT ENDPOINTS
# =============================================================================

@app.post(
    "/api/restaurants/nearby",
    response_model=RestaurantEnvelope,
    status_code=201,
    responses=ERROR_RESPONSES,
    tags=["Restaurants"],
    summary="Create Restaurant",
)
async def create_restaurant(
    payload: RestaurantCreate,
    db: AsyncSession = Depends(get_db),
) -> RestaurantEnvelope:
    """Add a restaurant for an existing owner."""
    try:
        if not await db.get(User, payload.user_id):
            raise HTTPException(status_code=400, detail="Owner (userId) does not exist")

        fields = payload.model_dump(exclude={"menu"})
        restaurant = Restaurant(
            **fields,
            menu=build_menu(payload.model_dump()["menu"]),
        )
        db.add(restaurant)
        await db.commit()

        logger.info(f"Restaurant #{restaurant.id} created for user #{restaurant.user_id}")

        return RestaurantEnvelope(
            message="Restaurant added successfully!",
            restaurant=RestaurantResponse.model_validate(restaurant),
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error adding restaurant: {e}")
        raise server_error("Failed to add restaurant. Server or database error.", e)


@app.get(
    "/api/restaurants/nearby",
    response_model=RestaurantListResponse,
    responses=ERROR_RESPONSES,
    tags=["Restaurants"],
    summary="List Restaurants by Owner",
)
async def list_restaurants(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: AsyncSession = Depends(get_db),
) -> RestaurantListResponse:
    """All restaurants owned by ``userId``."""
    if user_id is None:
        raise HTTPException(status_code=400, detail="User ID is required")

    try:
        restaurants = (
            await db.scalars(
                select(Restaurant)
                .where(Restaurant.user_id == user_id)
                .order_by(Restaurant.id)
            )
        ).all()

        return RestaurantListResponse(
            count=len(restaurants),
            restaurants=[RestaurantResponse.model_validate(r) for r in restaurants],
        )

    except Exception as e:
        logger.exception(f"Error fetching restaurants: {e}")
        raise server_error("Failed to fetch restaurant data.", e)


@app.patch(
    "/api/restaurants/nearby/{restaurant_id}",
    response_model=RestaurantEnvelope,
    responses=ERROR_RESPONSES,
    tags=["Restaurants"],
    summary="Update Restaurant",
)
async def update_restaurant(
    restaurant_id: int,
    payload: RestaurantUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> RestaurantEnvelope:
    """Overwrite only the fields present in the request body."""
    try:
        restaurant = await get_owned_restaurant(db, restaurant_id, user_id)

        updates = payload.model_dump(exclude_unset=True)
        menu = updates.pop("menu", None)

        for key, value in updates.items():
            setattr(restaurant, key, value)
        if menu is not None:
            restaurant.menu = build_menu(menu)

        await db.commit()

        logger.info(f"Restaurant #{restaurant_id} updated: {sorted(payload.model_fields_set)}")

        return RestaurantEnvelope(
            message="Restaurant updated successfully",
            restaurant=RestaurantResponse.model_validate(restaurant),
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error updating restaurant: {e}")
        raise server_error("Failed to update restaurant", e)


@app.get(
    "/api/restaurants/{restaurant_id}",
    response_model=RestaurantEnvelope,
    responses=ERROR_RESPONSES,
    tags=["Restaurants"],
)
async def get_restaurant(
    restaurant_id: int,
    db: AsyncSession = Depends(get_db),
) -> RestaurantEnvelope:
    """Get a single restaurant by id."""
    try:
        restaurant = await db.get(Restaurant, restaurant_id)
        if not restaurant:
            raise HTTPException(status_code=404, detail="Restaurant not found")
        return RestaurantEnvelope(restaurant=RestaurantResponse.model_validate(restaurant))

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error fetching restaurant: {e}")
        raise server_error("Failed to fetch restaurant data.", e)


@app.put(
    "/api/restaurants/{restaurant_id}",
    response_model=RestaurantEnvelope,
    responses=ERROR_RESPONSES,
    tags=["Restaurants"],
    summary="Replace Menu",
)
async def replace_menu(
    restaurant_id: int,
    payload: MenuReplace,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> RestaurantEnvelope:
    """Replace a restaurant's whole menu."""
    if payload.menu is None:
        raise HTTPException(status_code=400, detail="Invalid menu data")

    try:
        restaurant = await get_owned_restaurant(db, restaurant_id, user_id)
        restaurant.menu = build_menu(payload.model_dump()["menu"])
        await db.commit()

        logger.info(f"Restaurant #{restaurant_id} menu replaced ({len(restaurant.menu)} items)")

        return RestaurantEnvelope(
            message="Menu updated successfully",
            restaurant=RestaurantResponse.model_validate(restaurant),
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error updating menu: {e}")
        raise server_error("Error updating menu", e)


@app.delete(
    "/api/restaurants/{restaurant_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    tags=["Restaurants"],
)
async def delete_restaurant(
    restaurant_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Delete a restaurant and its menu. Its orders are kept, unlinked."""
    try:
        restaurant = await get_owned_restaurant(db, restaurant_id, user_id)
        await db.delete(restaurant)
        await db.commit()

        logger.info(f"Restaurant #{restaurant_id} deleted")

        return MessageResponse(message="Restaurant deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Delete error: {e}")
        raise server_error("Failed to delete restaurant", e)


# =============================================================================
# ORDER ENDPOINTS
# =============================================================================

@app.get(
    "/api/orders",
    response_model=OrderListResponse,
    responses=ERROR_RESPONSES,
    tags=["Orders"],
    summary="List Owner's Orders",
)
async def list_orders(
    restaurant_id: Optional[int] = Query(None, alias="restaurantId"),
    status: Optional[str] = Query(None),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> OrderListResponse:
    """
    Orders placed at the caller's restaurants, newest ``date`` first.

    ``restaurantCoords`` is the location of the selected restaurant, or
    of the owner's first restaurant when none is selected.
    """
    status_filter = None
    if status:
        try:
            status_filter = OrderStatus(status)
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid status. Options: {[s.value for s in OrderStatus]}",
            )

    try:
        restaurants = (
            await db.scalars(
                select(Restaurant)
                .where(Restaurant.user_id == user_id)
                .order_by(Restaurant.id)
            )
        ).all()

        if not restaurants:
            raise HTTPException(status_code=404, detail="Restaurant not found for this user")

        if restaurant_id is not None:
            selected = [r for r in restaurants if r.id == restaurant_id]
            if not selected:
                raise HTTPException(
                    status_code=404,
                    detail="Restaurant not found or not owned by user",
                )
        else:
            selected = list(restaurants)

        query = (
            select(Order)
            .where(Order.restaurant_id.in_([r.id for r in selected]))
            .order_by(Order.date.desc(), Order.id.desc())
        )
        if status_filter is not None:
            query = query.where(Order.order_status == status_filter)

        orders = (await db.scalars(query)).all()

        return OrderListResponse(
            restaurant_coords=RestaurantCoords(
                latitude=selected[0].latitude,
                longitude=selected[0].longitude,
            ),
            orders=[OrderResponse.model_validate(o) for o in orders],
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error fetching orders: {e}")
        raise server_error("Failed to fetch orders", e)


@app.post(
    "/api/orders",
    response_model=OrderEnvelope,
    status_code=201,
    responses=ERROR_RESPONSES,
    tags=["Orders"],
    summary="Place Order",
)
async def create_order(
    payload: OrderCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> OrderEnvelope:
    """Place an order at a restaurant as the logged-in customer."""
    try:
        if not await db.get(Restaurant, payload.restaurant_id):
            raise HTTPException(status_code=404, detail="Restaurant not found")

        amount = round(sum(item.total_price for item in payload.items), 2)

        order = Order(
            date=payload.date or datetime.now(timezone.utc).isoformat(),
            items=[item.model_dump() for item in payload.items],
            amount=amount,
            order_status=OrderStatus.ORDERED,
            user_id=user_id,
            restaurant_id=payload.restaurant_id,
            customer_name=payload.customer_name,
            latitude=payload.latitude,
            longitude=payload.longitude,
        )
        db.add(order)
        await db.commit()

        logger.info(f"Order #{order.id} placed at restaurant #{order.restaurant_id} ({amount})")

        return OrderEnvelope(
            message="Order placed successfully",
            order=OrderResponse.model_validate(order),
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error creating order: {e}")
        raise server_error("Failed to place order", e)


@app.get(
    "/api/orders/{order_id}",
    response_model=OrderEnvelope,
    responses=ERROR_RESPONSES,
    tags=["Orders"],
)
async def get_order(
    order_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> OrderEnvelope:
    """Get an order placed by, or placed at a restaurant of, the caller."""
    try:
        order = await db.get(Order, order_id)

        visible = False
        if order:
            visible = order.user_id == user_id
            if not visible and order.restaurant_id is not None:
                restaurant = await db.get(Restaurant, order.restaurant_id)
                visible = restaurant is not None and restaurant.user_id == user_id

        if not visible:
            raise HTTPException(status_code=404, detail=f"Order #{order_id} not found")

        return OrderEnvelope(order=OrderResponse.model_validate(order))

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error fetching order: {e}")
        raise server_error("Failed to fetch order", e)


@app.patch(
    "/api/orders/{order_id}",
    response_model=OrderEnvelope,
    responses=ERROR_RESPONSES,
    tags=["Orders"],
    summary="Update Order Status",
)
async def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> OrderEnvelope:
    """
    Set an order's status.

    Any of the three statuses may replace any other; transitions are
    not checked.
    """
    if payload.order_status is None:
        raise HTTPException(status_code=400, detail="orderStatus is required")

    try:
        order = await db.get(Order, order_id)

        owned = False
        if order and order.restaurant_id is not None:
            restaurant = await db.get(Restaurant, order.restaurant_id)
            owned = restaurant is not None and restaurant.user_id == user_id

        if not owned:
            raise HTTPException(status_code=404, detail="Order not found")

        previous = order.order_status
        order.order_status = payload.order_status
        await db.commit()

        logger.info(
            f"Order #{order_id} status {previous.value} → {order.order_status.value}"
        )

        return OrderEnvelope(
            message="Order status updated successfully",
            order=OrderResponse.model_validate(order),
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error updating order: {e}")
        raise server_error("Failed to update order", e)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors in the standard envelope."""
    content: dict[str, Any] = {"success": False}
    if isinstance(exc.detail, dict):
        content.update(exc.detail)
    else:
        content["message"] = str(exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or unknown request fields are a 400, not FastAPI's 422."""
    logger.debug(f"Validation failed on {request.url.path}: {exc.errors()}")

    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Invalid request data",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Internal Server Error",
            "error": str(exc),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("restodesk.main:app", host=settings.api_host, port=settings.api_port)
