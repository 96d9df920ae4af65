"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pizzeria.core.config import settings
from pizzeria.core.dependencies import create_cart_registry, get_catalog_repository
from pizzeria.core.logging import setup_logging
from pizzeria.db.database import init_db
from pizzeria.api import auth, cart, checkout, health, menu, orders

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    await init_db()
    app.state.cart_registry = create_cart_registry(get_catalog_repository())
    logger.info(f"[STARTUP] {settings.restaurant_name} ordering service ready")
    yield


app = FastAPI(
    title="Pizzeria Ordering",
    description="Menu, cart and checkout service for restaurant orders",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(menu.router, tags=["menu"])
app.include_router(cart.router, tags=["cart"])
app.include_router(checkout.router, tags=["checkout"])
app.include_router(auth.router, tags=["auth"])
app.include_router(orders.router, tags=["orders"])
