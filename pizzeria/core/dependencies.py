"""FastAPI dependencies."""
import re
import secrets

from fastapi import Depends, Request, Response

from pizzeria.core.config import Settings, settings
from pizzeria.services.cart.ledger import Cart
from pizzeria.services.cart.registry import CartRegistry
from pizzeria.services.cart.storage import FileCartStorage
from pizzeria.services.catalog.repository import CatalogRepository
from pizzeria.services.catalog.yaml_catalog import YamlCatalogProvider
from pizzeria.services.ordering.pricing import PriceCalculator
from pizzeria.services.ordering.validator import ConfigurationValidator

CART_COOKIE = "cart_session"
# Shape of secrets.token_urlsafe(16)
CART_SESSION_PATTERN = re.compile(r"[A-Za-z0-9_-]{22}")

_catalog_provider = YamlCatalogProvider(catalog_file=settings.catalog_file)


def get_catalog_repository() -> CatalogRepository:
    """Get catalog repository instance."""
    return CatalogRepository(provider=_catalog_provider)


def get_validator(
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
) -> ConfigurationValidator:
    """Get configuration validator for the current catalog."""
    return ConfigurationValidator(catalog_repository.get_catalog())


def create_cart_registry(
    catalog_repository: CatalogRepository, app_settings: Settings = settings
) -> CartRegistry:
    """Build the cart registry owned by the application."""
    return CartRegistry(
        calculator=PriceCalculator(catalog_repository.get_catalog()),
        storage=FileCartStorage(app_settings.cart_storage_dir),
        storage_name=app_settings.cart_storage_name,
        max_carts=app_settings.cart_max_sessions,
    )


def get_cart_registry(request: Request) -> CartRegistry:
    """Get the application's cart registry."""
    return request.app.state.cart_registry


def get_cart(
    request: Request,
    response: Response,
    registry: CartRegistry = Depends(get_cart_registry),
) -> Cart:
    """Get the cart for the caller's cart session, starting one if needed."""
    session_id = request.cookies.get(CART_COOKIE)
    if not session_id or not CART_SESSION_PATTERN.fullmatch(session_id):
        session_id = secrets.token_urlsafe(16)
        response.set_cookie(
            key=CART_COOKIE,
            value=session_id,
            httponly=True,
            max_age=60 * 60 * 24 * 30,
            samesite="lax",
        )
    return registry.get(session_id)
