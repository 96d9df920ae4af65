"""Shopping cart API endpoints.

Handlers are sync so blocking cart storage I/O runs in the threadpool.
"""
import logging
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from pizzeria.core.dependencies import get_cart, get_catalog_repository, get_validator
from pizzeria.services.cart.ledger import Cart
from pizzeria.services.cart.models import OrderLine
from pizzeria.services.catalog.repository import CatalogRepository
from pizzeria.services.ordering.selection import SelectionBundle
from pizzeria.services.ordering.validator import ConfigurationValidator


router = APIRouter()
logger = logging.getLogger(__name__)


class CartLineResponse(BaseModel):
    """Cart line response model."""
    line: OrderLine
    line_total: Decimal


class CartResponse(BaseModel):
    """Cart response model."""
    lines: List[CartLineResponse] = []
    item_count: int = 0
    subtotal: Decimal = Decimal("0")
    persistent: bool = True


class CartItemRequest(BaseModel):
    """Identifies a cart line by item id and selections."""
    item_id: int
    selections: SelectionBundle = SelectionBundle()


class QuantityRequest(CartItemRequest):
    """Sets the quantity of a cart line."""
    quantity: int


def cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        lines=[CartLineResponse(line=line, line_total=line.line_total) for line in cart.items],
        item_count=cart.item_count,
        subtotal=cart.subtotal,
        persistent=cart.persistent,
    )


@router.get("/api/cart", response_model=CartResponse)
def get_cart_contents(cart: Cart = Depends(get_cart)):
    """Get the current cart."""
    return cart_response(cart)


@router.post("/api/cart/items", response_model=CartResponse)
def add_cart_item(
    add_req: CartItemRequest,
    cart: Cart = Depends(get_cart),
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
    validator: ConfigurationValidator = Depends(get_validator),
):
    """Add a configured item to the cart."""
    item = catalog_repository.get_item(add_req.item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Menu item {add_req.item_id} not found")

    unknown = validator.unknown_options(item, add_req.selections)
    if unknown:
        raise HTTPException(
            status_code=422,
            detail={"message": "Unknown options", "unknown_options": unknown},
        )

    missing = validator.missing_requirement(item, add_req.selections)
    if missing is not None:
        logger.info(f"[CART] Rejected {item.name} - missing {missing}")
        raise HTTPException(
            status_code=422,
            detail={"message": "Selection incomplete", "missing": missing.value},
        )

    cart.add_item(item, add_req.selections)
    return cart_response(cart)


@router.delete("/api/cart/items", response_model=CartResponse)
def remove_cart_item(
    remove_req: CartItemRequest,
    cart: Cart = Depends(get_cart),
):
    """Remove a line from the cart."""
    cart.remove_item(remove_req.item_id, remove_req.selections)
    return cart_response(cart)


@router.put("/api/cart/items/quantity", response_model=CartResponse)
def update_cart_quantity(
    quantity_req: QuantityRequest,
    cart: Cart = Depends(get_cart),
):
    """Set the quantity of a cart line."""
    cart.update_quantity(quantity_req.item_id, quantity_req.quantity, quantity_req.selections)
    return cart_response(cart)


@router.delete("/api/cart", response_model=CartResponse)
def clear_cart(cart: Cart = Depends(get_cart)):
    """Empty the cart."""
    cart.clear_cart()
    return cart_response(cart)
