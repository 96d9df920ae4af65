"""Checkout API endpoint."""
import logging
from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from pizzeria.core.config import settings
from pizzeria.core.dependencies import get_cart
from pizzeria.db.database import get_db
from pizzeria.services.cart.ledger import Cart
from pizzeria.services.checkout.models import CheckoutRequest, OrderTotals
from pizzeria.services.checkout.summary import (
    build_order_message,
    calculate_totals,
    whatsapp_url,
)
from pizzeria.services.persistence.orders import OrderPersistenceService


router = APIRouter()
logger = logging.getLogger(__name__)


class CheckoutResponse(BaseModel):
    """Checkout response model."""
    order_id: int
    totals: OrderTotals
    message: str
    whatsapp_url: str


@router.post("/api/checkout", response_model=CheckoutResponse)
async def checkout(
    checkout_req: CheckoutRequest,
    cart: Cart = Depends(get_cart),
    db: AsyncSession = Depends(get_db),
):
    """Submit the cart as an order and hand back the message for the restaurant."""
    lines = cart.items
    if not lines:
        raise HTTPException(status_code=400, detail="Cart is empty")

    totals = calculate_totals(lines, checkout_req.order_type, checkout_req.delivery_zone)
    message = build_order_message(checkout_req, lines, totals)

    try:
        order = await OrderPersistenceService(db).create_order(
            checkout_req, lines, totals, message
        )
    except Exception as e:
        logger.error(
            f"[CHECKOUT] Error saving order - Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail="Error saving order")

    await run_in_threadpool(cart.clear_cart)
    logger.info(f"[CHECKOUT] Order {order.id} submitted - {checkout_req.order_type}, total {totals.total}")
    return CheckoutResponse(
        order_id=order.id,
        totals=totals,
        message=message,
        whatsapp_url=whatsapp_url(settings.whatsapp_number, message),
    )
