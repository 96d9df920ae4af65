"""Order dashboard API endpoints."""
import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from pizzeria.api.auth import require_auth
from pizzeria.db.database import get_db
from pizzeria.services.persistence.orders import OrderPersistenceService, date_range


router = APIRouter()
logger = logging.getLogger(__name__)


class OrderItemResponse(BaseModel):
    """Order item response model."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    menu_item_id: int
    number: str
    name: str
    quantity: int
    unit_price: Decimal
    selections: Optional[dict] = None


class OrderResponse(BaseModel):
    """Order response model."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_name: str
    phone: str
    order_type: str
    delivery_zone: Optional[str] = None
    delivery_time: str
    address: Optional[str] = None
    note: Optional[str] = None
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal
    created_at: datetime
    items: List[OrderItemResponse] = []


@router.get("/api/orders", response_model=List[OrderResponse])
async def list_orders(
    period: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(require_auth),
):
    """List submitted orders, newest first."""
    range_start = range_end = None
    if period:
        try:
            range_start, range_end = date_range(
                period,
                datetime.combine(start, time.min) if start else None,
                datetime.combine(end, time.min) if end else None,
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    orders = await OrderPersistenceService(db).list_orders(range_start, range_end, limit)
    logger.info(f"[ORDERS] Listing {len(orders)} orders - period: {period or 'all'}")
    return orders


@router.get("/api/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(require_auth),
):
    """Get one order."""
    order = await OrderPersistenceService(db).get_order_by_id(order_id)
    if not order:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return order


@router.delete("/api/orders/{order_id}")
async def delete_order(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    _: bool = Depends(require_auth),
):
    """Delete an order."""
    deleted = await OrderPersistenceService(db).delete_order(order_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return {"success": True}
