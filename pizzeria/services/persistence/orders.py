"""Order persistence service."""
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pizzeria.db.models import Order, OrderItem
from pizzeria.services.cart.models import OrderLine
from pizzeria.services.checkout.models import CheckoutRequest, OrderTotals, OrderType

logger = logging.getLogger(__name__)

PERIODS = ("today", "yesterday", "week", "month", "year", "custom")


def date_range(
    period: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Tuple[datetime, datetime]:
    """
    Resolve a reporting period to a start and end timestamp.

    Args:
        period: One of today, yesterday, week, month, year, custom
        start: First day of a custom range
        end: Last day of a custom range
        now: Reference time, defaults to the current UTC time

    Returns:
        Tuple of (start of first day, end of last day)
    """
    if period not in PERIODS:
        raise ValueError(f"Unknown period '{period}'")

    now = now or datetime.utcnow()
    first_day = last_day = now
    if period == "yesterday":
        first_day = last_day = now - timedelta(days=1)
    elif period == "week":
        first_day = now - timedelta(days=7)
    elif period == "month":
        first_day = now - timedelta(days=30)
    elif period == "year":
        first_day = now - timedelta(days=365)
    elif period == "custom":
        if start is None or end is None:
            raise ValueError("A custom period needs a start and an end")
        first_day, last_day = start, end

    return (
        first_day.replace(hour=0, minute=0, second=0, microsecond=0),
        last_day.replace(hour=23, minute=59, second=59, microsecond=999999),
    )


def line_selections(line: OrderLine) -> dict:
    """Selections of a cart line as stored with the order item."""
    return line.selections.model_dump(exclude_none=True, exclude_defaults=True)


class OrderPersistenceService:
    """Service for persisting submitted orders."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_order(
        self,
        request: CheckoutRequest,
        lines: List[OrderLine],
        totals: OrderTotals,
        message: Optional[str] = None,
    ) -> Order:
        """Create an order with its items."""
        address = None
        if request.order_type is OrderType.DELIVERY:
            address = f"{request.street} {request.house_number}, {request.postcode}"

        order = Order(
            customer_name=request.name,
            phone=request.phone,
            order_type=request.order_type.value,
            delivery_zone=request.delivery_zone,
            delivery_time=request.specific_time or request.delivery_time.value,
            address=address,
            note=request.note,
            subtotal=totals.subtotal,
            delivery_fee=totals.delivery_fee,
            total=totals.total,
            message=message,
        )
        order.items = [
            OrderItem(
                menu_item_id=line.item.id,
                number=line.item.number,
                name=line.item.name,
                quantity=line.quantity,
                unit_price=line.unit_price,
                selections=line_selections(line),
            )
            for line in lines
        ]
        self.db.add(order)
        await self.db.commit()
        logger.info(f"[ORDERS] Created order {order.id} - {len(lines)} lines, total {totals.total}")
        return await self.get_order_by_id(order.id)

    async def get_order_by_id(self, order_id: int) -> Optional[Order]:
        """Get order by ID with items."""
        result = await self.db.execute(
            select(Order)
            .where(Order.id == order_id)
            .options(selectinload(Order.items))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_orders(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 100,
    ) -> List[Order]:
        """List orders newest first, optionally within a time range."""
        query = select(Order).options(selectinload(Order.items))
        if start is not None:
            query = query.where(Order.created_at >= start)
        if end is not None:
            query = query.where(Order.created_at <= end)
        result = await self.db.execute(
            query.order_by(desc(Order.created_at), desc(Order.id)).limit(limit)
        )
        return list(result.scalars().all())

    async def delete_order(self, order_id: int) -> bool:
        """Delete an order. Returns False if it did not exist."""
        order = await self.get_order_by_id(order_id)
        if not order:
            return False
        await self.db.delete(order)
        await self.db.commit()
        logger.info(f"[ORDERS] Deleted order {order_id}")
        return True
