"""Cart line models."""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from pizzeria.services.catalog.base import MenuItem, Size
from pizzeria.services.ordering.identity import LineKey, resolve_line_key
from pizzeria.services.ordering.selection import SelectionBundle


class OrderLine(BaseModel):
    """One configured, priced and quantified menu item in the cart."""

    item: MenuItem
    unit_price: Decimal
    extras_surcharge: Decimal = Decimal("0")
    quantity: int = Field(default=1, ge=1)
    size: Optional[Size] = None
    ingredients: List[str] = []
    extras: List[str] = []
    pasta_type: Optional[str] = None
    sauce: Optional[str] = None
    pizza_style: Optional[str] = None
    fries_option: Optional[str] = None

    @property
    def selections(self) -> SelectionBundle:
        """Selections this line was created with."""
        return SelectionBundle(
            size=self.size.name if self.size else None,
            ingredients=list(self.ingredients),
            extras=list(self.extras),
            pasta_type=self.pasta_type,
            sauce=self.sauce,
            pizza_style=self.pizza_style,
            fries_option=self.fries_option,
        )

    @property
    def key(self) -> LineKey:
        return resolve_line_key(self.item.id, self.selections)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class CartSnapshot(BaseModel):
    """Persisted form of a cart."""

    version: int = 0
    lines: List[OrderLine] = []
