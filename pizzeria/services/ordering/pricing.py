"""Unit price calculation."""
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pizzeria.services.catalog.base import Catalog, MenuItem
from pizzeria.services.ordering.selection import SelectionBundle


CENT = Decimal("0.01")


class PriceCalculator:
    """Computes the unit price of a configured item."""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def base_price(self, item: MenuItem, size_name: Optional[str] = None) -> Decimal:
        """Price before surcharges: chosen size, else first size, else flat price."""
        if size_name is not None:
            size = item.get_size(size_name)
            if size is None:
                raise ValueError(f"Item {item.id} has no size '{size_name}'")
            return size.price
        if item.has_sizes:
            return item.sizes[0].price
        return item.price

    def extras_surcharge(self, bundle: SelectionBundle) -> Decimal:
        return len(set(bundle.extras)) * self.catalog.extra_price

    def style_surcharge(self, bundle: SelectionBundle) -> Decimal:
        if bundle.pizza_style is None:
            return Decimal("0")
        style = self.catalog.get_pizza_style(bundle.pizza_style)
        if style is None:
            raise ValueError(f"Unknown pizza style '{bundle.pizza_style}'")
        return style.price

    def fries_surcharge(self, bundle: SelectionBundle) -> Decimal:
        if bundle.fries_option is None:
            return Decimal("0")
        option = self.catalog.get_fries_option(bundle.fries_option)
        if option is None:
            raise ValueError(f"Unknown fries option '{bundle.fries_option}'")
        return option.price

    def unit_price(self, item: MenuItem, bundle: Optional[SelectionBundle] = None) -> Decimal:
        """
        Compute the unit price for an item and its selections.

        Pasta type, sauce, dressing and beer carry no price.
        """
        if bundle is None:
            bundle = SelectionBundle()
        return (
            self.base_price(item, bundle.size)
            + self.extras_surcharge(bundle)
            + self.style_surcharge(bundle)
            + self.fries_surcharge(bundle)
        )


def format_price(amount: Decimal) -> str:
    """Format an amount for display, e.g. ``11,00 €``."""
    rounded = Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    return f"{rounded:.2f}".replace(".", ",") + " €"
