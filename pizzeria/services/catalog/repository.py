"""Catalog repository."""
from typing import List, Optional

from pizzeria.services.catalog.base import (
    Catalog,
    CatalogProvider,
    ItemOptions,
    MenuItem,
)


class CatalogRepository:
    """Repository for catalog lookups."""

    def __init__(self, provider: CatalogProvider):
        self.provider = provider

    def get_catalog(self) -> Catalog:
        """Get the full catalog."""
        return self.provider.get_catalog()

    def get_item(self, item_id: int) -> Optional[MenuItem]:
        """Get item by id."""
        for item in self.get_catalog().items:
            if item.id == item_id:
                return item
        return None

    def get_items(self, category: Optional[str] = None) -> List[MenuItem]:
        """Get all items, optionally restricted to one category."""
        items = self.get_catalog().items
        if category is None:
            return list(items)
        return [item for item in items if item.category == category]

    def options_for(self, item: MenuItem) -> ItemOptions:
        """Get the candidate option lists for an item."""
        catalog = self.get_catalog()
        return ItemOptions(
            sizes=list(item.sizes),
            extras=list(catalog.extras) if item.is_pizza or item.is_build_your_own else [],
            ingredients=list(catalog.ingredients) if item.is_build_your_own else [],
            pasta_types=list(catalog.pasta_types) if item.is_pasta else [],
            sauce_kind=item.sauce_kind,
            sauces=catalog.variants_for(item.sauce_kind),
            pizza_styles=list(catalog.pizza_styles) if item.offers_pizza_style else [],
            fries_options=list(catalog.fries_options) if item.offers_fries else [],
        )
