"""Menu API endpoints."""
import logging
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from pizzeria.core.dependencies import get_catalog_repository, get_validator
from pizzeria.services.catalog.base import ItemOptions, MenuItem, Size
from pizzeria.services.catalog.repository import CatalogRepository
from pizzeria.services.ordering.pricing import PriceCalculator
from pizzeria.services.ordering.selection import SelectionBundle
from pizzeria.services.ordering.validator import ConfigurationValidator, MissingRequirement


router = APIRouter()
logger = logging.getLogger(__name__)


class MenuItemResponse(BaseModel):
    """Menu item response model."""
    id: int
    number: str
    name: str
    price: Decimal
    category: Optional[str] = None
    description: Optional[str] = None
    allergens: Optional[str] = None
    sizes: List[Size] = []
    needs_configuration: bool = False


class MenuResponse(BaseModel):
    """Menu response model."""
    items: List[MenuItemResponse]
    categories: List[str] = []


class ItemDetailResponse(BaseModel):
    """Menu item with its configuration options."""
    item: MenuItemResponse
    options: ItemOptions
    requirements: List[MissingRequirement] = []


class QuoteResponse(BaseModel):
    """Result of checking a selection bundle."""
    complete: bool
    missing: Optional[MissingRequirement] = None
    unknown_options: List[str] = []
    unit_price: Optional[Decimal] = None


def to_response(item: MenuItem, validator: ConfigurationValidator) -> MenuItemResponse:
    return MenuItemResponse(
        id=item.id,
        number=item.number,
        name=item.name,
        price=item.price,
        category=item.category,
        description=item.description,
        allergens=item.allergens,
        sizes=list(item.sizes),
        needs_configuration=validator.needs_configuration(item),
    )


def get_item_or_404(catalog_repository: CatalogRepository, item_id: int) -> MenuItem:
    item = catalog_repository.get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Menu item {item_id} not found")
    return item


@router.get("/api/menu", response_model=MenuResponse)
async def get_menu(
    category: Optional[str] = None,
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
    validator: ConfigurationValidator = Depends(get_validator),
):
    """Get the full menu."""
    catalog = catalog_repository.get_catalog()
    items = catalog_repository.get_items(category)
    logger.debug(f"[MENU] Returning {len(items)} items")
    return MenuResponse(
        items=[to_response(item, validator) for item in items],
        categories=catalog.categories,
    )


@router.get("/api/menu/items/{item_id}", response_model=ItemDetailResponse)
async def get_menu_item(
    item_id: int,
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
    validator: ConfigurationValidator = Depends(get_validator),
):
    """Get a menu item with the options it can be configured with."""
    item = get_item_or_404(catalog_repository, item_id)
    return ItemDetailResponse(
        item=to_response(item, validator),
        options=catalog_repository.options_for(item),
        requirements=validator.requirements(item),
    )


@router.post("/api/menu/items/{item_id}/quote", response_model=QuoteResponse)
async def quote_menu_item(
    item_id: int,
    bundle: SelectionBundle,
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
    validator: ConfigurationValidator = Depends(get_validator),
):
    """Check a partial selection and price it where possible."""
    item = get_item_or_404(catalog_repository, item_id)
    missing = validator.missing_requirement(item, bundle)
    unknown = validator.unknown_options(item, bundle)

    unit_price = None
    if not unknown:
        unit_price = PriceCalculator(catalog_repository.get_catalog()).unit_price(item, bundle)

    return QuoteResponse(
        complete=missing is None and not unknown,
        missing=missing,
        unknown_options=unknown,
        unit_price=unit_price,
    )
