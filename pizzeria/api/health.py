"""Health check endpoint."""
import logging
from fastapi import APIRouter, Depends

from pizzeria.core.config import settings
from pizzeria.core.dependencies import get_catalog_repository
from pizzeria.services.catalog.repository import CatalogRepository

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
):
    """Report service status and whether the catalog loads."""
    item_count = len(catalog_repository.get_items())
    logger.debug(f"[HEALTH] Catalog has {item_count} items")
    return {
        "status": "healthy",
        "restaurant": settings.restaurant_name,
        "menu_items": item_count,
    }
