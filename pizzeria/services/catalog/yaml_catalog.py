"""YAML catalog provider."""
import logging
from pathlib import Path
from typing import Optional

import yaml

from pizzeria.services.catalog.base import Catalog, CatalogProvider

logger = logging.getLogger(__name__)


class YamlCatalogProvider(CatalogProvider):
    """Catalog provider backed by a YAML file, loaded once and cached."""

    def __init__(self, catalog_file: Optional[str] = None):
        """Initialize with optional catalog file path."""
        if catalog_file is None:
            catalog_file = Path(__file__).parent / "data" / "menu.yaml"
        self.catalog_file = Path(catalog_file)
        self._catalog: Optional[Catalog] = None

    def _load_catalog(self) -> Catalog:
        """Load catalog from YAML file."""
        if self._catalog is None:
            with open(self.catalog_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

            items = data.get("items", [])
            categories = data.get("categories")
            if not categories:
                # Keep first-seen order of item categories
                categories = list(
                    dict.fromkeys(i["category"] for i in items if i.get("category"))
                )
            data["categories"] = categories

            self._catalog = Catalog.model_validate(data)
            logger.info(
                f"[CATALOG] Loaded {len(self._catalog.items)} items from {self.catalog_file}"
            )
        return self._catalog

    def get_catalog(self) -> Catalog:
        """Get the full catalog."""
        return self._load_catalog()
