"""Catalog models and provider interface."""
from abc import ABC, abstractmethod
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


NO_INGREDIENT = "ohne Zutat"


class SauceKind(str, Enum):
    """Which variant list an item draws its sauce slot from."""

    SAUCE = "sauce"
    DRESSING = "dressing"
    BEER = "beer"

    def __str__(self) -> str:
        return self.value


class CatalogModel(BaseModel):
    """Base for immutable catalog data."""

    model_config = ConfigDict(frozen=True)


class Size(CatalogModel):
    """Named price variant owned by a single menu item."""

    name: str
    price: Decimal = Field(ge=0)
    description: Optional[str] = None


class Extra(CatalogModel):
    """Pizza topping add-on."""

    name: str


class Ingredient(CatalogModel):
    """Selectable ingredient for build-your-own pizzas."""

    name: str
    disabled: bool = False


class VariantOption(CatalogModel):
    """Pasta type, sauce, dressing or beer choice. Carries no price."""

    name: str


class PricedOption(CatalogModel):
    """Pizza style or fries option with a surcharge."""

    name: str
    price: Decimal = Field(default=Decimal("0"), ge=0)


class MenuItem(CatalogModel):
    """Menu item model."""

    id: int
    number: str
    name: str
    price: Decimal = Field(default=Decimal("0"), ge=0)
    category: Optional[str] = None
    description: Optional[str] = None
    allergens: Optional[str] = None
    sizes: List[Size] = []

    is_pizza: bool = False
    is_build_your_own: bool = False
    is_pasta: bool = False
    is_specialty: bool = False
    is_salad: bool = False
    fixed_sauce: bool = False  # specialty served with its own sauce
    is_beer_selection: bool = False
    offers_pizza_style: bool = False
    offers_fries: bool = False

    @property
    def has_sizes(self) -> bool:
        return len(self.sizes) > 0

    @property
    def requires_sauce(self) -> bool:
        """Whether a sauce or dressing must be chosen."""
        return self.is_specialty and (self.is_salad or not self.fixed_sauce)

    @property
    def sauce_kind(self) -> Optional[SauceKind]:
        """Variant list used for the sauce slot, if any."""
        if self.is_beer_selection:
            return SauceKind.BEER
        if self.requires_sauce:
            return SauceKind.DRESSING if self.is_salad else SauceKind.SAUCE
        return None

    def get_size(self, name: Optional[str]) -> Optional[Size]:
        """Get a size variant by name."""
        for size in self.sizes:
            if size.name == name:
                return size
        return None


class Catalog(CatalogModel):
    """Full catalog: menu items plus the catalog-global option lists."""

    items: List[MenuItem]
    categories: List[str] = []
    extras: List[Extra] = []
    extra_price: Decimal = Decimal("1.50")
    ingredients: List[Ingredient] = []
    no_ingredient: str = NO_INGREDIENT
    pasta_types: List[VariantOption] = []
    sauces: List[VariantOption] = []
    dressings: List[VariantOption] = []
    beers: List[VariantOption] = []
    pizza_styles: List[PricedOption] = []
    fries_options: List[PricedOption] = []

    def variants_for(self, kind: Optional[SauceKind]) -> List[VariantOption]:
        """Get the variant list for a sauce slot kind."""
        if kind is SauceKind.BEER:
            return list(self.beers)
        if kind is SauceKind.DRESSING:
            return list(self.dressings)
        if kind is SauceKind.SAUCE:
            return list(self.sauces)
        return []

    def get_pizza_style(self, name: Optional[str]) -> Optional[PricedOption]:
        return next((s for s in self.pizza_styles if s.name == name), None)

    def get_fries_option(self, name: Optional[str]) -> Optional[PricedOption]:
        return next((f for f in self.fries_options if f.name == name), None)


class ItemOptions(BaseModel):
    """Candidate option lists offered for one menu item."""

    sizes: List[Size] = []
    extras: List[Extra] = []
    ingredients: List[Ingredient] = []
    pasta_types: List[VariantOption] = []
    sauce_kind: Optional[SauceKind] = None
    sauces: List[VariantOption] = []
    pizza_styles: List[PricedOption] = []
    fries_options: List[PricedOption] = []


class CatalogProvider(ABC):
    """Abstract base class for catalog providers."""

    @abstractmethod
    def get_catalog(self) -> Catalog:
        """Get the full catalog."""
        pass
