"""Item configuration validation."""
from enum import Enum
from typing import List, Optional

from pizzeria.services.catalog.base import Catalog, MenuItem, VariantOption
from pizzeria.services.ordering.selection import SelectionBundle


BUILD_YOUR_OWN_INGREDIENT_COUNT = 4


class MissingRequirement(str, Enum):
    """First requirement a selection bundle still lacks."""

    SIZE = "size"
    PASTA_TYPE = "pasta_type"
    SAUCE = "sauce"
    DRESSING = "dressing"
    BEER = "beer"
    INGREDIENTS = "ingredients"

    def __str__(self) -> str:
        return self.value


def _names(options: List[VariantOption]) -> set:
    return {option.name for option in options}


class ConfigurationValidator:
    """Decides whether a selection bundle is complete enough to order.

    All checks are pure and safe to call against partial selections.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def requirements(self, item: MenuItem) -> List[MissingRequirement]:
        """All requirements of an item, in the order they are checked."""
        required = []
        if item.has_sizes:
            required.append(MissingRequirement.SIZE)
        if item.is_pasta:
            required.append(MissingRequirement.PASTA_TYPE)
        if item.requires_sauce:
            required.append(
                MissingRequirement.DRESSING if item.is_salad else MissingRequirement.SAUCE
            )
        if item.is_beer_selection:
            required.append(MissingRequirement.BEER)
        if item.is_build_your_own:
            required.append(MissingRequirement.INGREDIENTS)
        return required

    def needs_configuration(self, item: MenuItem) -> bool:
        """Whether the item must be configured before it can be added."""
        return bool(self.requirements(item)) or item.is_pizza or item.is_build_your_own

    def missing_requirement(
        self, item: MenuItem, bundle: Optional[SelectionBundle] = None
    ) -> Optional[MissingRequirement]:
        """
        Find the first requirement the bundle does not satisfy.

        Returns:
            The missing requirement, or None when the bundle is complete
        """
        if bundle is None:
            bundle = SelectionBundle()

        for requirement in self.requirements(item):
            if not self._satisfies(requirement, item, bundle):
                return requirement
        return None

    def is_complete(self, item: MenuItem, bundle: Optional[SelectionBundle] = None) -> bool:
        """Check whether the bundle may become an order line."""
        return self.missing_requirement(item, bundle) is None

    def unknown_options(self, item: MenuItem, bundle: SelectionBundle) -> List[str]:
        """Optional selections that name nothing the item offers."""
        unknown = []
        extra_names = {extra.name for extra in self.catalog.extras}
        unknown.extend(extra for extra in bundle.extras if extra not in extra_names)

        if bundle.pizza_style is not None and (
            not item.offers_pizza_style or self.catalog.get_pizza_style(bundle.pizza_style) is None
        ):
            unknown.append(bundle.pizza_style)
        if bundle.fries_option is not None and (
            not item.offers_fries or self.catalog.get_fries_option(bundle.fries_option) is None
        ):
            unknown.append(bundle.fries_option)
        if bundle.size is not None and item.get_size(bundle.size) is None:
            unknown.append(bundle.size)
        return unknown

    def _satisfies(
        self, requirement: MissingRequirement, item: MenuItem, bundle: SelectionBundle
    ) -> bool:
        if requirement is MissingRequirement.SIZE:
            return item.get_size(bundle.size) is not None
        if requirement is MissingRequirement.PASTA_TYPE:
            return bundle.pasta_type in _names(self.catalog.pasta_types)
        if requirement is MissingRequirement.DRESSING:
            return bundle.sauce in _names(self.catalog.dressings)
        if requirement is MissingRequirement.SAUCE:
            return bundle.sauce in _names(self.catalog.sauces)
        if requirement is MissingRequirement.BEER:
            return bundle.sauce in _names(self.catalog.beers)
        if requirement is MissingRequirement.INGREDIENTS:
            return self._ingredients_valid(bundle.ingredients)
        return True

    def _ingredients_valid(self, ingredients: List[str]) -> bool:
        sentinel = self.catalog.no_ingredient
        if ingredients == [sentinel]:
            return True
        if sentinel in ingredients:
            return False

        selectable = {
            ing.name
            for ing in self.catalog.ingredients
            if not ing.disabled and ing.name != sentinel
        }
        distinct = set(ingredients)
        return (
            len(ingredients) == BUILD_YOUR_OWN_INGREDIENT_COUNT
            and len(distinct) == BUILD_YOUR_OWN_INGREDIENT_COUNT
            and distinct <= selectable
        )
