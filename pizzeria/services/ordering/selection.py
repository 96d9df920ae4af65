"""Selection bundle and selection-time toggles."""
from typing import List, Optional

from pydantic import BaseModel, field_validator

from pizzeria.services.catalog.base import NO_INGREDIENT


class SelectionBundle(BaseModel):
    """Raw selections made for one menu item.

    Option values are names. The ``sauce`` slot carries the sauce, dressing
    or beer choice depending on the item.
    """

    size: Optional[str] = None
    ingredients: List[str] = []
    extras: List[str] = []
    pasta_type: Optional[str] = None
    sauce: Optional[str] = None
    pizza_style: Optional[str] = None
    fries_option: Optional[str] = None

    @field_validator("size", "pasta_type", "sauce", "pizza_style", "fries_option")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("ingredients", "extras")
    @classmethod
    def _drop_blank_names(cls, value: List[str]) -> List[str]:
        return [name for name in value if name and name.strip()]

    @field_validator("extras")
    @classmethod
    def _unique_extras(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))

    def toggle_ingredient(self, name: str, sentinel: str = NO_INGREDIENT) -> "SelectionBundle":
        """Return a copy with ``name`` toggled in the ingredient list."""
        return self.model_copy(
            update={"ingredients": toggle_ingredient(self.ingredients, name, sentinel)}
        )

    def toggle_extra(self, name: str) -> "SelectionBundle":
        """Return a copy with ``name`` toggled in the extras list."""
        return self.model_copy(update={"extras": toggle_extra(self.extras, name)})


def toggle_ingredient(
    selected: List[str], name: str, sentinel: str = NO_INGREDIENT
) -> List[str]:
    """
    Toggle an ingredient, keeping the sentinel mutually exclusive.

    Selecting the sentinel clears every other ingredient; selecting a real
    ingredient clears the sentinel.
    """
    if name == sentinel:
        return [] if sentinel in selected else [sentinel]

    filtered = [ing for ing in selected if ing != sentinel]
    if name in filtered:
        return [ing for ing in filtered if ing != name]
    return filtered + [name]


def toggle_extra(selected: List[str], name: str) -> List[str]:
    """Add or remove an extra."""
    if name in selected:
        return [extra for extra in selected if extra != name]
    return selected + [name]
