"""Cart line identity."""
from typing import Iterable, NamedTuple, Optional, Tuple

from pizzeria.services.ordering.selection import SelectionBundle


class LineKey(NamedTuple):
    """Structural identity of a cart line. Equal keys merge quantity."""

    item_id: int
    size: Optional[str]
    ingredients: Tuple[str, ...]
    extras: Tuple[str, ...]
    pasta_type: Optional[str]
    sauce: Optional[str]
    pizza_style: Optional[str]
    fries_option: Optional[str]


def _name(value: Optional[str]) -> Optional[str]:
    return value or None


def _name_set(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    return tuple(sorted(set(values or ())))


def resolve_line_key(item_id: int, bundle: Optional[SelectionBundle] = None) -> LineKey:
    """Derive the line key for an item id and its selections."""
    if bundle is None:
        bundle = SelectionBundle()
    return LineKey(
        item_id=item_id,
        size=_name(bundle.size),
        ingredients=_name_set(bundle.ingredients),
        extras=_name_set(bundle.extras),
        pasta_type=_name(bundle.pasta_type),
        sauce=_name(bundle.sauce),
        pizza_style=_name(bundle.pizza_style),
        fries_option=_name(bundle.fries_option),
    )
