"""Cart ledger."""
import logging
import threading
from decimal import Decimal
from typing import List, Optional

from pydantic import ValidationError

from pizzeria.services.cart.models import CartSnapshot, OrderLine
from pizzeria.services.cart.storage import CartStorage, CartStorageError
from pizzeria.services.catalog.base import MenuItem
from pizzeria.services.ordering.identity import LineKey, resolve_line_key
from pizzeria.services.ordering.pricing import PriceCalculator
from pizzeria.services.ordering.selection import SelectionBundle

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "cart-storage"


class Cart:
    """
    Ordered collection of cart lines.

    Lines with the same line key are merged by quantity. The cart is
    rehydrated from storage on construction and written back after every
    mutation. Concurrent writers resolve by last write wins; every write
    bumps a version stamp past whatever is stored. If storage fails the
    cart keeps working in memory for the rest of its lifetime. Reads and
    mutations hold a per-cart lock, so a cart may be shared across threads.
    """

    def __init__(
        self,
        calculator: PriceCalculator,
        storage: Optional[CartStorage] = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        self.calculator = calculator
        self.storage = storage
        self.storage_key = storage_key
        self.version = 0
        self._lines: List[OrderLine] = []
        self._lock = threading.RLock()
        self._load()

    @property
    def persistent(self) -> bool:
        """Whether mutations are still written to storage."""
        return self.storage is not None

    @property
    def items(self) -> List[OrderLine]:
        """Current lines in insertion order."""
        with self._lock:
            return list(self._lines)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.items)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.items), Decimal("0"))

    def add_item(self, item: MenuItem, bundle: Optional[SelectionBundle] = None) -> OrderLine:
        """
        Add one unit of a configured item.

        Merges into an existing line with the same key, keeping that line's
        price, otherwise prices the item and appends a new line. Callers are
        expected to have validated the selections.
        """
        if item is None:
            raise ValueError("A menu item is required to add to the cart")
        if bundle is None:
            bundle = SelectionBundle()

        with self._lock:
            index = self._find_index(resolve_line_key(item.id, bundle))
            if index is not None:
                line = self._lines[index]
                line = line.model_copy(update={"quantity": line.quantity + 1})
                self._lines[index] = line
            else:
                line = OrderLine(
                    item=item,
                    unit_price=self.calculator.unit_price(item, bundle),
                    extras_surcharge=self.calculator.extras_surcharge(bundle),
                    quantity=1,
                    size=item.get_size(bundle.size),
                    ingredients=list(bundle.ingredients),
                    extras=list(bundle.extras),
                    pasta_type=bundle.pasta_type,
                    sauce=bundle.sauce,
                    pizza_style=bundle.pizza_style,
                    fries_option=bundle.fries_option,
                )
                self._lines.append(line)

            logger.debug(f"[CART] {self.storage_key}: {item.name} x{line.quantity}")
            self._persist()
        return line

    def remove_item(self, item_id: int, bundle: Optional[SelectionBundle] = None) -> None:
        """Remove the matching line. Missing lines are ignored."""
        with self._lock:
            index = self._find_index(resolve_line_key(item_id, bundle))
            if index is None:
                return
            del self._lines[index]
            self._persist()

    def update_quantity(
        self, item_id: int, quantity: int, bundle: Optional[SelectionBundle] = None
    ) -> None:
        """Set the quantity of the matching line; zero or less removes it."""
        if quantity <= 0:
            self.remove_item(item_id, bundle)
            return

        with self._lock:
            index = self._find_index(resolve_line_key(item_id, bundle))
            if index is None:
                return
            self._lines[index] = self._lines[index].model_copy(update={"quantity": quantity})
            self._persist()

    def clear_cart(self) -> None:
        """Remove all lines."""
        with self._lock:
            self._lines = []
            self._persist()

    def refresh(self) -> bool:
        """
        Reload from storage if another writer stored a newer version.

        Returns:
            True if the cart contents were replaced
        """
        with self._lock:
            snapshot = self._read_snapshot()
            if snapshot is None or snapshot.version <= self.version:
                return False
            self._lines = list(snapshot.lines)
            self.version = snapshot.version
            return True

    def to_snapshot(self) -> CartSnapshot:
        with self._lock:
            return CartSnapshot(version=self.version, lines=list(self._lines))

    def _find_index(self, key: LineKey) -> Optional[int]:
        for index, line in enumerate(self._lines):
            if line.key == key:
                return index
        return None

    def _load(self) -> None:
        snapshot = self._read_snapshot()
        if snapshot is not None:
            self._lines = list(snapshot.lines)
            self.version = snapshot.version
            logger.info(
                f"[CART] Restored {self.storage_key} - {len(self._lines)} lines, version {self.version}"
            )

    def _read_snapshot(self) -> Optional[CartSnapshot]:
        if self.storage is None:
            return None
        try:
            blob = self.storage.load(self.storage_key)
        except CartStorageError as e:
            self._degrade(e)
            return None
        if not blob:
            return None
        try:
            return CartSnapshot.model_validate_json(blob)
        except ValidationError as e:
            logger.warning(f"[CART] Discarding unreadable cart {self.storage_key}: {e}")
            return None

    def _persist(self) -> None:
        if self.storage is None:
            return
        stored = self._read_snapshot()
        if self.storage is None:
            return
        stored_version = stored.version if stored is not None else 0
        self.version = max(self.version, stored_version) + 1
        try:
            self.storage.save(self.storage_key, self.to_snapshot().model_dump_json())
        except CartStorageError as e:
            self._degrade(e)

    def _degrade(self, error: CartStorageError) -> None:
        logger.warning(
            f"[CART] Storage unavailable for {self.storage_key}, keeping cart in memory only: {error}"
        )
        self.storage = None
