"""Per-session cart registry."""
import logging
import threading
from collections import OrderedDict
from typing import Optional

from pizzeria.services.cart.ledger import DEFAULT_STORAGE_KEY, Cart
from pizzeria.services.cart.storage import CartStorage
from pizzeria.services.ordering.pricing import PriceCalculator

logger = logging.getLogger(__name__)

DEFAULT_MAX_CARTS = 1000


class CartRegistry:
    """
    Hands out one cart per browser cart session.

    At most ``max_carts`` carts are held in memory, least recently used
    first out. Storage stays the source of truth, so an evicted cart is
    rehydrated on its next lookup.
    """

    def __init__(
        self,
        calculator: PriceCalculator,
        storage: Optional[CartStorage] = None,
        storage_name: str = DEFAULT_STORAGE_KEY,
        max_carts: int = DEFAULT_MAX_CARTS,
    ):
        self.calculator = calculator
        self.storage = storage
        self.storage_name = storage_name
        self.max_carts = max_carts
        self._carts: "OrderedDict[str, Cart]" = OrderedDict()
        self._lock = threading.Lock()

    def storage_key(self, session_id: str) -> str:
        return f"{self.storage_name}:{session_id}"

    def get(self, session_id: str) -> Cart:
        """Get the cart for a session, rehydrating it if it is not held."""
        with self._lock:
            cart = self._carts.get(session_id)
            if cart is not None:
                self._carts.move_to_end(session_id)
            else:
                cart = Cart(
                    self.calculator,
                    storage=self.storage,
                    storage_key=self.storage_key(session_id),
                )
                self._carts[session_id] = cart
                logger.debug(f"[CART] Opened cart for session {session_id[:8]}")
                self._evict()
                return cart

        cart.refresh()
        return cart

    def _evict(self) -> None:
        while len(self._carts) > self.max_carts:
            session_id, _ = self._carts.popitem(last=False)
            logger.debug(f"[CART] Evicted cart for session {session_id[:8]}")
