"""Cart sessions backed by best-effort persistence."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from food_cart.domain.cart import AddResult, CheckoutSnapshot, ItemId
from food_cart.services.cart import CartStore, EmptyCartError
from food_cart.services.pricing import PricingPolicy

logger = logging.getLogger(__name__)


class CartRepository(Protocol):
    """Key-value persistence for cart snapshots."""

    def load(self, cart_id: str) -> dict[str, object] | None:
        """Return the saved snapshot for a cart, if present."""

    def save(self, cart_id: str, snapshot: dict[str, object]) -> None:
        """Store the snapshot for a cart."""

    def delete(self, cart_id: str) -> None:
        """Forget the saved snapshot for a cart."""


@dataclass
class CartPersistenceBridge:
    """Saves a cart after each change without blocking the change itself."""

    cart_id: str
    repository: CartRepository

    def __call__(self, store: CartStore) -> None:
        try:
            if store.is_empty:
                self.repository.delete(self.cart_id)
            else:
                self.repository.save(self.cart_id, store.to_snapshot())
        except Exception:
            logger.exception("Failed to persist cart %s", self.cart_id)


@dataclass
class CartSessionService:
    """Owns one live cart store per cart id."""

    repository: CartRepository
    policy: PricingPolicy = field(default_factory=PricingPolicy)
    strict_prices: bool = False
    _carts: dict[str, CartStore] = field(default_factory=dict, init=False)

    def get_cart(self, cart_id: str) -> CartStore:
        """Return the live cart, restoring it from storage on first access."""
        store = self._carts.get(cart_id)
        if store is not None:
            return store
        store = CartStore(self.policy, strict_prices=self.strict_prices)
        snapshot = self._load(cart_id)
        if snapshot:
            store.restore(snapshot)
            logger.info("Restored cart %s with %s items", cart_id, store.total_items)
        store.subscribe(CartPersistenceBridge(cart_id, self.repository))
        self._carts[cart_id] = store
        return store

    def view_cart(self, cart_id: str) -> CartStore:
        """Return the cart for reading without holding on to an empty one."""
        store = self.get_cart(cart_id)
        self._release_if_empty(cart_id)
        return store

    def add_item(
        self, cart_id: str, item: dict[str, object], replace_existing: bool = False
    ) -> AddResult:
        store = self.get_cart(cart_id)
        result = store.add_item(item, replace_existing=replace_existing)
        self._release_if_empty(cart_id)
        return result

    def increment_item(self, cart_id: str, item_id: ItemId) -> bool:
        changed = self.get_cart(cart_id).increment_item(item_id)
        self._release_if_empty(cart_id)
        return changed

    def decrement_item(self, cart_id: str, item_id: ItemId) -> bool:
        changed = self.get_cart(cart_id).decrement_item(item_id)
        self._release_if_empty(cart_id)
        return changed

    def remove_item(self, cart_id: str, item_id: ItemId) -> bool:
        changed = self.get_cart(cart_id).remove_item(item_id)
        self._release_if_empty(cart_id)
        return changed

    def clear_cart(self, cart_id: str) -> None:
        self.get_cart(cart_id).clear_cart()
        self._release_if_empty(cart_id)

    def checkout(self, cart_id: str) -> CheckoutSnapshot:
        """Return the checkout hand-off for a cart.

        Raises:
            EmptyCartError: when the cart has no items.
        """
        store = self.view_cart(cart_id)
        if store.is_empty:
            raise EmptyCartError(f"Cart {cart_id} is empty")
        return store.checkout_snapshot()

    def _release_if_empty(self, cart_id: str) -> None:
        # Empty carts have no stored row either; the next access starts fresh.
        store = self._carts.get(cart_id)
        if store is not None and store.is_empty:
            del self._carts[cart_id]

    def _load(self, cart_id: str) -> dict[str, object] | None:
        try:
            return self.repository.load(cart_id)
        except Exception:
            logger.exception("Failed to load cart %s", cart_id)
            return None
