"""In-memory cart state with restaurant affinity and change notifications."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import TypeGuard

from food_cart.domain.cart import (
    AddRejection,
    AddResult,
    CheckoutSnapshot,
    FormattedPricing,
    ItemId,
    LineItem,
    PricingSnapshot,
    RestaurantId,
)
from food_cart.services.prices import InvalidPriceError, normalize_price
from food_cart.services.pricing import (
    PricingPolicy,
    calculate_pricing,
    format_pricing,
)

logger = logging.getLogger(__name__)

CartListener = Callable[["CartStore"], None]


class EmptyCartError(RuntimeError):
    """Raised when checkout is requested for an empty cart."""


def _same_id(left: ItemId | RestaurantId, right: ItemId | RestaurantId) -> bool:
    # Ids reach the store both as JSON numbers and as URL path strings.
    return str(left) == str(right)


class CartStore:
    """Ordered line items for a single restaurant."""

    def __init__(
        self, policy: PricingPolicy | None = None, *, strict_prices: bool = False
    ) -> None:
        self.policy = policy or PricingPolicy()
        self.strict_prices = strict_prices
        self._items: list[LineItem] = []
        self._listeners: list[CartListener] = []

    @property
    def items(self) -> tuple[LineItem, ...]:
        """Line items in the order they were first added."""
        return tuple(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def current_restaurant_id(self) -> RestaurantId | None:
        """Restaurant shared by every item, or None for an empty cart."""
        return self._items[0].restaurant_id if self._items else None

    @property
    def current_restaurant_name(self) -> str | None:
        return self._items[0].restaurant_name if self._items else None

    @property
    def total_items(self) -> int:
        """Sum of quantities across all lines."""
        return sum(item.quantity for item in self._items)

    def can_add_from(self, restaurant_id: RestaurantId) -> bool:
        """Return True when an item from the restaurant may join the cart."""
        current = self.current_restaurant_id
        return current is None or _same_id(current, restaurant_id)

    def add_item(
        self, item: Mapping[str, object], *, replace_existing: bool = False
    ) -> AddResult:
        """Add one unit of a product, merging with an existing line.

        Items from a different restaurant are rejected unless
        ``replace_existing`` is set, which clears the cart first.
        """
        item_id = item.get("id")
        restaurant_id = item.get("restaurant_id")
        if not _is_identifier(item_id) or not _is_identifier(restaurant_id):
            logger.info("Rejected cart item without id or restaurant")
            return AddResult.rejected(AddRejection.INVALID_ITEM)
        try:
            price = normalize_price(item.get("price"), strict=self.strict_prices)
        except InvalidPriceError:
            logger.info("Rejected cart item %s with malformed price", item_id)
            return AddResult.rejected(AddRejection.INVALID_ITEM)

        if not self.can_add_from(restaurant_id):
            if not replace_existing:
                logger.info(
                    "Rejected item %s from restaurant %s; cart holds restaurant %s",
                    item_id,
                    restaurant_id,
                    self.current_restaurant_id,
                )
                return AddResult.rejected(AddRejection.DIFFERENT_RESTAURANT)
            self._items.clear()

        index = self._index_of(item_id)
        if index is not None:
            existing = self._items[index]
            updated = replace(existing, quantity=existing.quantity + 1)
            self._items[index] = updated
            self._notify()
            return AddResult.accepted(updated.quantity)

        self._items.append(
            LineItem(
                id=item_id,
                name=str(item.get("name") or ""),
                price=price,
                quantity=1,
                restaurant_id=restaurant_id,
                restaurant_name=_optional_str(item.get("restaurant_name")),
                image=_optional_str(item.get("image")),
                description=_optional_str(item.get("description")),
            )
        )
        self._notify()
        return AddResult.accepted(1)

    def increment_item(self, item_id: ItemId) -> bool:
        """Increase the quantity of an existing line by one."""
        index = self._index_of(item_id)
        if index is None:
            logger.debug("Increment ignored for unknown item %s", item_id)
            return False
        existing = self._items[index]
        self._items[index] = replace(existing, quantity=existing.quantity + 1)
        self._notify()
        return True

    def decrement_item(self, item_id: ItemId) -> bool:
        """Decrease the quantity by one, never below one.

        Removing the last unit is the caller's job via ``remove_item``.
        """
        index = self._index_of(item_id)
        if index is None:
            logger.debug("Decrement ignored for unknown item %s", item_id)
            return False
        existing = self._items[index]
        if existing.quantity <= 1:
            return False
        self._items[index] = replace(existing, quantity=existing.quantity - 1)
        self._notify()
        return True

    def remove_item(self, item_id: ItemId) -> bool:
        """Delete a line regardless of its quantity."""
        index = self._index_of(item_id)
        if index is None:
            logger.debug("Remove ignored for unknown item %s", item_id)
            return False
        del self._items[index]
        self._notify()
        return True

    def clear_cart(self) -> None:
        """Remove every line."""
        if not self._items:
            return
        self._items.clear()
        self._notify()

    def get_item_quantity(self, item_id: ItemId) -> int:
        """Return the quantity for an item, or 0 when absent."""
        index = self._index_of(item_id)
        return 0 if index is None else self._items[index].quantity

    def pricing(self) -> PricingSnapshot:
        return calculate_pricing(self._items, self.policy)

    def formatted_pricing(self) -> FormattedPricing:
        return format_pricing(self.pricing(), self.policy)

    def checkout_snapshot(self) -> CheckoutSnapshot:
        """Return a detached copy of the cart for the checkout flow."""
        if not self._items:
            raise EmptyCartError("Cart is empty")
        pricing = self.pricing()
        return CheckoutSnapshot(
            items=tuple(self._items),
            restaurant_id=self._items[0].restaurant_id,
            restaurant_name=self.current_restaurant_name,
            subtotal=pricing.subtotal,
            delivery_fee=pricing.delivery_fee,
            tax=pricing.tax,
            total=pricing.total,
        )

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register a change listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def to_snapshot(self) -> dict[str, object]:
        """Return JSON-compatible cart state."""
        return {
            "restaurant_id": self.current_restaurant_id,
            "items": [
                {
                    "id": item.id,
                    "name": item.name,
                    "price": item.price,
                    "quantity": item.quantity,
                    "restaurant_id": item.restaurant_id,
                    "restaurant_name": item.restaurant_name,
                    "image": item.image,
                    "description": item.description,
                }
                for item in self._items
            ],
        }

    def restore(self, snapshot: Mapping[str, object]) -> None:
        """Replace cart contents with a saved snapshot.

        Rows that would break the cart invariants are dropped. Listeners are
        not notified.
        """
        rows = snapshot.get("items")
        restored: list[LineItem] = []
        if isinstance(rows, list):
            for row in rows:
                line = self._line_from_row(row)
                if line is None:
                    continue
                if restored and not _same_id(
                    restored[0].restaurant_id, line.restaurant_id
                ):
                    logger.warning(
                        "Dropped restored item %s from restaurant %s",
                        line.id,
                        line.restaurant_id,
                    )
                    continue
                if any(_same_id(existing.id, line.id) for existing in restored):
                    logger.warning("Dropped duplicate restored item %s", line.id)
                    continue
                restored.append(line)
        self._items = restored

    def _line_from_row(self, row: object) -> LineItem | None:
        if not isinstance(row, Mapping):
            return None
        item_id = row.get("id")
        restaurant_id = row.get("restaurant_id")
        quantity = row.get("quantity")
        if not _is_identifier(item_id) or not _is_identifier(restaurant_id):
            return None
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            logger.warning(
                "Dropped restored item %s with quantity %r", item_id, quantity
            )
            return None
        return LineItem(
            id=item_id,
            name=str(row.get("name") or ""),
            price=normalize_price(row.get("price")),
            quantity=quantity,
            restaurant_id=restaurant_id,
            restaurant_name=_optional_str(row.get("restaurant_name")),
            image=_optional_str(row.get("image")),
            description=_optional_str(row.get("description")),
        )

    def _index_of(self, item_id: ItemId) -> int | None:
        for index, item in enumerate(self._items):
            if _same_id(item.id, item_id):
                return index
        return None

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Cart listener failed")


def _is_identifier(value: object) -> TypeGuard[ItemId]:
    return isinstance(value, str | int) and not isinstance(value, bool)


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)
