"""Domain models for the shopping cart."""

from dataclasses import dataclass
from enum import Enum

ItemId = str | int
RestaurantId = str | int


@dataclass(frozen=True)
class LineItem:
    """Single product entry in the cart with its quantity."""

    id: ItemId
    name: str
    price: float
    quantity: int
    restaurant_id: RestaurantId
    restaurant_name: str | None = None
    image: str | None = None
    description: str | None = None

    @property
    def line_total(self) -> float:
        """Unit price times quantity."""
        return self.price * self.quantity


class AddRejection(str, Enum):
    """Reasons an add can be refused."""

    DIFFERENT_RESTAURANT = "different_restaurant"
    INVALID_ITEM = "invalid_item"


@dataclass(frozen=True)
class AddResult:
    """Tagged outcome of adding an item to the cart."""

    ok: bool
    quantity: int = 0
    reason: AddRejection | None = None

    @classmethod
    def accepted(cls, quantity: int) -> "AddResult":
        return cls(ok=True, quantity=quantity)

    @classmethod
    def rejected(cls, reason: AddRejection, quantity: int = 0) -> "AddResult":
        return cls(ok=False, quantity=quantity, reason=reason)


@dataclass(frozen=True)
class PricingSnapshot:
    """Derived totals for the current cart contents."""

    subtotal: float
    delivery_fee: float
    tax: float
    total: float


@dataclass(frozen=True)
class FormattedPricing:
    """Currency display strings for a pricing snapshot."""

    subtotal: str
    delivery_fee: str
    tax: str
    total: str


@dataclass(frozen=True)
class CheckoutSnapshot:
    """Read-only cart view handed to the checkout flow."""

    items: tuple[LineItem, ...]
    restaurant_id: RestaurantId
    subtotal: float
    delivery_fee: float
    tax: float
    total: float
    restaurant_name: str | None = None
