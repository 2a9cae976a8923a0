"""Pricing rules for cart totals."""

from collections.abc import Iterable
from dataclasses import dataclass

from food_cart.domain.cart import FormattedPricing, LineItem, PricingSnapshot
from food_cart.services.prices import format_price

DEFAULT_DELIVERY_FEE = 40.0
DEFAULT_TAX_RATE = 0.05


@dataclass(frozen=True)
class PricingPolicy:
    """Fixed pricing constants applied to every cart."""

    delivery_fee: float = DEFAULT_DELIVERY_FEE
    tax_rate: float = DEFAULT_TAX_RATE
    currency_symbol: str = "₹"


def calculate_subtotal(items: Iterable[LineItem]) -> float:
    """Sum of price times quantity, without intermediate rounding."""
    return sum((item.price * item.quantity for item in items), 0.0)


def calculate_delivery_fee(items: Iterable[LineItem], policy: PricingPolicy) -> float:
    """Flat delivery fee for a non-empty cart, zero otherwise."""
    return policy.delivery_fee if any(True for _ in items) else 0.0


def calculate_tax(subtotal: float, policy: PricingPolicy) -> float:
    """Tax on the subtotal at the policy rate."""
    return subtotal * policy.tax_rate


def calculate_pricing(
    items: Iterable[LineItem], policy: PricingPolicy
) -> PricingSnapshot:
    """Derive the full pricing snapshot for the given items."""
    line_items = list(items)
    subtotal = calculate_subtotal(line_items)
    delivery_fee = calculate_delivery_fee(line_items, policy)
    tax = calculate_tax(subtotal, policy)
    return PricingSnapshot(
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        tax=tax,
        total=subtotal + delivery_fee + tax,
    )


def format_pricing(
    snapshot: PricingSnapshot, policy: PricingPolicy
) -> FormattedPricing:
    """Render a pricing snapshot as currency strings."""
    symbol = policy.currency_symbol
    return FormattedPricing(
        subtotal=format_price(snapshot.subtotal, symbol),
        delivery_fee=format_price(snapshot.delivery_fee, symbol),
        tax=format_price(snapshot.tax, symbol),
        total=format_price(snapshot.total, symbol),
    )
