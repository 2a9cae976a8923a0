"""Domain models for vendor menus."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MenuItem:
    """Menu entry published by a vendor."""

    id: str | int
    vendor_id: str | int
    name: str
    price: float
    category: str | None
    description: str | None
    available: bool
