"""Vendor menu management on top of the remote vendor API."""

from dataclasses import dataclass

from food_cart.adapters.vendor_menu_client import VendorMenuClient
from food_cart.domain.menu import MenuItem
from food_cart.services.prices import normalize_price


@dataclass
class MenuService:
    """Application service for vendor menus."""

    client: VendorMenuClient

    async def list_menu(self, vendor_id: str) -> list[MenuItem]:
        """Return the vendor's menu, skipping rows without an id."""
        rows = await self.client.get_menu(vendor_id)
        items = [_to_menu_item(vendor_id, row) for row in rows if isinstance(row, dict)]
        return [item for item in items if item is not None]

    async def add_item(
        self, vendor_id: str, payload: dict[str, object]
    ) -> dict[str, object]:
        """Publish a new menu item."""
        return await self.client.add_menu_item(vendor_id, payload)

    async def set_availability(
        self, vendor_id: str, item_id: str, available: bool
    ) -> dict[str, object]:
        """Mark a menu item as available or sold out."""
        return await self.client.update_availability(vendor_id, item_id, available)

    async def delete_item(self, vendor_id: str, item_id: str) -> None:
        """Remove a menu item."""
        await self.client.delete_menu_item(vendor_id, item_id)

    @staticmethod
    def to_cart_item(
        item: MenuItem, restaurant_name: str | None = None
    ) -> dict[str, object]:
        """Build the payload the cart store expects for a menu item."""
        return {
            "id": item.id,
            "name": item.name,
            "price": item.price,
            "restaurant_id": item.vendor_id,
            "restaurant_name": restaurant_name,
            "description": item.description,
        }


def _to_menu_item(vendor_id: str, row: dict[str, object]) -> MenuItem | None:
    item_id = row.get("id", row.get("itemId"))
    if not isinstance(item_id, str | int):
        return None
    available = row.get("available", True)
    return MenuItem(
        id=item_id,
        vendor_id=vendor_id,
        name=str(row.get("itemName") or row.get("name") or ""),
        price=normalize_price(row.get("price")),
        category=_optional_str(row.get("category")),
        description=_optional_str(row.get("description")),
        available=available not in (False, 0, "0", None),
    )


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)
