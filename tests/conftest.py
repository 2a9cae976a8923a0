"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from food_cart.adapters.vendor_menu_client import VendorMenuClient
from food_cart.config import Settings
from food_cart.containers import AppContainer
from food_cart.services.cart_sessions import CartRepository, CartSessionService
from food_cart.services.menu import MenuService
from food_cart.services.pricing import PricingPolicy


@dataclass
class InMemoryCartRepository(CartRepository):
    """In-memory cart repository for tests."""

    snapshots: dict[str, dict[str, object]] = field(default_factory=dict)
    saves: list[str] = field(default_factory=list)
    deletes: list[str] = field(default_factory=list)

    def load(self, cart_id: str) -> dict[str, object] | None:
        return self.snapshots.get(cart_id)

    def save(self, cart_id: str, snapshot: dict[str, object]) -> None:
        self.saves.append(cart_id)
        self.snapshots[cart_id] = snapshot

    def delete(self, cart_id: str) -> None:
        self.deletes.append(cart_id)
        self.snapshots.pop(cart_id, None)


@dataclass
class FailingCartRepository(CartRepository):
    """Repository whose every call fails."""

    def load(self, cart_id: str) -> dict[str, object] | None:
        raise RuntimeError("storage offline")

    def save(self, cart_id: str, snapshot: dict[str, object]) -> None:
        raise RuntimeError("storage offline")

    def delete(self, cart_id: str) -> None:
        raise RuntimeError("storage offline")


@dataclass
class FakeVendorMenuClient(VendorMenuClient):
    """Fake vendor client keeping menus in memory."""

    menus: dict[str, list[dict[str, object]]] = field(default_factory=dict)
    availability: list[tuple[str, str, bool]] = field(default_factory=list)
    deleted: list[tuple[str, str]] = field(default_factory=list)

    async def get_menu(self, vendor_id: str) -> list[dict[str, object]]:
        return self.menus.get(vendor_id, [])

    async def add_menu_item(
        self, vendor_id: str, payload: dict[str, object]
    ) -> dict[str, object]:
        row = {"id": len(self.menus.get(vendor_id, [])) + 1, **payload}
        self.menus.setdefault(vendor_id, []).append(row)
        return row

    async def update_availability(
        self, vendor_id: str, item_id: str, available: bool
    ) -> dict[str, object]:
        self.availability.append((vendor_id, item_id, available))
        return {"id": item_id, "available": 1 if available else 0}

    async def delete_menu_item(self, vendor_id: str, item_id: str) -> None:
        self.deleted.append((vendor_id, item_id))


def make_item(
    item_id: str | int = "x",
    price: object = 100,
    restaurant_id: str | int = "R1",
    name: str = "Paneer Tikka",
) -> dict[str, object]:
    return {
        "id": item_id,
        "name": name,
        "price": price,
        "restaurant_id": restaurant_id,
        "restaurant_name": f"Restaurant {restaurant_id}",
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        vendor_token="vendor-token",
        vendor_api_base_url="https://vendor.test",
    )


@pytest.fixture
def policy() -> PricingPolicy:
    return PricingPolicy(delivery_fee=40.0, tax_rate=0.05, currency_symbol="₹")


@pytest.fixture
def cart_repository() -> InMemoryCartRepository:
    return InMemoryCartRepository()


@pytest.fixture
def vendor_client() -> FakeVendorMenuClient:
    return FakeVendorMenuClient()


@pytest.fixture
def container(
    settings: Settings,
    cart_repository: InMemoryCartRepository,
    vendor_client: FakeVendorMenuClient,
) -> AppContainer:
    cart_sessions = CartSessionService(
        repository=cart_repository,
        policy=settings.pricing_policy(),
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        cart_sessions=cart_sessions,
        menu_service=MenuService(vendor_client),
        close_resources=close_resources,
    )
