"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_cart.adapters.supabase_cart_repository import SupabaseCartRepository
from food_cart.adapters.vendor_menu_client import HttpxVendorMenuClient
from food_cart.config import Settings
from food_cart.services.cart_sessions import CartSessionService
from food_cart.services.menu import MenuService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    cart_sessions: CartSessionService
    menu_service: MenuService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    cart_sessions = CartSessionService(
        repository=SupabaseCartRepository(supabase_client),
        policy=resolved_settings.pricing_policy(),
        strict_prices=resolved_settings.strict_price_parsing,
    )
    vendor_client = HttpxVendorMenuClient.create(
        base_url=resolved_settings.vendor_api_base_url,
        token=resolved_settings.vendor_api_token,
    )
    menu_service = MenuService(vendor_client)

    async def close_resources() -> None:
        await vendor_client.close()

    return AppContainer(
        settings=resolved_settings,
        cart_sessions=cart_sessions,
        menu_service=menu_service,
        close_resources=close_resources,
    )
