"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status

from food_cart.api.models import CartItemIn
from food_cart.api.vendors import router as vendors_router
from food_cart.app_logging import configure_logging
from food_cart.containers import AppContainer
from food_cart.domain.cart import AddRejection, CheckoutSnapshot
from food_cart.services.cart import CartStore, EmptyCartError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(vendors_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/carts/{cart_id}")
    async def get_cart(cart_id: str, request: Request) -> dict[str, object]:
        """Return the cart with its totals."""
        carts = _container(request).cart_sessions
        return _serialize_cart(carts.view_cart(cart_id))

    @app.post("/carts/{cart_id}/items")
    async def add_item(
        cart_id: str, payload: CartItemIn, request: Request
    ) -> dict[str, object]:
        """Add one unit of an item to the cart."""
        carts = _container(request).cart_sessions
        result = carts.add_item(
            cart_id, payload.to_item(), replace_existing=payload.replace_existing
        )
        if not result.ok:
            logger.info("Add to cart %s rejected: %s", cart_id, result.reason)
            code = (
                status.HTTP_409_CONFLICT
                if result.reason is AddRejection.DIFFERENT_RESTAURANT
                else status.HTTP_422_UNPROCESSABLE_ENTITY
            )
            reason = result.reason.value if result.reason else None
            raise HTTPException(status_code=code, detail={"reason": reason})
        body = _serialize_cart(carts.view_cart(cart_id))
        body["quantity"] = result.quantity
        return body

    @app.post("/carts/{cart_id}/items/{item_id}/increment")
    async def increment_item(
        cart_id: str, item_id: str, request: Request
    ) -> dict[str, object]:
        """Increase an item's quantity."""
        carts = _container(request).cart_sessions
        changed = carts.increment_item(cart_id, item_id)
        return {**_serialize_cart(carts.view_cart(cart_id)), "changed": changed}

    @app.post("/carts/{cart_id}/items/{item_id}/decrement")
    async def decrement_item(
        cart_id: str, item_id: str, request: Request
    ) -> dict[str, object]:
        """Decrease an item's quantity, stopping at one."""
        carts = _container(request).cart_sessions
        changed = carts.decrement_item(cart_id, item_id)
        return {**_serialize_cart(carts.view_cart(cart_id)), "changed": changed}

    @app.delete("/carts/{cart_id}/items/{item_id}")
    async def remove_item(
        cart_id: str, item_id: str, request: Request
    ) -> dict[str, object]:
        """Remove an item from the cart."""
        carts = _container(request).cart_sessions
        changed = carts.remove_item(cart_id, item_id)
        return {**_serialize_cart(carts.view_cart(cart_id)), "changed": changed}

    @app.get("/carts/{cart_id}/items/{item_id}/quantity")
    async def item_quantity(
        cart_id: str, item_id: str, request: Request
    ) -> dict[str, object]:
        """Return the quantity of an item in the cart."""
        store = _container(request).cart_sessions.view_cart(cart_id)
        return {"id": item_id, "quantity": store.get_item_quantity(item_id)}

    @app.delete("/carts/{cart_id}")
    async def clear_cart(cart_id: str, request: Request) -> dict[str, object]:
        """Empty the cart."""
        carts = _container(request).cart_sessions
        carts.clear_cart(cart_id)
        return _serialize_cart(carts.view_cart(cart_id))

    @app.get("/carts/{cart_id}/checkout")
    async def checkout(cart_id: str, request: Request) -> dict[str, object]:
        """Return the read-only snapshot handed to checkout."""
        carts = _container(request).cart_sessions
        try:
            snapshot = carts.checkout(cart_id)
        except EmptyCartError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail={"reason": "empty_cart"}
            ) from exc
        return _serialize_checkout(snapshot)

    return app


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _serialize_cart(store: CartStore) -> dict[str, object]:
    pricing = store.pricing()
    formatted = store.formatted_pricing()
    return {
        "items": [
            {**asdict(item), "line_total": item.line_total} for item in store.items
        ],
        "restaurant_id": store.current_restaurant_id,
        "restaurant_name": store.current_restaurant_name,
        "total_items": store.total_items,
        "subtotal": pricing.subtotal,
        "delivery_fee": pricing.delivery_fee,
        "tax": pricing.tax,
        "total": pricing.total,
        "formatted": asdict(formatted),
    }


def _serialize_checkout(snapshot: CheckoutSnapshot) -> dict[str, object]:
    return {
        "items": [asdict(item) for item in snapshot.items],
        "restaurant_id": snapshot.restaurant_id,
        "restaurant_name": snapshot.restaurant_name,
        "subtotal": snapshot.subtotal,
        "delivery_fee": snapshot.delivery_fee,
        "tax": snapshot.tax,
        "total": snapshot.total,
    }
