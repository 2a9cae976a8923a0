"""Vendor menu endpoints with simple token auth."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

import httpx
from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from food_cart.api.models import AvailabilityIn, MenuItemIn

if TYPE_CHECKING:
    from food_cart.containers import AppContainer

router = APIRouter(prefix="/vendors", tags=["vendors"])


def _get_vendor_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.vendor_token


async def require_vendor(
    x_vendor_token: str | None = Header(default=None),
    vendor_token: str = Depends(_get_vendor_token),
) -> None:
    """Ensure requests include a valid vendor token."""
    if not x_vendor_token or x_vendor_token != vendor_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _upstream_error(exc: httpx.HTTPError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Vendor backend error: {exc}",
    )


@router.get("/{vendor_id}/menu", dependencies=[Depends(require_vendor)])
async def list_menu(vendor_id: str, request: Request) -> dict[str, object]:
    """Return the vendor's menu."""
    container: AppContainer = request.app.state.container
    try:
        items = await container.menu_service.list_menu(vendor_id)
    except httpx.HTTPError as exc:
        raise _upstream_error(exc) from exc
    return {"items": [asdict(item) for item in items]}


@router.post("/{vendor_id}/menu", dependencies=[Depends(require_vendor)])
async def add_menu_item(
    vendor_id: str, payload: MenuItemIn, request: Request
) -> dict[str, object]:
    """Add an item to the vendor's menu."""
    container: AppContainer = request.app.state.container
    try:
        return await container.menu_service.add_item(vendor_id, payload.model_dump())
    except httpx.HTTPError as exc:
        raise _upstream_error(exc) from exc


@router.patch("/{vendor_id}/menu/{item_id}", dependencies=[Depends(require_vendor)])
async def update_availability(
    vendor_id: str, item_id: str, payload: AvailabilityIn, request: Request
) -> dict[str, object]:
    """Toggle a menu item's availability."""
    container: AppContainer = request.app.state.container
    try:
        return await container.menu_service.set_availability(
            vendor_id, item_id, payload.available
        )
    except httpx.HTTPError as exc:
        raise _upstream_error(exc) from exc


@router.delete("/{vendor_id}/menu/{item_id}", dependencies=[Depends(require_vendor)])
async def delete_menu_item(
    vendor_id: str, item_id: str, request: Request
) -> dict[str, str]:
    """Delete a menu item."""
    container: AppContainer = request.app.state.container
    try:
        await container.menu_service.delete_item(vendor_id, item_id)
    except httpx.HTTPError as exc:
        raise _upstream_error(exc) from exc
    return {"status": "ok"}
