"""Vendor menu API client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)


class VendorMenuClient(Protocol):
    """Interface for the remote vendor menu backend."""

    async def get_menu(self, vendor_id: str) -> list[dict[str, object]]:
        """Return raw menu rows for a vendor."""

    async def add_menu_item(
        self, vendor_id: str, payload: dict[str, object]
    ) -> dict[str, object]:
        """Create a menu item and return the raw response."""

    async def update_availability(
        self, vendor_id: str, item_id: str, available: bool
    ) -> dict[str, object]:
        """Toggle availability of a menu item."""

    async def delete_menu_item(self, vendor_id: str, item_id: str) -> None:
        """Delete a menu item."""


@dataclass
class HttpxVendorMenuClient(VendorMenuClient):
    """HTTPX-backed vendor menu client."""

    base_url: str
    http_client: httpx.AsyncClient
    token: str | None = None

    @classmethod
    def create(cls, base_url: str, token: str | None = None) -> "HttpxVendorMenuClient":
        """Create a vendor client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient(), token=token)

    async def get_menu(self, vendor_id: str) -> list[dict[str, object]]:
        """Fetch the vendor's menu."""
        data = await self._request("GET", f"/vendors/{vendor_id}/menu")
        if isinstance(data, dict):
            rows = data.get("menu") or data.get("items") or []
            return rows if isinstance(rows, list) else []
        return data if isinstance(data, list) else []

    async def add_menu_item(
        self, vendor_id: str, payload: dict[str, object]
    ) -> dict[str, object]:
        """Add an item to the vendor's menu."""
        body = {
            "itemName": payload.get("name"),
            "price": payload.get("price"),
            "category": payload.get("category"),
            "description": payload.get("description"),
            "available": payload.get("available", True),
        }
        data = await self._request("POST", f"/vendors/{vendor_id}/menu", json=body)
        return data if isinstance(data, dict) else {}

    async def update_availability(
        self, vendor_id: str, item_id: str, available: bool
    ) -> dict[str, object]:
        """Update availability; the backend stores it as a bit."""
        data = await self._request(
            "PATCH",
            f"/vendors/{vendor_id}/menu/{item_id}",
            json={"available": 1 if available else 0},
        )
        return data if isinstance(data, dict) else {}

    async def delete_menu_item(self, vendor_id: str, item_id: str) -> None:
        """Delete an item from the vendor's menu."""
        await self._request("DELETE", f"/vendors/{vendor_id}/menu/{item_id}")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self, method: str, path: str, json: dict[str, object] | None = None
    ) -> object:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = await self.http_client.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            headers=headers,
            timeout=15,
        )
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError:
            logger.error(
                "Vendor API error %s for %s %s: %s",
                response.status_code,
                method,
                path,
                response.text,
            )
            raise
        if not response.content:
            return None
        return response.json()
