"""Supabase repository for cart snapshots."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from food_cart.services.cart_sessions import CartRepository


@dataclass
class SupabaseCartRepository(CartRepository):
    """Supabase implementation for cart persistence."""

    client: Client

    def load(self, cart_id: str) -> dict[str, object] | None:
        """Return the stored snapshot for a cart."""
        response = (
            self.client.table("carts")
            .select("cart_id, snapshot_json")
            .eq("cart_id", cart_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        snapshot = response.data[0].get("snapshot_json")
        return snapshot if isinstance(snapshot, dict) else None

    def save(self, cart_id: str, snapshot: dict[str, object]) -> None:
        """Insert or replace the snapshot for a cart."""
        self.client.table("carts").upsert(
            {
                "cart_id": cart_id,
                "snapshot_json": snapshot,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="cart_id",
        ).execute()

    def delete(self, cart_id: str) -> None:
        """Delete the stored snapshot for a cart."""
        self.client.table("carts").delete().eq("cart_id", cart_id).execute()
