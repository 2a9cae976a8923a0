"""Pydantic models for cart and vendor API payloads."""

from pydantic import BaseModel, Field


class CartItemIn(BaseModel):
    """Item sent by the client when adding to a cart."""

    id: str | int
    name: str = ""
    price: float | str
    restaurant_id: str | int
    restaurant_name: str | None = None
    image: str | None = None
    description: str | None = None
    replace_existing: bool = False

    def to_item(self) -> dict[str, object]:
        """Return the mapping accepted by the cart store."""
        return self.model_dump(exclude={"replace_existing"})


class MenuItemIn(BaseModel):
    """Menu item created by a vendor."""

    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    category: str | None = None
    description: str | None = None
    available: bool = True


class AvailabilityIn(BaseModel):
    """Availability toggle for a menu item."""

    available: bool
