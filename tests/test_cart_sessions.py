"""Tests for cart sessions and persistence."""

import pytest

from food_cart.services.cart import EmptyCartError
from food_cart.services.cart_sessions import CartSessionService
from tests.conftest import FailingCartRepository, InMemoryCartRepository, make_item


def test_get_cart_returns_same_store() -> None:
    service = CartSessionService(InMemoryCartRepository())

    assert service.get_cart("c1") is service.get_cart("c1")
    assert service.get_cart("c1") is not service.get_cart("c2")


def test_mutations_are_saved() -> None:
    repository = InMemoryCartRepository()
    service = CartSessionService(repository)

    service.add_item("c1", make_item("x", price="₹99"))
    service.increment_item("c1", "x")

    assert repository.saves == ["c1", "c1"]
    saved = repository.snapshots["c1"]
    assert saved["restaurant_id"] == "R1"
    assert saved["items"][0]["quantity"] == 2
    assert saved["items"][0]["price"] == 99.0


def test_noop_mutations_are_not_saved() -> None:
    repository = InMemoryCartRepository()
    service = CartSessionService(repository)
    service.add_item("c1", make_item("x"))

    service.decrement_item("c1", "x")
    service.remove_item("c1", "missing")

    assert repository.saves == ["c1"]


def test_emptied_cart_is_deleted_from_storage() -> None:
    repository = InMemoryCartRepository()
    service = CartSessionService(repository)
    service.add_item("c1", make_item("x"))

    service.clear_cart("c1")

    assert repository.deletes == ["c1"]
    assert "c1" not in repository.snapshots


def test_cart_is_restored_on_first_access() -> None:
    repository = InMemoryCartRepository()
    first = CartSessionService(repository)
    first.add_item("c1", make_item("x", price=100))
    first.add_item("c1", make_item("x", price=100))

    second = CartSessionService(repository)
    store = second.get_cart("c1")

    assert store.get_item_quantity("x") == 2
    assert store.pricing().subtotal == 200


def test_storage_failures_do_not_block_cart() -> None:
    service = CartSessionService(FailingCartRepository())

    result = service.add_item("c1", make_item("x"))
    service.increment_item("c1", "x")

    assert result.ok
    assert service.get_cart("c1").get_item_quantity("x") == 2


def test_checkout_hand_off() -> None:
    service = CartSessionService(InMemoryCartRepository())
    service.add_item("c1", make_item("a", price=100))
    service.add_item("c1", make_item("a", price=100))
    service.add_item("c1", make_item("b", price=50))

    snapshot = service.checkout("c1")

    assert snapshot.subtotal == 250
    assert snapshot.tax == pytest.approx(12.5)
    assert snapshot.total == pytest.approx(302.5)
    assert [item.id for item in snapshot.items] == ["a", "b"]


def test_checkout_of_empty_cart_raises() -> None:
    service = CartSessionService(InMemoryCartRepository())

    with pytest.raises(EmptyCartError):
        service.checkout("c1")


def test_cleared_carts_are_released() -> None:
    service = CartSessionService(InMemoryCartRepository())

    for index in range(1000):
        service.add_item(f"c{index}", make_item("x"))
        service.clear_cart(f"c{index}")

    assert service._carts == {}


def test_cart_emptied_by_remove_is_released() -> None:
    repository = InMemoryCartRepository()
    service = CartSessionService(repository)
    service.add_item("c1", make_item("x"))
    service.add_item("c1", make_item("y"))

    service.remove_item("c1", "x")
    assert "c1" in service._carts

    service.remove_item("c1", "y")
    assert "c1" not in service._carts
    assert repository.deletes == ["c1"]


def test_viewing_unknown_carts_holds_nothing() -> None:
    service = CartSessionService(InMemoryCartRepository())

    store = service.view_cart("ghost")

    assert store.is_empty
    assert service._carts == {}


def test_released_cart_starts_fresh() -> None:
    service = CartSessionService(InMemoryCartRepository())
    service.add_item("c1", make_item("x", restaurant_id="A"))
    service.clear_cart("c1")

    result = service.add_item("c1", make_item("y", restaurant_id="B"))

    assert result.ok
    assert service.get_cart("c1").current_restaurant_id == "B"


def test_rejected_add_to_new_cart_holds_nothing() -> None:
    service = CartSessionService(InMemoryCartRepository())

    result = service.add_item("c1", {"name": "No id", "price": 10})

    assert result.ok is False
    assert service._carts == {}
