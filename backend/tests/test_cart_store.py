import pytest

from rentshop.core.local_storage import LocalStorage
from rentshop.schemas.cart import CartItemIn
from rentshop.services.cart_store import CART_KEY, CartStore


def item(pid: str, price: float = 10.0, title: str = None) -> CartItemIn:
    return CartItemIn(id=pid, product_id=pid, title=title or f"Item {pid}", price=price, image=f"/{pid}.jpg")


@pytest.mark.parametrize("n", [1, 2, 5])
def test_repeated_add_merges_into_one_line(n):
    cart = CartStore()
    for _ in range(n):
        cart.add_item(item("a"))
    assert len(cart.items) == 1
    assert cart.items[0].quantity == n
    assert cart.get_total_items() == n


def test_merge_keeps_first_captured_price_and_title():
    cart = CartStore()
    cart.add_item(item("a", price=10, title="Old title"))
    cart.add_item(item("a", price=99, title="New title"))
    line = cart.items[0]
    assert line.price == 10
    assert line.title == "Old title"
    assert line.quantity == 2


def test_totals_example():
    cart = CartStore()
    cart.add_item(item("a", price=10))
    cart.add_item(item("a", price=10))
    cart.add_item(item("b", price=5))
    assert cart.get_total_items() == 3
    assert cart.get_total_price() == 25


def test_total_price_avoids_float_drift():
    cart = CartStore()
    cart.add_item(item("a", price=0.1))
    cart.add_item(item("b", price=0.2))
    assert cart.get_total_price() == 0.3


@pytest.mark.parametrize("qty", [0, -1])
def test_update_quantity_non_positive_removes_line(qty):
    cart = CartStore()
    cart.add_item(item("a"))
    cart.add_item(item("b"))
    cart.update_quantity("a", qty)
    assert [it.product_id for it in cart.items] == ["b"]


def test_update_quantity_sets_absolute_value():
    cart = CartStore()
    cart.add_item(item("a"))
    cart.add_item(item("a"))
    cart.update_quantity("a", 7)
    assert cart.items[0].quantity == 7
    cart.update_quantity("a", 3)
    assert cart.items[0].quantity == 3


def test_missing_product_is_a_no_op():
    cart = CartStore()
    cart.add_item(item("a"))
    cart.remove_item("zzz")
    cart.update_quantity("zzz", 4)
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 1


def test_clear_cart():
    cart = CartStore()
    cart.add_item(item("a"))
    cart.add_item(item("b"))
    cart.clear_cart()
    assert cart.items == []
    assert cart.get_total_items() == 0
    assert cart.get_total_price() == 0


def test_insertion_order_is_kept():
    cart = CartStore()
    for pid in ("c", "a", "b", "a"):
        cart.add_item(item(pid))
    assert [it.product_id for it in cart.items] == ["c", "a", "b"]


def test_snapshot_round_trip(storage):
    cart = CartStore(storage)
    cart.add_item(item("a", price=10))
    cart.add_item(item("b", price=5.5))
    cart.add_item(item("a", price=10))
    cart.update_quantity("b", 4)

    reloaded = CartStore(storage)
    assert [it.model_dump() for it in reloaded.items] == [it.model_dump() for it in cart.items]
    assert reloaded.get_total_price() == cart.get_total_price()


def test_snapshot_written_after_each_mutation(storage):
    cart = CartStore(storage)
    cart.add_item(item("a"))
    assert storage.get_item(CART_KEY)["state"]["items"][0]["quantity"] == 1
    cart.add_item(item("a"))
    assert storage.get_item(CART_KEY)["state"]["items"][0]["quantity"] == 2
    cart.clear_cart()
    assert storage.get_item(CART_KEY)["state"]["items"] == []


def test_invalid_snapshot_lines_are_dropped(storage):
    storage.set_item(CART_KEY, {"state": {"items": [
        {"id": "a", "product_id": "a", "title": "A", "price": 1, "image": "/a", "quantity": 2},
        {"id": "b", "product_id": "b", "title": "B", "price": 1, "image": "/b", "quantity": 0},
        {"id": "a2", "product_id": "a", "title": "A again", "price": 1, "image": "/a", "quantity": 1},
    ]}, "version": 0})
    cart = CartStore(storage)
    assert [(it.product_id, it.quantity) for it in cart.items] == [("a", 2)]


def test_unavailable_storage_keeps_state_in_memory():
    cart = CartStore(LocalStorage(None))
    cart.add_item(item("a"))
    assert cart.get_total_items() == 1
