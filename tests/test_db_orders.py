"""Tests for OrderStore save/load."""

from datetime import datetime

import pytest

from conftest import make_order
from zocli.db.orders import OrdersNotFoundError, OrderStore


@pytest.fixture
def store(tmp_path):
    """Create a temporary OrderStore."""
    s = OrderStore(db_path=tmp_path / "orders.db")
    yield s
    s.close()


def test_load_missing_database(store):
    with pytest.raises(OrdersNotFoundError):
        store.load()


def test_load_empty_database(store):
    store.save([])
    with pytest.raises(OrdersNotFoundError):
        store.load()


def test_not_found_is_a_file_not_found_error():
    assert issubclass(OrdersNotFoundError, FileNotFoundError)


def test_save_load_sorted_newest_first(store):
    orders = [
        make_order(id="1", restaurant="A", placed_at=datetime(2023, 1, 1, 10)),
        make_order(id="2", restaurant="B", placed_at=datetime(2023, 1, 2, 10)),
        make_order(id="3", restaurant="C", placed_at=None),
    ]
    store.save(orders)
    loaded = store.load()

    assert [o.id for o in loaded] == ["2", "1", "3"]


def test_round_trip_preserves_fields(store):
    order = make_order(
        id="42",
        restaurant="Spice Route",
        total="Rs. 1,250",
        status="Out for delivery",
        placed_at=datetime(2024, 5, 6, 19, 45),
        items=[("Biryani [Serves 1", 1), ("Raita", 2)],
    )
    store.save([order])
    [loaded] = store.load()
    assert loaded == order


def test_save_replaces_previous(store):
    store.save([make_order(id="1"), make_order(id="2")])
    store.save([make_order(id="3")])
    assert [o.id for o in store.load()] == ["3"]
    assert store.count() == 1


def test_duplicate_ids_are_stored_as_given(store):
    store.save([make_order(id="1"), make_order(id="1")])
    assert store.count() == 2


def test_count_without_database(tmp_path):
    assert OrderStore(tmp_path / "none.db").count() == 0


def test_context_manager_closes(tmp_path):
    with OrderStore(tmp_path / "orders.db") as s:
        s.save([make_order()])
    assert s._conn is None
