"""Shared fixtures."""

from datetime import datetime

import pytest

from zocli.zomato.models import Order, OrderItem


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep default config/cookie/database paths inside a temp HOME."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("ZOMATO_COOKIE", raising=False)
    return home


def make_order(
    id: str = "1",
    restaurant: str = "Pizza Hut",
    total: str = "₹100",
    placed_at: datetime | None = datetime(2023, 1, 1, 10, 0),
    status: str = "Delivered",
    items: list[tuple[str, int]] | None = None,
) -> Order:
    """Helper to create an Order with sensible defaults."""
    if items is None:
        items = [("Cheese Pizza", 1)]
    return Order(
        id=id,
        restaurant=restaurant,
        status=status,
        placed_at=placed_at,
        total=total,
        items=[OrderItem(name=n, quantity=q) for n, q in items],
    )
