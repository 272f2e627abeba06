"""Local order history storage."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from ..zomato.models import Order, OrderItem
from .schema import ensure_schema

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "~/.config/zocli/orders.db"


class OrdersNotFoundError(FileNotFoundError):
    """No orders have been stored yet."""


class OrderStore:
    """Manages the orders and order_items tables.

    ``save`` replaces the stored collection; it does not deduplicate.
    """

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path).expanduser()
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> Path:
        return self._db_path

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> OrderStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def save(self, orders: list[Order]) -> None:
        """Replace all stored orders in a single transaction."""
        conn = self._get_conn()
        with conn:
            conn.execute("DELETE FROM orders")
            for position, order in enumerate(orders):
                cur = conn.execute(
                    """INSERT INTO orders
                       (order_id, restaurant, status, placed_at, total, position)
                       VALUES (?, ?, ?, ?, ?, ?)""",
                    (
                        order.id,
                        order.restaurant,
                        order.status,
                        order.placed_at.isoformat() if order.placed_at else None,
                        order.total,
                        position,
                    ),
                )
                conn.executemany(
                    """INSERT INTO order_items (order_row_id, position, name, quantity)
                       VALUES (?, ?, ?, ?)""",
                    [
                        (cur.lastrowid, i, item.name, item.quantity)
                        for i, item in enumerate(order.items)
                    ],
                )
        logger.info("stored %d orders in %s", len(orders), self._db_path)

    def load(self) -> list[Order]:
        """Return stored orders, newest first, undated orders last.

        Raises:
            OrdersNotFoundError: If nothing has been stored yet.
        """
        if not self._db_path.exists():
            raise OrdersNotFoundError(f"no order database at {self._db_path}")

        conn = self._get_conn()
        rows = conn.execute("SELECT * FROM orders ORDER BY position").fetchall()
        if not rows:
            raise OrdersNotFoundError(f"no orders stored in {self._db_path}")

        items: dict[int, list[OrderItem]] = {}
        for row in conn.execute(
            "SELECT * FROM order_items ORDER BY order_row_id, position"
        ):
            items.setdefault(row["order_row_id"], []).append(
                OrderItem(name=row["name"], quantity=row["quantity"])
            )

        orders = [
            Order(
                id=row["order_id"],
                restaurant=row["restaurant"],
                status=row["status"],
                placed_at=(
                    datetime.fromisoformat(row["placed_at"]) if row["placed_at"] else None
                ),
                total=row["total"],
                items=items.get(row["row_id"], []),
            )
            for row in rows
        ]
        orders.sort(key=lambda o: o.placed_at or datetime.min, reverse=True)
        return orders

    def count(self) -> int:
        """Number of stored orders (0 when the database does not exist)."""
        if not self._db_path.exists():
            return 0
        row = self._get_conn().execute("SELECT COUNT(*) AS n FROM orders").fetchone()
        return row["n"]
