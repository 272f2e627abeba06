"""SQLite storage for synced order history."""

from .orders import DEFAULT_DB_PATH, OrdersNotFoundError, OrderStore
from .schema import ensure_schema

__all__ = [
    "OrderStore",
    "OrdersNotFoundError",
    "DEFAULT_DB_PATH",
    "ensure_schema",
]
