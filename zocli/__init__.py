"""Unofficial Zomato order history tracker."""

from .config import (
    AuthConfig,
    StatsConfig,
    StorageConfig,
    SyncConfig,
    ZocliConfig,
    load_config,
)
from .db import OrdersNotFoundError, OrderStore
from .zomato import (
    FetchCancelledError,
    Order,
    OrderItem,
    ZomatoAPIError,
    ZomatoClient,
    ZomatoError,
)

__version__ = "0.1.0"

__all__ = [
    "ZomatoClient",
    "ZomatoError",
    "ZomatoAPIError",
    "FetchCancelledError",
    "Order",
    "OrderItem",
    "OrderStore",
    "OrdersNotFoundError",
    "ZocliConfig",
    "AuthConfig",
    "StorageConfig",
    "SyncConfig",
    "StatsConfig",
    "load_config",
]
