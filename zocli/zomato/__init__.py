"""Zomato order history integration."""

from .client import (
    FetchCancelledError,
    ZomatoAPIError,
    ZomatoClient,
    ZomatoError,
)
from .models import Order, OrderItem
from .normalize import normalize_order, orders_from_response, parse_items, parse_order_date

__all__ = [
    "ZomatoClient",
    "ZomatoError",
    "ZomatoAPIError",
    "FetchCancelledError",
    "Order",
    "OrderItem",
    "normalize_order",
    "orders_from_response",
    "parse_items",
    "parse_order_date",
]
