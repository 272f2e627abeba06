"""Order analytics: spend summaries, patterns, rankings and price trends."""

from .amount import normalize_currency, parse_amount
from .inflation import (
    InflationTrend,
    ItemPricePoint,
    calculate_inflation,
    find_top_inflation_trends,
)
from .suggest import Suggestion, suggest_restaurant
from .summary import (
    Bucket,
    Group,
    InvalidGroupingError,
    SpendBucket,
    Summary,
    Wrapped,
    compute_summary,
    filter_orders_by_date,
    find_most_expensive_order,
    group_orders,
    orders_by_time_window,
    orders_by_weekday,
    spend_by_weekday,
    top_items,
    top_restaurants,
    wrapped_summary,
)

__all__ = [
    "parse_amount",
    "normalize_currency",
    "Summary",
    "Group",
    "Bucket",
    "SpendBucket",
    "Wrapped",
    "InvalidGroupingError",
    "compute_summary",
    "group_orders",
    "orders_by_weekday",
    "orders_by_time_window",
    "spend_by_weekday",
    "top_restaurants",
    "top_items",
    "find_most_expensive_order",
    "filter_orders_by_date",
    "wrapped_summary",
    "ItemPricePoint",
    "InflationTrend",
    "calculate_inflation",
    "find_top_inflation_trends",
    "Suggestion",
    "suggest_restaurant",
]
