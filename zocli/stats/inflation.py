"""Unit price history and price-inflation trends per restaurant and item.

Only single-item, delivered orders with a positive total are used: a
multi-item order's total cannot be split into reliable per-item prices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ..zomato.models import Order
from .amount import parse_amount, round2
from .summary import DEFAULT_TOP

DELIVERED = "Delivered"


@dataclass
class ItemPricePoint:
    date: datetime | None
    order_id: str
    restaurant: str
    item_name: str
    unit_price: float
    quantity: int
    order_total: float
    change: float = 0.0  # % vs. the previous point at the same restaurant


@dataclass
class InflationTrend:
    key: str  # "<restaurant> - <item>"
    restaurant: str
    item_name: str
    first_seen: datetime | None
    last_seen: datetime | None
    first_price: float
    last_price: float
    total_change: float
    count: int
    points: list[ItemPricePoint] = field(default_factory=list)


def _chronological(orders: list[Order]) -> list[Order]:
    # Undated orders sort first; order among equal timestamps is unspecified.
    return sorted(orders, key=lambda o: o.placed_at or datetime.min)


def _price_point(order: Order) -> ItemPricePoint | None:
    if order.status != DELIVERED or len(order.items) != 1:
        return None
    total, _ = parse_amount(order.total)
    if total <= 0:
        return None
    item = order.items[0]
    quantity = max(item.quantity, 1)
    return ItemPricePoint(
        date=order.placed_at,
        order_id=order.id,
        restaurant=order.restaurant,
        item_name=item.name,
        unit_price=round2(total / quantity),
        quantity=quantity,
        order_total=total,
    )


def _eligible_points(orders: list[Order], query: str = "") -> list[ItemPricePoint]:
    query = query.strip().lower()
    points: list[ItemPricePoint] = []
    for order in _chronological(orders):
        point = _price_point(order)
        if point is None:
            continue
        if query and query not in point.item_name.lower():
            continue
        points.append(point)
    return points


def _percent_change(old: float, new: float) -> float:
    if old <= 0:
        return 0.0
    return round2((new - old) / old * 100)


def calculate_inflation(orders: list[Order], query: str = "") -> list[ItemPricePoint]:
    """Chronological unit prices for items matching ``query``.

    Each point's ``change`` is relative to the most recent earlier point
    from the same restaurant; a restaurant's first point has change 0.
    An empty query matches every item.
    """
    points = _eligible_points(orders, query)
    last_price: dict[str, float] = {}
    for point in points:
        previous = last_price.get(point.restaurant)
        if previous is not None:
            point.change = _percent_change(previous, point.unit_price)
        last_price[point.restaurant] = point.unit_price
    return points


def find_top_inflation_trends(
    orders: list[Order], limit: int = DEFAULT_TOP
) -> list[InflationTrend]:
    """First-to-last price change per (restaurant, item) pair.

    Pairs seen fewer than twice are dropped. Ranked by number of
    observations, then by key.
    """
    if limit <= 0:
        limit = DEFAULT_TOP

    grouped: dict[tuple[str, str], list[ItemPricePoint]] = {}
    for point in _eligible_points(orders):
        grouped.setdefault((point.restaurant, point.item_name), []).append(point)

    trends: list[InflationTrend] = []
    for (restaurant, item_name), points in grouped.items():
        if len(points) < 2:
            continue
        first, last = points[0], points[-1]
        trends.append(
            InflationTrend(
                key=f"{restaurant} - {item_name}",
                restaurant=restaurant,
                item_name=item_name,
                first_seen=first.date,
                last_seen=last.date,
                first_price=first.unit_price,
                last_price=last.unit_price,
                total_change=_percent_change(first.unit_price, last.unit_price),
                count=len(points),
                points=points,
            )
        )

    trends.sort(key=lambda t: (-t.count, t.key))
    return trends[:limit]
