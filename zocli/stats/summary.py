"""Spend summaries, period grouping, distributions and rankings."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime

from ..zomato.models import Order
from .amount import parse_amount

GROUP_MODES = ("none", "month", "year")

_GROUP_LAYOUTS = {"month": "%b %Y", "year": "%Y"}

WEEKDAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

# (label, first hour, end hour exclusive)
TIME_WINDOWS: list[tuple[str, int, int]] = [
    ("Late night (00-05)", 0, 6),
    ("Morning (06-11)", 6, 12),
    ("Afternoon (12-17)", 12, 18),
    ("Evening (18-23)", 18, 24),
]

UNKNOWN_KEY = "unknown"
DEFAULT_TOP = 5


class InvalidGroupingError(ValueError):
    """Raised for a grouping mode other than none, month or year."""


@dataclass
class Summary:
    count: int = 0
    total: float = 0.0
    average: float = 0.0
    currency: str = ""
    earliest: datetime | None = None
    latest: datetime | None = None


@dataclass
class Group:
    key: str
    count: int = 0
    total: float = 0.0
    average: float = 0.0


@dataclass
class Bucket:
    key: str
    count: int = 0
    percent: float = 0.0


@dataclass
class SpendBucket:
    key: str
    count: int = 0
    total: float = 0.0
    average: float = 0.0


@dataclass
class Wrapped:
    """One calendar year of ordering, condensed."""

    year: int
    summary: Summary
    top_restaurant: Bucket | None = None
    top_item: Bucket | None = None
    most_expensive: Order = field(default_factory=Order)
    most_expensive_amount: float = 0.0
    busiest_weekday: Bucket | None = None
    busiest_time_window: Bucket | None = None


def _percent(value: int, total: int) -> float:
    if total == 0:
        return 0.0
    return value / total * 100


def compute_summary(orders: list[Order]) -> Summary:
    """Count, total, average, first-seen currency and date range."""
    total = 0.0
    currency = ""
    earliest: datetime | None = None
    latest: datetime | None = None

    for order in orders:
        amount, cur = parse_amount(order.total)
        total += amount
        if not currency and cur:
            currency = cur
        if order.placed_at is not None:
            if earliest is None or order.placed_at < earliest:
                earliest = order.placed_at
            if latest is None or order.placed_at > latest:
                latest = order.placed_at

    count = len(orders)
    return Summary(
        count=count,
        total=total,
        average=total / count if count else 0.0,
        currency=currency,
        earliest=earliest,
        latest=latest,
    )


def _group_key(placed_at: datetime | None, mode: str) -> str:
    if mode == "none":
        return "all"
    if placed_at is None:
        return UNKNOWN_KEY
    return placed_at.strftime(_GROUP_LAYOUTS[mode])


def _group_sort_key(group: Group, mode: str) -> tuple:
    if group.key == UNKNOWN_KEY:
        return (2, datetime.max, group.key)
    try:
        return (0, datetime.strptime(group.key, _GROUP_LAYOUTS[mode]), group.key)
    except ValueError:
        return (1, datetime.min, group.key)


def group_orders(orders: list[Order], mode: str = "none") -> list[Group]:
    """Bucket orders by period and aggregate count, total and average.

    Args:
        mode: "none" (single "all" bucket), "month" ("Jan 2024") or
            "year" ("2024"). Undated orders land in "unknown", sorted last.

    Raises:
        InvalidGroupingError: If mode is not one of GROUP_MODES.
    """
    mode = (mode or "").strip().lower() or "none"
    if mode not in GROUP_MODES:
        raise InvalidGroupingError(
            f"group must be one of: {', '.join(GROUP_MODES)} (got {mode!r})"
        )

    groups: dict[str, Group] = {}
    for order in orders:
        key = _group_key(order.placed_at, mode)
        amount, _ = parse_amount(order.total)
        entry = groups.setdefault(key, Group(key=key))
        entry.count += 1
        entry.total += amount

    out = list(groups.values())
    for entry in out:
        entry.average = entry.total / entry.count if entry.count else 0.0

    if mode != "none":
        out.sort(key=lambda g: _group_sort_key(g, mode))
    return out


def orders_by_weekday(orders: list[Order]) -> list[Bucket]:
    """Order counts per weekday, Monday first; undated orders excluded."""
    counts = Counter(
        o.placed_at.weekday() for o in orders if o.placed_at is not None
    )
    total = sum(counts.values())
    return [
        Bucket(key=day, count=counts[i], percent=_percent(counts[i], total))
        for i, day in enumerate(WEEKDAYS)
    ]


def orders_by_time_window(orders: list[Order]) -> list[Bucket]:
    """Order counts per fixed clock-hour window; undated orders excluded."""
    counts = [0] * len(TIME_WINDOWS)
    for order in orders:
        if order.placed_at is None:
            continue
        hour = order.placed_at.hour
        for i, (_, start, end) in enumerate(TIME_WINDOWS):
            if start <= hour < end:
                counts[i] += 1
                break
    total = sum(counts)
    return [
        Bucket(key=label, count=counts[i], percent=_percent(counts[i], total))
        for i, (label, _, _) in enumerate(TIME_WINDOWS)
    ]


def spend_by_weekday(orders: list[Order]) -> list[SpendBucket]:
    """Count, total and average spend per weekday, Monday first."""
    buckets = [SpendBucket(key=day) for day in WEEKDAYS]
    for order in orders:
        if order.placed_at is None:
            continue
        amount, _ = parse_amount(order.total)
        entry = buckets[order.placed_at.weekday()]
        entry.count += 1
        entry.total += amount
    for entry in buckets:
        if entry.count:
            entry.average = entry.total / entry.count
    return buckets


def _rank(counts: Counter, limit: int) -> list[Bucket]:
    if limit <= 0:
        limit = DEFAULT_TOP
    total = sum(counts.values())
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return [
        Bucket(key=name, count=count, percent=_percent(count, total))
        for name, count in ranked[:limit]
    ]


def top_restaurants(orders: list[Order], limit: int = DEFAULT_TOP) -> list[Bucket]:
    """Restaurants by order count, ties by name."""
    counts: Counter = Counter()
    for order in orders:
        counts[order.restaurant.strip() or "Unknown"] += 1
    return _rank(counts, limit)


def top_items(orders: list[Order], limit: int = DEFAULT_TOP) -> list[Bucket]:
    """Items by summed quantity, ties by name."""
    counts: Counter = Counter()
    for order in orders:
        for item in order.items:
            name = item.name.strip()
            if not name:
                continue
            counts[name] += item.quantity if item.quantity > 0 else 1
    return _rank(counts, limit)


def find_most_expensive_order(orders: list[Order]) -> tuple[Order, float]:
    """Return the order with the strictly largest parsed total.

    The first of several equal maxima wins. No orders (or no positive
    totals) gives an empty Order and 0.
    """
    best = Order()
    best_amount = 0.0
    for order in orders:
        amount, _ = parse_amount(order.total)
        if amount > best_amount:
            best = order
            best_amount = amount
    return best, best_amount


def filter_orders_by_date(
    orders: list[Order],
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[Order]:
    """Keep dated orders within ``[start, end]``; open bounds when None."""
    return [
        o
        for o in orders
        if o.placed_at is not None
        and (start is None or o.placed_at >= start)
        and (end is None or o.placed_at <= end)
    ]


def wrapped_summary(orders: list[Order], year: int) -> Wrapped:
    """Year-in-review figures for the given calendar year."""
    in_year = filter_orders_by_date(
        orders,
        datetime(year, 1, 1),
        datetime(year, 12, 31, 23, 59, 59, 999999),
    )
    most_expensive, amount = find_most_expensive_order(in_year)
    restaurants = top_restaurants(in_year, 1)
    items = top_items(in_year, 1)

    weekdays = orders_by_weekday(in_year)
    windows = orders_by_time_window(in_year)
    return Wrapped(
        year=year,
        summary=compute_summary(in_year),
        top_restaurant=restaurants[0] if restaurants else None,
        top_item=items[0] if items else None,
        most_expensive=most_expensive,
        most_expensive_amount=amount,
        busiest_weekday=max(weekdays, key=lambda b: b.count) if in_year else None,
        busiest_time_window=max(windows, key=lambda b: b.count) if in_year else None,
    )
