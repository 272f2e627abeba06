"""Plain-text rendering of orders and statistics for the terminal."""

from __future__ import annotations

from datetime import datetime

from .stats import Bucket, Group, InflationTrend, ItemPricePoint, SpendBucket, Summary, Wrapped
from .zomato.models import Order

_DATE_FMT = "%Y-%m-%d"


def _truncate(text: str, width: int) -> str:
    if len(text) > width:
        return text[: width - 3] + "..."
    return text


def _date(value: datetime | None, fmt: str = _DATE_FMT) -> str:
    return value.strftime(fmt) if value else "-"


def _change(value: float) -> str:
    if value > 0:
        return f"+{value:.1f}% 🔺"
    if value < 0:
        return f"{value:.1f}% 🔻"
    return "0%"


def _table(header: list[str], rows: list[list[str]]) -> str:
    widths = [len(h) for h in header]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def line(cells: list[str]) -> str:
        return "  ".join(c.ljust(w) for c, w in zip(cells, widths)).rstrip()

    out = [line(header), line(["-" * len(h) for h in header])]
    out.extend(line(row) for row in rows)
    return "\n".join(out)


def format_orders(orders: list[Order]) -> str:
    if not orders:
        return "No orders to display."
    rows = [
        [
            _date(o.placed_at, "%Y-%m-%d %H:%M"),
            _truncate(o.restaurant or "Unknown", 28),
            o.total or "-",
            o.status or "-",
            _truncate(", ".join(f"{i.quantity}x {i.name}" for i in o.items), 40),
        ]
        for o in orders
    ]
    return _table(["DATE", "RESTAURANT", "TOTAL", "STATUS", "ITEMS"], rows)


def format_summary(summary: Summary) -> str:
    cur = summary.currency
    lines = [
        f"Orders:   {summary.count}",
        f"Total:    {cur}{summary.total:,.2f}",
        f"Average:  {cur}{summary.average:,.2f}",
    ]
    if summary.earliest and summary.latest:
        lines.append(f"Range:    {_date(summary.earliest)} → {_date(summary.latest)}")
    return "\n".join(lines)


def format_groups(groups: list[Group], currency: str = "") -> str:
    if not groups:
        return "No orders to summarize."
    rows = [
        [g.key, str(g.count), f"{currency}{g.total:,.2f}", f"{currency}{g.average:,.2f}"]
        for g in groups
    ]
    return _table(["PERIOD", "ORDERS", "TOTAL", "AVERAGE"], rows)


def format_spend_buckets(buckets: list[SpendBucket], currency: str = "") -> str:
    rows = [
        [b.key, str(b.count), f"{currency}{b.total:,.2f}", f"{currency}{b.average:,.2f}"]
        for b in buckets
    ]
    return _table(["DAY", "ORDERS", "TOTAL", "AVERAGE"], rows)


def format_buckets(label: str, buckets: list[Bucket]) -> str:
    rows = []
    for b in buckets:
        bar = "█" * int(round(b.percent / 5))
        rows.append([_truncate(b.key, 40), str(b.count), f"{b.percent:.1f}%", bar])
    return _table([label.upper(), "COUNT", "SHARE", ""], rows)


def format_inflation(points: list[ItemPricePoint]) -> str:
    if not points:
        return "No matching orders found (or no single-item orders for accurate pricing)."
    rows = [
        [
            _date(p.date),
            _truncate(p.restaurant, 28),
            _truncate(p.item_name, 30),
            f"{p.unit_price:.2f}",
            _change(p.change),
        ]
        for p in points
    ]
    return _table(["DATE", "RESTAURANT", "ITEM", "UNIT PRICE", "CHANGE %"], rows)


def format_trends(trends: list[InflationTrend]) -> str:
    if not trends:
        return "No data available for top items."
    rows = [
        [
            _truncate(t.key, 40),
            _date(t.first_seen),
            str(t.count),
            f"{t.first_price:.2f}",
            f"{t.last_price:.2f}",
            _change(t.total_change),
        ]
        for t in trends
    ]
    return _table(
        ["ITEM", "FIRST SEEN", "ORDERS", "FIRST PRICE", "LAST PRICE", "CHANGE"], rows
    )


def format_wrapped(wrapped: Wrapped) -> str:
    s = wrapped.summary
    if s.count == 0:
        return f"No orders found for {wrapped.year}."
    cur = s.currency
    lines = [
        f"🎉 Your {wrapped.year} in food",
        "",
        f"  Orders placed:     {s.count}",
        f"  Total spent:       {cur}{s.total:,.2f}",
        f"  Average order:     {cur}{s.average:,.2f}",
    ]
    if wrapped.top_restaurant:
        lines.append(
            f"  Favourite place:   {wrapped.top_restaurant.key} "
            f"({wrapped.top_restaurant.count} orders)"
        )
    if wrapped.top_item:
        lines.append(
            f"  Favourite dish:    {wrapped.top_item.key} ({wrapped.top_item.count}x)"
        )
    if wrapped.most_expensive_amount > 0:
        lines.append(
            f"  Biggest order:     {cur}{wrapped.most_expensive_amount:,.2f} "
            f"at {wrapped.most_expensive.restaurant or 'Unknown'}"
        )
    if wrapped.busiest_weekday:
        lines.append(f"  Busiest day:       {wrapped.busiest_weekday.key}")
    if wrapped.busiest_time_window:
        lines.append(f"  Usual time:        {wrapped.busiest_time_window.key}")
    return "\n".join(lines)
