"""CSV and JSON export of stored orders."""

from __future__ import annotations

import csv
import json
from typing import TextIO

from .zomato.models import Order

CSV_HEADER = ["Order ID", "Restaurant", "Date", "Status", "Total", "Items"]


def to_csv(orders: list[Order], fp: TextIO) -> None:
    """Write one row per order; items are joined as "2x Name; 1x Other"."""
    writer = csv.writer(fp)
    writer.writerow(CSV_HEADER)
    for order in orders:
        writer.writerow([
            order.id,
            order.restaurant,
            order.placed_at.strftime("%Y-%m-%d %H:%M:%S") if order.placed_at else "",
            order.status,
            order.total,
            "; ".join(f"{i.quantity}x {i.name}" for i in order.items),
        ])


def to_json(orders: list[Order], fp: TextIO) -> None:
    json.dump([o.to_dict() for o in orders], fp, ensure_ascii=False, indent=2)
    fp.write("\n")
