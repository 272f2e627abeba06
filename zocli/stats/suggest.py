"""Pick something to order, weighted by past orders."""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass

from ..zomato.models import Order


@dataclass
class Suggestion:
    restaurant: str
    item: str = ""  # Empty when the restaurant has no item data
    weight: int = 0  # Past orders at this restaurant


def suggest_restaurant(
    orders: list[Order], rng: random.Random | None = None
) -> Suggestion | None:
    """Choose a restaurant with probability proportional to its order count,
    then its most-ordered item (ties go to the alphabetically first name).

    Pass a seeded ``random.Random`` for repeatable picks. Returns None
    when no order names a restaurant.
    """
    if rng is None:
        rng = random.Random()

    restaurant_counts: Counter = Counter()
    item_counts: dict[str, Counter] = {}
    for order in orders:
        name = order.restaurant.strip()
        if not name:
            continue
        restaurant_counts[name] += 1
        items = item_counts.setdefault(name, Counter())
        for item in order.items:
            item_name = item.name.strip()
            if item_name:
                items[item_name] += item.quantity

    if not restaurant_counts:
        return None

    names = sorted(restaurant_counts)
    chosen = rng.choices(names, weights=[restaurant_counts[n] for n in names])[0]

    best_item = ""
    best_count = 0
    for item_name in sorted(item_counts[chosen]):
        count = item_counts[chosen][item_name]
        if count > best_count:
            best_item, best_count = item_name, count
    if not best_item and item_counts[chosen]:
        best_item = sorted(item_counts[chosen])[0]

    return Suggestion(
        restaurant=chosen, item=best_item, weight=restaurant_counts[chosen]
    )
