"""Bundled sample orders for trying the tool without an account."""

from __future__ import annotations

import json
from importlib import resources

from .zomato.models import Order


def sample_orders() -> list[Order]:
    data = resources.files("zocli").joinpath("data/sample_orders.json").read_text(
        encoding="utf-8"
    )
    return [Order.from_dict(d) for d in json.loads(data)]
