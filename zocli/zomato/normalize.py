"""Conversion of raw Zomato order payloads into Order objects."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from .models import Order, OrderItem

# Tried in order; the first layout that parses wins. %B/%b match English
# month names only while LC_TIME is the default "C" locale; zocli never
# calls locale.setlocale.
_DATE_LAYOUTS: list[str] = [
    "%B %d, %Y at %I:%M %p",
    "%B %d, %Y %I:%M %p",
    "%b %d, %Y at %I:%M %p",
    "%b %d, %Y %I:%M %p",
    "%d %b %Y at %I:%M %p",
    "%d %b %Y %I:%M %p",
    "%Y-%m-%d %H:%M",
]

_DISH_QTY_PATTERN = re.compile(r"^\s*(\d+)\s*x\s*(.+?)\s*$")

# Full RFC 3339 timestamp: date, time and zone are all required.
_RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})$"
)


def parse_order_date(text: str | None) -> datetime | None:
    """Parse an upstream order date into a naive local datetime.

    Returns None when no known layout matches.
    """
    text = (text or "").strip()
    if not text:
        return None

    for layout in _DATE_LAYOUTS:
        try:
            return datetime.strptime(text, layout)
        except ValueError:
            continue

    # RFC 3339 carries a zone; convert to local wall-clock time.
    if not _RFC3339_PATTERN.match(text):
        return None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_items(dish_string: str | None) -> list[OrderItem]:
    """Split a dish string like "2 x Burger, 1 x Fries" into items.

    The split is on every comma, so names with embedded commas
    ("Biryani [Serves 1, 2 Pieces]") come out as several items.
    """
    dish_string = (dish_string or "").strip()
    if not dish_string:
        return []

    items: list[OrderItem] = []
    for part in dish_string.split(","):
        part = part.strip()
        if not part:
            continue
        match = _DISH_QTY_PATTERN.match(part)
        if match:
            quantity = int(match.group(1)) or 1
            name = match.group(2).strip() or part
            items.append(OrderItem(name=name, quantity=quantity))
        else:
            items.append(OrderItem(name=part, quantity=1))
    return items


def _resolve_status(raw: dict[str, Any]) -> str:
    details = raw.get("deliveryDetails") or {}
    status = str(details.get("deliveryLabel") or "").strip()
    if not status:
        status = str(details.get("deliveryMessage") or "").strip()
    code = raw.get("status") or 0
    if not status and code:
        status = f"Status {code}"
    return status


def normalize_order(raw: dict[str, Any]) -> Order:
    """Build an Order from one entry of the upstream ``entities.ORDER`` map."""
    order_id = raw.get("orderId")
    res_info = raw.get("resInfo") or {}
    return Order(
        id=str(order_id) if order_id else "",
        restaurant=str(res_info.get("name") or "").strip(),
        status=_resolve_status(raw),
        placed_at=parse_order_date(raw.get("orderDate")),
        total=str(raw.get("totalCost") or "").strip(),
        items=parse_items(raw.get("dishString")),
    )


def orders_from_response(payload: dict[str, Any]) -> list[Order]:
    """Normalize every order referenced by the order history section."""
    section = (payload.get("sections") or {}).get("SECTION_USER_ORDER_HISTORY") or {}
    order_map = (payload.get("entities") or {}).get("ORDER") or {}

    orders: list[Order] = []
    for entity in section.get("entities") or []:
        if not entity or entity.get("entity_type") != "ORDER":
            continue
        for entity_id in entity.get("entity_ids") or []:
            raw = order_map.get(str(entity_id))
            if raw is None:
                continue
            orders.append(normalize_order(raw))
    return orders


def total_pages(payload: dict[str, Any]) -> int:
    """Return the reported page count, or 0 when unknown."""
    section = (payload.get("sections") or {}).get("SECTION_USER_ORDER_HISTORY") or {}
    try:
        return int(section.get("totalPages") or 0)
    except (TypeError, ValueError):
        return 0


# Scalar fields read from each raw order, with the JSON type they must have.
_ORDER_FIELDS: list[tuple[str, type]] = [
    ("orderId", int),
    ("totalCost", str),
    ("orderDate", str),
    ("dishString", str),
    ("status", int),
]


def _expect(value: Any, kind: type, where: str) -> None:
    """Raise ValueError unless value is None or of the given JSON type."""
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ValueError(
            f"{where}: expected {kind.__name__}, got {type(value).__name__}"
        )


def validate_orders_payload(payload: Any) -> None:
    """Check the shape of an orders page before it is normalized.

    Missing or null fields are accepted and read as empty, but a field
    holding the wrong JSON type raises ValueError naming the field.
    """
    _expect(payload, dict, "payload")
    payload = payload or {}

    sections = payload.get("sections")
    _expect(sections, dict, "sections")
    history = (sections or {}).get("SECTION_USER_ORDER_HISTORY")
    _expect(history, dict, "sections.SECTION_USER_ORDER_HISTORY")
    history = history or {}
    _expect(history.get("totalPages"), int, "totalPages")

    section_entities = history.get("entities")
    _expect(section_entities, list, "section entities")
    for i, entity in enumerate(section_entities or []):
        where = f"section entities[{i}]"
        _expect(entity, dict, where)
        entity = entity or {}
        _expect(entity.get("entity_type"), str, f"{where}.entity_type")
        ids = entity.get("entity_ids")
        _expect(ids, list, f"{where}.entity_ids")
        for entity_id in ids or []:
            _expect(entity_id, int, f"{where}.entity_ids")

    entities = payload.get("entities")
    _expect(entities, dict, "entities")
    order_map = (entities or {}).get("ORDER")
    _expect(order_map, dict, "entities.ORDER")
    for key, raw in (order_map or {}).items():
        where = f"entities.ORDER[{key}]"
        _expect(raw, dict, where)
        raw = raw or {}
        for name, kind in _ORDER_FIELDS:
            _expect(raw.get(name), kind, f"{where}.{name}")

        details = raw.get("deliveryDetails")
        _expect(details, dict, f"{where}.deliveryDetails")
        for name in ("deliveryLabel", "deliveryMessage"):
            _expect((details or {}).get(name), str, f"{where}.deliveryDetails.{name}")

        res_info = raw.get("resInfo")
        _expect(res_info, dict, f"{where}.resInfo")
        _expect((res_info or {}).get("name"), str, f"{where}.resInfo.name")
