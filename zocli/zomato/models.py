"""Data models for Zomato order history."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class OrderItem:
    """A single line item of an order."""

    name: str
    quantity: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrderItem:
        return cls(
            name=data.get("name", ""),
            quantity=int(data.get("quantity") or 1),
        )


@dataclass
class Order:
    """A normalized order, independent of the upstream wire format."""

    id: str = ""
    restaurant: str = ""
    status: str = ""
    placed_at: datetime | None = None  # None when the upstream date is unparseable
    total: str = ""                    # Raw price text, e.g. "₹150"
    items: list[OrderItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "restaurant": self.restaurant,
            "status": self.status,
            "placed_at": self.placed_at.isoformat() if self.placed_at else None,
            "total": self.total,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Order:
        raw_placed = data.get("placed_at")
        placed_at = datetime.fromisoformat(raw_placed) if raw_placed else None
        return cls(
            id=str(data.get("id", "")),
            restaurant=data.get("restaurant", ""),
            status=data.get("status", ""),
            placed_at=placed_at,
            total=data.get("total", ""),
            items=[OrderItem.from_dict(i) for i in data.get("items") or []],
        )
