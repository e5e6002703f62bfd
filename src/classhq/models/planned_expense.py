"""Wishlist items: purchases budgeted but not yet made."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .fields import number_or, text_or

PRIORITIES = ("High", "Medium", "Low")


@dataclass
class PlannedExpense:
    id: str
    item: str
    estimated_cost: float
    priority: str = "Medium"
    notes: Optional[str] = None

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": self.id,
            "item": self.item,
            "estimatedCost": self.estimated_cost,
            "priority": self.priority,
        }
        if self.notes:
            record["notes"] = self.notes
        return record

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "PlannedExpense":
        return cls(
            id=str(record["id"]),
            item=text_or(record.get("item")),
            estimated_cost=number_or(record.get("estimatedCost"), 0),
            priority=text_or(record.get("priority"), "Medium"),
            notes=text_or(record.get("notes")) or None,
        )
