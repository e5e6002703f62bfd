"""Recorded class-fund expenses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .fields import number_or, text_or

EXPENSE = "EXPENSE"
INCOME = "INCOME"
STATUS_PAID = "PAID"
STATUS_PENDING = "PENDING"


@dataclass
class Transaction:
    """An append-only expense record; never edited after creation."""

    id: str
    amount: float
    date: str  # ISO timestamp of creation
    description: str
    category: str = ""
    type: str = EXPENSE
    status: str = STATUS_PAID

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "amount": self.amount,
            "date": self.date,
            "description": self.description,
            "category": self.category,
            "type": self.type,
            "status": self.status,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Transaction":
        return cls(
            id=str(record["id"]),
            amount=number_or(record.get("amount"), 0),
            date=text_or(record.get("date")),
            description=text_or(record.get("description")),
            category=text_or(record.get("category")),
            type=text_or(record.get("type"), EXPENSE),
            status=text_or(record.get("status")) or STATUS_PAID,
        )
