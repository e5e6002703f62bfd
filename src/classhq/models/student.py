"""Roster entries and their per-date payment map."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from .fields import amount_map, text_or

Gender = Literal["M", "F"]


@dataclass
class Student:
    """A student with a sparse ``date -> amount paid`` ledger.

    A missing date means nothing was ever recorded; ``0`` is a recorded
    "unpaid" entry and is kept distinct.
    """

    id: str
    name: str
    gender: Gender = "M"
    payments: dict[str, float] = field(default_factory=dict)

    def paid_on(self, day: str) -> float:
        return self.payments.get(day) or 0

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "gender": self.gender,
            "payments": dict(self.payments),
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Student":
        gender = "F" if str(record.get("gender", "M")).upper() == "F" else "M"
        return cls(
            id=str(record["id"]),
            name=text_or(record.get("name")),
            gender=gender,
            payments=amount_map(record.get("payments")),
        )
