"""Input validation for funds endpoints.

Everything numeric or date-shaped is checked here so the services only ever
see finite numbers, non-empty strings and ``YYYY-MM-DD`` keys.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ...models.planned_expense import PRIORITIES
from ...services.ledger import parse_calendar_date

DEFAULT_EXPENSE_CATEGORY = "General"


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value).strip()


def parse_amount(raw: Any) -> Optional[float]:
    """Return a finite float, or ``None`` for blank/non-numeric input."""

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def is_calendar_date(value: str) -> bool:
    try:
        parse_calendar_date(value)
    except ValueError:
        return False
    return True


@dataclass
class _Form:
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)

    def _add_error(self, name: str, message: str) -> None:
        self.errors.setdefault(name, []).append(message)


@dataclass(slots=True)
class StudentForm(_Form):
    name: str = ""
    gender: str = "M"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StudentForm":
        return cls(name=_text(data, "name"), gender=_text(data, "gender").upper() or "M")

    def validate(self) -> bool:
        self.errors.clear()
        if not self.name:
            self._add_error("name", "Name is required.")
        if self.gender not in ("M", "F"):
            self._add_error("gender", "Gender must be M or F.")
        return not self.errors


@dataclass(slots=True)
class AmountForm(_Form):
    """A single non-negative amount (payments, quotas)."""

    raw: Any = None
    amount: Optional[float] = None
    allow_negative: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, allow_negative: bool = False) -> "AmountForm":
        return cls(raw=data.get("amount"), allow_negative=allow_negative)

    def validate(self) -> bool:
        self.errors.clear()
        self.amount = parse_amount(self.raw)
        if self.amount is None:
            self._add_error("amount", "Enter a valid number for the amount.")
        elif self.amount < 0 and not self.allow_negative:
            self._add_error("amount", "Amount cannot be negative.")
        return not self.errors


@dataclass(slots=True)
class ExpenseForm(_Form):
    raw_amount: Any = None
    description: str = ""
    category: str = DEFAULT_EXPENSE_CATEGORY
    amount: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ExpenseForm":
        return cls(
            raw_amount=data.get("amount"),
            description=_text(data, "description"),
            category=_text(data, "category") or DEFAULT_EXPENSE_CATEGORY,
        )

    def validate(self) -> bool:
        self.errors.clear()
        self.amount = parse_amount(self.raw_amount)
        if self.amount is None:
            self._add_error("amount", "Enter a valid number for the amount.")
        elif self.amount <= 0:
            self._add_error("amount", "Amount must be greater than zero.")
        if not self.description:
            self._add_error("description", "Description is required.")
        return not self.errors


@dataclass(slots=True)
class PlannedExpenseForm(_Form):
    item: str = ""
    raw_cost: Any = None
    priority: str = "Medium"
    notes: Optional[str] = None
    estimated_cost: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PlannedExpenseForm":
        return cls(
            item=_text(data, "item"),
            raw_cost=data.get("estimatedCost", data.get("estimated_cost")),
            priority=_text(data, "priority").capitalize() or "Medium",
            notes=_text(data, "notes") or None,
        )

    def validate(self) -> bool:
        self.errors.clear()
        if not self.item:
            self._add_error("item", "Item is required.")
        self.estimated_cost = parse_amount(self.raw_cost)
        if self.estimated_cost is None:
            self._add_error("estimatedCost", "Enter a valid number for the cost.")
        elif self.estimated_cost < 0:
            self._add_error("estimatedCost", "Cost cannot be negative.")
        if self.priority not in PRIORITIES:
            self._add_error("priority", "Priority must be High, Medium or Low.")
        return not self.errors
