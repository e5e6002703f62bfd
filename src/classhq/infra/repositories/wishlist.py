"""Planned-expense (wishlist) repository."""

from __future__ import annotations

from typing import Optional
from uuid import uuid4

from ...domain.repositories.store import KeyValueStore
from ...logging_config import get_logger
from ...models.planned_expense import PlannedExpense

PLANNED_EXPENSES_KEY = "planned_expenses"

logger = get_logger("wishlist")


class StoreWishlistRepository:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def list_planned(self) -> list[PlannedExpense]:
        """Return planned expenses in creation order (default: empty list)."""
        records = self.store.read(PLANNED_EXPENSES_KEY, [])
        if not isinstance(records, list):
            logger.warning("Ignoring malformed wishlist record")
            return []
        plans: list[PlannedExpense] = []
        for record in records:
            try:
                plans.append(PlannedExpense.from_record(record))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping unreadable wishlist item", extra={"record": record})
        return plans

    def get_planned(self, planned_id: str) -> Optional[PlannedExpense]:
        return next((p for p in self.list_planned() if p.id == planned_id), None)

    def add_planned_expense(
        self,
        item: str,
        estimated_cost: float,
        priority: str = "Medium",
        notes: str | None = None,
    ) -> PlannedExpense:
        plan = PlannedExpense(
            id=uuid4().hex,
            item=item,
            estimated_cost=estimated_cost,
            priority=priority,
            notes=notes,
        )
        existing = self.list_planned()
        self.store.write(PLANNED_EXPENSES_KEY, [p.to_record() for p in [*existing, plan]])
        logger.info("Wishlist item added", extra={"planned_id": plan.id, "item": item})
        return plan

    def delete_planned_expense(self, planned_id: str) -> None:
        existing = self.list_planned()
        remaining = [p for p in existing if p.id != planned_id]
        if len(remaining) != len(existing):
            self.store.write(PLANNED_EXPENSES_KEY, [p.to_record() for p in remaining])


__all__ = ["PLANNED_EXPENSES_KEY", "StoreWishlistRepository"]
