"""Expense ledger repository (append/delete only)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import uuid4

from ...domain.repositories.store import KeyValueStore
from ...logging_config import get_logger
from ...models.transaction import EXPENSE, STATUS_PAID, Transaction

TRANSACTIONS_KEY = "transactions"

logger = get_logger("expenses")


class StoreExpenseRepository:
    """Recorded expenses kept in creation order."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def list_expenses(self) -> list[Transaction]:
        """Return all transactions (default: empty list)."""
        records = self.store.read(TRANSACTIONS_KEY, [])
        if not isinstance(records, list):
            logger.warning("Ignoring malformed transactions record")
            return []
        transactions: list[Transaction] = []
        for record in records:
            try:
                transactions.append(Transaction.from_record(record))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping unreadable transaction", extra={"record": record})
        return transactions

    def get_expense(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self.list_expenses() if t.id == transaction_id), None)

    def record_expense(
        self,
        amount: float,
        description: str,
        category: str,
        *,
        occurred_at: datetime | None = None,
    ) -> Transaction:
        """Append a paid expense stamped with the creation time."""
        txn = Transaction(
            id=uuid4().hex,
            amount=amount,
            date=(occurred_at or datetime.now()).isoformat(),
            description=description,
            category=category,
            type=EXPENSE,
            status=STATUS_PAID,
        )
        existing = self.list_expenses()
        self.store.write(TRANSACTIONS_KEY, [t.to_record() for t in [*existing, txn]])
        logger.info(
            "Expense recorded",
            extra={"transaction_id": txn.id, "amount": amount, "category": category},
        )
        return txn

    def delete_expense(self, transaction_id: str) -> None:
        existing = self.list_expenses()
        remaining = [t for t in existing if t.id != transaction_id]
        if len(remaining) != len(existing):
            self.store.write(TRANSACTIONS_KEY, [t.to_record() for t in remaining])
            logger.info("Expense deleted", extra={"transaction_id": transaction_id})


__all__ = ["TRANSACTIONS_KEY", "StoreExpenseRepository"]
