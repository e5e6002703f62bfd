"""Funds operations that combine ledger decisions with store writes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..infra.repositories.expenses import StoreExpenseRepository
from ..infra.repositories.roster import StoreRosterRepository
from ..infra.repositories.settings import StoreSettingsRepository
from ..infra.repositories.wishlist import StoreWishlistRepository
from ..logging_config import get_logger
from ..models.student import Student
from ..models.transaction import Transaction
from . import ledger

WISHLIST_CATEGORY = "Materials"

logger = get_logger("funds")


def toggle_payment(
    *,
    settings_repo: StoreSettingsRepository,
    roster_repo: StoreRosterRepository,
    student_id: str,
    day: str,
) -> Optional[Student]:
    """Flip a student between paid-in-full and unpaid for ``day``.

    Returns the updated student, or ``None`` when the day is inactive or the
    student no longer exists.
    """

    settings = settings_repo.get_settings()
    student = roster_repo.get_student(student_id)
    if student is None:
        return None
    amount = ledger.toggled_amount(settings, student, day)
    if amount is None:
        logger.info("Toggle ignored on inactive day", extra={"day": day, "student_id": student_id})
        return None
    return roster_repo.record_payment(student_id, day, amount)


def bulk_mark(
    *,
    settings_repo: StoreSettingsRepository,
    roster_repo: StoreRosterRepository,
    day: str,
    paid: bool,
) -> int:
    """Set every student's payment for ``day`` to the quota or to 0.

    Returns the number of students touched; 0 when the day is inactive.
    """

    settings = settings_repo.get_settings()
    amount = ledger.bulk_mark_amount(settings, day, paid)
    if amount is None:
        logger.info("Bulk mark ignored on inactive day", extra={"day": day})
        return 0
    students = roster_repo.list_students()
    updated = roster_repo.record_payments({s.id: amount for s in students}, day)
    logger.info("Bulk mark applied", extra={"day": day, "paid": paid, "count": len(updated)})
    return len(updated)


def convert_to_expense(
    *,
    wishlist_repo: StoreWishlistRepository,
    expense_repo: StoreExpenseRepository,
    planned_id: str,
) -> Optional[Transaction]:
    """Buy a wishlist item: record it as an expense, then drop it from the list.

    The expense is persisted first; if that write raises, the planned item
    stays where it is and the error propagates.
    """

    plan = wishlist_repo.get_planned(planned_id)
    if plan is None:
        return None
    txn = expense_repo.record_expense(plan.estimated_cost, plan.item, WISHLIST_CATEGORY)
    wishlist_repo.delete_planned_expense(plan.id)
    logger.info(
        "Wishlist item converted",
        extra={"planned_id": plan.id, "transaction_id": txn.id, "amount": txn.amount},
    )
    return txn


def load_summary(
    *,
    settings_repo: StoreSettingsRepository,
    roster_repo: StoreRosterRepository,
    expense_repo: StoreExpenseRepository,
    wishlist_repo: StoreWishlistRepository,
    today: str | None = None,
) -> ledger.FundsSummary:
    return ledger.compute_financials(
        settings=settings_repo.get_settings(),
        students=roster_repo.list_students(),
        transactions=expense_repo.list_expenses(),
        planned=wishlist_repo.list_planned(),
        today=today,
    )


@dataclass(slots=True)
class LedgerRow:
    """One student's line in the week grid."""

    student_id: str
    name: str
    gender: str
    amounts: dict[str, Optional[float]]
    week_total: float


def week_ledger(
    *,
    settings_repo: StoreSettingsRepository,
    roster_repo: StoreRosterRepository,
    day: str,
) -> dict:
    """Build the Monday..Friday payment grid around ``day``."""

    settings = settings_repo.get_settings()
    days = ledger.week_days(day)
    rows = [
        LedgerRow(
            student_id=s.id,
            name=s.name,
            gender=s.gender,
            amounts={d: s.payments.get(d) for d in days},
            week_total=ledger.weekly_total(s, days),
        )
        for s in roster_repo.list_students()
    ]
    return {
        "days": [
            {
                "date": d,
                "active": ledger.is_collection_active(settings, d),
                "quota": ledger.effective_quota(settings, d),
            }
            for d in days
        ],
        "rows": rows,
    }
