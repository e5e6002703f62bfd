"""Ledger engine: quotas, debts and fund aggregates.

Everything here is a pure function of the Settings, roster, expense and
wishlist snapshots handed in. Nothing reads the store or mutates its inputs;
the funds service applies the decisions computed here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..models.planned_expense import PlannedExpense
from ..models.settings import Settings
from ..models.student import Student
from ..models.transaction import Transaction

OTHER_CATEGORY = "Other"


# Calendar helpers ---------------------------------------------------------


def to_calendar_date(value: date | datetime) -> str:
    """Normalize a date or local datetime to a ``YYYY-MM-DD`` key."""

    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def today_key() -> str:
    return to_calendar_date(date.today())


def parse_calendar_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` key; raises ``ValueError`` for anything else."""

    return datetime.strptime(value, "%Y-%m-%d").date()


def week_days(day: str) -> list[str]:
    """Return Monday..Friday of the school week containing ``day``.

    Sunday is grouped with the week that ends on it.
    """

    current = parse_calendar_date(day)
    monday = current - timedelta(days=current.weekday())
    return [to_calendar_date(monday + timedelta(days=offset)) for offset in range(5)]


# Quotas ---------------------------------------------------------------------


def is_collection_active(settings: Settings, day: str) -> bool:
    return settings.collection_days.get(day) is True


def effective_quota(settings: Settings, day: str) -> float:
    """Override for ``day`` if set, else the daily quota; 0 on inactive days."""

    if not is_collection_active(settings, day):
        return 0
    override = settings.custom_quotas.get(day)
    return settings.daily_quota if override is None else override


def is_fully_paid(settings: Settings, student: Student, day: str) -> bool:
    return student.paid_on(day) >= effective_quota(settings, day)


def toggled_amount(settings: Settings, student: Student, day: str) -> Optional[float]:
    """Amount a "tap to mark paid" toggle should store, or ``None`` to no-op.

    A student already at or above the quota drops to 0, anyone else is raised
    to exactly the quota. Inactive days never produce a payment.
    """

    if not is_collection_active(settings, day):
        return None
    quota = effective_quota(settings, day)
    return 0 if student.paid_on(day) >= quota else quota


def bulk_mark_amount(settings: Settings, day: str, paid: bool) -> Optional[float]:
    """Amount every student gets from a bulk mark, or ``None`` on inactive days."""

    if not is_collection_active(settings, day):
        return None
    return effective_quota(settings, day) if paid else 0


# Debts ----------------------------------------------------------------------


def active_collection_dates(settings: Settings, today: str) -> list[str]:
    """Active dates up to and including ``today``, in calendar order."""

    return sorted(
        day
        for day, active in settings.collection_days.items()
        if active is True and day <= today
    )


@dataclass(slots=True)
class StudentDebt:
    """Owed/paid totals for one student over the active collection dates."""

    student_id: str
    name: str
    gender: str
    owed: float
    paid: float

    @property
    def debt(self) -> float:
        return max(0, self.owed - self.paid)


def student_debt(settings: Settings, student: Student, active_dates: Iterable[str]) -> StudentDebt:
    owed = 0.0
    paid = 0.0
    for day in active_dates:
        owed += effective_quota(settings, day)
        paid += student.paid_on(day)
    return StudentDebt(
        student_id=student.id,
        name=student.name,
        gender=student.gender,
        owed=owed,
        paid=paid,
    )


def debtors(
    settings: Settings,
    students: Sequence[Student],
    *,
    today: str | None = None,
) -> list[StudentDebt]:
    """Students with outstanding debt, largest first.

    ``today`` is resolved once for the whole pass; ``sorted`` is stable so
    equal debts keep roster order.
    """

    active_dates = active_collection_dates(settings, today or today_key())
    rows = [student_debt(settings, s, active_dates) for s in students]
    owing = [row for row in rows if row.debt > 0]
    return sorted(owing, key=lambda row: row.debt, reverse=True)


def total_debt(rows: Iterable[StudentDebt]) -> float:
    return sum((row.debt for row in rows), 0.0)


# Aggregates -------------------------------------------------------------------


def total_income(students: Iterable[Student]) -> float:
    """Every payment ever recorded, whether or not its date is still active."""

    return sum((amount or 0 for s in students for amount in s.payments.values()), 0.0)


def total_expenses(transactions: Iterable[Transaction]) -> float:
    return sum((t.amount for t in transactions), 0.0)


def category_breakdown(transactions: Iterable[Transaction]) -> dict[str, float]:
    """Sum expenses per category in first-seen order; blanks fold into "Other"."""

    totals: dict[str, float] = {}
    for txn in transactions:
        name = txn.category or OTHER_CATEGORY
        totals[name] = totals.get(name, 0.0) + txn.amount
    return totals


def wishlist_total(planned: Iterable[PlannedExpense]) -> float:
    return sum((p.estimated_cost for p in planned), 0.0)


def weekly_total(student: Student, days: Iterable[str]) -> float:
    return sum((student.paid_on(day) for day in days), 0.0)


@dataclass(slots=True)
class FundsSummary:
    """Everything the funds dashboard shows, derived in one pass."""

    total_income: float
    total_expenses: float
    debtors: list[StudentDebt] = field(default_factory=list)
    total_debt: float = 0.0
    wishlist_total: float = 0.0
    categories: dict[str, float] = field(default_factory=dict)
    currency_symbol: str = ""

    @property
    def balance(self) -> float:
        return self.total_income - self.total_expenses


def compute_financials(
    *,
    settings: Settings,
    students: Sequence[Student],
    transactions: Sequence[Transaction],
    planned: Sequence[PlannedExpense] = (),
    today: str | None = None,
) -> FundsSummary:
    owing = debtors(settings, students, today=today or today_key())
    return FundsSummary(
        total_income=total_income(students),
        total_expenses=total_expenses(transactions),
        debtors=owing,
        total_debt=total_debt(owing),
        wishlist_total=wishlist_total(planned),
        categories=category_breakdown(transactions),
        currency_symbol=settings.currency_symbol,
    )
