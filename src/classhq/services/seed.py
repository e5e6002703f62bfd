"""Default and demo data seeding."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from ..context import AppContext
from ..logging_config import get_logger
from . import ledger

logger = get_logger("seed")

DEMO_ROSTER = (
    ("Alvarez, Marco", "M"),
    ("Bautista, Leo", "M"),
    ("Cruz, Daniel", "M"),
    ("Dizon, Paolo", "M"),
    ("Estrada, Ana", "F"),
    ("Fernandez, Bea", "F"),
    ("Garcia, Carla", "F"),
    ("Hernandez, Joy", "F"),
)

DEMO_EXPENSES = (
    (120.0, "Manila paper and markers", "Materials"),
    (45.0, "Photocopies for review", "Printing"),
    (80.0, "Snacks for class meeting", "Food"),
)

DEMO_WISHLIST = (
    ("Classroom electric fan", 1500.0, "High"),
    ("Bulletin board border", 150.0, "Low"),
)


@dataclass(slots=True)
class SeedSummary:
    students: int = 0
    collection_days: int = 0
    expenses: int = 0
    planned: int = 0
    announcements: int = 0
    agenda: int = 0


def run_demo_seed(ctx: AppContext, *, today: date | None = None) -> SeedSummary:
    """Populate an empty store with a sample class.

    Idempotent: does nothing when a roster already exists.
    """

    summary = SeedSummary()
    if ctx.roster_repo.list_students():
        logger.info("Demo seed skipped; roster already present")
        return summary

    today = today or date.today()
    students = ctx.roster_repo.add_many(DEMO_ROSTER)
    summary.students = len(students)

    # Last week's school days are collection days; most students paid.
    monday = today - timedelta(days=today.weekday() + 7)
    settings = ctx.settings_repo.get_settings()
    for offset in range(5):
        day = ledger.to_calendar_date(monday + timedelta(days=offset))
        settings.collection_days[day] = True
        summary.collection_days += 1
    ctx.settings_repo.save_settings(settings)

    for index, day in enumerate(sorted(settings.collection_days)):
        quota = ledger.effective_quota(settings, day)
        payers = [s.id for i, s in enumerate(students) if (i + index) % 4 != 0]
        ctx.roster_repo.record_payments({sid: quota for sid in payers}, day)

    for amount, description, category in DEMO_EXPENSES:
        ctx.expense_repo.record_expense(amount, description, category)
        summary.expenses += 1
    for item, cost, priority in DEMO_WISHLIST:
        ctx.wishlist_repo.add_planned_expense(item, cost, priority)
        summary.planned += 1

    ctx.bulletin_repo.post_announcement(
        "Class Tee Design Submission",
        "Submit your designs by Friday!",
        "Secretary",
    )
    ctx.bulletin_repo.post_announcement(
        "Final Exam Schedule Posted",
        "Please check the agenda for the upcoming math and science final exams.",
        "President",
        is_important=True,
    )
    summary.announcements = 2

    agenda_seed = (
        ("History Essay Due", today + timedelta(days=3), "23:59", "HOMEWORK"),
        ("Math Final", today + timedelta(days=7), "09:00", "EXAM"),
        ("Class Potluck", today + timedelta(days=12), "12:00", "EVENT"),
    )
    for title, when, time, item_type in agenda_seed:
        ctx.bulletin_repo.add_agenda_item(title, ledger.to_calendar_date(when), time, item_type)
        summary.agenda += 1

    logger.info("Demo seed completed", extra={"students": summary.students})
    return summary
