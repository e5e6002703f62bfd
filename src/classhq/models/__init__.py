"""Store table and domain record exports."""

from .bulletin import AgendaItem, Announcement
from .planned_expense import PlannedExpense
from .settings import Settings
from .store import StoreEntry
from .student import Student
from .transaction import Transaction
from .user import User

__all__ = [
    "AgendaItem",
    "Announcement",
    "PlannedExpense",
    "Settings",
    "StoreEntry",
    "Student",
    "Transaction",
    "User",
]
