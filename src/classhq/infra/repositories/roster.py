"""Roster repository: students and their payment maps."""

from __future__ import annotations

import re
from typing import Iterable, Optional
from uuid import uuid4

from ...domain.repositories.store import KeyValueStore
from ...logging_config import get_logger
from ...models.student import Gender, Student

STUDENTS_KEY = "students"

logger = get_logger("roster")

_LINE_SPLIT = re.compile(r"\r?\n|\r")


def new_student_id() -> str:
    return uuid4().hex


def parse_roster_line(line: str) -> tuple[str, Gender]:
    """Split an import line into ``(name, gender)``.

    ``"F Name"``/``"F,Name"`` is female and ``"M Name"``/``"M,Name"`` male;
    the marker and any commas in the rest of the line are dropped. Unmarked
    lines keep their text and default to male.
    """

    head = line[:2].upper()
    if head in ("F ", "F,", "M ", "M,"):
        gender: Gender = "F" if head[0] == "F" else "M"
        return line[2:].replace(",", "").strip(), gender
    return line, "M"


def parse_roster_text(text: str) -> list[tuple[str, Gender]]:
    lines = (line.strip() for line in _LINE_SPLIT.split(text or ""))
    return [parse_roster_line(line) for line in lines if line]


class StoreRosterRepository:
    """Ordered student list persisted wholesale on every mutation."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def list_students(self) -> list[Student]:
        """Return students in insertion order (default: empty roster)."""
        records = self.store.read(STUDENTS_KEY, [])
        if not isinstance(records, list):
            logger.warning("Ignoring malformed roster record")
            return []
        students: list[Student] = []
        for record in records:
            try:
                students.append(Student.from_record(record))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping unreadable student record", extra={"record": record})
        return students

    def save_students(self, students: Iterable[Student]) -> None:
        self.store.write(STUDENTS_KEY, [s.to_record() for s in students])

    def get_student(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.list_students() if s.id == student_id), None)

    def add_student(self, name: str, gender: Gender = "M") -> Student:
        return self.add_many([(name, gender)])[0]

    def add_many(self, entries: Iterable[tuple[str, Gender]]) -> list[Student]:
        """Append new students with empty payment maps, preserving order."""
        created = [
            Student(id=new_student_id(), name=name, gender=gender, payments={})
            for name, gender in entries
        ]
        if not created:
            return []
        self.save_students([*self.list_students(), *created])
        logger.info("Students added", extra={"count": len(created)})
        return created

    def delete_student(self, student_id: str) -> None:
        students = self.list_students()
        remaining = [s for s in students if s.id != student_id]
        if len(remaining) != len(students):
            self.save_students(remaining)
            logger.info("Student deleted", extra={"student_id": student_id})

    def rename_student(self, student_id: str, name: str) -> Optional[Student]:
        students = self.list_students()
        target = next((s for s in students if s.id == student_id), None)
        if target is None:
            return None
        target.name = name
        self.save_students(students)
        return target

    def import_from_text(self, text: str) -> int:
        """Append one student per non-blank line; returns the number created."""
        return len(self.add_many(parse_roster_text(text)))

    def record_payment(self, student_id: str, day: str, amount: float) -> Optional[Student]:
        """Set (not add to) the amount paid on ``day``; unknown ids are ignored."""
        return self.record_payments({student_id: amount}, day).get(student_id)

    def record_payments(self, amounts: dict[str, float], day: str) -> dict[str, Student]:
        """Set ``payments[day]`` for several students in one write."""
        students = self.list_students()
        updated: dict[str, Student] = {}
        for student in students:
            if student.id in amounts:
                student.payments[day] = amounts[student.id]
                updated[student.id] = student
        if updated:
            self.save_students(students)
        return updated


__all__ = [
    "STUDENTS_KEY",
    "StoreRosterRepository",
    "parse_roster_line",
    "parse_roster_text",
]
