"""Ledger grid export (students x collection dates) via pandas."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd

from ..models.settings import Settings
from ..models.student import Student


def ledger_frame(
    students: Sequence[Student],
    *,
    settings: Settings | None = None,
    dates: Iterable[str] | None = None,
) -> pd.DataFrame:
    """Return a frame with one row per student and one column per date.

    Columns default to every date that is flagged in settings or carries a
    payment, in calendar order. Unrecorded cells are empty; a ``Total``
    column sums each row.
    """

    if dates is None:
        found: set[str] = set()
        if settings is not None:
            found.update(settings.collection_days.keys())
        for student in students:
            found.update(student.payments.keys())
        columns = sorted(found)
    else:
        columns = list(dates)

    rows = [
        {"Name": s.name, "Gender": s.gender, **{d: s.payments.get(d) for d in columns}}
        for s in students
    ]
    frame = pd.DataFrame(rows, columns=["Name", "Gender", *columns])
    if columns:
        amounts = frame[columns].apply(pd.to_numeric, errors="coerce").fillna(0)
        frame["Total"] = amounts.sum(axis=1)
    else:
        frame["Total"] = 0.0
    return frame


def export_ledger_csv(
    *,
    students: Sequence[Student],
    settings: Settings | None,
    output_path: Path,
) -> Path:
    """Write the ledger grid to ``output_path`` and return it."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    ledger_frame(students, settings=settings).to_csv(output_path, index=False, encoding="utf-8")
    return output_path
