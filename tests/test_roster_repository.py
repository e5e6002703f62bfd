"""Roster repository and text import tests."""

from __future__ import annotations

import pytest

from classhq.infra.repositories.roster import STUDENTS_KEY, parse_roster_line, parse_roster_text


@pytest.mark.parametrize(
    "line,expected",
    [
        ("F Beth", ("Beth", "F")),
        ("f,Beth", ("Beth", "F")),
        ("M Carl", ("Carl", "M")),
        ("M,Cruz, Daniel", ("Cruz Daniel", "M")),
        ("Alice", ("Alice", "M")),
        ("Fiona", ("Fiona", "M")),
        ("Cruz, Daniel", ("Cruz, Daniel", "M")),
    ],
)
def test_parse_roster_line(line, expected):
    assert parse_roster_line(line) == expected


def test_parse_roster_text_skips_blank_lines():
    assert parse_roster_text("Alice\nF Beth\nM Carl\n\n") == [
        ("Alice", "M"),
        ("Beth", "F"),
        ("Carl", "M"),
    ]


def test_parse_roster_text_handles_crlf_and_cr():
    assert parse_roster_text("Alice\r\nF Beth\rM Carl\r\n   \r\n") == [
        ("Alice", "M"),
        ("Beth", "F"),
        ("Carl", "M"),
    ]


def test_import_appends_in_order(roster_repo):
    roster_repo.add_student("Existing", "F")

    created = roster_repo.import_from_text("Alice\nF Beth\nM Carl\n\n")

    students = roster_repo.list_students()
    assert created == 3
    assert [s.name for s in students] == ["Existing", "Alice", "Beth", "Carl"]
    assert [s.gender for s in students] == ["F", "M", "F", "M"]
    assert all(s.payments == {} for s in students)
    assert len({s.id for s in students}) == 4


def test_import_of_empty_text_creates_nothing(roster_repo):
    assert roster_repo.import_from_text("\n\n  \n") == 0
    assert roster_repo.list_students() == []


def test_record_payment_sets_rather_than_adds(roster_repo):
    student = roster_repo.add_student("Alice")

    roster_repo.record_payment(student.id, "2024-01-08", 5)
    roster_repo.record_payment(student.id, "2024-01-08", 3)

    assert roster_repo.get_student(student.id).payments == {"2024-01-08": 3}


def test_zero_payment_is_kept_distinct_from_absent(roster_repo):
    student = roster_repo.add_student("Alice")

    roster_repo.record_payment(student.id, "2024-01-08", 0)

    payments = roster_repo.get_student(student.id).payments
    assert "2024-01-08" in payments
    assert payments["2024-01-08"] == 0
    assert "2024-01-09" not in payments


def test_record_payment_for_unknown_student_is_ignored(roster_repo, store):
    roster_repo.add_student("Alice")
    before = store.read(STUDENTS_KEY, [])

    assert roster_repo.record_payment("missing", "2024-01-08", 5) is None
    assert store.read(STUDENTS_KEY, []) == before


def test_delete_student_removes_payments(roster_repo):
    keep = roster_repo.add_student("Keep")
    gone = roster_repo.add_student("Gone")
    roster_repo.record_payment(gone.id, "2024-01-08", 5)

    roster_repo.delete_student(gone.id)
    roster_repo.delete_student("missing")

    assert [s.id for s in roster_repo.list_students()] == [keep.id]


def test_rename_student(roster_repo):
    student = roster_repo.add_student("Alise")

    assert roster_repo.rename_student(student.id, "Alice").name == "Alice"
    assert roster_repo.get_student(student.id).name == "Alice"
    assert roster_repo.rename_student("missing", "Nobody") is None


def test_unreadable_records_are_skipped(roster_repo, store):
    store.write(STUDENTS_KEY, [{"name": "no id"}, {"id": "ok", "name": "Alice", "gender": "f"}])

    students = roster_repo.list_students()

    assert [(s.id, s.gender) for s in students] == [("ok", "F")]


def test_record_payments_updates_several_students(roster_repo):
    a = roster_repo.add_student("A")
    b = roster_repo.add_student("B")
    c = roster_repo.add_student("C")

    updated = roster_repo.record_payments({a.id: 5, c.id: 5, "ghost": 5}, "2024-01-08")

    assert set(updated) == {a.id, c.id}
    assert roster_repo.get_student(b.id).payments == {}


def test_malformed_payment_maps_are_sanitized(roster_repo, store):
    store.write(
        STUDENTS_KEY,
        [
            {"id": "a", "name": "Alice", "payments": "abc"},
            {"id": "b", "name": 42, "payments": {"2024-01-08": None, "2024-01-09": 5, "2024-01-10": "5"}},
            "not a record",
        ],
    )

    students = roster_repo.list_students()

    assert [s.id for s in students] == ["a", "b"]
    assert students[0].payments == {}
    assert students[1].name == ""
    assert students[1].payments == {"2024-01-09": 5}
