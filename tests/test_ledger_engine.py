"""Ledger engine tests: quotas, toggles, debts and aggregates."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from classhq.models.planned_expense import PlannedExpense
from classhq.models.transaction import Transaction
from classhq.services import ledger
from tests.conftest import assert_float_equal, make_settings

DAY = "2024-01-08"


def _expense(amount: float, category: str = "", txn_id: str = "t") -> Transaction:
    return Transaction(id=txn_id, amount=amount, date="2024-01-08T10:00:00", description="x", category=category)


class TestQuotas:
    def test_inactive_dates_have_zero_quota(self):
        settings = make_settings(daily_quota=5, inactive=("2024-01-09",), custom={"2024-01-09": 20})

        assert ledger.effective_quota(settings, "2024-01-09") == 0
        assert ledger.effective_quota(settings, "2024-01-10") == 0  # absent == inactive

    def test_active_date_uses_default_or_override(self):
        settings = make_settings(daily_quota=5, active=(DAY, "2024-01-09"), custom={"2024-01-09": 12})

        assert ledger.effective_quota(settings, DAY) == 5
        assert ledger.effective_quota(settings, "2024-01-09") == 12

    def test_zero_override_is_respected(self):
        settings = make_settings(daily_quota=5, active=(DAY,), custom={DAY: 0})

        assert ledger.effective_quota(settings, DAY) == 0

    def test_only_literal_true_counts_as_active(self):
        settings = make_settings()
        settings.collection_days[DAY] = "yes"  # type: ignore[assignment]

        assert ledger.is_collection_active(settings, DAY) is False


class TestToggle:
    def test_toggle_unpaid_sets_quota(self, student_factory):
        settings = make_settings(active=(DAY,))
        student = student_factory()

        assert ledger.toggled_amount(settings, student, DAY) == 5

    def test_toggle_paid_resets_to_zero(self, student_factory):
        settings = make_settings(active=(DAY,))
        student = student_factory(payments={DAY: 7})

        assert ledger.toggled_amount(settings, student, DAY) == 0

    def test_partial_payment_toggles_up_to_quota(self, student_factory):
        settings = make_settings(active=(DAY,))
        student = student_factory(payments={DAY: 2})

        assert ledger.toggled_amount(settings, student, DAY) == 5

    def test_toggle_is_noop_on_inactive_day(self, student_factory):
        settings = make_settings(inactive=(DAY,))

        assert ledger.toggled_amount(settings, student_factory(), DAY) is None
        assert ledger.bulk_mark_amount(settings, DAY, True) is None
        assert ledger.bulk_mark_amount(settings, "2030-01-01", False) is None

    @pytest.mark.parametrize("start", [None, 0, 5])
    def test_double_toggle_returns_to_original(self, student_factory, start):
        settings = make_settings(active=(DAY,))
        payments = {} if start is None else {DAY: start}
        student = student_factory(payments=payments)
        original = student.paid_on(DAY)

        for _ in range(2):
            student.payments[DAY] = ledger.toggled_amount(settings, student, DAY)

        assert student.paid_on(DAY) == original

    def test_bulk_mark_amounts(self):
        settings = make_settings(active=(DAY,), custom={DAY: 10})

        assert ledger.bulk_mark_amount(settings, DAY, True) == 10
        assert ledger.bulk_mark_amount(settings, DAY, False) == 0


class TestDebts:
    def test_active_dates_exclude_future_and_inactive(self):
        settings = make_settings(
            active=("2024-01-08", "2024-01-09", "2024-01-12"),
            inactive=("2024-01-10",),
        )

        assert ledger.active_collection_dates(settings, "2024-01-10") == ["2024-01-08", "2024-01-09"]

    def test_today_is_included(self):
        settings = make_settings(active=("2024-01-10",))

        assert ledger.active_collection_dates(settings, "2024-01-10") == ["2024-01-10"]

    def test_debtors_sorted_descending_with_stable_ties(self, student_factory):
        settings = make_settings(daily_quota=5, active=("2024-01-08", "2024-01-09"))
        full = student_factory("Full", payments={"2024-01-08": 5, "2024-01-09": 5})
        owes_five_a = student_factory("A", payments={"2024-01-08": 5})
        owes_ten = student_factory("Ten")
        owes_five_b = student_factory("B", payments={"2024-01-09": 5})

        rows = ledger.debtors(settings, [full, owes_five_a, owes_ten, owes_five_b], today="2024-01-31")

        assert [r.name for r in rows] == ["Ten", "A", "B"]
        assert [r.debt for r in rows] == [10, 5, 5]

    def test_overpayment_never_produces_negative_debt(self, student_factory):
        settings = make_settings(daily_quota=5, active=(DAY,))
        student = student_factory(payments={DAY: 50})
        row = ledger.student_debt(settings, student, [DAY])

        assert row.debt == 0
        assert ledger.debtors(settings, [student], today=DAY) == []

    def test_future_active_dates_do_not_accrue(self, student_factory):
        settings = make_settings(active=("2099-01-01",))

        assert ledger.debtors(settings, [student_factory()], today="2024-01-01") == []

    def test_custom_quota_counts_toward_owed(self, student_factory):
        settings = make_settings(daily_quota=5, active=(DAY, "2024-01-09"), custom={"2024-01-09": 20})
        row = ledger.student_debt(settings, student_factory(payments={DAY: 5}), [DAY, "2024-01-09"])

        assert row.owed == 25
        assert row.paid == 5
        assert row.debt == 20

    def test_total_debt(self, student_factory):
        settings = make_settings(active=(DAY,))
        rows = ledger.debtors(settings, [student_factory(), student_factory(payments={DAY: 3})], today=DAY)

        assert ledger.total_debt(rows) == 7

    def test_debtors_defaults_today_to_local_date(self, student_factory):
        past = ledger.to_calendar_date(date(2000, 1, 3))
        settings = make_settings(active=(past,))

        rows = ledger.debtors(settings, [student_factory()])

        assert len(rows) == 1


class TestAggregates:
    def test_income_counts_every_payment_including_inactive_dates(self, student_factory):
        settings = make_settings(active=(DAY,), inactive=("2024-01-09",))
        students = [
            student_factory(payments={DAY: 5, "2024-01-09": 5}),
            student_factory(payments={"2030-01-01": 2.5, "2024-02-01": 0}),
        ]

        assert ledger.total_income(students) == 12.5
        assert ledger.debtors(settings, students, today="2024-12-31")[0].debt == 5

    def test_empty_collections_sum_to_zero(self):
        assert ledger.total_income([]) == 0
        assert ledger.total_expenses([]) == 0
        assert ledger.wishlist_total([]) == 0
        assert ledger.category_breakdown([]) == {}

    def test_category_breakdown_folds_blank_into_other(self):
        breakdown = ledger.category_breakdown(
            [_expense(20, "Materials", "a"), _expense(5, "", "b"), _expense(3, "Materials", "c")]
        )

        assert breakdown == {"Materials": 23, "Other": 5}
        assert list(breakdown) == ["Materials", "Other"]

    def test_category_breakdown_keeps_first_seen_order(self):
        breakdown = ledger.category_breakdown(
            [_expense(1, "Food"), _expense(1, ""), _expense(1, "Events"), _expense(1, "Food")]
        )

        assert list(breakdown) == ["Food", "Other", "Events"]

    def test_balance_may_be_negative(self, student_factory):
        summary = ledger.compute_financials(
            settings=make_settings(),
            students=[student_factory(payments={DAY: 10})],
            transactions=[_expense(25, "Food")],
            today=DAY,
        )

        assert summary.balance == -15

    def test_compute_financials_bundles_everything(self, student_factory):
        settings = make_settings(active=(DAY,))
        settings.currency_symbol = "$"
        students = [student_factory(payments={DAY: 5}), student_factory()]
        planned = [
            PlannedExpense(id="p1", item="Fan", estimated_cost=1500),
            PlannedExpense(id="p2", item="Tape", estimated_cost=20.5),
        ]

        summary = ledger.compute_financials(
            settings=settings,
            students=students,
            transactions=[_expense(3, "Materials")],
            planned=planned,
            today=DAY,
        )

        assert summary.total_income == 5
        assert summary.total_expenses == 3
        assert summary.balance == 2
        assert summary.total_debt == 5
        assert [d.student_id for d in summary.debtors] == [students[1].id]
        assert_float_equal(summary.wishlist_total, 1520.5)
        assert summary.categories == {"Materials": 3}
        assert summary.currency_symbol == "$"


class TestCalendar:
    def test_to_calendar_date_drops_time(self):
        assert ledger.to_calendar_date(datetime(2024, 1, 8, 23, 59)) == "2024-01-08"

    def test_week_days_runs_monday_to_friday(self):
        assert ledger.week_days("2024-01-10") == [
            "2024-01-08",
            "2024-01-09",
            "2024-01-10",
            "2024-01-11",
            "2024-01-12",
        ]

    def test_sunday_belongs_to_preceding_week(self):
        assert ledger.week_days("2024-01-14")[0] == "2024-01-08"

    def test_week_spans_month_boundary(self):
        assert ledger.week_days("2024-02-01") == [
            "2024-01-29",
            "2024-01-30",
            "2024-01-31",
            "2024-02-01",
            "2024-02-02",
        ]

    def test_weekly_total_ignores_missing_days(self, student_factory):
        student = student_factory(payments={"2024-01-08": 5, "2024-01-10": 2, "2024-01-20": 99})

        assert ledger.weekly_total(student, ledger.week_days("2024-01-08")) == 7

    def test_parse_calendar_date_rejects_garbage(self):
        with pytest.raises(ValueError):
            ledger.parse_calendar_date("08/01/2024")
