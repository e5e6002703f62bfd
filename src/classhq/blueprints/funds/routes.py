"""Funds routes: settings, roster, payments, expenses and wishlist."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify, request
from werkzeug.exceptions import BadRequest

from ...extensions import get_context
from ...models.settings import Settings
from ...services import funds, ledger, reports, roster_import
from ..guards import json_body, login_required, officer_required
from . import bp
from .forms import (
    AmountForm,
    ExpenseForm,
    PlannedExpenseForm,
    StudentForm,
    is_calendar_date,
    parse_amount,
)


def _invalid(errors: dict[str, list[str]]):
    return jsonify({"error": "validation failed", "fields": errors}), 400


def _require_date(value: str) -> str:
    if not is_calendar_date(value):
        raise BadRequest("Dates must use YYYY-MM-DD.")
    return value


def _repos() -> dict[str, Any]:
    ctx = get_context()
    return {
        "settings_repo": ctx.settings_repo,
        "roster_repo": ctx.roster_repo,
        "expense_repo": ctx.expense_repo,
        "wishlist_repo": ctx.wishlist_repo,
    }


def _summary_payload(summary: ledger.FundsSummary) -> dict[str, Any]:
    return {
        "currencySymbol": summary.currency_symbol,
        "totalIncome": summary.total_income,
        "totalExpenses": summary.total_expenses,
        "balance": summary.balance,
        "totalDebt": summary.total_debt,
        "wishlistTotal": summary.wishlist_total,
        "debtors": [
            {
                "studentId": row.student_id,
                "name": row.name,
                "gender": row.gender,
                "owed": row.owed,
                "paid": row.paid,
                "debt": row.debt,
            }
            for row in summary.debtors
        ],
        "categories": [{"name": name, "value": value} for name, value in summary.categories.items()],
    }


# Summary ----------------------------------------------------------------------


@bp.get("/summary")
@login_required
def summary():
    """Income, expenses, balance, debtors and category breakdown."""

    repos = _repos()
    result = funds.load_summary(
        settings_repo=repos["settings_repo"],
        roster_repo=repos["roster_repo"],
        expense_repo=repos["expense_repo"],
        wishlist_repo=repos["wishlist_repo"],
    )
    return jsonify(_summary_payload(result))


@bp.get("/charts/categories.png")
@login_required
def category_chart():
    ctx = get_context()
    transactions = ctx.expense_repo.list_expenses()
    settings = ctx.settings_repo.get_settings()
    png = reports.category_chart_png(
        ledger.category_breakdown(transactions), currency_symbol=settings.currency_symbol
    )
    return Response(png, mimetype="image/png")


# Settings ---------------------------------------------------------------------


@bp.get("/settings")
@login_required
def get_settings():
    return jsonify(get_context().settings_repo.get_settings().to_record())


@bp.put("/settings")
@officer_required
def replace_settings():
    """Replace the settings record; omitted fields fall back to defaults."""

    data = json_body()
    if not isinstance(data, dict):
        raise BadRequest("Expected a JSON object.")
    errors: dict[str, list[str]] = {}
    for key in ("customQuotas", "collectionDays"):
        value = data.get(key)
        if value is not None and not isinstance(value, dict):
            errors[key] = ["Expected an object keyed by YYYY-MM-DD."]
    quota = parse_amount(data.get("dailyQuota", Settings().daily_quota))
    if quota is None:
        errors["dailyQuota"] = ["Enter a valid number for the quota."]
    if errors:
        return _invalid(errors)
    settings = Settings.from_record(data)
    settings.daily_quota = quota
    get_context().settings_repo.save_settings(settings)
    return jsonify(settings.to_record())


@bp.post("/collection-days/<day>/toggle")
@officer_required
def toggle_collection_day(day: str):
    settings = get_context().settings_repo.toggle_collection_day(_require_date(day))
    return jsonify(
        {
            "date": day,
            "active": ledger.is_collection_active(settings, day),
            "quota": ledger.effective_quota(settings, day),
        }
    )


@bp.put("/quotas/<day>")
@officer_required
def set_quota(day: str):
    _require_date(day)
    form = AmountForm.from_mapping(json_body(), allow_negative=True)
    if not form.validate():
        return _invalid(form.errors)
    settings = get_context().settings_repo.set_custom_quota(day, form.amount)
    return jsonify({"date": day, "quota": ledger.effective_quota(settings, day)})


@bp.delete("/quotas/<day>")
@officer_required
def clear_quota(day: str):
    get_context().settings_repo.clear_custom_quota(_require_date(day))
    return "", 204


# Roster -----------------------------------------------------------------------


@bp.get("/students")
@login_required
def list_students():
    return jsonify([s.to_record() for s in get_context().roster_repo.list_students()])


@bp.post("/students")
@officer_required
def add_student():
    form = StudentForm.from_mapping(json_body())
    if not form.validate():
        return _invalid(form.errors)
    student = get_context().roster_repo.add_student(form.name, form.gender)  # type: ignore[arg-type]
    return jsonify(student.to_record()), 201


@bp.patch("/students/<student_id>")
@officer_required
def rename_student(student_id: str):
    form = StudentForm.from_mapping(json_body())
    form.validate()
    if "name" in form.errors:
        return _invalid({"name": form.errors["name"]})
    student = get_context().roster_repo.rename_student(student_id, form.name)
    if student is None:
        return "", 204
    return jsonify(student.to_record())


@bp.delete("/students/<student_id>")
@officer_required
def delete_student(student_id: str):
    get_context().roster_repo.delete_student(student_id)
    return "", 204


@bp.post("/students/import")
@officer_required
def import_students():
    text = json_body().get("text")
    if not isinstance(text, str):
        return _invalid({"text": ["Roster text is required."]})
    created = get_context().roster_repo.import_from_text(text)
    return jsonify({"created": created}), 201


@bp.post("/students/import-image")
@officer_required
def import_students_from_image():
    """Append students read from an uploaded class-list photo."""

    parser = get_context().roster_parser
    if parser is None:
        return jsonify({"error": "image import is not configured"}), 501
    upload = request.files.get("image")
    image = upload.read() if upload else b""
    if not image:
        return _invalid({"image": ["Upload a class-list image."]})
    created = roster_import.import_from_image(parser, get_context().roster_repo, image)
    return jsonify({"created": created}), 201


@bp.put("/students/<student_id>/payments/<day>")
@officer_required
def record_payment(student_id: str, day: str):
    _require_date(day)
    form = AmountForm.from_mapping(json_body())
    if not form.validate():
        return _invalid(form.errors)
    student = get_context().roster_repo.record_payment(student_id, day, form.amount)
    if student is None:
        return "", 204
    return jsonify(student.to_record())


@bp.post("/students/<student_id>/payments/<day>/toggle")
@officer_required
def toggle_payment(student_id: str, day: str):
    _require_date(day)
    ctx = get_context()
    if ctx.roster_repo.get_student(student_id) is None:
        return "", 204
    student = funds.toggle_payment(
        settings_repo=ctx.settings_repo,
        roster_repo=ctx.roster_repo,
        student_id=student_id,
        day=day,
    )
    if student is None:
        return jsonify({"error": "collection is not active on this date", "date": day}), 409
    return jsonify(student.to_record())


@bp.post("/payments/<day>/bulk")
@officer_required
def bulk_mark(day: str):
    paid = json_body().get("paid")
    if not isinstance(paid, bool):
        return _invalid({"paid": ["Expected true or false."]})
    ctx = get_context()
    _require_date(day)
    if not ledger.is_collection_active(ctx.settings_repo.get_settings(), day):
        return jsonify({"error": "collection is not active on this date", "date": day}), 409
    count = funds.bulk_mark(
        settings_repo=ctx.settings_repo, roster_repo=ctx.roster_repo, day=day, paid=paid
    )
    return jsonify({"date": day, "paid": paid, "updated": count})


@bp.get("/ledger")
@login_required
def week_ledger():
    """Monday-to-Friday grid around ``?date=`` (defaults to today)."""

    day = _require_date(request.args.get("date") or ledger.today_key())
    ctx = get_context()
    grid = funds.week_ledger(settings_repo=ctx.settings_repo, roster_repo=ctx.roster_repo, day=day)
    rows = [
        {
            "studentId": row.student_id,
            "name": row.name,
            "gender": row.gender,
            "amounts": row.amounts,
            "weekTotal": row.week_total,
        }
        for row in grid["rows"]
    ]
    return jsonify({"days": grid["days"], "rows": rows})


# Expenses ---------------------------------------------------------------------


@bp.get("/expenses")
@login_required
def list_expenses():
    return jsonify([t.to_record() for t in get_context().expense_repo.list_expenses()])


@bp.post("/expenses")
@officer_required
def record_expense():
    form = ExpenseForm.from_mapping(json_body())
    if not form.validate():
        return _invalid(form.errors)
    txn = get_context().expense_repo.record_expense(form.amount, form.description, form.category)
    return jsonify(txn.to_record()), 201


@bp.delete("/expenses/<transaction_id>")
@officer_required
def delete_expense(transaction_id: str):
    get_context().expense_repo.delete_expense(transaction_id)
    return "", 204


# Wishlist ---------------------------------------------------------------------


@bp.get("/wishlist")
@login_required
def list_wishlist():
    plans = get_context().wishlist_repo.list_planned()
    return jsonify(
        {
            "items": [p.to_record() for p in plans],
            "total": ledger.wishlist_total(plans),
        }
    )


@bp.post("/wishlist")
@officer_required
def add_wishlist_item():
    form = PlannedExpenseForm.from_mapping(json_body())
    if not form.validate():
        return _invalid(form.errors)
    plan = get_context().wishlist_repo.add_planned_expense(
        form.item, form.estimated_cost, form.priority, form.notes
    )
    return jsonify(plan.to_record()), 201


@bp.delete("/wishlist/<planned_id>")
@officer_required
def delete_wishlist_item(planned_id: str):
    get_context().wishlist_repo.delete_planned_expense(planned_id)
    return "", 204


@bp.post("/wishlist/<planned_id>/convert")
@officer_required
def convert_wishlist_item(planned_id: str):
    ctx = get_context()
    txn = funds.convert_to_expense(
        wishlist_repo=ctx.wishlist_repo, expense_repo=ctx.expense_repo, planned_id=planned_id
    )
    if txn is None:
        return "", 204
    return jsonify(txn.to_record()), 201
