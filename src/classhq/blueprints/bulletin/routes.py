"""Announcement and agenda routes."""

from __future__ import annotations

import re

from flask import jsonify

from ...extensions import get_context
from ...models.bulletin import AGENDA_TYPES
from ..funds.forms import is_calendar_date
from ..guards import current_user, json_body, login_required, officer_required
from . import bp

_TIME = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


@bp.get("/announcements")
@login_required
def list_announcements():
    return jsonify([a.to_record() for a in get_context().bulletin_repo.list_announcements()])


@bp.post("/announcements")
@officer_required
def post_announcement():
    data = json_body()
    title = _text(data.get("title"))
    content = _text(data.get("content"))
    if not title or not content:
        return jsonify({"error": "title and content are required"}), 400
    tags = data.get("tags") or []
    if not isinstance(tags, list):
        tags = []
    user = current_user()
    announcement = get_context().bulletin_repo.post_announcement(
        title,
        content,
        user.username if user else "",
        is_important=bool(data.get("isImportant", False)),
        tags=[str(tag) for tag in tags],
    )
    return jsonify(announcement.to_record()), 201


@bp.delete("/announcements/<announcement_id>")
@officer_required
def delete_announcement(announcement_id: str):
    get_context().bulletin_repo.delete_announcement(announcement_id)
    return "", 204


@bp.get("/agenda")
@login_required
def list_agenda():
    return jsonify([a.to_record() for a in get_context().bulletin_repo.list_agenda()])


@bp.post("/agenda")
@officer_required
def add_agenda_item():
    data = json_body()
    title = _text(data.get("title"))
    day = _text(data.get("date"))
    time = _text(data.get("time")) or "00:00"
    item_type = _text(data.get("type")).upper() or "EVENT"
    errors = {}
    if not title:
        errors["title"] = ["Title is required."]
    if not is_calendar_date(day):
        errors["date"] = ["Dates must use YYYY-MM-DD."]
    if not _TIME.match(time):
        errors["time"] = ["Times must use HH:MM."]
    if item_type not in AGENDA_TYPES:
        errors["type"] = ["Type must be HOMEWORK, EXAM or EVENT."]
    if errors:
        return jsonify({"error": "validation failed", "fields": errors}), 400
    item = get_context().bulletin_repo.add_agenda_item(title, day, time, item_type)
    return jsonify(item.to_record()), 201


@bp.delete("/agenda/<item_id>")
@officer_required
def delete_agenda_item(item_id: str):
    get_context().bulletin_repo.delete_agenda_item(item_id)
    return "", 204
