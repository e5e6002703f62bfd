"""Login stub routes backed by the Flask session cookie."""

from __future__ import annotations

from flask import jsonify, session

from ...logging_config import get_logger
from ...services import auth
from ..guards import SESSION_USER_KEY, current_user, json_body, login_required
from . import bp

logger = get_logger("auth")


@bp.post("/login")
def login():
    username = json_body().get("username")
    try:
        user = auth.login(username if isinstance(username, str) else "")
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    session[SESSION_USER_KEY] = user.to_record()
    logger.info("User logged in", extra={"user_id": user.id, "role": user.role})
    return jsonify(user.to_record())


@bp.post("/logout")
def logout():
    session.pop(SESSION_USER_KEY, None)
    return "", 204


@bp.get("/me")
@login_required
def me():
    user = current_user()
    return jsonify(user.to_record() if user else None)
