"""Session helpers and role guards shared by the blueprints."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Mapping, Optional, TypeVar

from flask import request, session

from ..errors import NotAuthenticated, PermissionDenied
from ..models.user import User

SESSION_USER_KEY = "user"

F = TypeVar("F", bound=Callable[..., Any])


def current_user() -> Optional[User]:
    record = session.get(SESSION_USER_KEY)
    if not record:
        return None
    return User.from_record(record)


def login_required(view: F) -> F:
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            raise NotAuthenticated("Login required")
        return view(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def officer_required(view: F) -> F:
    """Allow the view only for officers; students get 403."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            raise NotAuthenticated("Login required")
        if not user.is_officer:
            raise PermissionDenied("Officer role required")
        return view(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_body() -> Mapping[str, Any]:
    """Request JSON object, falling back to form data; never ``None``."""

    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form
