"""Login stub: derives the session role from the username."""

from __future__ import annotations

import re
from urllib.parse import quote_plus

from ..models.user import ROLE_OFFICER, ROLE_STUDENT, User

OFFICER_MARKER = "officer"
ADMIN_USERNAME = "admin"
AVATAR_URL = "https://ui-avatars.com/api/?name={name}&background=4F46E5&color=fff"


def role_for(username: str) -> str:
    lowered = username.strip().lower()
    if OFFICER_MARKER in lowered or lowered == ADMIN_USERNAME:
        return ROLE_OFFICER
    return ROLE_STUDENT


def login(username: str) -> User:
    """Build the session user for ``username``; raises ``ValueError`` when blank."""

    username = (username or "").strip()
    if not username:
        raise ValueError("Username is required")
    return User(
        id=re.sub(r"\s", "_", username.lower()),
        username=username,
        role=role_for(username),
        avatar=AVATAR_URL.format(name=quote_plus(username)),
    )
