"""Funds blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("funds", __name__, url_prefix="/funds")

from . import routes  # noqa: E402,F401 - ensure routes get registered

__all__ = ["bp"]
