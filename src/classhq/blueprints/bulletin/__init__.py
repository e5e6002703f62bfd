"""Bulletin blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("bulletin", __name__, url_prefix="/bulletin")

from . import routes  # noqa: E402,F401

__all__ = ["bp"]
