"""Store wiring for the Flask application."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .context import AppContext, create_app_context

EXTENSION_KEY = "classhq"


def init_store(app: Flask) -> AppContext:
    """Build the application context from the app's config and attach it."""

    config: BaseConfig = app.config["CLASSHQ_CONFIG"]
    ctx = create_app_context(config)
    app.extensions[EXTENSION_KEY] = ctx
    return ctx


def get_context() -> AppContext:
    """Return the context of the active Flask application."""

    ctx = current_app.extensions.get(EXTENSION_KEY)
    if ctx is None:  # pragma: no cover - only when the factory was bypassed
        raise RuntimeError("Store not initialized")
    return ctx
