"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    DB_FILENAME = "classhq.db"
    DEFAULT_STORE_PREFIX = "classroom_hq_"
    SQLITE_PRAGMAS = {"journal_mode": "wal"}
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("CLASSHQ_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("CLASSHQ_DEV_MODE", default=True)
        self.STORE_PREFIX = os.getenv("CLASSHQ_STORE_PREFIX", self.DEFAULT_STORE_PREFIX)
        self.DATABASE_URL = os.getenv("CLASSHQ_DATABASE_URL", self._build_sqlite_url())
        self.ROSTER_PARSER = os.getenv("CLASSHQ_ROSTER_PARSER", "")
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("CLASSHQ_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("CLASSHQ_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            fallback_path = Path.home() / ".classhq"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; never requires a secret."""

    TESTING = True
    __test__ = False  # not a pytest test class

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
