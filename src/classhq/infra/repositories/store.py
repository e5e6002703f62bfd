"""SQLModel-backed key-value store."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from ...errors import StoreWriteError
from ...logging_config import get_logger
from ...models.store import StoreEntry
from ..database import SessionFactory

T = TypeVar("T")

logger = get_logger("store")


class SQLModelKeyValueStore:
    """Stores each collection as one JSON document row.

    Reads never raise: a missing row, undecodable JSON or a database error
    yields the caller's default. Writes raise ``StoreWriteError`` so callers
    can keep multi-step operations ordered.
    """

    def __init__(self, session_factory: SessionFactory, *, prefix: str = ""):
        self.session_factory = session_factory
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def read(self, key: str, default: T) -> Any | T:
        full_key = self._key(key)
        try:
            with self.session_factory() as session:
                entry = session.exec(select(StoreEntry).where(StoreEntry.key == full_key)).first()
                raw = entry.value if entry else None
        except SQLAlchemyError:
            logger.warning("Store read failed; using default", exc_info=True, extra={"key": full_key})
            return default
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Corrupt store value; using default", extra={"key": full_key})
            return default

    def write(self, key: str, value: Any) -> None:
        full_key = self._key(key)
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as exc:
            logger.error("Store value is not JSON serializable", extra={"key": full_key})
            raise StoreWriteError(full_key, "value is not serializable") from exc
        try:
            with self.session_factory() as session:
                entry = session.exec(select(StoreEntry).where(StoreEntry.key == full_key)).first()
                if entry:
                    entry.value = payload
                    entry.updated_at = datetime.now(timezone.utc)
                else:
                    entry = StoreEntry(key=full_key, value=payload)
                session.add(entry)
        except SQLAlchemyError as exc:
            logger.error("Store write failed", exc_info=True, extra={"key": full_key})
            raise StoreWriteError(full_key) from exc

    def delete(self, key: str) -> None:
        full_key = self._key(key)
        try:
            with self.session_factory() as session:
                entry = session.exec(select(StoreEntry).where(StoreEntry.key == full_key)).first()
                if entry:
                    session.delete(entry)
        except SQLAlchemyError as exc:
            logger.error("Store delete failed", exc_info=True, extra={"key": full_key})
            raise StoreWriteError(full_key, "store delete failed") from exc


__all__ = ["SQLModelKeyValueStore"]
