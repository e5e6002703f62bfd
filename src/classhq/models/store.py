"""Key-value rows holding whole JSON-encoded collections."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


class StoreEntry(SQLModel, table=True):
    """One top-level collection (settings, students, ...) serialized as JSON."""

    __tablename__: ClassVar[str] = "store_entry"

    key: str = Field(primary_key=True, max_length=128)
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
