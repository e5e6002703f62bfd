"""Announcement feed and agenda records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .fields import text_list, text_or

AGENDA_TYPES = ("HOMEWORK", "EXAM", "EVENT")


@dataclass
class Announcement:
    id: str
    title: str
    content: str
    date: str  # ISO timestamp
    author: str
    tags: list[str] = field(default_factory=list)
    is_important: bool = False

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "date": self.date,
            "author": self.author,
            "tags": list(self.tags),
            "isImportant": self.is_important,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Announcement":
        return cls(
            id=str(record["id"]),
            title=text_or(record.get("title")),
            content=text_or(record.get("content")),
            date=text_or(record.get("date")),
            author=text_or(record.get("author")),
            tags=text_list(record.get("tags")),
            is_important=bool(record.get("isImportant", False)),
        )


@dataclass
class AgendaItem:
    id: str
    title: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    type: str = "EVENT"

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "time": self.time,
            "type": self.type,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "AgendaItem":
        return cls(
            id=str(record["id"]),
            title=text_or(record.get("title")),
            date=text_or(record.get("date")),
            time=text_or(record.get("time")),
            type=text_or(record.get("type"), "EVENT"),
        )
