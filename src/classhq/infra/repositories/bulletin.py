"""Announcements and agenda repositories."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable
from uuid import uuid4

from ...domain.repositories.store import KeyValueStore
from ...logging_config import get_logger
from ...models.bulletin import AgendaItem, Announcement

ANNOUNCEMENTS_KEY = "announcements"
AGENDA_KEY = "agenda"

logger = get_logger("bulletin")


class StoreBulletinRepository:
    """Flat CRUD over the announcement feed and the class agenda."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _load(self, key: str, factory) -> list:
        records = self.store.read(key, [])
        if not isinstance(records, list):
            return []
        items = []
        for record in records:
            try:
                items.append(factory(record))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping unreadable bulletin record", extra={"key": key})
        return items

    # Announcements -------------------------------------------------------

    def list_announcements(self) -> list[Announcement]:
        """Newest first (default: empty feed)."""
        items = self._load(ANNOUNCEMENTS_KEY, Announcement.from_record)
        return sorted(items, key=lambda a: a.date, reverse=True)

    def save_announcements(self, items: Iterable[Announcement]) -> None:
        self.store.write(ANNOUNCEMENTS_KEY, [a.to_record() for a in items])

    def post_announcement(
        self,
        title: str,
        content: str,
        author: str,
        *,
        is_important: bool = False,
        tags: Iterable[str] = (),
    ) -> Announcement:
        announcement = Announcement(
            id=uuid4().hex,
            title=title,
            content=content,
            date=datetime.now().isoformat(),
            author=author,
            tags=list(tags),
            is_important=is_important,
        )
        self.save_announcements([announcement, *self._load(ANNOUNCEMENTS_KEY, Announcement.from_record)])
        logger.info("Announcement posted", extra={"announcement_id": announcement.id})
        return announcement

    def delete_announcement(self, announcement_id: str) -> None:
        items = self._load(ANNOUNCEMENTS_KEY, Announcement.from_record)
        remaining = [a for a in items if a.id != announcement_id]
        if len(remaining) != len(items):
            self.save_announcements(remaining)

    # Agenda --------------------------------------------------------------

    def list_agenda(self) -> list[AgendaItem]:
        """Sorted by date then time (default: empty agenda)."""
        items = self._load(AGENDA_KEY, AgendaItem.from_record)
        return sorted(items, key=lambda a: (a.date, a.time))

    def save_agenda(self, items: Iterable[AgendaItem]) -> None:
        self.store.write(AGENDA_KEY, [a.to_record() for a in items])

    def add_agenda_item(self, title: str, day: str, time: str, item_type: str = "EVENT") -> AgendaItem:
        item = AgendaItem(id=uuid4().hex, title=title, date=day, time=time, type=item_type)
        self.save_agenda([*self._load(AGENDA_KEY, AgendaItem.from_record), item])
        return item

    def delete_agenda_item(self, item_id: str) -> None:
        items = self._load(AGENDA_KEY, AgendaItem.from_record)
        remaining = [a for a in items if a.id != item_id]
        if len(remaining) != len(items):
            self.save_agenda(remaining)


__all__ = ["AGENDA_KEY", "ANNOUNCEMENTS_KEY", "StoreBulletinRepository"]
