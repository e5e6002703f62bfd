"""Roster import from an external image-recognition service."""

from __future__ import annotations

import json
import re
from importlib import import_module
from typing import Any, Callable, Optional, Protocol

from ..infra.repositories.roster import StoreRosterRepository
from ..logging_config import get_logger
from ..models.student import Gender

logger = get_logger("roster_import")

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


class RosterImageParser(Protocol):
    """External service turning a class-list photo into name/gender guesses."""

    def parse(self, image: bytes) -> list[dict[str, Any]]:  # pragma: no cover - interface
        """Return ``[{"name": ..., "gender": "M"|"F"}, ...]`` or ``[]``."""
        ...


def parse_roster_response(text: str | None) -> list[dict[str, str]]:
    """Clean a model reply into roster entries; any failure yields ``[]``."""

    cleaned = _CODE_FENCE.sub("", text or "").strip()
    if not cleaned:
        return []
    try:
        payload = json.loads(cleaned)
    except ValueError:
        logger.warning("Roster response was not JSON", extra={"preview": cleaned[:80]})
        return []
    if not isinstance(payload, list):
        return []

    entries: list[dict[str, str]] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        name = str(item.get("name") or "").strip()
        if not name:
            continue
        gender = "F" if str(item.get("gender", "")).strip().upper() == "F" else "M"
        entries.append({"name": name, "gender": gender})
    return entries


def import_from_image(
    parser: RosterImageParser, roster_repo: StoreRosterRepository, image: bytes
) -> int:
    """Append every student the parser recognises; returns how many were added."""

    try:
        guesses = parser.parse(image)
    except Exception:  # external service; a failed call imports nothing
        logger.warning("Roster image parser failed", exc_info=True)
        return 0

    if not isinstance(guesses, list):
        guesses = []
    entries: list[tuple[str, Gender]] = []
    for guess in guesses:
        if not isinstance(guess, dict):
            continue
        name = str(guess.get("name") or "").strip()
        if name:
            entries.append((name, "F" if guess.get("gender") == "F" else "M"))
    created = roster_repo.add_many(entries)
    logger.info("Roster image imported", extra={"count": len(created)})
    return len(created)


class ReplyRosterParser:
    """Adapts a function returning a model's raw text reply for an image."""

    def __init__(self, reply: Callable[[bytes], Optional[str]]):
        self.reply = reply

    def parse(self, image: bytes) -> list[dict[str, Any]]:
        return parse_roster_response(self.reply(image))


def load_roster_parser(target: Optional[str]) -> Optional[RosterImageParser]:
    """Resolve a ``"package.module:attr"`` hook into a parser.

    ``attr`` may be a parser object or a reply function ``(bytes) -> str``.
    Returns ``None`` when no hook is configured.
    """

    if not target:
        return None
    module_name, _, attr = target.partition(":")
    if not attr:
        raise ValueError(f"Roster parser hook must look like 'module:attr', got {target!r}")
    hook = getattr(import_module(module_name), attr)
    if hasattr(hook, "parse"):
        return hook
    return ReplyRosterParser(hook)
