"""Session user record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

ROLE_OFFICER = "OFFICER"
ROLE_STUDENT = "STUDENT"


@dataclass
class User:
    id: str
    username: str
    role: str = ROLE_STUDENT
    avatar: Optional[str] = None

    @property
    def is_officer(self) -> bool:
        return self.role == ROLE_OFFICER

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role,
            "avatar": self.avatar,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "User":
        return cls(
            id=str(record["id"]),
            username=record.get("username", ""),
            role=record.get("role", ROLE_STUDENT),
            avatar=record.get("avatar"),
        )
