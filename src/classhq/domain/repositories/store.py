"""Key-value store protocol."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class KeyValueStore(Protocol):
    """Persistent store of JSON-serializable values keyed by collection name."""

    def read(self, key: str, default: T) -> Any | T:
        """Return the stored value for ``key`` or ``default`` when absent/unreadable."""
        ...

    def write(self, key: str, value: Any) -> None:
        """Replace the stored value for ``key``."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``; no-op when absent."""
        ...
