"""Repository protocol definitions for domain layer."""

from .store import KeyValueStore

__all__ = ["KeyValueStore"]
