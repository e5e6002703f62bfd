"""Concrete repository implementations over the key-value store."""

from .bulletin import StoreBulletinRepository
from .expenses import StoreExpenseRepository
from .roster import StoreRosterRepository
from .settings import StoreSettingsRepository
from .store import SQLModelKeyValueStore
from .wishlist import StoreWishlistRepository

__all__ = [
    "SQLModelKeyValueStore",
    "StoreBulletinRepository",
    "StoreExpenseRepository",
    "StoreRosterRepository",
    "StoreSettingsRepository",
    "StoreWishlistRepository",
]
