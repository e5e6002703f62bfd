"""Application context: the store and the repositories built on it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .domain.repositories.store import KeyValueStore
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelKeyValueStore,
    StoreBulletinRepository,
    StoreExpenseRepository,
    StoreRosterRepository,
    StoreSettingsRepository,
    StoreWishlistRepository,
)

if TYPE_CHECKING:
    from .services.roster_import import RosterImageParser


@dataclass
class AppContext:
    """Centralized context handed to routes, CLI commands and tests."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory
    store: KeyValueStore

    settings_repo: StoreSettingsRepository
    roster_repo: StoreRosterRepository
    expense_repo: StoreExpenseRepository
    wishlist_repo: StoreWishlistRepository
    bulletin_repo: StoreBulletinRepository
    roster_parser: Optional[RosterImageParser] = None

    def close(self) -> None:
        """Release pooled database connections."""
        self.engine.dispose()


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, ensure the schema exists and wire the repositories."""

    if config is None:
        config = BaseConfig()

    from .services.roster_import import load_roster_parser

    engine, session_factory = bootstrap_database(config)
    store = SQLModelKeyValueStore(session_factory, prefix=config.STORE_PREFIX)

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        store=store,
        settings_repo=StoreSettingsRepository(store),
        roster_repo=StoreRosterRepository(store),
        expense_repo=StoreExpenseRepository(store),
        wishlist_repo=StoreWishlistRepository(store),
        bulletin_repo=StoreBulletinRepository(store),
        roster_parser=load_roster_parser(config.ROSTER_PARSER),
    )
