"""Settings repository: quota defaults, overrides and collection days."""

from __future__ import annotations

from ...domain.repositories.store import KeyValueStore
from ...logging_config import get_logger
from ...models.settings import Settings

SETTINGS_KEY = "settings"

logger = get_logger("settings")


class StoreSettingsRepository:
    """Reads and replaces the single settings record.

    No validation is applied; a negative quota or odd currency string is
    stored as given.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def get_settings(self) -> Settings:
        """Return stored settings merged over defaults (default: quota 5, ``₱``)."""
        record = self.store.read(SETTINGS_KEY, None)
        if record is not None and not isinstance(record, dict):
            logger.warning("Ignoring malformed settings record")
            record = None
        return Settings.from_record(record)

    def save_settings(self, settings: Settings) -> None:
        self.store.write(SETTINGS_KEY, settings.to_record())

    def set_collection_day(self, day: str, active: bool) -> Settings:
        settings = self.get_settings()
        settings.collection_days[day] = active
        self.save_settings(settings)
        logger.info("Collection day updated", extra={"day": day, "active": active})
        return settings

    def toggle_collection_day(self, day: str) -> Settings:
        settings = self.get_settings()
        return self.set_collection_day(day, settings.collection_days.get(day) is not True)

    def set_custom_quota(self, day: str, amount: float) -> Settings:
        settings = self.get_settings()
        settings.custom_quotas[day] = amount
        self.save_settings(settings)
        logger.info("Custom quota set", extra={"day": day, "amount": amount})
        return settings

    def clear_custom_quota(self, day: str) -> Settings:
        settings = self.get_settings()
        if settings.custom_quotas.pop(day, None) is not None:
            self.save_settings(settings)
        return settings

    def set_daily_quota(self, amount: float) -> Settings:
        settings = self.get_settings()
        settings.daily_quota = amount
        self.save_settings(settings)
        return settings

    def set_currency_symbol(self, symbol: str) -> Settings:
        settings = self.get_settings()
        settings.currency_symbol = symbol
        self.save_settings(settings)
        return settings


__all__ = ["SETTINGS_KEY", "StoreSettingsRepository"]
