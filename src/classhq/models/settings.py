"""Funds settings: default quota, currency and per-date overrides."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .fields import amount_map, flag_map, number_or, text_or

DEFAULT_DAILY_QUOTA = 5.0
DEFAULT_CURRENCY_SYMBOL = "₱"


@dataclass
class Settings:
    """Collection settings keyed by calendar date (``YYYY-MM-DD``).

    A date is active only when ``collection_days[date] is True``; missing and
    ``False`` entries are treated the same.
    """

    daily_quota: float = DEFAULT_DAILY_QUOTA
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    custom_quotas: dict[str, float] = field(default_factory=dict)
    collection_days: dict[str, bool] = field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        return {
            "dailyQuota": self.daily_quota,
            "currencySymbol": self.currency_symbol,
            "customQuotas": dict(self.custom_quotas),
            "collectionDays": dict(self.collection_days),
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any] | None) -> "Settings":
        """Merge a stored record over the defaults so no field is ever missing."""

        defaults = cls()
        if not isinstance(record, Mapping):
            record = {}
        return cls(
            daily_quota=number_or(record.get("dailyQuota"), defaults.daily_quota),
            currency_symbol=text_or(record.get("currencySymbol"), defaults.currency_symbol),
            custom_quotas=amount_map(record.get("customQuotas")),
            collection_days=flag_map(record.get("collectionDays")),
        )
