"""Shape checks for records loaded from the store.

Stored JSON may have been edited or written by an older build; each helper
returns the caller's default when a field has the wrong type.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def number_or(value: Any, default: float) -> float:
    return value if is_number(value) else default


def text_or(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def amount_map(value: Any) -> dict[str, float]:
    """``date -> amount`` entries with numeric amounts; anything else is dropped."""

    if not isinstance(value, Mapping):
        return {}
    return {str(key): amount for key, amount in value.items() if is_number(amount)}


def flag_map(value: Any) -> dict[str, bool]:
    if not isinstance(value, Mapping):
        return {}
    return {str(key): flag for key, flag in value.items() if isinstance(flag, bool)}


def text_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
