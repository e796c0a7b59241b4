"""Total coercion helpers for loosely typed document fields.

Every helper returns its default instead of raising, so a document decode
built from them cannot fail half-way through a field bag.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def as_str(value: Any, default: str = "") -> str:
    """Stringify scalars; None and containers fall back to ``default``."""
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        # 12.0 -> "12", matching how the storefront writes whole prices
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    return default


def as_float(value: Any, default: float = 0.0) -> float:
    """Coerce numbers and numeric strings (``"$12.50"`` included)."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip().lstrip("$").replace(",", "")
        try:
            return float(text)
        except ValueError:
            return default
    return default


def as_int(value: Any, default: int = 0) -> int:
    number = as_float(value, float(default))
    try:
        return int(number)
    except (OverflowError, ValueError):
        return default


def as_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return default


def as_str_list(value: Any) -> list[str]:
    """Keep the non-empty scalar entries of a list; anything else is ``[]``."""
    if not isinstance(value, (list, tuple)):
        return []
    items = (as_str(item) for item in value)
    return [item for item in items if item]


def as_datetime(value: Any) -> datetime | None:
    """Accept datetimes, ``{"seconds": ...}`` timestamp maps and epoch numbers."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, dict):
        value = value.get("seconds", value.get("_seconds"))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    return None
