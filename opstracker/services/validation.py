"""Input checks shared by the service functions."""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from ..errors import ValidationFailed


def parse_iso_date(value: Any, field: str = "date") -> str:
    """Return ``value`` if it is a ``YYYY-MM-DD`` calendar date."""

    if isinstance(value, date):
        return value.isoformat()
    text = str(value or "").strip()
    if len(text) != 10:
        raise ValidationFailed(f"{field} must be a YYYY-MM-DD date")
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        raise ValidationFailed(f"{field} must be a YYYY-MM-DD date") from None


def parse_month(value: Any) -> Tuple[str, str]:
    """Return the inclusive start and exclusive end dates for a ``YYYY-MM`` month."""

    text = str(value or "").strip()
    try:
        year_text, month_text = text.split("-")
        year, month = int(year_text), int(month_text)
        start = date(year, month, 1)
    except ValueError:
        raise ValidationFailed("month must be a YYYY-MM value") from None
    if len(year_text) != 4 or len(month_text) != 2:
        raise ValidationFailed("month must be a YYYY-MM value")
    following = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start.isoformat(), following.isoformat()


def require_non_negative(value: Any, field: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationFailed(f"{field} must be a number") from None
    if not math.isfinite(number):
        raise ValidationFailed(f"{field} must be a finite number")
    if number < 0:
        raise ValidationFailed(f"{field} must be zero or greater")
    return number


def require_text(value: Any, field: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValidationFailed(f"{field} is required")
    return text


def pick_fields(
    fields: Optional[Mapping[str, Any]],
    allowed: Iterable[str],
    *,
    drop_none: bool = True,
) -> Dict[str, Any]:
    """Keep only whitelisted columns so callers can never overwrite owner or id fields."""

    allowed_set = set(allowed)
    return {
        key: value
        for key, value in (fields or {}).items()
        if key in allowed_set and not (drop_none and value is None)
    }
