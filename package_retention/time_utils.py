"""
Shared datetime and duration helpers.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Optional


_DURATION_RE = re.compile(
    r"^\s*(?P<amount>(?:\d+)?\.?\d+)\s*(?P<unit>[a-z]*)\s*$",
    re.IGNORECASE,
)

# Accepted unit spellings, in milliseconds.
_UNIT_MILLISECONDS = {
    "ms": 1,
    "msec": 1,
    "msecs": 1,
    "millisecond": 1,
    "milliseconds": 1,
    "s": 1000,
    "sec": 1000,
    "secs": 1000,
    "second": 1000,
    "seconds": 1000,
    "m": 60_000,
    "min": 60_000,
    "mins": 60_000,
    "minute": 60_000,
    "minutes": 60_000,
    "h": 3_600_000,
    "hr": 3_600_000,
    "hrs": 3_600_000,
    "hour": 3_600_000,
    "hours": 3_600_000,
    "d": 86_400_000,
    "day": 86_400_000,
    "days": 86_400_000,
    "w": 604_800_000,
    "week": 604_800_000,
    "weeks": 604_800_000,
    "y": 31_557_600_000,
    "yr": 31_557_600_000,
    "yrs": 31_557_600_000,
    "year": 31_557_600_000,
    "years": 31_557_600_000,
}


def ensure_utc(dt: datetime) -> datetime:
    """Return a timezone-aware UTC datetime."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp and normalize it to UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return ensure_utc(parsed)


def parse_duration(value: str) -> Optional[timedelta]:
    """Parse a human duration such as ``30d``, ``2 weeks`` or ``1500``.

    A bare number is read as milliseconds. Units are case-insensitive.

    Returns:
        The duration, or None if the value cannot be parsed
    """
    if not value:
        return None
    match = _DURATION_RE.match(value)
    if not match:
        return None
    unit = match.group("unit").lower() or "ms"
    factor = _UNIT_MILLISECONDS.get(unit)
    if factor is None:
        return None
    return timedelta(milliseconds=float(match.group("amount")) * factor)
