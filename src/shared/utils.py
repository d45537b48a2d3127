"""Shared utility functions."""
from __future__ import annotations

import math
from datetime import date, datetime, timezone

_SECONDS_PER_DAY = 24 * 60 * 60


def now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def today_iso() -> str:
    """Return the current UTC date as ``yyyy-mm-dd``."""
    return datetime.now(timezone.utc).date().isoformat()


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO date or datetime string into an aware UTC datetime.

    Returns ``None`` for empty, non-string or unparseable values.  Naive
    values are taken to be UTC, and bare dates mean midnight UTC.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.combine(date.fromisoformat(text), datetime.min.time())
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def days_since(value: object, now: datetime | None = None) -> float:
    """Whole days elapsed since *value*, truncated toward the past.

    Missing or unparseable values yield ``math.inf``.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return math.inf
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    elapsed = (current - parsed).total_seconds()
    return float(math.floor(elapsed / _SECONDS_PER_DAY))
