"""
Time helpers for recency windows.

All comparisons are done on timezone-aware UTC datetimes.  Naive datetimes
coming from loosely-typed sources are assumed to already be UTC.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to a naive datetime; convert an aware one to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_within_days(
    value: Optional[datetime],
    days: int,
    now: Optional[datetime] = None,
) -> bool:
    """Return ``True`` if ``value`` is no older than ``days`` days before ``now``.

    ``None`` is never recent.

    Args:
        value: Timestamp to check.
        days:  Window length in days.
        now:   Reference time (default: :func:`utcnow`).
    """
    if value is None:
        return False
    ref = ensure_utc(now) if now is not None else utcnow()
    return ensure_utc(value) >= ref - timedelta(days=days)
