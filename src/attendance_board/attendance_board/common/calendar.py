"""Calendar-day keys in the fixed local offset (UTC+9).

Every date boundary in the application ("today", month start, year start,
the Sunday check) goes through this module so bucketing never depends on
the server's own timezone.

A *day key* is a ``YYYY-MM-DD`` string naming one local day. Its *instant*
is local midnight of that day as an aware UTC ``datetime``; the same key
always maps to the same instant, which is what the ledger stores and
range-filters on.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ..core.constants import LOCAL_UTC_OFFSET_HOURS
from ..core.exceptions import ValidationError

LOCAL_TZ = timezone(timedelta(hours=LOCAL_UTC_OFFSET_HOURS), name="KST")

DAY_KEY_FORMAT = "%Y-%m-%d"


def now_utc() -> datetime:
    """Current instant (aware, UTC).

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def _as_utc(instant: datetime) -> datetime:
    # Naive values are treated as UTC, never as server-local time.
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def parse_day_key(key: str) -> date:
    try:
        return datetime.strptime(key, DAY_KEY_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError("invalid_day_key", f"Invalid day key: {key!r}")


def day_key(instant: Optional[datetime] = None) -> str:
    """Local (UTC+9) calendar day of ``instant`` as ``YYYY-MM-DD``."""
    local = _as_utc(instant or now_utc()).astimezone(LOCAL_TZ)
    d = local.date()
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def day_key_to_instant(key: str) -> datetime:
    """Local midnight of the day named by ``key``, as an aware UTC instant."""
    d = parse_day_key(key)
    return datetime(d.year, d.month, d.day, tzinfo=LOCAL_TZ).astimezone(timezone.utc)


def is_sunday(key: str) -> bool:
    return parse_day_key(key).weekday() == 6


def month_start_key(key: str) -> str:
    d = parse_day_key(key)
    return f"{d.year:04d}-{d.month:02d}-01"


def year_start_key(key: str) -> str:
    d = parse_day_key(key)
    return f"{d.year:04d}-01-01"


def local_year(key: str) -> int:
    return parse_day_key(key).year
