"""Date range helpers shared by list filters and period reports."""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple


def as_aware(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on round-trip)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_date_param(value: Optional[str], *, end_of_day: bool = False) -> Optional[datetime]:
    """
    Parse an ISO date or datetime query value into an aware UTC datetime.

    Bare dates resolve to the start of the day, or to its last microsecond
    when `end_of_day` is set. Raises ValueError for unparsable input.
    """
    if value is None or not str(value).strip():
        return None
    raw = str(value).strip()
    if len(raw) == 10:
        day = date.fromisoformat(raw)
        moment = datetime.combine(day, time.max if end_of_day else time.min)
        return moment.replace(tzinfo=timezone.utc)
    parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    return as_aware(parsed)


def current_month_range(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Return (first instant, last instant) of the month containing `now`."""
    now = as_aware(now) or datetime.now(timezone.utc)
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        next_month = start.replace(year=start.year + 1, month=1)
    else:
        next_month = start.replace(month=start.month + 1)
    return start, next_month - timedelta(microseconds=1)
