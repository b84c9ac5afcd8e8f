"""
Time-bill calendar aggregation.

Durations are stored as entered: either ``H:MM``/``HH:MM`` or decimal hours.
Each row's amount is hours multiplied by its hourly rate; rows are bucketed
by work date (creation date when no work date was recorded).
"""
from __future__ import annotations

import logging
import re
from collections import defaultdict
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from vhr.db import models
from vhr.utils.dates import as_aware, current_month_range
from vhr.utils.numbers import parse_leading_float

logger = logging.getLogger(__name__)

_CLOCK_DURATION = re.compile(r"^\d{1,2}:\d{2}$")


def parse_duration_hours(duration: Any) -> float:
    """
    Convert a stored duration to hours.

    ``"1:30"`` -> 1.5, ``"2.5"`` -> 2.5. Unparsable values count as zero.
    """
    text = str(duration).strip() if duration is not None else ""
    if _CLOCK_DURATION.match(text):
        hours, minutes = text.split(":")
        return int(hours) + int(minutes) / 60
    parsed = parse_leading_float(text)
    return parsed if parsed is not None else 0.0


def line_amount(duration: Any, hourly_rate: Any) -> float:
    rate = parse_leading_float(hourly_rate)
    return parse_duration_hours(duration) * (rate if rate is not None else 0.0)


def bucket_date(row) -> str:
    moment = as_aware(row.date_of_work) or as_aware(row.created_at)
    return moment.date().isoformat()


def aggregate_rows(rows: Iterable[Any]) -> Dict[str, Any]:
    """Fold time-bill rows into per-day and period totals, days sorted ascending."""
    per_day_amount: Dict[str, float] = defaultdict(float)
    per_day_hours: Dict[str, float] = defaultdict(float)
    for row in rows:
        hours = parse_duration_hours(row.duration)
        amount = line_amount(row.duration, row.hourly_rate)
        key = bucket_date(row)
        per_day_amount[key] += amount
        per_day_hours[key] += hours

    days: List[Dict[str, Any]] = [
        {
            "date": key,
            "total_amount": round(per_day_amount[key], 2),
            "total_hours": round(per_day_hours[key], 2),
        }
        for key in sorted(per_day_amount)
    ]
    return {
        "days": days,
        "total_amount": round(sum(per_day_amount.values()), 2),
        "total_hours": round(sum(per_day_hours.values()), 2),
    }


def calendar_summary(
    db: Session,
    *,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    status: Optional[str] = None,
) -> Dict[str, Any]:
    """Aggregate non-deleted time bills whose work date falls in [start, end]; defaults to the current month."""
    if start is None or end is None:
        month_start, month_end = current_month_range()
        start = start or month_start
        end = end or month_end

    work_date = func.coalesce(models.TimeBill.date_of_work, models.TimeBill.created_at)
    q = db.query(models.TimeBill).filter(
        models.TimeBill.is_delete.is_(False),
        work_date >= start,
        work_date <= end,
    )
    if status:
        q = q.filter(models.TimeBill.status == status)
    rows = q.all()
    logger.info(f"Calendar summary over {len(rows)} time bills from {start.date()} to {end.date()}")

    summary = aggregate_rows(rows)
    summary["start_date"] = start
    summary["end_date"] = end
    return summary
