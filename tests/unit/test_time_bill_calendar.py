from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from vhr.services.time_bill_calendar import (
    aggregate_rows,
    line_amount,
    parse_duration_hours,
)


def _row(duration, rate, date_of_work=None, created_at=None):
    return SimpleNamespace(
        duration=duration,
        hourly_rate=rate,
        date_of_work=date_of_work,
        created_at=created_at or datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc),
    )


@pytest.mark.parametrize(
    "duration, hours",
    [("1:30", 1.5), ("01:45", 1.75), ("2.5", 2.5), ("3", 3.0), ("4h", 4.0), ("abc", 0.0), ("", 0.0), (None, 0.0)],
)
def test_parse_duration_hours(duration, hours):
    assert parse_duration_hours(duration) == pytest.approx(hours)


def test_clock_format_needs_two_minute_digits():
    # "1:5" is not H:MM, so only the leading number counts
    assert parse_duration_hours("1:5") == 1.0


def test_line_amounts():
    assert line_amount("1:30", "100") == pytest.approx(150)
    assert line_amount("2.5", "40") == pytest.approx(100)
    assert line_amount("2", "n/a") == 0


def test_aggregate_groups_by_work_date_then_created_date():
    rows = [
        _row("1:30", "100", date_of_work=datetime(2024, 5, 2, tzinfo=timezone.utc)),
        _row("2.5", "40", date_of_work=datetime(2024, 5, 2, 15, tzinfo=timezone.utc)),
        _row("1", "50", created_at=datetime(2024, 5, 1, 8, tzinfo=timezone.utc)),
    ]
    summary = aggregate_rows(rows)
    assert summary["days"] == [
        {"date": "2024-05-01", "total_amount": 50.0, "total_hours": 1.0},
        {"date": "2024-05-02", "total_amount": 250.0, "total_hours": 4.0},
    ]
    assert summary["total_amount"] == 300.0
    assert summary["total_hours"] == 5.0


def test_aggregate_naive_dates_treated_as_utc():
    summary = aggregate_rows([_row("1", "10", date_of_work=datetime(2024, 6, 30, 23, 0))])
    assert summary["days"][0]["date"] == "2024-06-30"


def test_aggregate_empty():
    assert aggregate_rows([]) == {"days": [], "total_amount": 0, "total_hours": 0}
