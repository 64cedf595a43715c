from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Optional


def to_date(value: Any) -> date:
    """
    Normalise a date-like value to a `datetime.date`.

    Strings are read from their first 10 characters, so both "2024-06-03" and
    "2024-06-03T00:00:00.000Z" give the same day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as exc:
            raise ValueError(f"Invalid date string {value!r}") from exc
    raise TypeError(
        "Dates must be ISO strings or datetime.date / datetime.datetime objects."
    )


def day_count(start: Any, end: Any) -> int:
    """
    Inclusive number of days between two dates: ceil(|end - start| / 1 day) + 1.
    """
    # whole days only, so the ceiling of the span is the span itself
    return abs((to_date(end) - to_date(start)).days) + 1


def interval_days(start: Any, end: Any) -> int:
    """Days an interval contributes to totals; 0 when end < start."""
    s, e = to_date(start), to_date(end)
    if e < s:
        return 0
    return day_count(s, e)


def expand_days(start: Any, end: Any, max_days: Optional[int] = None) -> list[date]:
    """
    Ascending inclusive list of dates from start to end.

    Returns [] when end < start. `max_days` caps the expansion for
    pathologically long intervals.
    """
    s, e = to_date(start), to_date(end)
    if e < s:
        return []
    n = (e - s).days + 1
    if max_days is not None:
        n = min(n, max(int(max_days), 0))
    return [s + timedelta(days=i) for i in range(n)]


def date_keys(start: Any, end: Any, max_days: Optional[int] = None) -> list[str]:
    return [d.isoformat() for d in expand_days(start, end, max_days=max_days)]
