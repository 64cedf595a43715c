from __future__ import annotations

from typing import Optional, Sequence

from timeoff.buckets import build_day_buckets
from timeoff.data_models import DayStats
from timeoff.models import Employee, TimeOffEvent


def _rank_key(row: DayStats) -> tuple[int, str]:
    # count descending, then date ascending
    return (-row.count, row.date)


def busiest_days(
    events: Sequence[TimeOffEvent],
    limit: int = 10,
    max_days: Optional[int] = None,
) -> list[DayStats]:
    """
    Top `limit` days by number of overlapping events.

    Two events for the same employee on the same day count twice.
    """
    if limit < 0:
        raise ValueError("limit must be >= 0.")
    if limit == 0:
        return []

    buckets = build_day_buckets(events, max_days=max_days)
    rows = [
        DayStats(date=day, count=len(evs), events=tuple(evs))
        for day, evs in buckets.events_by_day.items()
    ]
    rows.sort(key=_rank_key)
    return rows[:limit]


def coverage_gaps(
    events: Sequence[TimeOffEvent],
    employees: Sequence[Employee],
    threshold: float = 0.3,
    max_days: Optional[int] = None,
) -> list[DayStats]:
    """
    Days where the share of employees on leave is >= threshold.

    `count` is the number of distinct employees off that day. `events` lists
    every event whose [start, end] covers the day.
    """
    total = len(employees)
    if total == 0:
        return []

    buckets = build_day_buckets(events, max_days=max_days)
    gaps: list[DayStats] = []
    for day, ids in buckets.employee_ids_by_day.items():
        if len(ids) / total >= threshold:
            day_events = tuple(ev for ev in events if ev.covers(day))
            gaps.append(DayStats(date=day, count=len(ids), events=day_events))

    gaps.sort(key=_rank_key)
    return gaps
