from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from timeoff.intervals import date_keys
from timeoff.models import TimeOffEvent


@dataclass
class DayBuckets:
    """
    Date-keyed index over a set of events.

    events_by_day:       {"YYYY-MM-DD" -> [events covering that day]} in input order
    employee_ids_by_day: {"YYYY-MM-DD" -> {employee ids covering that day}}
    """

    events_by_day: dict[str, list[TimeOffEvent]] = field(default_factory=dict)
    employee_ids_by_day: dict[str, set[str]] = field(default_factory=dict)

    def dates(self) -> list[str]:
        return sorted(self.events_by_day)

    def events_on(self, day: str) -> list[TimeOffEvent]:
        return self.events_by_day.get(day, [])

    def distinct_employees(self, day: str) -> int:
        return len(self.employee_ids_by_day.get(day, ()))

    def overlap_count(self, day: str) -> int:
        return len(self.events_by_day.get(day, ()))

    def __len__(self) -> int:
        return len(self.events_by_day)


def build_day_buckets(
    events: Iterable[TimeOffEvent], max_days: Optional[int] = None
) -> DayBuckets:
    """Expand every event over its days and index it by date."""
    buckets = DayBuckets()
    for ev in events:
        for key in date_keys(ev.start_date, ev.end_date, max_days=max_days):
            buckets.events_by_day.setdefault(key, []).append(ev)
            buckets.employee_ids_by_day.setdefault(key, set()).add(ev.employee_id)
    return buckets
