from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from timeoff.buckets import DayBuckets
from timeoff.intervals import to_date
from timeoff.models import Employee, TimeOffEvent

ALL = "all"


@dataclass(frozen=True)
class FilterCriteria:
    """
    Display filters over a DayBuckets index.

    division_id / category: a value or "all".
    name_query: case-insensitive substring of the employee name; "" disables.
    date_from / date_to: inclusive bounds on the day key; either may be None.
    """

    division_id: str = ALL
    category: str = ALL
    name_query: str = ""
    date_from: Optional[str] = None
    date_to: Optional[str] = None

    def __post_init__(self) -> None:
        for attr in ("date_from", "date_to"):
            val = getattr(self, attr)
            if val is not None and val != "":
                object.__setattr__(self, attr, to_date(val).isoformat())
            else:
                object.__setattr__(self, attr, None)

    def active_count(self) -> int:
        return (
            int(self.division_id != ALL)
            + int(bool(self.name_query))
            + int(self.category != ALL)
            + int(self.date_from is not None or self.date_to is not None)
        )


def filter_day_buckets(
    buckets: DayBuckets,
    criteria: FilterCriteria,
    employees: Sequence[Employee],
) -> dict[str, list[TimeOffEvent]]:
    """
    Apply criteria to every day; keep days with at least one matching event.

    Per-day event order is unchanged. Division matching uses the event's own
    division_id, not the employee's home division.
    """
    names = {e.id: e.full_name for e in employees}
    query = criteria.name_query.lower()

    def keep(ev: TimeOffEvent) -> bool:
        if criteria.division_id != ALL and ev.division_id != criteria.division_id:
            return False
        if criteria.category != ALL and ev.category != criteria.category:
            return False
        if query and query not in names.get(ev.employee_id, ev.employee_id).lower():
            return False
        return True

    out: dict[str, list[TimeOffEvent]] = {}
    for day in buckets.dates():
        if criteria.date_from is not None and day < criteria.date_from:
            continue
        if criteria.date_to is not None and day > criteria.date_to:
            continue
        kept = [ev for ev in buckets.events_on(day) if keep(ev)]
        if kept:
            out[day] = kept
    return out


def filter_employees(employees: Sequence[Employee], name_query: str) -> list[Employee]:
    if not name_query:
        return list(employees)
    q = name_query.lower()
    return [e for e in employees if q in e.full_name.lower()]
