from __future__ import annotations

from collections import Counter
from typing import Iterable, Optional, Sequence

from timeoff.data_models import (
    CategoryBreakdown,
    DivisionStats,
    EmployeeStats,
    EmployeeStatsTable,
)
from timeoff.intervals import interval_days
from timeoff.models import Division, Employee, TimeOffEvent

# category -> EmployeeStats counter field
CATEGORY_FIELDS: dict[str, str] = {
    "VACATION": "vacation_days",
    "SICK": "sick_days",
    "UNPAID": "unpaid_days",
    "OTHER": "other_days",
}


def employee_stats(
    employees: Sequence[Employee], events: Iterable[TimeOffEvent]
) -> EmployeeStatsTable:
    """
    Aggregate leave days per employee.

    Every known employee gets a row, even with no events. Events for unknown
    employee ids are counted in `orphaned_events` and otherwise ignored.
    Unknown categories still add to total_days and event_count. Rows are
    sorted by total_days descending; ties keep snapshot order.
    """
    counters: dict[str, Counter[str]] = {}
    for emp in employees:
        counters.setdefault(emp.id, Counter())

    orphaned = 0
    malformed = 0
    for ev in events:
        c = counters.get(ev.employee_id)
        if c is None:
            orphaned += 1
            continue
        if ev.is_malformed:
            malformed += 1
        days = interval_days(ev.start_date, ev.end_date)
        c["total_days"] += days
        c["event_count"] += 1
        category_field = CATEGORY_FIELDS.get(ev.category)
        if category_field is not None:
            c[category_field] += days

    seen: set[str] = set()
    rows: list[EmployeeStats] = []
    for emp in employees:
        # a duplicated id in the snapshot gets one row, at its first position
        if emp.id in seen:
            continue
        seen.add(emp.id)
        c = counters[emp.id]
        rows.append(
            EmployeeStats(
                employee_id=emp.id,
                employee_name=emp.full_name,
                division_id=emp.division_id,
                total_days=c["total_days"],
                vacation_days=c["vacation_days"],
                sick_days=c["sick_days"],
                unpaid_days=c["unpaid_days"],
                other_days=c["other_days"],
                event_count=c["event_count"],
            )
        )

    rows.sort(key=lambda r: r.total_days, reverse=True)
    return EmployeeStatsTable(
        rows=tuple(rows), orphaned_events=orphaned, malformed_events=malformed
    )


def division_stats(
    divisions: Sequence[Division],
    employees: Sequence[Employee],
    employee_stats: Iterable[EmployeeStats],
) -> list[DivisionStats]:
    """
    Per-division totals using each employee's home division.

    Sorted by average days per employee, descending; ties keep division order.
    """
    # one head per employee id; the first entry for a duplicated id wins
    homes: dict[str, Optional[str]] = {}
    for e in employees:
        homes.setdefault(e.id, e.division_id)
    headcount: Counter[str] = Counter(d for d in homes.values() if d is not None)
    totals: Counter[str] = Counter()
    for row in employee_stats:
        if row.division_id is not None:
            totals[row.division_id] += row.total_days

    out: list[DivisionStats] = []
    for div in divisions:
        n = headcount[div.id]
        total = totals[div.id]
        out.append(
            DivisionStats(
                division_id=div.id,
                division_name=div.name,
                employee_count=n,
                total_days=total,
                average_days_per_employee=(total / n) if n > 0 else 0,
            )
        )

    out.sort(key=lambda d: d.average_days_per_employee, reverse=True)
    return out


def category_breakdown(events: Iterable[TimeOffEvent]) -> CategoryBreakdown:
    """Total leave days per category across all events."""
    c: Counter[str] = Counter()
    for ev in events:
        c[ev.category] += interval_days(ev.start_date, ev.end_date)
    return CategoryBreakdown(
        vacation=c["VACATION"],
        sick=c["SICK"],
        unpaid=c["UNPAID"],
        other=c["OTHER"],
    )


def monthly_trends(events: Iterable[TimeOffEvent]) -> dict[str, int]:
    """{"YYYY-MM" -> leave days}, bucketed by the month each event starts in."""
    months: Counter[str] = Counter()
    for ev in events:
        months[ev.start_key[:7]] += interval_days(ev.start_date, ev.end_date)
    return dict(sorted(months.items()))
