from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

import pandas as pd

from timeoff.analysis import Analytics
from timeoff.data_models import DayStats, DivisionStats, EmployeeStats
from timeoff.models import Employee, TimeOffEvent

EMPLOYEE_COLUMNS = [
    "employee_id",
    "employee_name",
    "division_id",
    "total_days",
    "vacation_days",
    "sick_days",
    "unpaid_days",
    "other_days",
    "event_count",
]
DIVISION_COLUMNS = [
    "division_id",
    "division_name",
    "employee_count",
    "total_days",
    "average_days_per_employee",
]
DAY_COLUMNS = ["date", "count", "event_ids"]
FILTERED_DAY_COLUMNS = ["date", "count", "employees", "categories", "event_ids"]
EVENT_COLUMNS = [
    "id",
    "employee_id",
    "division_id",
    "category",
    "start_date",
    "end_date",
    "source_system",
]


def employee_stats_frame(rows: Iterable[EmployeeStats]) -> pd.DataFrame:
    return pd.DataFrame([asdict(r) for r in rows], columns=EMPLOYEE_COLUMNS)


def division_stats_frame(rows: Iterable[DivisionStats]) -> pd.DataFrame:
    return pd.DataFrame([asdict(r) for r in rows], columns=DIVISION_COLUMNS)


def day_stats_frame(rows: Iterable[DayStats]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "date": r.date,
                "count": r.count,
                "event_ids": ",".join(ev.id for ev in r.events),
            }
            for r in rows
        ],
        columns=DAY_COLUMNS,
    )


def events_frame(events: Sequence[TimeOffEvent]) -> pd.DataFrame:
    rows = []
    for e in events:
        rows.append(
            {
                "id": e.id,
                "employee_id": e.employee_id,
                "division_id": e.division_id,
                "category": e.category,
                "start_date": e.start_key,
                "end_date": e.end_key,
                "source_system": e.source_system,
            }
        )
    return pd.DataFrame(rows, columns=EVENT_COLUMNS)


def filtered_days_frame(
    filtered: Mapping[str, Sequence[TimeOffEvent]],
    employees: Sequence[Employee] = (),
) -> pd.DataFrame:
    """One row per day of a filtered day -> events map, names resolved where known."""
    names = {e.id: e.full_name for e in employees}
    rows = []
    for day in sorted(filtered):
        evs = filtered[day]
        rows.append(
            {
                "date": day,
                "count": len(evs),
                "employees": ", ".join(
                    names.get(ev.employee_id, ev.employee_id) for ev in evs
                ),
                "categories": ",".join(ev.category for ev in evs),
                "event_ids": ",".join(ev.id for ev in evs),
            }
        )
    return pd.DataFrame(rows, columns=FILTERED_DAY_COLUMNS)


def daily_headcount_frame(analytics: Analytics) -> pd.DataFrame:
    """One row per day in the bucket index: overlapping events and distinct employees."""
    b = analytics.buckets
    days = b.dates()
    return pd.DataFrame(
        {
            "events": [b.overlap_count(d) for d in days],
            "employees": [b.distinct_employees(d) for d in days],
        },
        index=pd.Index(days, name="date"),
    )


def write_csv_exports(
    analytics: Analytics,
    out_dir: Path,
    filtered: Optional[pd.DataFrame] = None,
) -> list[Path]:
    """
    Persist the tabular views as CSV files under out_dir.

    `filtered` is an already built filtered_days_frame; it is written as
    filtered_days.csv when given.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    tables = {
        "employee_stats.csv": employee_stats_frame(analytics.employee_stats),
        "division_stats.csv": division_stats_frame(analytics.division_stats),
        "busiest_days.csv": day_stats_frame(analytics.busiest_days),
        "coverage_gaps.csv": day_stats_frame(analytics.coverage_gaps),
    }
    for name, df in tables.items():
        path = out_dir / name
        df.to_csv(path, index=False)
        written.append(path)

    path = out_dir / "daily_headcount.csv"
    daily_headcount_frame(analytics).to_csv(path)
    written.append(path)

    if filtered is not None:
        path = out_dir / "filtered_days.csv"
        filtered.to_csv(path, index=False)
        written.append(path)
    return written
