from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from timeoff.aggregate import (
    category_breakdown,
    division_stats,
    employee_stats,
    monthly_trends,
)
from timeoff.buckets import DayBuckets, build_day_buckets
from timeoff.data_models import (
    CategoryBreakdown,
    DayStats,
    DivisionStats,
    EmployeeStatsTable,
)
from timeoff.ranking import busiest_days, coverage_gaps
from timeoff.sources.base import Snapshot


@dataclass(frozen=True)
class Analytics:
    """Every derived view for one snapshot."""

    buckets: DayBuckets
    employee_stats: EmployeeStatsTable
    division_stats: list[DivisionStats]
    busiest_days: list[DayStats]
    coverage_gaps: list[DayStats]
    category_breakdown: CategoryBreakdown
    monthly_trends: dict[str, int]
    coverage_threshold: float


def analyze(
    snapshot: Snapshot,
    cfg: Any,
    *,
    threshold: Optional[float] = None,
    limit: Optional[int] = None,
) -> Analytics:
    """
    Run the full engine over a snapshot.

    cfg must expose COVERAGE_THRESHOLD, BUSIEST_DAY_LIMIT and MAX_INTERVAL_DAYS;
    `threshold` / `limit` override the config values when given.
    """
    thr = float(cfg.COVERAGE_THRESHOLD if threshold is None else threshold)
    lim = int(cfg.BUSIEST_DAY_LIMIT if limit is None else limit)
    cap = getattr(cfg, "MAX_INTERVAL_DAYS", None)

    emp_stats = employee_stats(snapshot.employees, snapshot.events)
    return Analytics(
        buckets=build_day_buckets(snapshot.events, max_days=cap),
        employee_stats=emp_stats,
        division_stats=division_stats(
            snapshot.divisions, snapshot.employees, emp_stats
        ),
        busiest_days=busiest_days(snapshot.events, lim, max_days=cap),
        coverage_gaps=coverage_gaps(
            snapshot.events, snapshot.employees, thr, max_days=cap
        ),
        category_breakdown=category_breakdown(snapshot.events),
        monthly_trends=monthly_trends(snapshot.events),
        coverage_threshold=thr,
    )
