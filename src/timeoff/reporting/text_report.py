from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages

from timeoff.analysis import Analytics
from timeoff.calendar import DAY_NAMES, CalendarMonth
from timeoff.filters import ALL, FilterCriteria
from timeoff.sources.base import Snapshot

from .export import day_stats_frame, division_stats_frame, employee_stats_frame


class ReportDocument:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.lines: list[str] = []
        self.figures: list[plt.Figure] = []

    def add_text(self, text: str) -> None:
        self.lines.append(text)

    def add_figure(self, fig: plt.Figure) -> None:
        self.figures.append(fig)

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(self.path) as pdf:
            if self.lines:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                text = "\n".join(self.lines)
                ax.text(
                    0.01,
                    0.99,
                    text,
                    ha="left",
                    va="top",
                    fontsize=7,
                    family="monospace",
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            elif not self.figures:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.5,
                    0.5,
                    "Report contains no data.",
                    ha="center",
                    va="center",
                    fontsize=12,
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            for fig in self.figures:
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)


_ACTIVE_REPORT: Optional[ReportDocument] = None


def set_active_report(doc: Optional[ReportDocument]) -> None:
    global _ACTIVE_REPORT
    _ACTIVE_REPORT = doc


def get_active_report() -> Optional[ReportDocument]:
    return _ACTIVE_REPORT


def _log_print(*args, **kwargs) -> None:
    from io import StringIO

    buf = StringIO()
    kwargs_copy = kwargs.copy()
    kwargs_copy["file"] = buf
    print(*args, **kwargs_copy)
    print(*args, **kwargs)
    if _ACTIVE_REPORT is not None:
        _ACTIVE_REPORT.add_text(buf.getvalue().rstrip("\n"))


def _fmt_float(x: float | None, nd: int = 2, as_pct: bool = False) -> str:
    if x is None:
        return "nan"
    try:
        if pd.isna(x):
            return "nan"
        return f"{float(100 * x):.{nd}f}%" if as_pct else f"{float(x):.{nd}f}"
    except (TypeError, ValueError):
        return "nan"


def _print_days_histogram(df_emp: pd.DataFrame) -> None:
    if df_emp.empty:
        _log_print("\nLeave distribution: (no data)")
        return
    counts = df_emp["total_days"].astype(int).value_counts().sort_index()
    _log_print("\nLeave distribution, employees per total:")
    for d, n in counts.items():
        bar = "█" * min(int(n), 50)
        _log_print(f"  {d:>3}d : {n:>4} staff  {bar}")


def _print_day_table(title: str, rows: list, empty_msg: str) -> None:
    if not rows:
        _log_print(f"\n{empty_msg}")
        return
    _log_print(f"\n{title}")
    df = day_stats_frame(rows)
    df["event_ids"] = df["event_ids"].str.slice(0, 60)
    _log_print(df.to_string(index=False))


def render_text_report(
    cfg: Any,
    snapshot: Snapshot,
    analytics: Analytics,
    *,
    num_print_examples: int = 10,
) -> None:
    stats = analytics.employee_stats
    _log_print(
        f"Snapshot: {len(snapshot.employees)} employees | "
        f"{len(snapshot.divisions)} divisions | {len(snapshot.events)} events"
    )
    if stats.orphaned_events:
        _log_print(
            f"⚠️ {stats.orphaned_events} event(s) reference unknown employees "
            "and were left out of the totals."
        )
    if stats.malformed_events:
        _log_print(
            f"⚠️ {stats.malformed_events} event(s) end before they start "
            "and count as 0 days."
        )

    df_emp = employee_stats_frame(stats)
    if not df_emp.empty:
        _log_print(f"\nPer-employee leave days (top {num_print_examples}):")
        _log_print(
            df_emp.drop(columns=["division_id"])
            .head(num_print_examples)
            .to_string(index=False)
        )

        days = df_emp["total_days"].to_numpy(dtype=float)
        mean = float(np.mean(days))
        std = float(np.std(days, ddof=1)) if days.size > 1 else float("nan")
        if days.size > 1:
            p5, p95 = np.percentile(days, [5.0, 95.0])
        else:
            p5, p95 = float(days.min()), float(days.max())
        _log_print(
            "\nLeave days across employees: "
            f"mean={_fmt_float(mean)} | std={_fmt_float(std)} | "
            f"p5={_fmt_float(p5)} | p95={_fmt_float(p95)} | "
            f"min={_fmt_float(float(days.min()))} | max={_fmt_float(float(days.max()))}"
        )

    df_div = division_stats_frame(analytics.division_stats)
    if not df_div.empty:
        _log_print("\nDivisions (home-division accounting):")
        _log_print(df_div.to_string(index=False, float_format=lambda v: f"{v:.2f}"))

    b = analytics.category_breakdown
    total = b.total
    _log_print(
        "\nLeave by category: "
        + " | ".join(
            f"{name}={days:,} ({_fmt_float(days / total if total else 0.0, nd=1, as_pct=True)})"
            for name, days in (
                ("vacation", b.vacation),
                ("sick", b.sick),
                ("unpaid", b.unpaid),
                ("other", b.other),
            )
        )
    )

    if analytics.monthly_trends:
        _log_print("\nLeave days by start month:")
        for month, days in analytics.monthly_trends.items():
            bar = "█" * min(days // 2, 50)
            _log_print(f"  {month} : {days:>4}d  {bar}")

    _print_day_table(
        f"Busiest days (top {len(analytics.busiest_days)}, overlapping events):",
        analytics.busiest_days,
        "Busiest days: (no events)",
    )
    _print_day_table(
        "Coverage gaps (share of staff off >= "
        f"{_fmt_float(analytics.coverage_threshold, nd=0, as_pct=True)}):",
        analytics.coverage_gaps,
        "Coverage gaps: none at this threshold.",
    )

    inspect_ids = list(getattr(cfg, "INSPECT_EMPLOYEE_IDS", []) or [])
    for emp_id in inspect_ids:
        _print_employee_events(snapshot, emp_id)

    _print_days_histogram(df_emp)


def _print_employee_events(snapshot: Snapshot, employee_id: str) -> None:
    events = [e for e in snapshot.events if e.employee_id == employee_id]
    _log_print(f"\nEvents for {employee_id}: {len(events)}")
    for e in events:
        _log_print(f"  {e.start_key} → {e.end_key}  {e.category:<8} ({e.id})")


def render_calendar(month: CalendarMonth, *, max_names: int = 0) -> None:
    """Print a month grid; each cell shows the day and the number of events."""
    _log_print(f"\n{month.month_name} {month.year}")
    _log_print("  ".join(f"{name:>7}" for name in DAY_NAMES))
    for week in month.weeks:
        cells = []
        for day in week.days:
            label = f"{day.date.day:>2}" if day.is_current_month else "  "
            marker = "*" if day.is_today else " "
            count = f"({len(day.events)})" if day.events and day.is_current_month else ""
            cells.append(f"{label}{marker}{count:>4}")
        _log_print("  ".join(f"{c:>7}" for c in cells))
        if max_names:
            for day in week.days:
                if day.is_current_month and day.events:
                    ids = ", ".join(e.employee_id for e in day.events[:max_names])
                    _log_print(f"    {day.date_string}: {ids}")


def _describe_criteria(criteria: FilterCriteria) -> str:
    parts = []
    if criteria.division_id != ALL:
        parts.append(f"division={criteria.division_id}")
    if criteria.category != ALL:
        parts.append(f"category={criteria.category}")
    if criteria.name_query:
        parts.append(f"name~{criteria.name_query!r}")
    if criteria.date_from is not None or criteria.date_to is not None:
        parts.append(f"days {criteria.date_from or '...'} to {criteria.date_to or '...'}")
    return " | ".join(parts) or "no filters"


def render_filtered_days(
    criteria: FilterCriteria, df_days: pd.DataFrame, *, max_rows: int = 10
) -> None:
    """Print the filtered day listing built by filtered_days_frame."""
    _log_print(
        f"\nFiltered days ({criteria.active_count()} active: "
        f"{_describe_criteria(criteria)}): {len(df_days)} day(s)"
    )
    if df_days.empty:
        _log_print("  (no matching events)")
        return
    shown = df_days.drop(columns=["event_ids"]).head(max_rows)
    _log_print(shown.to_string(index=False))
    if len(df_days) > max_rows:
        _log_print(f"  ... {len(df_days) - max_rows} more day(s)")
