from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from timeoff.analysis import Analytics, analyze
from timeoff.calendar import build_month
from timeoff.filters import FilterCriteria, filter_day_buckets
from timeoff.reporting.export import filtered_days_frame, write_csv_exports
from timeoff.reporting.plots import (
    show_daily_headcount,
    show_division_averages,
    show_monthly_trends,
)
from timeoff.reporting.text_report import (
    ReportDocument,
    render_calendar,
    render_filtered_days,
    render_text_report,
    set_active_report,
)
from timeoff.sources.base import Snapshot


class Reporter:
    """High-level orchestrator: runs the engine over a snapshot and renders reports."""

    def __init__(
        self,
        cfg: Any,
        num_print_examples: Optional[int] = None,
        enable_plots: Optional[bool] = None,
    ) -> None:
        """
        cfg must expose:
          - COVERAGE_THRESHOLD / BUSIEST_DAY_LIMIT / MAX_INTERVAL_DAYS
          - OUTPUT_DIR, WRITE_PDF, WRITE_CSV
        """
        self.cfg = cfg
        self.num_print_examples = (
            num_print_examples
            if num_print_examples is not None
            else getattr(cfg, "NUM_PRINT_EXAMPLES", 10)
        )
        self.enable_plots = (
            enable_plots
            if enable_plots is not None
            else getattr(cfg, "ENABLE_PLOTS", True)
        )

    @property
    def out_dir(self) -> Path:
        return Path(getattr(self.cfg, "OUTPUT_DIR", "outputs"))

    def render(
        self,
        snapshot: Snapshot,
        today: Any,
        *,
        month: Optional[tuple[int, int]] = None,
        threshold: Optional[float] = None,
        limit: Optional[int] = None,
        criteria: Optional[FilterCriteria] = None,
    ) -> Analytics:
        """
        Analyse the snapshot, print the text report and write any outputs.

        When `criteria` has active filters the filtered day listing is printed
        and exported as well.
        """
        analytics = analyze(snapshot, self.cfg, threshold=threshold, limit=limit)
        df_filtered = None
        if criteria is not None and criteria.active_count():
            df_filtered = filtered_days_frame(
                filter_day_buckets(analytics.buckets, criteria, snapshot.employees),
                snapshot.employees,
            )

        report_doc = (
            ReportDocument(self.out_dir / "report.pdf")
            if getattr(self.cfg, "WRITE_PDF", True)
            else None
        )
        set_active_report(report_doc)
        try:
            render_text_report(
                self.cfg,
                snapshot,
                analytics,
                num_print_examples=self.num_print_examples,
            )
            if month is not None:
                year, m = month
                render_calendar(
                    build_month(year, m, snapshot.events, today),
                    max_names=getattr(self.cfg, "CALENDAR_NAMES_PER_DAY", 0),
                )
            if criteria is not None and df_filtered is not None:
                render_filtered_days(
                    criteria, df_filtered, max_rows=self.num_print_examples
                )
            if self.enable_plots:
                show_daily_headcount(analytics, self.out_dir)
                show_division_averages(analytics.division_stats, self.out_dir)
                show_monthly_trends(analytics, self.out_dir)
        finally:
            set_active_report(None)
            if report_doc is not None:
                report_doc.write()

        if getattr(self.cfg, "WRITE_CSV", True):
            write_csv_exports(analytics, self.out_dir, filtered=df_filtered)

        return analytics
