from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt

from timeoff.analysis import Analytics
from timeoff.data_models import DivisionStats

from .export import daily_headcount_frame
from .text_report import get_active_report

CATEGORY_COLORS = {
    "vacation": "#34D399",
    "sick": "#F87171",
    "unpaid": "#FBBF24",
    "other": "#94A3B8",
}


def _save_and_show(fig: plt.Figure, filename: str, out_dir: Path = Path("outputs")) -> None:
    """Persist the plot under out_dir and show it."""
    out_dir.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_dir / filename, dpi=fig.dpi, bbox_inches="tight")
    plt.show()


def _attach(fig: plt.Figure) -> None:
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)


def show_daily_headcount(
    analytics: Analytics, out_dir: Path = Path("outputs"), enable_plot: bool = True
) -> None:
    """Line chart of employees off per day, with the coverage threshold marked."""
    if not enable_plot:
        return
    df = daily_headcount_frame(analytics)
    if df.empty:
        return

    fig, ax = plt.subplots(figsize=(9, 3.5), dpi=150)
    ax.set_title("Employees on leave per day", pad=12)
    x = list(range(len(df)))
    ax.fill_between(x, df["employees"].tolist(), step="mid", alpha=0.35, color="tab:blue")
    ax.plot(x, df["events"].tolist(), linewidth=0.8, color="tab:blue", label="Overlapping events")

    gap_days = {g.date for g in analytics.coverage_gaps}
    gap_x = [i for i, d in enumerate(df.index) if d in gap_days]
    if gap_x:
        ax.scatter(
            gap_x,
            [int(df["employees"].iloc[i]) for i in gap_x],
            color="tab:red",
            s=8,
            zorder=3,
            label="Coverage gap",
        )

    step = max(len(df) // 12, 1)
    ax.set_xticks(x[::step], [d[5:] for d in df.index[::step]], rotation=45)
    ax.set_xlabel("Day (MM-DD)")
    ax.set_ylabel("Employees off")
    ax.set_xmargin(0.0)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.legend(frameon=False, loc="upper right")
    fig.tight_layout()
    _save_and_show(fig, "daily_headcount.png", out_dir)
    _attach(fig)


def show_division_averages(
    rows: Sequence[DivisionStats],
    out_dir: Path = Path("outputs"),
    enable_plot: bool = True,
) -> None:
    """Horizontal bars of average leave days per employee by division."""
    if not enable_plot or not rows:
        return

    names = [r.division_name for r in rows][::-1]
    vals = [float(r.average_days_per_employee) for r in rows][::-1]
    fig, ax = plt.subplots(figsize=(7.5, 1.5 + 0.35 * len(rows)), dpi=150)
    ax.set_title("Average leave days per employee (home division)")
    ax.barh(names, vals, color="#3B82F6", alpha=0.85, edgecolor="none")
    for y, v in enumerate(vals):
        ax.text(v, y, f" {v:.1f}", va="center", fontsize=7)
    ax.set_xlabel("Days")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    fig.tight_layout()
    _save_and_show(fig, "division_averages.png", out_dir)
    _attach(fig)


def show_monthly_trends(
    analytics: Analytics, out_dir: Path = Path("outputs"), enable_plot: bool = True
) -> None:
    """Bar chart of leave days by start month plus a category legend panel."""
    if not enable_plot or not analytics.monthly_trends:
        return

    months = list(analytics.monthly_trends.keys())
    vals = list(analytics.monthly_trends.values())
    b = analytics.category_breakdown
    shares = {
        "vacation": b.vacation,
        "sick": b.sick,
        "unpaid": b.unpaid,
        "other": b.other,
    }

    fig, (ax, ax_cat) = plt.subplots(
        1, 2, figsize=(10, 3.5), dpi=150, gridspec_kw={"width_ratios": [3, 1]}
    )
    ax.bar(months, vals, color="tab:green", alpha=0.8, width=0.8)
    ax.set_title("Leave days by start month")
    ax.set_ylabel("Days")
    ax.tick_params(axis="x", rotation=45)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)

    labels = [k for k, v in shares.items() if v > 0]
    if labels:
        ax_cat.pie(
            [shares[k] for k in labels],
            labels=labels,
            colors=[CATEGORY_COLORS[k] for k in labels],
            autopct="%1.0f%%",
            textprops={"fontsize": 7},
        )
    ax_cat.set_title("By category")
    fig.tight_layout()
    _save_and_show(fig, "monthly_trends.png", out_dir)
    _attach(fig)
