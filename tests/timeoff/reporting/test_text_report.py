from __future__ import annotations

from pathlib import Path

from timeoff.analysis import analyze
from timeoff.calendar import build_month
from timeoff.config import Config
from timeoff.models import TimeOffEvent
from timeoff.reporting.text_report import (
    ReportDocument,
    get_active_report,
    render_calendar,
    render_text_report,
    set_active_report,
)
from timeoff.sources.base import Snapshot


def test_render_text_report_prints_summary(capsys, divisions, employees, events):
    snap = Snapshot(tuple(employees), tuple(divisions), tuple(events))
    cfg = Config(COVERAGE_THRESHOLD=0.5, INSPECT_EMPLOYEE_IDS=["e3"])
    render_text_report(cfg, snap, analyze(snap, cfg), num_print_examples=2)
    out = capsys.readouterr().out
    assert "Snapshot: 4 employees | 2 divisions | 4 events" in out
    assert "Per-employee leave days (top 2)" in out
    assert "Busiest days" in out
    assert "2024-06-06" in out
    assert "Events for e3: 1" in out
    assert "unknown employees" not in out


def test_render_text_report_flags_orphans(capsys, employees):
    orphan = TimeOffEvent(
        id="o",
        employee_id="ghost",
        category="SICK",
        start_date="2024-01-01",
        end_date="2024-01-01",
    )
    snap = Snapshot(tuple(employees), (), (orphan,))
    cfg = Config()
    render_text_report(cfg, snap, analyze(snap, cfg))
    out = capsys.readouterr().out
    assert "1 event(s) reference unknown employees" in out


def test_render_text_report_handles_empty_snapshot(capsys):
    snap = Snapshot((), (), ())
    cfg = Config()
    render_text_report(cfg, snap, analyze(snap, cfg))
    out = capsys.readouterr().out
    assert "Busiest days: (no events)" in out
    assert "Coverage gaps: none" in out


def test_render_calendar_marks_today(capsys, events):
    render_calendar(build_month(2024, 6, events, today="2024-06-12"), max_names=2)
    out = capsys.readouterr().out
    assert "June 2024" in out
    assert "12*" in out
    assert "2024-06-06: e1, e2" in out


def test_active_report_collects_lines(tmp_path: Path, capsys):
    doc = ReportDocument(tmp_path / "report.pdf")
    set_active_report(doc)
    try:
        assert get_active_report() is doc
        render_calendar(build_month(2024, 2, [], today="2024-02-01"))
    finally:
        set_active_report(None)
    assert any("February 2024" in line for line in doc.lines)
    doc.write()
    assert (tmp_path / "report.pdf").exists()
