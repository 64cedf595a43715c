from __future__ import annotations

from timeoff.buckets import build_day_buckets
from timeoff.models import TimeOffEvent


def test_empty_input_gives_empty_maps() -> None:
    b = build_day_buckets([])
    assert b.events_by_day == {}
    assert b.employee_ids_by_day == {}
    assert len(b) == 0


def test_buckets_preserve_input_order(events) -> None:
    b = build_day_buckets(events)
    assert b.dates() == [f"2024-06-{d:02d}" for d in range(3, 11)]
    assert [e.id for e in b.events_by_day["2024-06-06"]] == ["ev1", "ev2", "ev3", "ev4"]
    assert [e.id for e in b.events_by_day["2024-06-03"]] == ["ev1"]
    assert [e.id for e in b.events_on("2024-06-10")] == ["ev4"]
    assert b.events_on("2024-07-01") == []


def test_employee_sets_are_distinct(events) -> None:
    b = build_day_buckets(events)
    # ev1 and ev4 both belong to e1
    assert b.employee_ids_by_day["2024-06-07"] == {"e1"}
    assert b.overlap_count("2024-06-07") == 2
    assert b.distinct_employees("2024-06-06") == 3
    assert b.distinct_employees("2024-01-01") == 0


def test_duplicate_events_are_both_counted() -> None:
    ev = TimeOffEvent(
        id="dup",
        employee_id="e1",
        category="SICK",
        start_date="2024-06-03",
        end_date="2024-06-03",
    )
    b = build_day_buckets([ev, ev])
    assert len(b.events_by_day["2024-06-03"]) == 2
    assert b.employee_ids_by_day["2024-06-03"] == {"e1"}


def test_malformed_events_are_skipped() -> None:
    ev = TimeOffEvent(
        id="bad",
        employee_id="e1",
        category="SICK",
        start_date="2024-06-05",
        end_date="2024-06-03",
    )
    assert build_day_buckets([ev]).events_by_day == {}
