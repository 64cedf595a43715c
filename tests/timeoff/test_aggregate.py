from __future__ import annotations

from timeoff.aggregate import (
    category_breakdown,
    division_stats,
    employee_stats,
    monthly_trends,
)
from timeoff.intervals import interval_days
from timeoff.models import Division, Employee, TimeOffEvent


def _event(id, employee_id, category, start, end, division_id=None):
    return TimeOffEvent(
        id=id,
        employee_id=employee_id,
        division_id=division_id,
        category=category,
        start_date=start,
        end_date=end,
    )


def test_end_to_end_single_employee() -> None:
    employees = [Employee(id="e1", full_name="Alice", division_id="d1")]
    divisions = [Division(id="d1", name="Eng")]
    events = [_event("ev1", "e1", "VACATION", "2024-06-03", "2024-06-07")]

    stats = employee_stats(employees, events)
    assert stats[0].total_days == 5
    assert stats[0].vacation_days == 5
    assert stats[0].event_count == 1

    divs = division_stats(divisions, employees, stats)
    assert divs[0].employee_count == 1
    assert divs[0].total_days == 5
    assert divs[0].average_days_per_employee == 5


def test_employee_stats_sorted_and_seeded(employees, events) -> None:
    stats = employee_stats(employees, events)
    assert [r.employee_id for r in stats] == ["e1", "e2", "e3", "e4"]
    e1 = stats[0]
    assert (e1.total_days, e1.vacation_days, e1.other_days, e1.event_count) == (
        10,
        5,
        5,
        2,
    )
    assert stats[3].total_days == 0 and stats[3].event_count == 0


def test_category_buckets_sum_to_total(employees, events) -> None:
    for r in employee_stats(employees, events):
        assert r.vacation_days + r.sick_days + r.unpaid_days + r.other_days == r.total_days


def test_ties_keep_snapshot_order() -> None:
    employees = [
        Employee(id="z", full_name="Zed"),
        Employee(id="a", full_name="Ann"),
        Employee(id="m", full_name="Max"),
    ]
    events = [
        _event("1", "m", "SICK", "2024-01-01", "2024-01-02"),
        _event("2", "a", "SICK", "2024-01-01", "2024-01-01"),
        _event("3", "z", "SICK", "2024-01-05", "2024-01-05"),
    ]
    stats = employee_stats(employees, events)
    assert [r.employee_id for r in stats] == ["m", "z", "a"]


def test_orphaned_events_are_counted_not_attributed(employees) -> None:
    events = [
        _event("ok", "e1", "SICK", "2024-01-01", "2024-01-01"),
        _event("lost", "ghost", "VACATION", "2024-01-01", "2024-01-10"),
    ]
    stats = employee_stats(employees, events)
    assert stats.orphaned_events == 1
    assert len(stats) == len(employees)
    assert sum(r.total_days for r in stats) == 1
    assert "ghost" not in {r.employee_id for r in stats}


def test_unknown_category_counts_towards_total_only(employees) -> None:
    events = [_event("x", "e2", "PARENTAL", "2024-01-01", "2024-01-03")]
    row = next(r for r in employee_stats(employees, events) if r.employee_id == "e2")
    assert row.total_days == 3
    assert row.event_count == 1
    assert row.vacation_days + row.sick_days + row.unpaid_days + row.other_days == 0


def test_malformed_interval_counts_zero_days(employees) -> None:
    events = [_event("bad", "e1", "SICK", "2024-01-10", "2024-01-01")]
    stats = employee_stats(employees, events)
    row = next(r for r in stats if r.employee_id == "e1")
    assert row.total_days == 0
    assert row.event_count == 1
    assert stats.malformed_events == 1


def test_division_stats_use_home_division(divisions, employees, events) -> None:
    stats = employee_stats(employees, events)
    divs = division_stats(divisions, employees, stats)
    by_id = {d.division_id: d for d in divs}
    # ev3 is booked against d1 but e3's home is d2
    assert by_id["d2"].total_days == 1
    assert by_id["d1"].total_days == 12
    assert by_id["d1"].average_days_per_employee == 6
    assert [d.division_id for d in divs] == ["d1", "d2"]


def test_empty_division_average_is_zero(employees) -> None:
    divs = division_stats(
        [Division(id="empty", name="Nobody")], employees, employee_stats(employees, [])
    )
    assert divs[0].employee_count == 0
    assert divs[0].average_days_per_employee == 0


def test_duplicate_employee_id_counts_once_per_division() -> None:
    employees = [
        Employee(id="e1", full_name="Alice", division_id="d1"),
        Employee(id="e1", full_name="Alice", division_id="d1"),
    ]
    events = [_event("ev1", "e1", "SICK", "2024-03-04", "2024-03-07")]

    divs = division_stats(
        [Division(id="d1", name="Eng")], employees, employee_stats(employees, events)
    )
    assert divs[0].employee_count == 1
    assert divs[0].total_days == 4
    assert divs[0].average_days_per_employee == 4.0


def test_duplicate_employee_id_uses_first_home_division() -> None:
    employees = [
        Employee(id="e1", full_name="Alice", division_id="d1"),
        Employee(id="e1", full_name="Alice", division_id="d2"),
    ]
    divisions = [Division(id="d1", name="Eng"), Division(id="d2", name="Ops")]
    divs = division_stats(divisions, employees, employee_stats(employees, []))
    assert {d.division_id: d.employee_count for d in divs} == {"d1": 1, "d2": 0}


def test_division_ties_are_stable() -> None:
    divisions = [Division(id="b", name="B"), Division(id="a", name="A")]
    divs = division_stats(divisions, [], [])
    assert [d.division_id for d in divs] == ["b", "a"]


def test_category_breakdown_matches_interval_days(events) -> None:
    b = category_breakdown(events)
    assert (b.vacation, b.sick, b.unpaid, b.other) == (5, 2, 1, 5)
    assert b.total == sum(interval_days(e.start_date, e.end_date) for e in events)


def test_monthly_trends_bucket_by_start_month() -> None:
    events = [
        _event("1", "e1", "SICK", "2024-02-27", "2024-03-02"),
        _event("2", "e1", "SICK", "2024-01-05", "2024-01-05"),
        _event("3", "e2", "SICK", "2024-02-01", "2024-02-02"),
    ]
    trends = monthly_trends(events)
    assert list(trends) == ["2024-01", "2024-02"]
    assert trends == {"2024-01": 1, "2024-02": 7}
