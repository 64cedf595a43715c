from __future__ import annotations

from datetime import date

import pytest

from timeoff.intervals import day_count
from timeoff.sources.mock import (
    MockDataSource,
    MockSourceConfig,
    add_work_days,
    mock_config_from_mapping,
    next_monday,
)


def test_next_monday_is_strictly_after() -> None:
    assert next_monday(date(2024, 6, 3)) == date(2024, 6, 10)  # Monday
    assert next_monday(date(2024, 6, 9)) == date(2024, 6, 10)  # Sunday
    assert next_monday(date(2024, 6, 5)) == date(2024, 6, 10)  # Wednesday


def test_add_work_days_skips_weekends() -> None:
    assert add_work_days(date(2024, 6, 3), 4) == date(2024, 6, 7)
    assert add_work_days(date(2024, 6, 7), 1) == date(2024, 6, 10)
    assert add_work_days(date(2024, 6, 7), 1, work_week_days=7) == date(2024, 6, 8)


def test_generation_shape_and_links() -> None:
    src = MockDataSource(MockSourceConfig(employee_count=12, division_count=3, event_count=40, year=2024))
    divisions = src.get_divisions()
    employees = src.get_employees()
    events = src.get_time_off_events()

    assert [d.id for d in divisions] == ["div-1", "div-2", "div-3"]
    assert employees[0].full_name == "Emma Smith"
    assert employees[3].division_id == "div-1"
    assert len(events) == 40
    emp_div = {e.id: e.division_id for e in employees}
    for ev in events:
        assert ev.employee_id in emp_div
        assert ev.division_id == emp_div[ev.employee_id]
        assert not ev.is_malformed
    starts = [ev.start_date for ev in events]
    assert starts == sorted(starts)


def test_vacations_start_on_monday_for_five_day_weeks() -> None:
    src = MockDataSource(
        MockSourceConfig(event_count=60, year=2024, category_probs=(1.0, 0.0, 0.0, 0.0))
    )
    for ev in src.get_time_off_events():
        assert ev.category == "VACATION"
        assert ev.start_date.weekday() == 0
        assert ev.end_date.weekday() == 4
        assert day_count(ev.start_date, ev.end_date) in (5, 12, 19)


def test_short_leave_lasts_two_to_four_days() -> None:
    src = MockDataSource(
        MockSourceConfig(event_count=30, year=2024, category_probs=(0.0, 1.0, 0.0, 0.0))
    )
    for ev in src.get_time_off_events():
        assert 2 <= day_count(ev.start_date, ev.end_date) <= 4


def test_same_seed_same_data() -> None:
    a = MockDataSource(MockSourceConfig(seed=11, year=2024)).get_time_off_events()
    b = MockDataSource(MockSourceConfig(seed=11, year=2024)).get_time_off_events()
    assert a == b


def test_event_window_filter() -> None:
    src = MockDataSource(MockSourceConfig(year=2024))
    window = src.get_time_off_events(date(2024, 3, 1), date(2024, 3, 31))
    for ev in window:
        assert ev.end_date >= date(2024, 3, 1)
        assert ev.start_date <= date(2024, 3, 31)


def test_config_validation() -> None:
    with pytest.raises(ValueError, match="category_probs must sum to 1.0"):
        MockSourceConfig(category_probs=(0.5, 0.5, 0.5, 0.0)).validate()
    with pytest.raises(ValueError, match="work_week_days"):
        MockSourceConfig(work_week_days=6).validate()


def test_config_from_mapping_accepts_camel_case() -> None:
    c = mock_config_from_mapping({"employeeCount": 3, "workWeekDays": 7, "seed": 1})
    assert (c.employee_count, c.work_week_days, c.seed) == (3, 7, 1)
    with pytest.raises(ValueError, match="Unknown mock connector option"):
        mock_config_from_mapping({"colour": "red"})
