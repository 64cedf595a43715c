from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Sequence

from timeoff.intervals import to_date
from timeoff.models import TimeOffEvent

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

WEEKS_PER_GRID = 6
DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class CalendarDay:
    date: date
    date_string: str
    is_current_month: bool
    is_today: bool
    day_of_week: int  # 0 = Sunday
    events: tuple[TimeOffEvent, ...]


@dataclass(frozen=True)
class CalendarWeek:
    days: tuple[CalendarDay, ...]


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int  # 1..12
    month_name: str
    weeks: tuple[CalendarWeek, ...]

    @property
    def days(self) -> list[CalendarDay]:
        return [d for w in self.weeks for d in w.days]


def month_name(month: int) -> str:
    _check_month(month)
    return MONTH_NAMES[month - 1]


def day_name(day_of_week: int) -> str:
    """0 = Sun ... 6 = Sat."""
    return DAY_NAMES[day_of_week]


def sunday_index(d: date) -> int:
    # date.weekday() is Monday = 0; the grid uses Sunday = 0
    return (d.weekday() + 1) % 7


def build_month(
    year: int, month: int, events: Sequence[TimeOffEvent], today: Any
) -> CalendarMonth:
    """
    Build a fixed 6x7 grid for (year, month), starting on the Sunday on or
    before the 1st. `today` is supplied by the caller; the grid never reads
    the clock.
    """
    _check_month(month)
    today_d = to_date(today)
    first = date(year, month, 1)
    try:
        current = first - timedelta(days=sunday_index(first))
        current + timedelta(days=WEEKS_PER_GRID * DAYS_PER_WEEK - 1)
    except OverflowError as exc:
        raise ValueError(
            f"{year}-{month:02d}: the month grid runs outside the supported date range."
        ) from exc

    weeks: list[CalendarWeek] = []
    for _ in range(WEEKS_PER_GRID):
        days: list[CalendarDay] = []
        for _ in range(DAYS_PER_WEEK):
            key = current.isoformat()
            days.append(
                CalendarDay(
                    date=current,
                    date_string=key,
                    is_current_month=current.month == month,
                    is_today=current == today_d,
                    day_of_week=sunday_index(current),
                    events=tuple(ev for ev in events if ev.covers(key)),
                )
            )
            current += timedelta(days=1)
        weeks.append(CalendarWeek(days=tuple(days)))

    return CalendarMonth(
        year=year, month=month, month_name=month_name(month), weeks=tuple(weeks)
    )


def next_month(year: int, month: int) -> tuple[int, int]:
    _check_month(month)
    if month == 12:
        return year + 1, 1
    return year, month + 1


def prev_month(year: int, month: int) -> tuple[int, int]:
    _check_month(month)
    if month == 1:
        return year - 1, 12
    return year, month - 1


def _check_month(month: int) -> None:
    if not (1 <= month <= 12):
        raise ValueError("month must be within [1, 12].")
