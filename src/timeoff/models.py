from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from timeoff.intervals import to_date


CATEGORIES: tuple[str, ...] = ("VACATION", "SICK", "UNPAID", "OTHER")


@dataclass(frozen=True, slots=True)
class Division:
    id: str
    name: str
    external_ref: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Employee:
    """
    An employee snapshot. `division_id` is the home division.
    """

    id: str
    full_name: str
    division_id: Optional[str] = None
    email: Optional[str] = None
    external_ref: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TimeOffEvent:
    """
    One leave interval, both ends inclusive.

    `division_id` is the division the event was booked against and may differ
    from the employee's home division. It is kept separate on purpose: stats
    read the home division, filters read this one.
    """

    id: str
    employee_id: str
    category: str
    start_date: date
    end_date: date
    division_id: Optional[str] = None
    source_system: str = "INTERNAL"
    raw: Any = field(default=None, compare=False)

    def __post_init__(self) -> None:
        # frozen dataclass, so assign through object.__setattr__
        object.__setattr__(self, "start_date", to_date(self.start_date))
        object.__setattr__(self, "end_date", to_date(self.end_date))

    @property
    def start_key(self) -> str:
        return self.start_date.isoformat()

    @property
    def end_key(self) -> str:
        return self.end_date.isoformat()

    @property
    def is_malformed(self) -> bool:
        return self.end_date < self.start_date

    def covers(self, day: str | date) -> bool:
        """Inclusive coverage check, compared on ISO date strings."""
        key = day if isinstance(day, str) else day.isoformat()
        return self.start_key <= key <= self.end_key
