from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, overload

from timeoff.models import TimeOffEvent


@dataclass(frozen=True)
class EmployeeStats:
    """Per-employee leave totals, in days."""

    employee_id: str
    employee_name: str
    division_id: Optional[str]
    total_days: int = 0
    vacation_days: int = 0
    sick_days: int = 0
    unpaid_days: int = 0
    other_days: int = 0
    event_count: int = 0


@dataclass(frozen=True)
class EmployeeStatsTable(Sequence[EmployeeStats]):
    """
    Sorted EmployeeStats rows plus diagnostics for events that could not be
    attributed (unknown employee id) or that had end < start.
    """

    rows: tuple[EmployeeStats, ...] = ()
    orphaned_events: int = 0
    malformed_events: int = 0

    @overload
    def __getitem__(self, index: int) -> EmployeeStats: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[EmployeeStats]: ...

    def __getitem__(self, index):
        return self.rows[index]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[EmployeeStats]:
        return iter(self.rows)


@dataclass(frozen=True)
class DivisionStats:
    """Home-division totals; average is 0 for empty divisions."""

    division_id: str
    division_name: str
    employee_count: int
    total_days: int
    average_days_per_employee: float


@dataclass(frozen=True)
class DayStats:
    """A ranked day. `count` is overlap count or distinct employees depending on the ranking."""

    date: str
    count: int
    events: tuple[TimeOffEvent, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CategoryBreakdown:
    vacation: int = 0
    sick: int = 0
    unpaid: int = 0
    other: int = 0

    @property
    def total(self) -> int:
        return self.vacation + self.sick + self.unpaid + self.other
