from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Protocol

from timeoff.intervals import to_date
from timeoff.models import Division, Employee, TimeOffEvent


class TimeOffDataSource(Protocol):
    """Minimal interface the engine needs from any upstream system."""

    def get_employees(self) -> list[Employee]: ...
    def get_divisions(self) -> list[Division]: ...
    def get_time_off_events(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> list[TimeOffEvent]: ...


@dataclass(frozen=True)
class Snapshot:
    """The three collections one computation runs over."""

    employees: tuple[Employee, ...]
    divisions: tuple[Division, ...]
    events: tuple[TimeOffEvent, ...]


def overlaps(ev: TimeOffEvent, date_from: Optional[date], date_to: Optional[date]) -> bool:
    """True when the event touches [date_from, date_to]; open bounds match all."""
    if date_from is not None and ev.end_date < date_from:
        return False
    if date_to is not None and ev.start_date > date_to:
        return False
    return True


def load_snapshot(
    source: TimeOffDataSource,
    date_from: Any = None,
    date_to: Any = None,
) -> Snapshot:
    """
    Fetch employees, divisions and events concurrently and combine them.

    An exception from any fetch propagates; no partial snapshot is returned.
    """
    d_from = to_date(date_from) if date_from is not None else None
    d_to = to_date(date_to) if date_to is not None else None

    with ThreadPoolExecutor(max_workers=3) as pool:
        f_emp = pool.submit(source.get_employees)
        f_div = pool.submit(source.get_divisions)
        f_ev = pool.submit(source.get_time_off_events, d_from, d_to)
        employees, divisions, events = f_emp.result(), f_div.result(), f_ev.result()

    return Snapshot(
        employees=tuple(employees),
        divisions=tuple(divisions),
        events=tuple(events),
    )
