from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Optional, Tuple

import numpy as np

from timeoff.models import CATEGORIES, Division, Employee, TimeOffEvent
from timeoff.sources.base import overlaps
from timeoff.sources.names import DIVISION_NAMES, FIRST_NAMES, LAST_NAMES


# ----------------------------
# Configuration container
# ----------------------------
@dataclass(slots=True)
class MockSourceConfig:
    """
    Configuration for generation of synthetic time-off data.
    """

    employee_count: int = 25
    division_count: int = 5
    event_count: int = 50

    # Category distribution (must sum to 1.0), aligned with CATEGORIES
    category_probs: Tuple[float, ...] = (0.65, 0.25, 0.05, 0.05)

    # Vacation length in working weeks and its distribution
    vacation_weeks: Tuple[int, ...] = (1, 2, 3)
    vacation_week_probs: Tuple[float, ...] = (0.6, 0.3, 0.1)

    # 5 = vacations start on Monday and skip weekends; 7 = calendar days
    work_week_days: int = 5

    # Year the events fall in; None = current year
    year: Optional[int] = None

    # RNG seed
    seed: Optional[int] = 7

    def validate(self) -> None:
        if self.employee_count < 0:
            raise ValueError("employee_count must be >= 0.")
        if self.division_count <= 0:
            raise ValueError("division_count must be > 0.")
        if self.event_count < 0:
            raise ValueError("event_count must be >= 0.")
        if self.event_count > 0 and self.employee_count == 0:
            raise ValueError("event_count > 0 requires employee_count > 0.")
        if len(self.category_probs) != len(CATEGORIES):
            raise ValueError("category_probs must have one entry per category.")
        if not np.isclose(sum(self.category_probs), 1.0, atol=1e-9):
            raise ValueError("category_probs must sum to 1.0")
        if len(self.vacation_weeks) != len(self.vacation_week_probs):
            raise ValueError("vacation_weeks and vacation_week_probs must be same length.")
        if any(w <= 0 for w in self.vacation_weeks):
            raise ValueError("vacation_weeks must be positive integers.")
        if not np.isclose(sum(self.vacation_week_probs), 1.0, atol=1e-9):
            raise ValueError("vacation_week_probs must sum to 1.0")
        if self.work_week_days not in (5, 7):
            raise ValueError("work_week_days must be 5 or 7.")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError("seed must be an int or None.")


# ----------------------------
# Generation helpers
# ----------------------------
def _rng(seed: Optional[int]) -> np.random.Generator:
    return np.random.default_rng(seed) if seed is not None else np.random.default_rng()


def next_monday(d: date) -> date:
    """The Monday strictly after `d` (a Sunday moves one day forward)."""
    return d + timedelta(days=7 - d.weekday())


def add_work_days(d: date, days: int, work_week_days: int = 5) -> date:
    """Move `days` working days forward; weekends are skipped for a 5-day week."""
    if work_week_days == 7:
        return d + timedelta(days=days)
    added = 0
    out = d
    while added < days:
        out += timedelta(days=1)
        if out.weekday() < 5:
            added += 1
    return out


# ----------------------------
# Core API
# ----------------------------
def create_divisions(cfg: MockSourceConfig) -> list[Division]:
    return [
        Division(
            id=f"div-{i + 1}",
            name=DIVISION_NAMES[i % len(DIVISION_NAMES)],
            external_ref=f"MOCK-DIV-{i + 1}",
        )
        for i in range(cfg.division_count)
    ]


def create_employees(cfg: MockSourceConfig, divisions: list[Division]) -> list[Employee]:
    employees: list[Employee] = []
    for i in range(cfg.employee_count):
        first = FIRST_NAMES[i % len(FIRST_NAMES)]
        last = LAST_NAMES[(i // len(FIRST_NAMES)) % len(LAST_NAMES)]
        employees.append(
            Employee(
                id=f"emp-{i + 1}",
                full_name=f"{first} {last}",
                division_id=divisions[i % len(divisions)].id,
                email=f"{first.lower()}.{last.lower()}@mockcompany.com",
                external_ref=f"MOCK-EMP-{i + 1}",
            )
        )
    return employees


def create_events(
    cfg: MockSourceConfig, employees: list[Employee], year: int
) -> list[TimeOffEvent]:
    """
    Generate `event_count` events, round robin over employees, sorted by start.
    """
    g = _rng(cfg.seed)
    categories = g.choice(
        len(CATEGORIES), size=cfg.event_count, p=np.array(cfg.category_probs)
    )

    events: list[TimeOffEvent] = []
    for i in range(cfg.event_count):
        emp = employees[i % len(employees)]
        category = CATEGORIES[int(categories[i])]
        rough = date(year, int(g.integers(1, 13)), int(g.integers(1, 29)))

        if category == "VACATION":
            start = next_monday(rough) if cfg.work_week_days == 5 else rough
            weeks = int(
                g.choice(cfg.vacation_weeks, p=np.array(cfg.vacation_week_probs))
            )
            # start day counts as the first working day
            end = add_work_days(
                start, weeks * cfg.work_week_days - 1, cfg.work_week_days
            )
        else:
            start = rough
            end = start + timedelta(days=int(g.integers(1, 4)))

        events.append(
            TimeOffEvent(
                id=f"event-{i + 1}",
                employee_id=emp.id,
                division_id=emp.division_id,
                category=category,
                start_date=start,
                end_date=end,
                source_system="INTERNAL",
                raw={"generated": True, "mockId": i + 1},
            )
        )

    events.sort(key=lambda e: e.start_date)
    return events


class MockDataSource:
    """In-memory TimeOffDataSource filled with seeded synthetic data."""

    def __init__(self, config: MockSourceConfig | None = None) -> None:
        self.config = config or MockSourceConfig()
        self.config.validate()
        year = self.config.year if self.config.year is not None else date.today().year
        self._divisions = create_divisions(self.config)
        self._employees = create_employees(self.config, self._divisions)
        self._events = create_events(self.config, self._employees, year)

    def get_employees(self) -> list[Employee]:
        return list(self._employees)

    def get_divisions(self) -> list[Division]:
        return list(self._divisions)

    def get_time_off_events(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> list[TimeOffEvent]:
        return [e for e in self._events if overlaps(e, date_from, date_to)]


def mock_config_from_mapping(raw: dict[str, Any]) -> MockSourceConfig:
    """Build a MockSourceConfig from tenants.json (camelCase or snake_case keys)."""
    aliases = {
        "employeeCount": "employee_count",
        "divisionCount": "division_count",
        "eventCount": "event_count",
        "workWeekDays": "work_week_days",
    }
    kwargs: dict[str, Any] = {}
    for key, value in (raw or {}).items():
        name = aliases.get(key, key)
        if name not in MockSourceConfig.__dataclass_fields__:
            raise ValueError(f"Unknown mock connector option '{key}'.")
        kwargs[name] = tuple(value) if isinstance(value, list) else value
    return MockSourceConfig(**kwargs)

