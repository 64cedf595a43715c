from __future__ import annotations

from .export import (
    day_stats_frame,
    division_stats_frame,
    employee_stats_frame,
    events_frame,
)
from .reporter import Reporter

__all__ = [
    "Reporter",
    "day_stats_frame",
    "division_stats_frame",
    "employee_stats_frame",
    "events_frame",
]
