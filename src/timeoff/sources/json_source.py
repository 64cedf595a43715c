from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from timeoff.models import Division, Employee, TimeOffEvent
from timeoff.sources.base import overlaps


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in raw and raw[k] is not None:
            return raw[k]
    return None


def _required_str(raw: Mapping[str, Any], field: str, *keys: str) -> str:
    value = _first(raw, *keys)
    if value in (None, ""):
        raise ValueError(f"Entry missing '{field}': {dict(raw)!r}")
    return str(value)


def _optional_str(raw: Mapping[str, Any], *keys: str) -> Optional[str]:
    value = _first(raw, *keys)
    return None if value in (None, "") else str(value)


def _entries(data: Mapping[str, Any], key: str, file_path: Path) -> Sequence[Any]:
    entries = data.get(key, [])
    if isinstance(entries, (str, bytes, bytearray)) or not isinstance(
        entries, Sequence
    ):
        raise TypeError(f"'{key}' in {file_path} must be a list of objects.")
    for raw in entries:
        if not isinstance(raw, Mapping):
            raise TypeError(f"Each '{key}' entry must be an object/dict.")
    return entries


def parse_employee(raw: Mapping[str, Any]) -> Employee:
    return Employee(
        id=_required_str(raw, "id", "id"),
        full_name=_required_str(raw, "fullName", "fullName", "full_name", "name"),
        division_id=_optional_str(raw, "divisionId", "division_id"),
        email=_optional_str(raw, "email"),
        external_ref=_optional_str(raw, "externalRef", "external_ref"),
    )


def parse_division(raw: Mapping[str, Any]) -> Division:
    return Division(
        id=_required_str(raw, "id", "id"),
        name=_required_str(raw, "name", "name"),
        external_ref=_optional_str(raw, "externalRef", "external_ref"),
    )


def parse_event(raw: Mapping[str, Any]) -> TimeOffEvent:
    return TimeOffEvent(
        id=_required_str(raw, "id", "id"),
        employee_id=_required_str(raw, "employeeId", "employeeId", "employee_id"),
        division_id=_optional_str(raw, "divisionId", "division_id"),
        category=_required_str(raw, "type", "type", "category").upper(),
        start_date=_required_str(raw, "startDate", "startDate", "start_date"),
        end_date=_required_str(raw, "endDate", "endDate", "end_date"),
        source_system=_optional_str(raw, "sourceSystem", "source_system") or "INTERNAL",
        raw=_first(raw, "raw"),
    )


class JsonDataSource:
    """
    TimeOffDataSource backed by a JSON file of the form
    {"employees": [...], "divisions": [...], "events": [...]}.

    Keys may be camelCase (as exported by the web API) or snake_case.
    """

    def __init__(self, path: str | Path) -> None:
        file_path = Path(path).expanduser()
        if file_path.suffix.lower() != ".json":
            raise ValueError("JsonDataSource expects a path to a .json file.")
        if not file_path.exists():
            raise FileNotFoundError(f"Time-off JSON file not found: {file_path}")

        try:
            data = json.loads(file_path.read_text())
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {file_path}") from exc
        if not isinstance(data, Mapping):
            raise TypeError(
                "JSON file must contain an object with employees/divisions/events."
            )

        self.path = file_path
        self._employees = [parse_employee(r) for r in _entries(data, "employees", file_path)]
        self._divisions = [parse_division(r) for r in _entries(data, "divisions", file_path)]
        events_key = "events" if "events" in data else "timeoff"
        self._events = [parse_event(r) for r in _entries(data, events_key, file_path)]

    def get_employees(self) -> list[Employee]:
        return list(self._employees)

    def get_divisions(self) -> list[Division]:
        return list(self._divisions)

    def get_time_off_events(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> list[TimeOffEvent]:
        return [e for e in self._events if overlaps(e, date_from, date_to)]
